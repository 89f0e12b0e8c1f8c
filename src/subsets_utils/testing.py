"""Output validation helpers used by each transform's test()."""

from datetime import datetime
import pyarrow as pa


def validate(table: pa.Table, spec: dict) -> None:
    """Validate a table against a simple declarative spec.

    Supported keys:
        columns: {name: arrow type name}, e.g. {"date": "string", "price": "double"}
        not_null: columns that must have no nulls
        unique: columns whose values must not repeat
        min_rows: minimum row count
    """
    for name, type_name in spec.get("columns", {}).items():
        assert name in table.column_names, f"Missing column: {name}"
        actual = str(table.schema.field(name).type)
        assert actual == type_name, f"Column {name} has type {actual}, expected {type_name}"

    for name in spec.get("not_null", []):
        nulls = table.column(name).null_count
        assert nulls == 0, f"Column {name} has {nulls} null values"

    for name in spec.get("unique", []):
        values = table.column(name).to_pylist()
        assert len(values) == len(set(values)), f"Column {name} has duplicate values"

    min_rows = spec.get("min_rows")
    if min_rows is not None:
        assert len(table) >= min_rows, f"Expected at least {min_rows} rows, got {len(table)}"


def assert_valid_date(table: pa.Table, column: str, fmt: str = "%Y-%m-%d") -> None:
    for value in table.column(column).to_pylist():
        if value is None:
            continue
        try:
            datetime.strptime(value, fmt)
        except ValueError:
            raise AssertionError(f"Invalid date in {column}: {value!r}")


def assert_positive(table: pa.Table, column: str) -> None:
    bad = [v for v in table.column(column).to_pylist() if v is not None and v <= 0]
    assert not bad, f"Column {column} has {len(bad)} non-positive values (e.g. {bad[0]})"
