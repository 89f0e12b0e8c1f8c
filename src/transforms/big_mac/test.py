import pyarrow as pa
from subsets_utils import validate
from subsets_utils.testing import assert_valid_date, assert_positive
from .countries import BASE_CURRENCIES


def test(raw: pa.Table, adjusted: pa.Table, full: pa.Table) -> None:
    """Validate Big Mac Index outputs."""
    key_columns = {
        "date": "string",
        "iso_a3": "string",
        "currency_code": "string",
        "name": "string",
        "dollar_price": "double",
    }

    validate(raw, {
        "columns": {**key_columns, **{code: "double" for code in BASE_CURRENCIES}},
        "not_null": ["date", "iso_a3", "currency_code", "dollar_price"],
        "min_rows": 1,
    })
    validate(adjusted, {
        "columns": {**key_columns, "GDP_dollar": "double", "adj_price": "double"},
        "not_null": ["date", "iso_a3", "GDP_dollar", "adj_price"],
    })
    validate(full, {
        "columns": {
            **key_columns,
            **{f"{code}_raw": "double" for code in BASE_CURRENCIES},
            **{f"{code}_adjusted": "double" for code in BASE_CURRENCIES},
        },
        "not_null": ["date", "iso_a3", "dollar_price"],
    })

    assert_valid_date(raw, "date")
    assert_positive(raw, "dollar_price")
    assert_positive(adjusted, "GDP_dollar")

    # One row per country per date
    keys = list(zip(raw.column("date").to_pylist(), raw.column("iso_a3").to_pylist()))
    assert len(keys) == len(set(keys)), "Duplicate (date, iso_a3) rows in raw index"

    # Left join keeps every raw row exactly once
    assert len(full) == len(raw), f"Full index has {len(full)} rows, raw has {len(raw)}"

    # Each currency is at parity with itself
    for code in BASE_CURRENCIES:
        currencies = raw.column("currency_code").to_pylist()
        values = raw.column(code).to_pylist()
        bad = [v for c, v in zip(currencies, values) if c == code and v not in (None, 0.0)]
        assert not bad, f"{code} rows deviate from their own currency: {bad[:3]}"

    prices = [p for p in raw.column("dollar_price").to_pylist() if p is not None]
    assert max(prices) < 20, f"Suspicious high price: ${max(prices)}"

    dates = set(raw.column("date").to_pylist())
    print(f"  Validated {len(raw):,} raw and {len(adjusted):,} adjusted rows across {len(dates)} dates")
