"""Local storage for the connector: raw cache, run state, CSV outputs, Delta tables.

Everything lives under ``DATA_DIR``:

    raw/<asset>.<ext>        source files as ingested
    state/<asset>.json       small JSON state, stamped with the run id
    output/<name>.csv        published tables as CSV
    subsets/<dataset>/       published tables as Delta
"""

import os
import io
import json
import hashlib
from datetime import datetime
from pathlib import Path
import pyarrow as pa
import pyarrow.csv as pacsv
import pyarrow.parquet as pq
from deltalake import write_deltalake
from . import debug
from .environment import get_data_dir


def _data_path(*parts: str, create: bool = True) -> Path:
    path = Path(get_data_dir()).joinpath(*parts)
    if create:
        path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _report_table(data: pa.Table, name: str, mode: str) -> None:
    nulls = {col: data[col].null_count for col in data.column_names if data[col].null_count}
    debug.log_data_output(dataset_name=name, row_count=data.num_rows, size_bytes=data.nbytes,
                          columns=data.column_names, column_count=data.num_columns,
                          null_counts=nulls, mode=mode)


def table_fingerprint(data: pa.Table) -> str:
    """Short content hash; parquet bytes are stable for identical tables."""
    sink = io.BytesIO()
    pq.write_table(data, sink, compression='snappy')
    return hashlib.sha256(sink.getvalue()).hexdigest()[:16]


def sync_data(data: pa.Table, dataset_name: str, mode: str = "overwrite") -> str | None:
    """Write a table to its Delta location unless it matches the last write.

    Returns the table path when written, None when skipped.
    """
    if data.num_rows == 0:
        print(f"  {dataset_name}: empty, nothing to sync")
        return None

    state_key = f"_hash_{dataset_name}"
    fingerprint = table_fingerprint(data)
    previous = load_state(state_key).get("hash")
    if previous == fingerprint:
        print(f"  {dataset_name}: unchanged ({fingerprint}), skipping Delta write")
        return None

    target = str(_data_path("subsets", dataset_name))
    write_deltalake(target, data, mode=mode, schema_mode="overwrite")
    print(f"  -> Delta: {dataset_name} {data.num_rows:,} rows x {data.num_columns} cols "
          f"({previous or 'new'} -> {fingerprint})")

    save_state(state_key, {"hash": fingerprint})
    _report_table(data, dataset_name, mode)
    return target


def save_csv(data: pa.Table, name: str) -> str:
    """Write a table as CSV: header row, comma-separated, nulls as empty fields."""
    path = _data_path("output", f"{name}.csv")
    pacsv.write_csv(data, path, write_options=pacsv.WriteOptions(include_header=True, delimiter=","))
    print(f"  -> Output: {path.name} ({data.num_rows:,} rows)")
    _report_table(data, name, "csv")
    return str(path)


def load_csv(name: str) -> pa.Table:
    path = _data_path("output", f"{name}.csv", create=False)
    if not path.exists():
        raise FileNotFoundError(f"Output '{name}.csv' not found at {path}")
    return pacsv.read_csv(path)


def load_state(asset: str) -> dict:
    path = _data_path("state", f"{asset}.json", create=False)
    if not path.exists():
        return {}
    return json.loads(path.read_text(encoding='utf-8'))


def save_state(asset: str, state_data: dict) -> str:
    """Persist state for an asset, stamped with the time and run id."""
    before = load_state(asset)
    stamped = {**state_data, '_metadata': {
        'updated_at': datetime.now().isoformat(),
        'run_id': os.environ.get('RUN_ID', 'unknown'),
    }}
    path = _data_path("state", f"{asset}.json")
    path.write_text(json.dumps(stamped, indent=2), encoding='utf-8')
    debug.log_state_change(asset, before, stamped)
    return str(path)


def save_raw_file(content: str | bytes, asset_id: str, extension: str = "txt") -> str:
    path = _data_path("raw", f"{asset_id}.{extension}")
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding='utf-8')
    print(f"  -> Raw cache: {path.name}")
    return str(path)


def load_raw_file(asset_id: str, extension: str = "txt") -> str | bytes:
    """Read a cached raw file, as text when it decodes as UTF-8."""
    path = _data_path("raw", f"{asset_id}.{extension}", create=False)
    if not path.exists():
        raise FileNotFoundError(f"Raw asset '{asset_id}.{extension}' not found at {path}")
    data = path.read_bytes()
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError:
        return data
