"""Dataset metadata publishing."""

import json
from pathlib import Path
from . import debug
from .environment import get_data_dir


def publish(dataset_id: str, metadata: dict) -> str:
    """Write dataset metadata next to the published tables."""
    if metadata.get("id") != dataset_id:
        raise ValueError(f"Metadata id {metadata.get('id')!r} does not match dataset {dataset_id!r}")

    path = Path(get_data_dir()) / "metadata" / f"{dataset_id}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(metadata, indent=2, sort_keys=True), encoding="utf-8")
    debug.log_event("publish", dataset_id=dataset_id, columns=sorted(metadata.get("column_descriptions", {})))
    print(f"  -> Published metadata for {dataset_id}")
    return str(path)
