"""Structured debug events, one JSON object per log line."""

import json
import logging
import os
from datetime import datetime

logger = logging.getLogger("subsets")


def _emit(event: str, level: int = logging.DEBUG, **fields) -> dict:
    payload = {
        "event": event,
        "run_id": os.environ.get("RUN_ID", "unknown"),
        "timestamp": datetime.now().isoformat(),
        **fields,
    }
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))
    return payload


def log_event(event: str, level: int = logging.DEBUG, **fields) -> dict:
    return _emit(event, level, **fields)


def log_data_output(dataset_name: str, row_count: int, size_bytes: int, columns: list[str],
                    column_count: int, null_counts: dict, mode: str) -> dict:
    return _emit("data_output", dataset_name=dataset_name, row_count=row_count, size_bytes=size_bytes,
                 columns=columns, column_count=column_count, null_counts=null_counts, mode=mode)


def log_state_change(asset: str, old_state: dict, new_state: dict) -> dict:
    changed = sorted(k for k in set(old_state) | set(new_state)
                     if k != "_metadata" and old_state.get(k) != new_state.get(k))
    return _emit("state_change", asset=asset, changed_keys=changed)
