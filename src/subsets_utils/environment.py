"""Environment configuration for local connector runs."""

import os

REQUIRED_ENV_VARS: list[str] = []

DEFAULT_DATA_DIR = "data"


def get_data_dir() -> str:
    """Root directory for raw cache, state, outputs and Delta tables."""
    return os.environ.get("DATA_DIR", DEFAULT_DATA_DIR)


def validate_environment(additional: list[str] = None) -> None:
    """Raise if any required environment variable is missing."""
    required = REQUIRED_ENV_VARS + (additional or [])
    missing = [var for var in required if not os.environ.get(var)]
    if missing:
        raise EnvironmentError(f"Missing required environment variables: {', '.join(missing)}")
