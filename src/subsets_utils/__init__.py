from .io import (
    sync_data, load_state, save_state, save_csv, load_csv,
    save_raw_file, load_raw_file,
)
from .environment import validate_environment, get_data_dir
from .publish import publish
from .testing import validate
from . import debug

__all__ = [
    'sync_data', 'load_state', 'save_state', 'save_csv', 'load_csv',
    'save_raw_file', 'load_raw_file',
    'validate_environment', 'get_data_dir',
    'publish',
    'validate',
]
