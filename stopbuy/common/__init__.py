# Common utilities
from .config_loader import (
    load_config,
    load_storefronts,
    load_watcher_settings,
)
from .csv_utils import read_csv, write_csv
from .log_config import setup_logging
from .text_utils import clean_text, unique_in_order
