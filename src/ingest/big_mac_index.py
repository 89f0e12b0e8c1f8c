"""Ingest The Economist's Big Mac source data.

The Big Mac Index is an informal measure of purchasing power parity (PPP)
between currencies, using the price of a Big Mac as the benchmark. The source
table holds local prices, exchange rates and GDP per capita, one row per
country per reporting date.
"""

import csv
import os
from io import StringIO
from pathlib import Path
from subsets_utils import save_raw_file, get_data_dir

RAW_ASSET = "big_mac_source"
SOURCE_FILENAME = "big-mac-source-data.csv"
REQUIRED_COLUMNS = ["date", "iso_a3", "currency_code", "name", "local_price", "dollar_ex", "GDP_dollar"]


def default_source() -> Path:
    return Path(os.environ.get("BIG_MAC_SOURCE") or Path(get_data_dir()) / SOURCE_FILENAME)


def run(source: str | Path = None):
    """Copy the source CSV into the raw cache."""
    path = Path(source) if source else default_source()
    print(f"  Reading Big Mac source data from {path}...")
    if not path.exists():
        raise FileNotFoundError(f"Big Mac source data not found at {path}")

    text = path.read_text(encoding="utf-8-sig")
    header = [col.strip() for col in next(csv.reader(StringIO(text)), [])]
    missing = [col for col in REQUIRED_COLUMNS if col not in header]
    if missing:
        raise ValueError(f"Big Mac source data is missing columns: {missing}")

    save_raw_file(text, RAW_ASSET, extension="csv")
    print(f"    Saved {RAW_ASSET}.csv ({len(text):,} bytes)")
