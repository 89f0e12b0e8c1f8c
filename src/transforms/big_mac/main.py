"""Transform Big Mac source data into the raw, adjusted and consolidated index."""

import csv
from io import StringIO
from subsets_utils import load_raw_file, save_csv, sync_data, publish
from .assemble import build_index, to_tables
from .countries import BASE_CURRENCIES
from .records import NoValidDataError, Observation, parse_float
from .test import test

RAW_ASSET = "big_mac_source"

RAW_DATASET_ID = "big_mac_raw_index"
ADJUSTED_DATASET_ID = "big_mac_adjusted_index"
FULL_DATASET_ID = "big_mac_full_index"

_KEY_DESCRIPTIONS = {
    "date": "Observation date (YYYY-MM-DD)",
    "iso_a3": "ISO 3166-1 alpha-3 country code (EUZ for the euro area)",
    "currency_code": "ISO 4217 currency code",
    "name": "Country name",
    "local_price": "Big Mac price in local currency",
    "dollar_ex": "Local currency units per US dollar",
    "dollar_price": "Big Mac price converted to USD",
}
_GDP_DESCRIPTIONS = {
    "GDP_dollar": "GDP per capita in US dollars",
    "adj_price": "Fair dollar price predicted from GDP per capita",
}

METADATA = {
    RAW_DATASET_ID: {
        "id": RAW_DATASET_ID,
        "title": "Big Mac Index, raw",
        "description": "Over/under-valuation of each currency implied by Big Mac prices, against five base currencies.",
        "column_descriptions": {
            **_KEY_DESCRIPTIONS,
            **{code: f"Raw index vs {code} (fractional over/under valuation)" for code in BASE_CURRENCIES},
        },
    },
    ADJUSTED_DATASET_ID: {
        "id": ADJUSTED_DATASET_ID,
        "title": "Big Mac Index, GDP-adjusted",
        "description": "Over/under-valuation after adjusting for the relationship between GDP per capita and Big Mac prices.",
        "column_descriptions": {
            **_KEY_DESCRIPTIONS,
            **_GDP_DESCRIPTIONS,
            **{code: f"GDP-adjusted index vs {code}" for code in BASE_CURRENCIES},
        },
    },
    FULL_DATASET_ID: {
        "id": FULL_DATASET_ID,
        "title": "Big Mac Index, full",
        "description": "Raw and GDP-adjusted Big Mac Index side by side.",
        "column_descriptions": {
            **_KEY_DESCRIPTIONS,
            **{f"{code}_raw": f"Raw index vs {code}" for code in BASE_CURRENCIES},
            **_GDP_DESCRIPTIONS,
            **{f"{code}_adjusted": f"GDP-adjusted index vs {code}" for code in BASE_CURRENCIES},
        },
    },
}


def parse_observations(csv_text: str) -> list[Observation]:
    """Parse source CSV rows into observations, normalizing missing numbers to None."""
    records = []
    reader = csv.DictReader(StringIO(csv_text))

    for row in reader:
        date = (row.get("date") or "").strip()
        if not date:
            continue

        records.append(Observation(
            date=date,
            iso_a3=(row.get("iso_a3") or "").strip(),
            currency_code=(row.get("currency_code") or "").strip(),
            name=(row.get("name") or "").strip(),
            local_price=parse_float(row.get("local_price")),
            dollar_ex=parse_float(row.get("dollar_ex")),
            GDP_dollar=parse_float(row.get("GDP_dollar")),
        ))

    return records


def run():
    """Transform Big Mac source data."""
    csv_text = load_raw_file(RAW_ASSET, extension="csv")
    observations = parse_observations(csv_text)
    if not observations:
        raise NoValidDataError("No Big Mac source data found")

    index = build_index(observations)
    raw_table, adjusted_table, full_table = to_tables(index)

    countries = set(r.observation.name for r in index.raw)
    dates = [r.observation.date for r in index.raw]
    print(f"  Transformed {len(observations):,} observations")
    print(f"  Raw index: {len(raw_table):,} rows, {len(countries)} countries, {min(dates)} to {max(dates)}")
    degenerate = sorted(date for date, fit in index.fits.items() if fit is None)
    print(f"  Adjusted index: {len(adjusted_table):,} rows, "
          f"{len(index.fits) - len(degenerate)} dates fitted, {len(degenerate)} degenerate")
    if degenerate:
        print(f"  No GDP adjustment for: {', '.join(degenerate)}")

    test(raw_table, adjusted_table, full_table)

    for dataset_id, table in ((RAW_DATASET_ID, raw_table),
                              (ADJUSTED_DATASET_ID, adjusted_table),
                              (FULL_DATASET_ID, full_table)):
        save_csv(table, dataset_id)
        sync_data(table, dataset_id)
        publish(dataset_id, METADATA[dataset_id])


if __name__ == "__main__":
    run()
