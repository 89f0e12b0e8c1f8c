"""Build the raw, GDP-adjusted and consolidated Big Mac Index tables."""

from dataclasses import replace
from typing import NamedTuple
import pyarrow as pa
from .countries import BASE_CURRENCIES, REGRESSION_COUNTRIES, REPORTING_COUNTRIES
from .ratios import deviations_for_partition, flatten, partition_by_date
from .records import AdjustedIndexRow, IndexRow, NoValidDataError, Observation
from .regression import adjust

RAW_SUFFIX = "_raw"
ADJUSTED_SUFFIX = "_adjusted"
DISPLAY_DECIMALS = 3


class IndexTables(NamedTuple):
    raw: list[IndexRow]
    adjusted: list[AdjustedIndexRow]
    merged: list[dict]
    fits: dict


def prepare(observations: list[Observation]) -> list[Observation]:
    """Drop rows without a local price and sort by (date, name)."""
    kept = [o for o in observations if o.local_price is not None]
    return sorted(kept, key=lambda o: (o.date, o.name))


def _round(deviations: dict) -> dict:
    return {code: None if v is None else round(v, DISPLAY_DECIMALS) for code, v in deviations.items()}


def _with_deviations(rows: list, price_of, basket) -> list:
    """Compute deviations per date partition and attach them, rounded for display."""
    partitions = partition_by_date(rows, lambda r: r.observation.date)
    result = {}
    for date, partition in partitions.items():
        deviations = deviations_for_partition(
            partition, price_of, basket, currency_of=lambda r: r.observation.currency_code, date=date)
        result[date] = [replace(row, deviations=_round(d)) for row, d in zip(partition, deviations)]
    return flatten(result)


def raw_index(observations: list[Observation], reporting=REPORTING_COUNTRIES,
              basket=BASE_CURRENCIES) -> list[IndexRow]:
    """Deviation of each reported country's dollar price from each base currency's."""
    rows = [IndexRow(observation=o) for o in observations
            if o.dollar_price is not None and o.iso_a3 in reporting]
    return _with_deviations(rows, lambda r: r.observation.dollar_price, basket)


def fit_adjusted(observations: list[Observation], regression=REGRESSION_COUNTRIES,
                 reporting=REPORTING_COUNTRIES, basket=BASE_CURRENCIES) -> tuple[list[AdjustedIndexRow], dict]:
    """Adjusted index rows plus the per-date regression fits behind them.

    Dates are taken from the whole regression basket before the GDP filter,
    so a date with no GDP figures still shows up as a degenerate fit.
    """
    basket_rows = [o for o in observations if o.dollar_price is not None and o.iso_a3 in regression]
    fitted, fits = adjust(basket_rows)
    rows = [r for r in fitted if r.observation.iso_a3 in reporting and r.adj_price]
    return _with_deviations(rows, lambda r: r.observation.dollar_price / r.adj_price, basket), fits


def adjusted_index(observations: list[Observation], regression=REGRESSION_COUNTRIES,
                   reporting=REPORTING_COUNTRIES, basket=BASE_CURRENCIES) -> list[AdjustedIndexRow]:
    """Deviations computed on actual over GDP-predicted dollar price."""
    rows, _ = fit_adjusted(observations, regression, reporting, basket)
    return rows


def merge_index(raw: list[IndexRow], adjusted: list[AdjustedIndexRow],
                basket=BASE_CURRENCIES) -> list[dict]:
    """Left-outer join of raw and adjusted rows on the observation key."""
    by_key = {row.key(): row for row in adjusted}
    merged = []
    for row in raw:
        record = row.to_record(suffix=RAW_SUFFIX)
        match = by_key.get(row.key())
        record["GDP_dollar"] = match.GDP_dollar if match else None
        record["adj_price"] = match.adj_price if match else None
        for code in basket:
            record[f"{code}{ADJUSTED_SUFFIX}"] = match.deviations.get(code) if match else None
        merged.append(record)
    return merged


def build_index(observations: list[Observation]) -> IndexTables:
    """Run the full computation on loaded observations.

    Raises:
        NoValidDataError: if nothing is left to index after filtering.
    """
    prepared = prepare(observations)
    if not prepared:
        raise NoValidDataError("No Big Mac observations with a local price")

    raw = raw_index(prepared)
    if not raw:
        raise NoValidDataError("No Big Mac observations for reporting countries")

    adjusted, fits = fit_adjusted(prepared)
    return IndexTables(raw=raw, adjusted=adjusted, merged=merge_index(raw, adjusted), fits=fits)


# --- Arrow tables ---

_KEY_FIELDS = [
    pa.field("date", pa.string()),
    pa.field("iso_a3", pa.string()),
    pa.field("currency_code", pa.string()),
    pa.field("name", pa.string()),
    pa.field("local_price", pa.float64()),
    pa.field("dollar_ex", pa.float64()),
    pa.field("dollar_price", pa.float64()),
]
_GDP_FIELDS = [pa.field("GDP_dollar", pa.float64()), pa.field("adj_price", pa.float64())]


def _currency_fields(basket, suffix: str = "") -> list[pa.Field]:
    return [pa.field(f"{code}{suffix}", pa.float64()) for code in basket]


RAW_SCHEMA = pa.schema(_KEY_FIELDS + _currency_fields(BASE_CURRENCIES))
ADJUSTED_SCHEMA = pa.schema(_KEY_FIELDS + _GDP_FIELDS + _currency_fields(BASE_CURRENCIES))
MERGED_SCHEMA = pa.schema(_KEY_FIELDS + _currency_fields(BASE_CURRENCIES, RAW_SUFFIX)
                          + _GDP_FIELDS + _currency_fields(BASE_CURRENCIES, ADJUSTED_SUFFIX))


def to_tables(tables: IndexTables) -> tuple[pa.Table, pa.Table, pa.Table]:
    return (
        pa.Table.from_pylist([r.to_record() for r in tables.raw], schema=RAW_SCHEMA),
        pa.Table.from_pylist([r.to_record() for r in tables.adjusted], schema=ADJUSTED_SCHEMA),
        pa.Table.from_pylist(tables.merged, schema=MERGED_SCHEMA),
    )
