"""Relative price ratios against a basket of base currencies.

Every comparison is made within a single reporting date. For a base currency
``c`` the reference is the one record in the partition whose currency_code is
``c``; each record's deviation is ``price / reference - 1``. A currency with
no unique reference record in a partition yields ``None`` for every record in
that partition and leaves the other currencies untouched.
"""

import logging
from typing import Callable, Iterable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def partition_by_date(items: Iterable[T], date_of: Callable[[T], str]) -> dict[str, list[T]]:
    """Group items by date, preserving input order within each partition."""
    partitions: dict[str, list[T]] = {}
    for item in items:
        partitions.setdefault(date_of(item), []).append(item)
    return partitions


def flatten(partitions: dict[str, list[T]]) -> list[T]:
    """Concatenate partitions in date order."""
    return [item for date in sorted(partitions) for item in partitions[date]]


def reference_values(partition: list, price_of: Callable, basket: Iterable[str],
                     currency_of: Callable = lambda r: r.currency_code, date: str = None) -> dict[str, float | None]:
    """Map each base currency to its reference price in this partition."""
    by_currency: dict[str, list[int]] = {}
    for i, record in enumerate(partition):
        by_currency.setdefault(currency_of(record), []).append(i)

    references = {}
    for code in basket:
        matches = by_currency.get(code, [])
        if not matches:
            logger.debug("No %s reference on %s", code, date or "this date")
            references[code] = None
            continue
        if len(matches) > 1:
            # e.g. a reported country adopting the euro alongside EUZ
            logger.warning("%d records share base currency %s on %s; its deviations are left missing",
                           len(matches), code, date or "this date")
            references[code] = None
            continue
        price = price_of(partition[matches[0]])
        references[code] = price if price else None
    return references


def deviation(price: float | None, reference: float | None) -> float | None:
    if price is None or reference is None:
        return None
    return price / reference - 1


def deviations_for_partition(partition: list, price_of: Callable, basket: Iterable[str],
                             currency_of: Callable = lambda r: r.currency_code, date: str = None) -> list[dict]:
    """One {currency: deviation} mapping per record, in partition order."""
    basket = list(basket)
    references = reference_values(partition, price_of, basket, currency_of, date)
    return [
        {code: deviation(price_of(record), references[code]) for code in basket}
        for record in partition
    ]
