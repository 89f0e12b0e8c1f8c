"""Record types for Big Mac Index observations and computed index rows."""

from dataclasses import dataclass, field

MISSING_SENTINELS = {"", "#N/A", "N/A", "NA", "NaN", "nan"}

KEY_COLUMNS = ["date", "iso_a3", "currency_code", "name", "local_price", "dollar_ex", "dollar_price"]


class NoValidDataError(ValueError):
    """No usable observations survived loading and filtering."""


def parse_float(value: str) -> float | None:
    """Parse float value, returning None for empty, sentinel or invalid input."""
    if value is None:
        return None
    value = value.strip()
    if value in MISSING_SENTINELS:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    # NaN and inf are not usable prices or GDP figures
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


@dataclass(frozen=True)
class Observation:
    """One country's Big Mac price on one reporting date."""

    date: str
    iso_a3: str
    currency_code: str
    name: str
    local_price: float | None
    dollar_ex: float | None
    GDP_dollar: float | None = None

    @property
    def dollar_price(self) -> float | None:
        if self.local_price is None or not self.dollar_ex:
            return None
        return self.local_price / self.dollar_ex

    def key(self) -> tuple:
        return (self.date, self.iso_a3, self.currency_code, self.name,
                self.local_price, self.dollar_ex, self.dollar_price)


@dataclass(frozen=True)
class IndexRow:
    """An observation with its deviation from parity against each base currency."""

    observation: Observation
    deviations: dict = field(default_factory=dict)

    def key(self) -> tuple:
        return self.observation.key()

    def to_record(self, suffix: str = "") -> dict:
        record = dict(zip(KEY_COLUMNS, self.key()))
        record.update({f"{code}{suffix}": value for code, value in self.deviations.items()})
        return record


@dataclass(frozen=True)
class AdjustedIndexRow(IndexRow):
    """An index row computed on actual over GDP-predicted price."""

    adj_price: float | None = None

    @property
    def GDP_dollar(self) -> float | None:
        return self.observation.GDP_dollar

    def to_record(self, suffix: str = "") -> dict:
        record = dict(zip(KEY_COLUMNS, self.key()))
        record["GDP_dollar"] = self.GDP_dollar
        record["adj_price"] = self.adj_price
        record.update({f"{code}{suffix}": value for code, value in self.deviations.items()})
        return record
