"""GDP adjustment: per-date OLS of dollar price on GDP per capita.

Poorer countries have structurally cheaper labour and non-traded inputs, so
their burgers are cheaper even at fair exchange rates. Fitting
``dollar_price = intercept + slope * GDP_dollar`` across the regression basket
gives a fair price for each country on that date.
"""

import logging
from dataclasses import dataclass
import numpy as np
from scipy import stats
from subsets_utils import debug
from .ratios import partition_by_date, flatten
from .records import AdjustedIndexRow, Observation

logger = logging.getLogger(__name__)


class DegenerateRegressionError(ValueError):
    """The fit is undefined: too few points or no spread in GDP."""


@dataclass(frozen=True)
class RegressionFit:
    intercept: float
    slope: float
    n_obs: int
    r_squared: float | None

    def predict(self, gdp: float) -> float:
        return self.intercept + self.slope * gdp


def fit_line(gdp: list[float], prices: list[float]) -> RegressionFit:
    """Ordinary least squares with one regressor.

    Raises:
        DegenerateRegressionError: fewer than two points, fewer than two
            distinct GDP values, or a non-finite result.
    """
    if len(gdp) != len(prices):
        raise ValueError("gdp and prices must have same length")
    if len(gdp) < 2:
        raise DegenerateRegressionError(f"need at least 2 observations, got {len(gdp)}")

    x = np.asarray(gdp, dtype=float)
    y = np.asarray(prices, dtype=float)
    if len(np.unique(x)) < 2:
        raise DegenerateRegressionError("all GDP values are identical")

    result = stats.linregress(x, y)
    slope, intercept = float(result.slope), float(result.intercept)
    if not (np.isfinite(slope) and np.isfinite(intercept)):
        raise DegenerateRegressionError("non-finite coefficients")

    # r is undefined when every price is the same
    r_squared = float(result.rvalue ** 2) if len(np.unique(y)) > 1 else None

    return RegressionFit(intercept=intercept, slope=slope, n_obs=len(x), r_squared=r_squared)


def has_gdp(observation: Observation) -> bool:
    return observation.GDP_dollar is not None and observation.GDP_dollar > 0


def adjust_partition(partition: list[Observation], date: str) -> tuple[list[AdjustedIndexRow], RegressionFit | None]:
    """Attach a GDP-predicted fair price to every record of one date with GDP.

    Records without a positive GDP figure sit out the fit and get no row. A
    date where nothing usable is left is reported like any other degenerate fit.
    """
    usable = [o for o in partition if has_gdp(o)]
    try:
        fit = fit_line([o.GDP_dollar for o in usable], [o.dollar_price for o in usable])
    except DegenerateRegressionError as e:
        logger.warning("Degenerate GDP regression for %s (%d of %d records with GDP): %s",
                       date, len(usable), len(partition), e)
        return [AdjustedIndexRow(observation=o, adj_price=None) for o in usable], None

    debug.log_event("gdp_regression", date=date, intercept=fit.intercept, slope=fit.slope,
                    n_obs=fit.n_obs, r_squared=fit.r_squared)
    rows = [AdjustedIndexRow(observation=o, adj_price=fit.predict(o.GDP_dollar)) for o in usable]
    return rows, fit


def adjust(observations: list[Observation]) -> tuple[list[AdjustedIndexRow], dict[str, RegressionFit | None]]:
    """Fit each date independently and return fair prices plus the fits.

    Every date present in ``observations`` gets an entry in the fits mapping,
    ``None`` where the regression was degenerate.
    """
    partitions = partition_by_date(observations, lambda o: o.date)
    adjusted, fits = {}, {}
    for date, partition in partitions.items():
        adjusted[date], fits[date] = adjust_partition(partition, date)
    return flatten(adjusted), fits
