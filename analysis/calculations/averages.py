"""
Average price utilities.
Pure functions for the series mean and per-year means.
"""

import numpy as np
from typing import Dict, Iterable

from analysis.models import PriceSeries, prices_of, series_to_frame


# Documented placeholder for a requested year with no price data.
# It is not a computed average.
YEAR_NO_DATA_SENTINEL = 0.0


class AveragesError(Exception):
    """Raised when an average cannot be calculated."""
    pass


class EmptySeriesError(AveragesError):
    """Raised when averaging a series with no records."""
    pass


def average_price(series: PriceSeries) -> float:
    """
    Calculate the arithmetic mean of all prices in the series.

    Args:
        series: Price records in any order

    Returns:
        Mean price

    Raises:
        EmptySeriesError: If the series has no records
    """
    if len(series) == 0:
        raise EmptySeriesError("Cannot average an empty price series")

    return float(np.mean(np.array(prices_of(series), dtype=float)))


def yearly_averages(series: PriceSeries, years: Iterable[int]) -> Dict[int, float]:
    """
    Calculate the mean price for each requested year.

    Every requested year gets an entry, in request order. Years without
    any records map to YEAR_NO_DATA_SENTINEL.

    Args:
        series: Price records in any order
        years: Calendar years to report

    Returns:
        Dictionary mapping year to average price (or the sentinel)
    """
    frame = series_to_frame(series)
    means = frame.groupby('year')['price'].mean() if not frame.empty else None

    result = {}
    for year in years:
        year = int(year)
        if year in result:
            continue

        if means is not None and year in means.index:
            result[year] = float(means.loc[year])
        else:
            result[year] = YEAR_NO_DATA_SENTINEL

    return result
