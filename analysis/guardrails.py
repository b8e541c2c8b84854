"""
Guardrails for analysis engine - validation and safety checks.
Flags series problems before the queries run over them.
"""

import warnings
from collections import Counter
from typing import List

from analysis.calculations.extremes import DECILE_SKIP
from analysis.models import PriceRecord, PriceSeries, in_year_range


class DataQualityError(Exception):
    """Raised when data quality issues require user intervention."""
    pass


class DataQualityWarning(UserWarning):
    """Raised when data quality issues should be noted but don't block execution."""
    pass


def validate_price_series(series: PriceSeries) -> None:
    """
    Check that every element of the series is a PriceRecord.

    PriceRecord validates its own fields on construction, so the type
    check covers dates and prices too.

    Args:
        series: Price records to check

    Raises:
        DataQualityError: If the series is not a sequence of PriceRecord
    """
    if isinstance(series, (str, bytes)) or not hasattr(series, '__len__'):
        raise DataQualityError(f"Price series must be a sequence, got {type(series).__name__}")

    for i, record in enumerate(series):
        if not isinstance(record, PriceRecord):
            raise DataQualityError(
                f"Element {i} is not a PriceRecord: {type(record).__name__}"
            )


def has_second_decile_data(series: PriceSeries, year_low: int, year_high: int) -> bool:
    """
    Tell whether the year range holds enough records for a second decile.

    An empty second-decile result means "insufficient data" exactly when
    this returns False.
    """
    count = sum(1 for r in series if in_year_range(r, year_low, year_high))
    return count > DECILE_SKIP


def check_zero_prices(series: PriceSeries) -> int:
    """
    Warn when zero prices are present.

    Zero prices make percentage returns undefined for any query that uses
    them as a buy or baseline price.

    Returns:
        Number of zero-priced records
    """
    zero_count = sum(1 for r in series if r.price == 0)

    if zero_count:
        warnings.warn(
            f"Found {zero_count} zero-priced records; percentage returns "
            f"against them are undefined.",
            DataQualityWarning
        )

    return zero_count


def price_series_warnings(series: PriceSeries) -> List[str]:
    """
    Detect non-blocking anomalies in the series.

    Args:
        series: Price records in any order

    Returns:
        List of human-readable warnings
    """
    found = []

    if len(series) == 0:
        return found

    date_counts = Counter(r.date for r in series)
    duplicates = sorted(d for d, n in date_counts.items() if n > 1)
    if duplicates:
        found.append(
            f"Duplicate dates on {len(duplicates)} days: "
            f"{[d.isoformat() for d in duplicates[:5]]}"
        )

    if any(series[i].date < series[i - 1].date for i in range(1, len(series))):
        found.append("Series is not in chronological order")

    return found
