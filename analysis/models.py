"""
Price record model and series helpers.
A price series is any ordered sequence of immutable PriceRecord values.
"""

import math
import pandas as pd
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Sequence


@dataclass(frozen=True)
class PriceRecord:
    """A single dated price observation."""
    date: date
    price: float

    def __post_init__(self):
        """Validate date has no time component and price is usable."""
        if isinstance(self.date, datetime) or not isinstance(self.date, date):
            raise ValueError(f"date must be a calendar date, got {type(self.date).__name__}")

        if isinstance(self.price, bool) or not isinstance(self.price, (int, float)):
            raise ValueError(f"price must be numeric, got {type(self.price).__name__}")

        if not math.isfinite(self.price):
            raise ValueError(f"price must be finite, got {self.price}")

        if self.price < 0:
            raise ValueError(f"price must be non-negative, got {self.price}")

        # Keep float semantics for int input (frozen, so bypass __setattr__)
        object.__setattr__(self, 'price', float(self.price))


PriceSeries = Sequence[PriceRecord]


def in_year(record: PriceRecord, year: int) -> bool:
    return record.date.year == year


def in_year_range(record: PriceRecord, year_low: int, year_high: int) -> bool:
    """Inclusive on both ends."""
    return year_low <= record.date.year <= year_high


def in_date_range(record: PriceRecord, start: date, end: date) -> bool:
    """Inclusive on both ends."""
    return start <= record.date <= end


def prices_of(series: PriceSeries) -> List[float]:
    return [record.price for record in series]


def series_to_frame(series: PriceSeries) -> pd.DataFrame:
    """
    Build a DataFrame view of the series.

    Args:
        series: Price records in any order

    Returns:
        DataFrame with date, year and price columns in input order
    """
    return pd.DataFrame({
        'date': [record.date for record in series],
        'year': pd.Series([record.date.year for record in series], dtype='int64'),
        'price': pd.Series([record.price for record in series], dtype='float64'),
    })
