"""
Ranking utilities.
Pure functions that rank records by price within a year or year range.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List

from analysis.models import PriceRecord, PriceSeries, in_year, in_year_range


TOP_N = 3

# Second decile: skip the 10 highest prices, then take the next 3 (ranks 11-13)
DECILE_SKIP = 10
DECILE_TAKE = 3


@dataclass(frozen=True)
class Extremes:
    """Highest prices (descending) and lowest prices (ascending)."""
    highest: List[PriceRecord] = field(default_factory=list)
    lowest: List[PriceRecord] = field(default_factory=list)


def rank_by_price(records: PriceSeries, descending: bool = False) -> List[PriceRecord]:
    """
    Sort records by price, keeping input order among equal prices.

    Args:
        records: Price records
        descending: Highest price first when True

    Returns:
        New sorted list
    """
    # sorted() is stable for reverse=True as well
    return sorted(records, key=lambda r: r.price, reverse=descending)


def top3_extremes(series: PriceSeries, current_year: int) -> Extremes:
    """
    Find the 3 highest and 3 lowest prices within the given year.

    Args:
        series: Price records in any order
        current_year: Calendar year to filter on

    Returns:
        Extremes with up to TOP_N records each. Fewer matches than
        TOP_N returns all matches.
    """
    year_records = [r for r in series if in_year(r, current_year)]

    return Extremes(
        highest=rank_by_price(year_records, descending=True)[:TOP_N],
        lowest=rank_by_price(year_records)[:TOP_N],
    )


def second_decile_dates(series: PriceSeries, year_low: int, year_high: int) -> List[date]:
    """
    Get the dates that open the second ten of the price ranking.

    Filters to [year_low, year_high], ranks by price descending, skips
    the first DECILE_SKIP records and returns the dates of the next
    DECILE_TAKE.

    Args:
        series: Price records in any order
        year_low: First year (inclusive)
        year_high: Last year (inclusive)

    Returns:
        Dates in ranking order. Empty when DECILE_SKIP or fewer records
        qualify.
    """
    window = [r for r in series if in_year_range(r, year_low, year_high)]

    if len(window) <= DECILE_SKIP:
        return []

    ranked = rank_by_price(window, descending=True)
    return [r.date for r in ranked[DECILE_SKIP:DECILE_SKIP + DECILE_TAKE]]
