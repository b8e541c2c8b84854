"""
Returns calculation utilities.
Pure functions for percentage returns against a baseline and buy/sell pairs.
"""

import numpy as np
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from analysis.models import PriceSeries, in_date_range


# Minimum gain over the baseline price, in percent, for a profitable day
PROFIT_THRESHOLD_PCT = 5.0


class ReturnsError(Exception):
    """Raised when returns calculation fails."""
    pass


@dataclass(frozen=True)
class ProfitableDay:
    date: date
    return_pct: float


@dataclass(frozen=True)
class InvestmentPeriod:
    buy_date: date
    sell_date: date
    return_pct: float


def percent_return(buy_price: float, sell_price: float) -> float:
    """
    Calculate percentage return from buy to sell price.

    Formula: R = (P_sell - P_buy) / P_buy * 100

    Raises:
        ReturnsError: If buy price is zero
    """
    if buy_price == 0:
        raise ReturnsError("Zero buy price: percentage return is undefined")

    return (sell_price - buy_price) / buy_price * 100


def profitable_days(
    series: PriceSeries,
    start: date,
    end: date,
    threshold_pct: float = PROFIT_THRESHOLD_PCT
) -> List[ProfitableDay]:
    """
    Find days in a window whose price beats the window's lowest price.

    The baseline is the minimum price within [start, end]. Each record in
    the window is compared against it and kept when its return strictly
    exceeds threshold_pct.

    Args:
        series: Price records in any order
        start: First date of the window (inclusive)
        end: Last date of the window (inclusive)
        threshold_pct: Required gain in percent

    Returns:
        ProfitableDay entries in input order. Empty if no record falls in
        the window.

    Raises:
        ValueError: If start is after end
        ReturnsError: If the baseline price is zero

    Example:
        Window prices [100, 104, 106, 110]:
        - Baseline: 100
        - Returns: [0.0, 4.0, 6.0, 10.0]
        Result: the 106 and 110 days
    """
    if start > end:
        raise ValueError(f"start ({start}) must be <= end ({end})")

    window = [r for r in series if in_date_range(r, start, end)]

    if not window:
        return []

    prices = np.array([r.price for r in window], dtype=float)
    baseline = float(prices[np.argmin(prices)])

    if baseline == 0:
        raise ReturnsError(
            f"Baseline price is zero between {start} and {end}: returns are undefined"
        )

    returns = (prices - baseline) / baseline * 100

    return [
        ProfitableDay(date=record.date, return_pct=float(ret))
        for record, ret in zip(window, returns)
        if ret > threshold_pct
    ]


def best_investment_period(series: PriceSeries) -> Optional[InvestmentPeriod]:
    """
    Find the buy/sell pair with the highest percentage return.

    Brute force over every ordered pair: O(n^2) in series length, which
    becomes the bottleneck for long series. Pairs are generated buy index
    ascending, then sell index ascending, and only pairs with
    buy.date < sell.date count. The first pair reaching the maximum wins.

    Args:
        series: Price records in any order

    Returns:
        InvestmentPeriod for the best pair, or None if no record has a
        strictly later record to sell on

    Raises:
        ReturnsError: If any candidate pair has a zero buy price. A single
            zero-priced record dated before any other record therefore makes
            the whole query fail, even when every other pair is well defined.
    """
    best = None

    for buy in series:
        for sell in series:
            if not buy.date < sell.date:
                continue

            ret = percent_return(buy.price, sell.price)

            if best is None or ret > best.return_pct:
                best = InvestmentPeriod(
                    buy_date=buy.date,
                    sell_date=sell.date,
                    return_pct=ret
                )

    return best
