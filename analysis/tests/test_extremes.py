"""
Tests for ranking utilities - top 3 extremes and second-decile dates.
"""

import pytest
from datetime import date, timedelta

from analysis.models import PriceRecord
from analysis.calculations.extremes import (
    top3_extremes,
    second_decile_dates,
    rank_by_price,
    Extremes,
    TOP_N,
    DECILE_SKIP,
    DECILE_TAKE
)


class TestTop3Extremes:
    """Tests for top3_extremes function."""

    def test_top3_basic(self):
        """Test highest descending and lowest ascending."""
        series = [
            PriceRecord(date(2024, 1, 1), 250.0),
            PriceRecord(date(2024, 2, 1), 300.0),
            PriceRecord(date(2024, 3, 1), 200.0),
            PriceRecord(date(2024, 4, 1), 275.0),
            PriceRecord(date(2024, 5, 1), 225.0)
        ]

        result = top3_extremes(series, 2024)

        assert [r.price for r in result.highest] == [300.0, 275.0, 250.0]
        assert [r.price for r in result.lowest] == [200.0, 225.0, 250.0]

    def test_filters_to_current_year(self):
        """Test records outside the year are ignored."""
        series = [
            PriceRecord(date(2023, 12, 31), 1000.0),
            PriceRecord(date(2024, 1, 1), 250.0),
            PriceRecord(date(2025, 1, 1), 1.0)
        ]

        result = top3_extremes(series, 2024)

        assert result.highest == [PriceRecord(date(2024, 1, 1), 250.0)]
        assert result.lowest == [PriceRecord(date(2024, 1, 1), 250.0)]

    def test_fewer_than_three_matches(self):
        """Test fewer matches returns all of them without padding."""
        series = [
            PriceRecord(date(2024, 1, 1), 10.0),
            PriceRecord(date(2024, 1, 2), 20.0)
        ]

        result = top3_extremes(series, 2024)

        assert len(result.highest) == 2
        assert len(result.lowest) == 2

    def test_no_matches(self):
        result = top3_extremes([PriceRecord(date(2020, 1, 1), 1.0)], 2024)

        assert result == Extremes(highest=[], lowest=[])

    def test_ties_keep_input_order(self):
        """Test stable tie-break among equal prices."""
        a = PriceRecord(date(2024, 3, 1), 100.0)
        b = PriceRecord(date(2024, 1, 1), 100.0)
        c = PriceRecord(date(2024, 2, 1), 100.0)
        d = PriceRecord(date(2024, 4, 1), 100.0)

        result = top3_extremes([a, b, c, d], 2024)

        assert result.highest == [a, b, c]
        assert result.lowest == [a, b, c]

    def test_length_and_ordering_invariants(self):
        """Test output sizes and sort direction on a longer series."""
        series = [
            PriceRecord(date(2024, 1, 1) + timedelta(days=i), float((i * 37) % 101))
            for i in range(60)
        ]

        result = top3_extremes(series, 2024)
        highest = [r.price for r in result.highest]
        lowest = [r.price for r in result.lowest]

        assert len(highest) <= TOP_N
        assert len(lowest) <= TOP_N
        assert highest == sorted(highest, reverse=True)
        assert lowest == sorted(lowest)
        assert highest[0] == max(r.price for r in series)
        assert lowest[0] == min(r.price for r in series)

    def test_year_is_a_parameter(self):
        series = [PriceRecord(date(2021, 6, 1), 5.0)]

        assert top3_extremes(series, 2021).highest == series
        assert top3_extremes(series, 2022).highest == []


class TestSecondDecileDates:
    """Tests for second_decile_dates function."""

    def test_thirteen_records_returns_ranks_11_to_13(self):
        """Test exactly 13 qualifying records returns the bottom three."""
        # Prices 130, 120, ..., 10 on consecutive days
        series = [
            PriceRecord(date(2020, 1, 1) + timedelta(days=i), float(130 - 10 * i))
            for i in range(13)
        ]

        result = second_decile_dates(series, 2019, 2022)

        assert result == [series[10].date, series[11].date, series[12].date]

    def test_order_follows_price_not_input(self):
        """Test result is in descending price order."""
        series = [PriceRecord(date(2019, 1, 1) + timedelta(days=i), float(i)) for i in range(15)]

        result = second_decile_dates(series, 2019, 2022)

        # Descending: 14..0, skip 14..5, take 4, 3, 2
        assert result == [series[4].date, series[3].date, series[2].date]

    def test_ten_or_fewer_returns_empty(self):
        """Test insufficient data yields an empty list, not an error."""
        series = [PriceRecord(date(2020, 1, 1) + timedelta(days=i), float(i)) for i in range(DECILE_SKIP)]

        assert second_decile_dates(series, 2019, 2022) == []

    def test_eleven_records_returns_one(self):
        series = [PriceRecord(date(2020, 1, 1) + timedelta(days=i), float(i)) for i in range(11)]

        result = second_decile_dates(series, 2019, 2022)

        assert result == [series[0].date]

    def test_year_range_filter_inclusive(self):
        """Test records outside [low, high] are excluded."""
        inside = [PriceRecord(date(2019, 1, 1) + timedelta(days=i), 100.0 + i) for i in range(12)]
        outside = [
            PriceRecord(date(2018, 12, 31), 5000.0),
            PriceRecord(date(2023, 1, 1), 6000.0)
        ]

        result = second_decile_dates(outside + inside, 2019, 2022)

        # Descending 111..100, skip 10 -> 101, 100
        assert result == [inside[1].date, inside[0].date]

    def test_take_size(self):
        series = [PriceRecord(date(2020, 1, 1) + timedelta(days=i), float(i)) for i in range(40)]

        assert len(second_decile_dates(series, 2020, 2020)) == DECILE_TAKE


class TestRankByPrice:
    """Tests for rank_by_price helper."""

    def test_does_not_mutate_input(self):
        series = [PriceRecord(date(2024, 1, 2), 2.0), PriceRecord(date(2024, 1, 1), 1.0)]
        before = list(series)

        rank_by_price(series)

        assert series == before
