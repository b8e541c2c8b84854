"""
Metrics aggregator - composes all gold price queries into one summary.
Runs each query independently so one failing query does not hide the rest.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from analysis.calculations.averages import average_price, yearly_averages
from analysis.calculations.extremes import second_decile_dates, top3_extremes
from analysis.calculations.returns import (
    PROFIT_THRESHOLD_PCT,
    ReturnsError,
    best_investment_period,
    profitable_days,
)
from analysis.config import AnalysisConfig
from analysis.guardrails import (
    DataQualityError,
    check_zero_prices,
    has_second_decile_data,
    price_series_warnings,
    validate_price_series,
)
from analysis.models import PriceSeries

logger = logging.getLogger(__name__)


CALCULATION_VERSION = '1.0.0'


class MetricsAggregatorError(Exception):
    """Raised when metrics aggregation fails."""
    pass


def compose_analysis(
    series: PriceSeries,
    config: Optional[AnalysisConfig] = None
) -> Dict[str, Any]:
    """
    Compose all gold price queries into a JSON-friendly summary.

    Args:
        series: Price records in any order
        config: Query parameters (defaults to AnalysisConfig())

    Returns:
        Summary dictionary. Dates are ISO strings.

    Raises:
        MetricsAggregatorError: If the series is empty or invalid
    """
    if config is None:
        config = AnalysisConfig()

    if len(series) == 0:
        raise MetricsAggregatorError("Empty price series provided")

    try:
        validate_price_series(series)
    except DataQualityError as e:
        raise MetricsAggregatorError(f"Invalid price series: {e}") from e

    errors = {}
    dates = [r.date for r in series]

    extremes = top3_extremes(series, config.current_year)

    profitable = None
    try:
        profitable = [
            {'date': day.date.isoformat(), 'return_pct': day.return_pct}
            for day in profitable_days(
                series, config.profit_window_start, config.profit_window_end
            )
        ]
    except ReturnsError as e:
        logger.warning(f"Profitable days query failed: {e}")
        errors['profitable_days'] = str(e)

    decile_ok = has_second_decile_data(series, config.decile_year_low, config.decile_year_high)
    decile_dates = second_decile_dates(series, config.decile_year_low, config.decile_year_high)

    best = None
    try:
        period = best_investment_period(series)
        if period is not None:
            best = {
                'buy_date': period.buy_date.isoformat(),
                'sell_date': period.sell_date.isoformat(),
                'return_pct': period.return_pct
            }
    except ReturnsError as e:
        logger.warning(f"Best investment query failed: {e}")
        errors['best_investment'] = str(e)

    return {
        'record_count': len(series),
        'data_period': {
            'start_date': min(dates).isoformat(),
            'end_date': max(dates).isoformat()
        },
        'average_price': average_price(series),
        'top3': {
            'year': config.current_year,
            'highest': [_record_dict(r) for r in extremes.highest],
            'lowest': [_record_dict(r) for r in extremes.lowest]
        },
        'profitable_days': {
            'start_date': config.profit_window_start.isoformat(),
            'end_date': config.profit_window_end.isoformat(),
            'threshold_pct': PROFIT_THRESHOLD_PCT,
            'days': profitable
        },
        'second_decile': {
            'year_low': config.decile_year_low,
            'year_high': config.decile_year_high,
            'status': 'ok' if decile_ok else 'insufficient_data',
            'dates': [d.isoformat() for d in decile_dates]
        },
        'yearly_averages': yearly_averages(series, config.yearly_average_years),
        'best_investment': best,
        'errors': errors,
        'metadata': {
            'calculated_at': datetime.now().isoformat(),
            'calculation_version': CALCULATION_VERSION,
            'zero_price_records': check_zero_prices(series),
            'warnings': price_series_warnings(series)
        }
    }


def _record_dict(record) -> Dict[str, Any]:
    return {'date': record.date.isoformat(), 'price': record.price}
