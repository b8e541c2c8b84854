"""
Core validators for canonical price records.
Pure functions - no IO, network, or side effects.
"""

import math
from datetime import date, datetime
from typing import Any, Dict

from analysis.models import PriceRecord


class ValidationError(ValueError):
    """Raised when data validation fails."""
    pass


def validate_price_row(row: Dict[str, Any]) -> None:
    """
    Validate a canonical price row before it becomes a PriceRecord.

    Args:
        row: Dictionary with 'date' and 'price' keys

    Raises:
        ValidationError: If validation fails
    """
    required_keys = {'date', 'price'}

    missing = required_keys - set(row.keys())
    if missing:
        raise ValidationError(f"Missing required keys: {sorted(missing)}")

    if isinstance(row['date'], datetime) or not isinstance(row['date'], date):
        raise ValidationError(f"date must be date, got {type(row['date'])}")

    price = row['price']
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        raise ValidationError(f"price must be numeric, got {type(price)}")

    if not math.isfinite(price):
        raise ValidationError(f"price must be finite, got {price}")

    if price < 0:
        raise ValidationError(f"price must be non-negative, got {price}")


def validate_price_record(record: Any) -> None:
    """
    Validate an already constructed record.

    Raises:
        ValidationError: If record is not a valid PriceRecord
    """
    if not isinstance(record, PriceRecord):
        raise ValidationError(f"Expected PriceRecord, got {type(record)}")

    validate_price_row({'date': record.date, 'price': record.price})
