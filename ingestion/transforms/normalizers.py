"""
Normalizers for transforming provider data to canonical price records.
Pure functions - no IO, network, or side effects.
Minimal normalization - only when necessary.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Sequence, Tuple, Union

from analysis.models import PriceRecord
from ingestion.transforms.validators import ValidationError, validate_price_row


# Field names per provider shape: canonical, then the NBP gold price API
DATE_KEYS = ('date', 'data')
PRICE_KEYS = ('price', 'cena')

RawRow = Union[Dict[str, Any], Tuple[Any, Any]]


def _pick(raw: Dict[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def parse_date(value: Any) -> date:
    """
    Parse an ISO date string or pass through a date.

    Raises:
        ValidationError: If value is not a calendar date
    """
    if isinstance(value, datetime):
        # Provider timestamps at midnight are plain dates
        if value.time() != datetime.min.time():
            raise ValidationError(f"date has a time component: {value.isoformat()}")
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}")

    raise ValidationError(f"date must be ISO string or date, got {type(value)}")


def parse_price(value: Any) -> float:
    """
    Parse a decimal string or number into a float price.

    Raises:
        ValidationError: If value is not numeric
    """
    if isinstance(value, bool):
        raise ValidationError(f"price must be numeric, got {type(value)}")

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ValidationError(f"Invalid price: {value!r}")

    raise ValidationError(f"price must be numeric, got {type(value)}")


def normalize_price_row(raw: RawRow) -> PriceRecord:
    """
    Transform one provider row to a PriceRecord.

    Accepts a {date, price} dict (also {data, cena}) or a (date, price)
    pair.

    Raises:
        ValidationError: If the row is malformed
    """
    if isinstance(raw, dict):
        raw_date = _pick(raw, DATE_KEYS)
        raw_price = _pick(raw, PRICE_KEYS)
    elif isinstance(raw, (tuple, list)) and len(raw) == 2:
        raw_date, raw_price = raw
    else:
        raise ValidationError(f"Unsupported row shape: {type(raw)}")

    if raw_date is None:
        raise ValidationError("Row is missing a date")
    if raw_price is None:
        raise ValidationError("Row is missing a price")

    canonical = {
        'date': parse_date(raw_date),
        'price': parse_price(raw_price),
    }
    validate_price_row(canonical)

    return PriceRecord(date=canonical['date'], price=canonical['price'])


def normalize_price_rows(raw_rows: Sequence[RawRow]) -> List[PriceRecord]:
    """
    Transform provider-native rows to PriceRecords.

    Input order is kept and duplicate dates are not merged.

    Args:
        raw_rows: Dicts or (date, price) pairs

    Returns:
        List of PriceRecord

    Raises:
        ValidationError: If any row is malformed, naming its index
    """
    if not raw_rows:
        return []

    normalized = []
    for i, raw in enumerate(raw_rows):
        try:
            normalized.append(normalize_price_row(raw))
        except ValidationError as e:
            raise ValidationError(f"Row {i}: {e}")

    return normalized
