"""
Price store - XML persistence for a gold price series.
Thin IO layer: one flat document, written atomically, parsed strictly.
"""

import logging
import numpy as np
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from analysis.models import PriceRecord, PriceSeries
from storage.atomic_writer import AtomicWriteError, write_bytes_atomic

logger = logging.getLogger(__name__)


ROOT_TAG = 'GoldPrices'
RECORD_TAG = 'GoldPrice'
DATE_TAG = 'Date'
PRICE_TAG = 'Price'
DATE_FORMAT = '%Y-%m-%d'


class PriceStoreError(Exception):
    """Raised when the price document cannot be written or read."""
    pass


class PriceParseError(PriceStoreError, ValueError):
    """Raised when a present price document is malformed."""
    pass


def format_price(price: float) -> str:
    """
    Format a price as plain decimal text, never scientific notation.

    Shortest digits that parse back to the same float, e.g. 1e-05 is
    written as 0.00001 and 1e16 as 10000000000000000.0.
    """
    return np.format_float_positional(float(price), unique=True, trim='0')


def build_prices_document(series: PriceSeries) -> ET.Element:
    """
    Build the XML tree for a series.

    Layout:
        <GoldPrices>
          <GoldPrice><Date>2024-01-02</Date><Price>250.12</Price></GoldPrice>
          ...
        </GoldPrices>
    """
    root = ET.Element(ROOT_TAG)

    for record in series:
        entry = ET.SubElement(root, RECORD_TAG)
        ET.SubElement(entry, DATE_TAG).text = record.date.strftime(DATE_FORMAT)
        ET.SubElement(entry, PRICE_TAG).text = format_price(record.price)

    ET.indent(root)
    return root


def save_prices_xml(series: PriceSeries, file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Save a price series to an XML document.

    Args:
        series: Price records, written in the given order
        file_path: Destination path (parent directories are created)

    Returns:
        Dictionary with write results

    Raises:
        PriceStoreError: If the document could not be written
    """
    output_path = Path(file_path)
    content = ET.tostring(build_prices_document(series), encoding='utf-8', xml_declaration=True)

    try:
        result = write_bytes_atomic(content, output_path)
    except AtomicWriteError as e:
        raise PriceStoreError(str(e)) from e

    result['records_written'] = len(series)
    logger.info(f"Saved {len(series)} prices to {output_path}")

    return result


def _parse_entry(entry: ET.Element, index: int) -> PriceRecord:
    date_el = entry.find(DATE_TAG)
    price_el = entry.find(PRICE_TAG)

    if date_el is None:
        raise PriceParseError(f"{RECORD_TAG} #{index} is missing <{DATE_TAG}>")
    if price_el is None:
        raise PriceParseError(f"{RECORD_TAG} #{index} is missing <{PRICE_TAG}>")

    date_text = (date_el.text or '').strip()
    price_text = (price_el.text or '').strip()

    try:
        record_date = datetime.strptime(date_text, DATE_FORMAT).date()
    except ValueError:
        raise PriceParseError(f"{RECORD_TAG} #{index} has invalid date: {date_text!r}")

    try:
        price = float(price_text)
    except ValueError:
        raise PriceParseError(f"{RECORD_TAG} #{index} has invalid price: {price_text!r}")

    try:
        return PriceRecord(date=record_date, price=price)
    except ValueError as e:
        raise PriceParseError(f"{RECORD_TAG} #{index}: {e}")


def load_prices_xml(file_path: Union[str, Path]) -> List[PriceRecord]:
    """
    Load a price series from an XML document.

    Args:
        file_path: Path written by save_prices_xml

    Returns:
        List of PriceRecord in document order. Empty if the file does
        not exist.

    Raises:
        PriceParseError: If the document or any entry is malformed
        PriceStoreError: If the file exists but cannot be read
    """
    input_path = Path(file_path)

    if not input_path.exists():
        logger.info(f"Price file not found, returning empty series: {input_path}")
        return []

    try:
        root = ET.parse(input_path).getroot()
    except ET.ParseError as e:
        raise PriceParseError(f"Malformed price document {input_path}: {e}") from e
    except OSError as e:
        raise PriceStoreError(f"Failed to read {input_path}: {e}") from e

    if root.tag != ROOT_TAG:
        logger.warning(f"Unexpected root element <{root.tag}> in {input_path}")

    records = [
        _parse_entry(entry, i)
        for i, entry in enumerate(root.findall(RECORD_TAG))
    ]

    logger.info(f"Loaded {len(records)} prices from {input_path}")
    return records
