"""
Normalization utilities for Consulta Amigable report data.

Handles:
- Concepto labels (accent stripping for stable comparison keys)
- Devengado amounts ("1,234,567.89", "  500 ")
- Scaling to millions and percentage rounding
"""

import math
import re
import unicodedata
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional


# Combining diacritical marks block
COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")

# Leading decimal number, optionally signed, with optional exponent
LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

MILLION = 1_000_000


def strip_accents(text: str) -> str:
    """
    Remove diacritics from a label.

    Applies canonical decomposition (NFD) and drops combining marks
    (U+0300-U+036F), so "Educación" and "Educacion" share one key.

    Args:
        text: Raw label text

    Returns:
        Label without combining marks
    """
    if not text:
        return ""

    decomposed = unicodedata.normalize("NFD", text)
    return COMBINING_MARKS.sub("", decomposed)


def parse_amount(text: str) -> Optional[float]:
    """
    Parse a devengado amount from a table cell.

    Thousands-separator commas are removed and the leading numeric
    part of the text is parsed; trailing garbage is ignored.

    Supported formats:
    - "1,234,567.89" -> 1234567.89
    - "500" -> 500.0
    - "-2,000" -> -2000.0
    - "12.5 %" -> 12.5

    Args:
        text: Cell text

    Returns:
        Float amount or None if the text does not start with a finite number
    """
    if not text:
        return None

    cleaned = text.strip().replace(",", "")
    match = LEADING_NUMBER.match(cleaned)
    if not match:
        return None

    try:
        amount = float(match.group(0))
    except (ValueError, OverflowError):
        return None

    # "1e400" overflows to inf
    if not math.isfinite(amount):
        return None
    return amount


def scale_to_millions(amount: float) -> int:
    """
    Scale a raw amount to millions, truncating toward zero.

    2,999,999 -> 2 and -2,999,999 -> -2.
    """
    return math.trunc(amount / MILLION)


def round_half_away(value: float, digits: int = 1) -> float:
    """
    Round to a fixed number of decimals, ties away from zero.

    The exact binary value of the float is rounded, so 0.25 -> 0.3 and
    -0.25 -> -0.3. Negative zero collapses to 0.
    """
    quantum = Decimal(1).scaleb(-digits)
    rounded = float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
    return rounded if rounded != 0 else 0.0


def percentage_change(actual: int, anterior: int) -> float:
    """
    Percentage change from anterior to actual, one decimal.

    Returns exactly 0 when anterior is 0.
    """
    if anterior == 0:
        return 0
    return round_half_away((actual / anterior) * 100 - 100, 1)
