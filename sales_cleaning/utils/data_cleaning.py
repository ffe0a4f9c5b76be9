# -*- coding: utf-8 -*-
"""Field-level cleaning helpers shared by the sales record normalizer.

Each helper takes one raw cell (a string, or None when the source line was
short) and returns a typed value or a missing marker. None of them raise on
bad input: callers decide whether a missing value rejects the row.
"""

import logging
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

import pandas as pd

logger = logging.getLogger(__name__)

# Enough significant digits to quantize any finite double to cents.
ROUNDING_PRECISION = 400


def clean_text(value: Optional[str]) -> str:
    """Strip surrounding whitespace; missing values become an empty string."""
    if value is None:
        return ""
    return str(value).strip()


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a free-form date string into a calendar date.

    Uses pandas' general date parser. Timestamps carrying a UTC offset are
    converted to UTC before the time of day is dropped.

    Args:
        value: Raw date string (e.g. "2024-03-01", "03/01/2024 10:30")

    Returns:
        The calendar date, or None if the value is missing, unparseable or
        not a real calendar date (e.g. "31/02/2024"). Relative keywords
        such as "now" and "today" are rejected so the result never depends
        on the clock.
    """
    text = clean_text(value)
    # No digits means a relative keyword like "now" or "today", or garbage.
    if not any(ch.isdigit() for ch in text):
        return None

    parsed = pd.to_datetime(text, errors="coerce", utc=True)
    if pd.isna(parsed):
        return None
    return parsed.date()


def coerce_number(value: Optional[str]) -> float:
    """Coerce a raw cell to a float.

    Args:
        value: Raw numeric string

    Returns:
        The numeric value, or NaN if the cell is missing or not a number.
    """
    text = clean_text(value)
    if not text:
        return math.nan

    number = pd.to_numeric(text, errors="coerce")
    if pd.isna(number):
        return math.nan
    return float(number)


def is_positive_number(number: float) -> bool:
    """True for finite numbers strictly greater than zero."""
    return math.isfinite(number) and number > 0


def round_half_up(value: float, places: int = 2) -> float:
    """Round to a fixed number of decimals, halves away from zero.

    Works on the exact binary value of the float, so 1.005 (stored as
    1.00499999...) rounds to 1.0 while 0.125 rounds to 0.13.

    Args:
        value: Finite number to round
        places: Decimal places to keep

    Returns:
        Rounded float
    """
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        ctx.prec = ROUNDING_PRECISION
        return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def format_number(value: float) -> str:
    """Render a number in plain decimal notation.

    Integral values drop the trailing ".0" (2.0 -> "2"); everything else uses
    the shortest representation that round-trips (12.5 -> "12.5").
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
