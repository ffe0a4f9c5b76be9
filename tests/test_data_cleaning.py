# -*- coding: utf-8 -*-
"""Tests for sales_cleaning/utils/data_cleaning.py."""

import math
from datetime import date

from sales_cleaning.utils.data_cleaning import (
    clean_text,
    coerce_number,
    format_number,
    is_positive_number,
    parse_date,
    round_half_up,
)


class TestCleanText:
    """Test text trimming."""

    def test_strip(self):
        """Surrounding whitespace removed."""
        assert clean_text("  Paella \t") == "Paella"

    def test_none_is_empty(self):
        """Missing value becomes empty string."""
        assert clean_text(None) == ""


class TestParseDate:
    """Test date parsing."""

    def test_iso_date(self):
        """ISO dates parse as-is."""
        assert parse_date("2024-03-01") == date(2024, 3, 1)

    def test_time_of_day_discarded(self):
        """Time component is dropped."""
        assert parse_date("2024-03-01 10:15:00") == date(2024, 3, 1)

    def test_offset_converted_to_utc(self):
        """Offset timestamps are converted to UTC before truncation."""
        assert parse_date("2024-03-01T23:30:00+02:00") == date(2024, 3, 1)
        assert parse_date("2024-03-01T01:30:00+02:00") == date(2024, 2, 29)

    def test_invalid_calendar_date(self):
        """31 February is rejected."""
        assert parse_date("31/02/2024") is None

    def test_garbage(self):
        """Non-date text is rejected."""
        assert parse_date("not a date") is None

    def test_relative_keywords_rejected(self):
        """Clock-relative words never resolve to a date."""
        assert parse_date("now") is None
        assert parse_date("today") is None
        assert parse_date(" Today ") is None

    def test_missing(self):
        """Empty and missing values are rejected."""
        assert parse_date("") is None
        assert parse_date(None) is None


class TestCoerceNumber:
    """Test numeric coercion."""

    def test_integer_and_decimal(self):
        """Plain numbers parse to float."""
        assert coerce_number("2") == 2.0
        assert coerce_number("12.5") == 12.5
        assert coerce_number(" 3 ") == 3.0

    def test_not_a_number(self):
        """Non-numeric text becomes NaN."""
        assert math.isnan(coerce_number("abc"))
        assert math.isnan(coerce_number(""))
        assert math.isnan(coerce_number(None))


class TestIsPositiveNumber:
    """Test positivity check."""

    def test_values(self):
        """Only finite values above zero pass."""
        assert is_positive_number(0.01)
        assert not is_positive_number(0.0)
        assert not is_positive_number(-1.0)
        assert not is_positive_number(math.nan)
        assert not is_positive_number(math.inf)


class TestRoundHalfUp:
    """Test two-decimal rounding."""

    def test_exact_half_rounds_up(self):
        """An exact binary half goes away from zero."""
        assert round_half_up(0.125) == 0.13

    def test_binary_value_below_half(self):
        """1.005 is stored below the half and rounds down."""
        assert round_half_up(1.005) == 1.0

    def test_already_rounded(self):
        """Values with two decimals are unchanged."""
        assert round_half_up(25.0) == 25.0

    def test_huge_magnitudes(self):
        """Values beyond the default decimal precision round without error."""
        assert round_half_up(2e27) == 2e27
        assert round_half_up(1.5e300) == 1.5e300
        assert round_half_up(12.34) == 12.34


class TestFormatNumber:
    """Test number rendering."""

    def test_integral_values(self):
        """Integral floats drop the decimal part."""
        assert format_number(2.0) == "2"
        assert format_number(25.0) == "25"

    def test_fractional_values(self):
        """Fractional values keep their shortest representation."""
        assert format_number(12.5) == "12.5"
        assert format_number(0.1) == "0.1"
