"""Tests for normalizer functions."""

import math

import pytest

from budget_comparator.core.normalizer import (
    strip_accents,
    parse_amount,
    scale_to_millions,
    round_half_away,
    percentage_change,
)


class TestStripAccents:
    """Tests for strip_accents function."""

    def test_removes_acute_accents(self):
        """Test removal of acute accents."""
        assert strip_accents("Educación Básica") == "Educacion Basica"

    def test_removes_tilde_from_enye(self):
        """Test that ñ decomposes to n."""
        assert strip_accents("Niño y Señora") == "Nino y Senora"

    def test_removes_diaeresis(self):
        """Test removal of diaeresis."""
        assert strip_accents("Pingüino") == "Pinguino"

    def test_precomposed_and_decomposed_collapse(self):
        """Test precomposed and combining forms give the same key."""
        precomposed = "Educación"
        decomposed = "Educacio\u0301n"
        assert strip_accents(precomposed) == strip_accents(decomposed) == "Educacion"

    def test_plain_text_unchanged(self):
        """Test ASCII text is returned as is."""
        assert strip_accents("Personal y Obligaciones") == "Personal y Obligaciones"

    def test_empty_string(self):
        """Test empty string."""
        assert strip_accents("") == ""

    def test_none_input(self):
        """Test None input."""
        assert strip_accents(None) == ""


class TestParseAmount:
    """Tests for parse_amount function."""

    def test_thousands_separators(self):
        """Test commas are removed before parsing."""
        assert parse_amount("1,234,567.89") == 1_234_567.89

    def test_surrounding_whitespace(self):
        """Test whitespace is trimmed."""
        assert parse_amount("  500 \n") == 500.0

    def test_negative(self):
        """Test negative amounts."""
        assert parse_amount("-2,000") == -2000.0

    def test_leading_number_with_suffix(self):
        """Test trailing text after the number is ignored."""
        assert parse_amount("12.5 %") == 12.5

    def test_leading_decimal_point(self):
        """Test numbers starting with a decimal point."""
        assert parse_amount(".5") == 0.5

    def test_exponent(self):
        """Test exponent notation."""
        assert parse_amount("1e3") == 1000.0

    def test_overflow_rejected(self):
        """Test amounts too large for a float are not numbers."""
        assert parse_amount("1e400") is None
        assert parse_amount("-1e400") is None

    def test_non_numeric(self):
        """Test text without a leading number."""
        assert parse_amount("S/ 100") is None
        assert parse_amount("Devengado") is None
        assert parse_amount("--") is None

    def test_empty_string(self):
        """Test empty string returns None."""
        assert parse_amount("") is None
        assert parse_amount("   ") is None


class TestScaleToMillions:
    """Tests for scale_to_millions function."""

    def test_truncates_positive(self):
        """Test positive amounts truncate down."""
        assert scale_to_millions(2_999_999) == 2

    def test_truncates_negative_toward_zero(self):
        """Test negative amounts truncate toward zero."""
        assert scale_to_millions(-2_999_999) == -2
        assert scale_to_millions(-500_000) == 0

    def test_exact_millions(self):
        """Test exact multiples."""
        assert scale_to_millions(1_005_000_000) == 1005

    def test_fractional_amount(self):
        """Test float amounts."""
        assert scale_to_millions(1_500_000.75) == 1

    def test_returns_int(self):
        """Test result type."""
        assert isinstance(scale_to_millions(3_000_000.0), int)


class TestRoundHalfAway:
    """Tests for round_half_away function."""

    def test_rounds_to_one_decimal(self):
        """Test ordinary rounding."""
        assert round_half_away(12.345) == 12.3
        assert round_half_away(-66.666) == -66.7

    def test_ties_away_from_zero(self):
        """Test exact ties round away from zero."""
        assert round_half_away(0.25) == 0.3
        assert round_half_away(-0.25) == -0.3

    def test_negative_zero_collapses(self):
        """Test tiny negatives do not produce -0.0."""
        result = round_half_away(-0.04)
        assert result == 0
        assert math.copysign(1, result) == 1


class TestPercentageChange:
    """Tests for percentage_change function."""

    def test_increase(self):
        """Test increase."""
        assert percentage_change(1005, 1000) == 0.5

    def test_decrease(self):
        """Test decrease."""
        assert percentage_change(50, 100) == -50.0

    def test_repeating_decimal(self):
        """Test rounding of repeating decimals."""
        assert percentage_change(1, 3) == -66.7

    @pytest.mark.parametrize("actual", [0, 5, -5, 1_000_000])
    def test_zero_anterior_is_zero(self, actual):
        """Test division by zero is avoided."""
        assert percentage_change(actual, 0) == 0

    def test_no_change(self):
        """Test equal amounts."""
        assert percentage_change(250, 250) == 0
