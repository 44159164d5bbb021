"""Tests for display formatting."""

import pytest

from theme_mcp.utils.formatting import (
    PLACEHOLDER,
    fmt_int,
    fmt_int_delta,
    fmt_pct,
    fmt_pp,
    is_finite_number,
    round_half_up,
)


class TestIsFiniteNumber:
    """Tests for is_finite_number()."""

    def test_numbers(self) -> None:
        assert is_finite_number(1)
        assert is_finite_number(-2.5)

    @pytest.mark.parametrize("value", [None, True, "1", float("nan"), float("inf")])
    def test_not_numbers(self, value) -> None:
        assert not is_finite_number(value)


class TestFmtPct:
    """Tests for fmt_pct()."""

    def test_positive_has_plus(self) -> None:
        assert fmt_pct(3.456) == "+3.46%"

    def test_negative(self) -> None:
        assert fmt_pct(-1.2) == "-1.20%"

    def test_zero_unsigned(self) -> None:
        assert fmt_pct(0.0) == "0.00%"

    def test_rounds_to_negative_zero(self) -> None:
        """A value that rounds to zero never shows a minus sign."""
        assert fmt_pct(-0.001) == "0.00%"

    def test_missing(self) -> None:
        assert fmt_pct(None) == PLACEHOLDER
        assert fmt_pct(float("nan")) == PLACEHOLDER


class TestFmtPp:
    """Tests for fmt_pp()."""

    def test_suffix(self) -> None:
        assert fmt_pp(1.25) == "+1.25%p"
        assert fmt_pp(-13.3333) == "-13.33%p"

    def test_missing(self) -> None:
        assert fmt_pp(float("inf")) == PLACEHOLDER


class TestFmtInt:
    """Tests for integer displays."""

    def test_half_up(self) -> None:
        assert fmt_int(62.5) == "63"
        assert fmt_int(66.666) == "67"

    def test_no_sign(self) -> None:
        assert fmt_int(5) == "5"

    def test_delta_signed(self) -> None:
        assert fmt_int_delta(3) == "+3"
        assert fmt_int_delta(-2) == "-2"
        assert fmt_int_delta(0) == "0"

    def test_missing(self) -> None:
        assert fmt_int(None) == PLACEHOLDER
        assert fmt_int_delta(None) == PLACEHOLDER


class TestRoundHalfUp:
    """Tests for round_half_up()."""

    def test_exact_half(self) -> None:
        assert round_half_up(2.5) == "3"
        assert round_half_up(0.5) == "1"

    def test_binary_value_used(self) -> None:
        """1.005 is stored just below 1.005, so it rounds down."""
        assert round_half_up(1.005, 2) == "1.00"

    def test_digits(self) -> None:
        assert round_half_up(0.125, 2) == "0.13"

    def test_large_magnitude(self) -> None:
        """Values past the default decimal precision still quantize."""
        assert round_half_up(1e30, 2) == "1000000000000000019884624838656.00"
        assert round_half_up(-1e30, 0) == "-1000000000000000019884624838656"
        assert fmt_pct(1e30) == "+1000000000000000019884624838656.00%"
