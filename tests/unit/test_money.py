"""
Tests for the money primitives

Checks:
1. Conversion of int/str/Decimal/float inputs to quantized Decimals
2. Rejection of NaN/Infinity and garbage
3. Tolerant comparison
4. Equal split with remainder
"""

from decimal import Decimal

import pytest

from splitledger.core.math.money import (
    AMOUNT_QUANTUM,
    SPLIT_TOLERANCE,
    ZERO,
    amounts_match,
    split_equally,
    sum_amounts,
    to_amount,
)


# =============================================================================
# CONVERSION
# =============================================================================


class TestToAmount:
    def test_int_and_str(self) -> None:
        assert to_amount(40) == Decimal("40.00")
        assert to_amount("12.5") == Decimal("12.50")
        assert to_amount(" 7 ") == Decimal("7.00")

    def test_decimal_is_quantized(self) -> None:
        assert to_amount(Decimal("1.005")) == Decimal("1.01")
        assert to_amount(Decimal("3")).as_tuple().exponent == -2

    def test_float_goes_through_repr(self) -> None:
        """0.1 + 0.2 must not leak binary noise into the ledger"""
        assert to_amount(0.1 + 0.2) == Decimal("0.30")
        assert to_amount(13.333333333333334) == Decimal("13.33")

    def test_negative_values_are_representable(self) -> None:
        assert to_amount("-5") == Decimal("-5.00")

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), "NaN", "Infinity", "abc", "", None, True])
    def test_rejects_non_finite_or_garbage(self, bad) -> None:
        with pytest.raises(ValueError):
            to_amount(bad)

    @pytest.mark.parametrize("huge", ["1e30", "1" + "0" * 27, Decimal("1E+26")])
    def test_rejects_amounts_beyond_precision(self, huge) -> None:
        """Quantizing to cents must not exceed the decimal context precision"""
        with pytest.raises(ValueError, match="out of range"):
            to_amount(huge)

    def test_large_amount_within_precision(self) -> None:
        assert to_amount("1" + "0" * 25) == Decimal("1" + "0" * 25 + ".00")

    def test_quantum_constant(self) -> None:
        assert AMOUNT_QUANTUM == Decimal("0.01")


# =============================================================================
# COMPARISON
# =============================================================================


class TestAmountsMatch:
    def test_exact(self) -> None:
        assert amounts_match(Decimal("30.00"), Decimal("30.00"))

    def test_boundary_is_inclusive(self) -> None:
        assert amounts_match(Decimal("99.99"), Decimal("100.00"), SPLIT_TOLERANCE)

    def test_outside_tolerance(self) -> None:
        assert not amounts_match(Decimal("20.00"), Decimal("30.00"))
        assert not amounts_match(Decimal("99.98"), Decimal("100.00"))

    def test_negative_tolerance_rejected(self) -> None:
        with pytest.raises(ValueError):
            amounts_match(ZERO, ZERO, Decimal("-0.01"))

    def test_sum_of_nothing_is_zero(self) -> None:
        assert sum_amounts([]) == ZERO


# =============================================================================
# EQUAL SPLIT
# =============================================================================


class TestSplitEqually:
    def test_even(self) -> None:
        assert split_equally(Decimal("40.00"), 2) == (Decimal("20.00"), Decimal("0.00"))

    def test_remainder(self) -> None:
        share, remainder = split_equally(Decimal("100.00"), 3)
        assert share == Decimal("33.33")
        assert remainder == Decimal("0.01")
        assert share * 3 + remainder == Decimal("100.00")

    def test_shares_round_down(self) -> None:
        share, remainder = split_equally(Decimal("0.05"), 3)
        assert share == Decimal("0.01")
        assert remainder == Decimal("0.02")

    def test_zero_parts_rejected(self) -> None:
        with pytest.raises(ValueError):
            split_equally(Decimal("10.00"), 0)
