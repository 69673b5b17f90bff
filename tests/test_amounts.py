"""Tests for wire precision normalization."""

import pytest

from token_bridge_relayer.core.amounts import denormalize_amount, normalize_amount, round_trip_amount
from token_bridge_relayer.core.constants import UINT64_BITS, UINT256_MAX
from token_bridge_relayer.core.errors import AmountOverflowError, InvalidInputError


class TestNormalizeAmount:
    """Tests for scaling amounts down to 8 decimals."""

    @pytest.mark.parametrize("decimals", [0, 6, 8])
    def test_small_decimals_are_untouched(self, decimals):
        """Amounts with 8 or fewer decimals already fit the wire precision."""
        assert normalize_amount(123_456_789, decimals) == 123_456_789
        assert denormalize_amount(123_456_789, decimals) == 123_456_789

    def test_truncates_extra_decimals(self):
        """Digits beyond 8 decimals are dropped, never rounded."""
        assert normalize_amount(1_234_567_891_234_567_891, 18) == 123_456_789
        assert normalize_amount(9_999_999_999, 18) == 0

    def test_denormalize_scales_back_up(self):
        assert denormalize_amount(123_456_789, 18) == 1_234_567_890_000_000_000

    def test_round_trip_drops_dust(self):
        """Only the wire-representable part of an amount survives bridging."""
        amount = 1_234_567_891_234_567_891
        survived = round_trip_amount(amount, 18)

        assert survived == 1_234_567_890_000_000_000
        assert survived <= amount
        assert round_trip_amount(survived, 18) == survived

    def test_max_uint256_normalizes(self):
        assert normalize_amount(UINT256_MAX, 18) == UINT256_MAX // 10**10

    @pytest.mark.parametrize("amount", [-1, 1.5, "100", True])
    def test_rejects_non_unsigned_amounts(self, amount):
        with pytest.raises(InvalidInputError):
            normalize_amount(amount, 18)

    @pytest.mark.parametrize("decimals", [-1, 256])
    def test_rejects_decimals_outside_uint8(self, decimals):
        with pytest.raises(InvalidInputError):
            normalize_amount(1, decimals)

    def test_amount_wider_than_native_width(self):
        """A Solana amount must fit in u64."""
        with pytest.raises(AmountOverflowError):
            normalize_amount(2**64, 9, bits=UINT64_BITS)

    def test_denormalize_overflow(self):
        with pytest.raises(AmountOverflowError):
            denormalize_amount(2**255, 18)
        with pytest.raises(AmountOverflowError):
            denormalize_amount(2**64 - 1, 18, bits=UINT64_BITS)
