"""Tests for the native swap arithmetic shared by all relayer programs."""

import pytest

from token_bridge_relayer.core.constants import UINT64_MAX, ChainFamily
from token_bridge_relayer.core.errors import AmountOverflowError, DivisionByZeroError
from token_bridge_relayer.core.swap_math import (
    calculate_max_swap_amount_in_tokens,
    calculate_native_swap_amount_out,
    calculate_native_swap_amounts,
    calculate_native_swap_rate,
)

PRECISION = 100_000_000
SOL_RATE = 42_000_000_000
SOLANA = ChainFamily.SOLANA


class TestNativeSwapRate:
    """Tests for the native price expressed in token terms."""

    def test_solana_rates(self):
        assert calculate_native_swap_rate(1_000_000_000, 420_000_000_000, PRECISION, family=SOLANA) == 42_000_000_000
        assert calculate_native_swap_rate(6_900_000_000, 420_000_000_000, PRECISION, family=SOLANA) == 6_086_956_521

    def test_zero_rate_is_rejected(self):
        """A rate that truncates to zero would price every swap at zero."""
        with pytest.raises(DivisionByZeroError):
            calculate_native_swap_rate(1_000_000_000, 1, PRECISION, family=SOLANA)

    def test_unset_token_rate(self):
        with pytest.raises(DivisionByZeroError):
            calculate_native_swap_rate(0, SOL_RATE, PRECISION)

    def test_rate_wider_than_u64(self):
        with pytest.raises(AmountOverflowError):
            calculate_native_swap_rate(1, UINT64_MAX, PRECISION, family=SOLANA)

    def test_evm_has_room_for_the_same_rate(self):
        assert calculate_native_swap_rate(1, UINT64_MAX, PRECISION) == UINT64_MAX * PRECISION


class TestMaxSwapAmountIn:
    """Tests for the max native swap amount converted to token units."""

    @pytest.mark.parametrize(
        "decimals, expected",
        [(10, 4_200_000_000_000), (9, 420_000_000_000), (8, 42_000_000_000)],
    )
    def test_scales_by_decimal_gap(self, decimals, expected):
        result = calculate_max_swap_amount_in_tokens(
            decimals, 1_000_000_000, SOL_RATE, PRECISION, family=SOLANA
        )
        assert result == expected

    def test_expensive_native_token(self):
        result = calculate_max_swap_amount_in_tokens(
            9, 1_000_000_000, 690_000_000_000_000, PRECISION, family=SOLANA
        )
        assert result == 6_900_000_000_000_000

    def test_small_max_native_amount(self):
        result = calculate_max_swap_amount_in_tokens(9, 1_000_000, SOL_RATE, PRECISION, family=SOLANA)
        assert result == 420_000_000

    def test_overflow(self):
        with pytest.raises(AmountOverflowError):
            calculate_max_swap_amount_in_tokens(9, 1_000_000, UINT64_MAX, 1, family=SOLANA)


class TestNativeSwapAmountOut:
    """Tests for the uncapped native gas paid for a token amount."""

    def test_stablecoin_to_ether(self):
        """100 USDC at 2000 USD per ether buys 0.05 ether."""
        rate = calculate_native_swap_rate(PRECISION, 2_000 * PRECISION, PRECISION)
        assert rate == 200_000_000_000

        assert calculate_native_swap_amount_out(6, 100_000_000, rate, PRECISION) == 5 * 10**16

    def test_same_price_same_decimals(self):
        rate = calculate_native_swap_rate(PRECISION, PRECISION, PRECISION)
        assert calculate_native_swap_amount_out(18, 10**18, rate, PRECISION) == 10**18

    def test_zero_native_rate(self):
        with pytest.raises(DivisionByZeroError):
            calculate_native_swap_amount_out(18, 10**18, 0, PRECISION)


class TestNativeSwapAmounts:
    """Tests for the amounts swapped when a transfer is redeemed."""

    @pytest.mark.parametrize(
        "decimals, expected_out",
        [(10, 23_809_523), (9, 238_095_238), (8, 2_380_952_380)],
    )
    def test_swap_within_limit(self, decimals, expected_out):
        result = calculate_native_swap_amounts(
            decimals, 1_000_000_000, SOL_RATE, PRECISION, 10_000_000_000, 10_000_000_000, family=SOLANA
        )
        assert result == (10_000_000_000, expected_out)

    def test_nothing_requested(self):
        result = calculate_native_swap_amounts(
            10, 1_000_000_000, SOL_RATE, PRECISION, 10_000_000_000, 0, family=SOLANA
        )
        assert result == (0, 0)

    def test_swaps_disabled(self):
        result = calculate_native_swap_amounts(
            10, 1_000_000_000, SOL_RATE, PRECISION, 0, 10_000_000_000, family=SOLANA
        )
        assert result == (0, 0)

    def test_request_clamped_to_max_in(self):
        result = calculate_native_swap_amounts(
            10, 1_000_000_000, SOL_RATE, PRECISION, 1_000_000_000, 6_900_000_000_000, family=SOLANA
        )
        assert result == (420_000_000_000, 1_000_000_000)

    def test_dust_request_swaps_nothing(self):
        result = calculate_native_swap_amounts(
            10, 1_000_000_000, SOL_RATE, PRECISION, 10_000_000_000, 1, family=SOLANA
        )
        assert result == (0, 0)

    def test_max_in_overflow(self):
        with pytest.raises(AmountOverflowError):
            calculate_native_swap_amounts(
                10, PRECISION, PRECISION, PRECISION, UINT64_MAX, UINT64_MAX, family=SOLANA
            )

    def test_rate_overflow(self):
        with pytest.raises(AmountOverflowError):
            calculate_native_swap_amounts(
                8, PRECISION, UINT64_MAX, 1, UINT64_MAX, UINT64_MAX, family=SOLANA
            )
