"""Native swap arithmetic as performed by the relayer programs.

Every relayer deployment prices a native gas swap the same way:

* the native swap rate is ``swap_rate_precision * native_swap_rate / token_swap_rate``;
* the most a recipient may swap in is the token's ``max_native_swap_amount``
  expressed in token units at that rate;
* the native amount out for a token amount scales by the decimal gap between
  the token and the native gas token.

Products are formed before any division and are checked against the
program's intermediate width, results against its native width.
"""

from __future__ import annotations

from typing import Tuple

from token_bridge_relayer.core.constants import ChainFamily
from token_bridge_relayer.core.errors import AmountOverflowError, DivisionByZeroError
from token_bridge_relayer.core.utils import checked_div, checked_mul, ensure_decimals, ensure_uint, pow10


def _fit(value: int, bits: int, what: str) -> int:
    if value >> bits:
        raise AmountOverflowError(f"{what} does not fit in uint{bits}: {value}")
    return value


def calculate_native_swap_rate(
    token_swap_rate: int,
    native_swap_rate: int,
    swap_rate_precision: int,
    *,
    family: ChainFamily = ChainFamily.EVM,
) -> int:
    """Price of the native gas token in units of the token, scaled by precision."""
    ensure_uint(token_swap_rate, "token_swap_rate")
    ensure_uint(native_swap_rate, "native_swap_rate")
    ensure_uint(swap_rate_precision, "swap_rate_precision")

    product = checked_mul(swap_rate_precision, native_swap_rate, bits=family.intermediate_bits)
    rate = checked_div(product, token_swap_rate, what="token swap rate")
    if rate == 0:
        raise DivisionByZeroError("native swap rate is zero")
    return _fit(rate, family.native_bits, "native swap rate")


def calculate_max_swap_amount_in_tokens(
    token_decimals: int,
    max_native_swap_amount: int,
    native_swap_rate: int,
    swap_rate_precision: int,
    *,
    family: ChainFamily = ChainFamily.EVM,
) -> int:
    """Largest token amount the program will swap for native gas."""
    ensure_decimals(token_decimals, "token_decimals")
    ensure_uint(max_native_swap_amount, "max_native_swap_amount")
    bits = family.intermediate_bits
    native_decimals = family.native_decimals

    if token_decimals > native_decimals:
        numerator = checked_mul(
            max_native_swap_amount,
            native_swap_rate,
            pow10(token_decimals - native_decimals, bits=bits),
            bits=bits,
        )
        max_in = checked_div(numerator, swap_rate_precision, what="swap rate precision")
    else:
        numerator = checked_mul(max_native_swap_amount, native_swap_rate, bits=bits)
        denominator = checked_mul(
            pow10(native_decimals - token_decimals, bits=bits),
            swap_rate_precision,
            bits=bits,
        )
        max_in = checked_div(numerator, denominator, what="swap rate precision")
    return _fit(max_in, family.native_bits, "max swap amount in")


def calculate_native_swap_amount_out(
    token_decimals: int,
    to_native_token_amount: int,
    native_swap_rate: int,
    swap_rate_precision: int,
    *,
    family: ChainFamily = ChainFamily.EVM,
) -> int:
    """Native gas paid out for ``to_native_token_amount`` of the token, uncapped."""
    ensure_decimals(token_decimals, "token_decimals")
    ensure_uint(to_native_token_amount, "to_native_token_amount")
    bits = family.intermediate_bits
    native_decimals = family.native_decimals

    if token_decimals > native_decimals:
        numerator = checked_mul(swap_rate_precision, to_native_token_amount, bits=bits)
        denominator = checked_mul(
            native_swap_rate,
            pow10(token_decimals - native_decimals, bits=bits),
            bits=bits,
        )
        amount_out = checked_div(numerator, denominator, what="native swap rate")
    else:
        numerator = checked_mul(
            swap_rate_precision,
            to_native_token_amount,
            pow10(native_decimals - token_decimals, bits=bits),
            bits=bits,
        )
        amount_out = checked_div(numerator, native_swap_rate, what="native swap rate")
    return _fit(amount_out, family.native_bits, "native swap amount out")


def calculate_native_swap_amounts(
    token_decimals: int,
    token_swap_rate: int,
    native_swap_rate: int,
    swap_rate_precision: int,
    max_native_swap_amount: int,
    to_native_token_amount: int,
    *,
    family: ChainFamily = ChainFamily.EVM,
) -> Tuple[int, int]:
    """Return ``(token_amount_in, native_amount_out)`` for a redemption.

    The requested token amount is clamped to the maximum swap-in amount. A
    request that would pay out nothing swaps nothing.
    """
    ensure_uint(to_native_token_amount, "to_native_token_amount")
    ensure_uint(max_native_swap_amount, "max_native_swap_amount")
    if to_native_token_amount == 0 or max_native_swap_amount == 0:
        return 0, 0

    rate = calculate_native_swap_rate(
        token_swap_rate, native_swap_rate, swap_rate_precision, family=family
    )
    max_in = calculate_max_swap_amount_in_tokens(
        token_decimals, max_native_swap_amount, rate, swap_rate_precision, family=family
    )
    amount_in = min(to_native_token_amount, max_in)
    amount_out = calculate_native_swap_amount_out(
        token_decimals, amount_in, rate, swap_rate_precision, family=family
    )
    if amount_out == 0:
        return 0, 0
    return amount_in, amount_out


__all__ = [
    "calculate_max_swap_amount_in_tokens",
    "calculate_native_swap_amount_out",
    "calculate_native_swap_amounts",
    "calculate_native_swap_rate",
]
