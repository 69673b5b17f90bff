"""Token bridge amount normalization.

The token bridge carries amounts with at most ``WIRE_DECIMALS`` decimals.
Tokens with more decimals lose their low-order digits when crossing chains;
``round_trip_amount`` shows exactly what survives.
"""

from __future__ import annotations

from token_bridge_relayer.core.constants import UINT256_BITS, WIRE_DECIMALS
from token_bridge_relayer.core.utils import checked_mul, ensure_decimals, ensure_uint


def _scale(decimals: int) -> int:
    ensure_decimals(decimals, "decimals")
    if decimals > WIRE_DECIMALS:
        return 10 ** (decimals - WIRE_DECIMALS)
    return 1


def normalize_amount(amount: int, decimals: int, *, bits: int = UINT256_BITS) -> int:
    """Scale ``amount`` from ``decimals`` down to wire precision, truncating."""
    ensure_uint(amount, "amount", bits=bits)
    return amount // _scale(decimals)


def denormalize_amount(amount: int, decimals: int, *, bits: int = UINT256_BITS) -> int:
    """Scale a wire-precision ``amount`` back up to ``decimals``."""
    ensure_uint(amount, "amount", bits=bits)
    return checked_mul(amount, _scale(decimals), bits=bits)


def round_trip_amount(amount: int, decimals: int, *, bits: int = UINT256_BITS) -> int:
    """Return the part of ``amount`` that survives normalize then denormalize."""
    return denormalize_amount(normalize_amount(amount, decimals, bits=bits), decimals, bits=bits)


__all__ = ["denormalize_amount", "normalize_amount", "round_trip_amount"]
