"""Typed snapshots of on-chain relayer state."""

from __future__ import annotations

from dataclasses import dataclass

from token_bridge_relayer.core.constants import UINT256_BITS
from token_bridge_relayer.core.errors import InvalidInputError
from token_bridge_relayer.core.utils import ensure_chain_id, ensure_decimals, ensure_uint


@dataclass(frozen=True)
class TokenMetadata:
    """Registered token state read from a relayer program.

    ``swap_rate`` is the token's USD price scaled by ``swap_rate_precision``.
    ``max_native_swap_amount`` is expressed in native gas units. A zero swap
    rate means the token is registered but not priced; fee and quote
    calculations reject it. With ``swap_enabled`` off the token can still be
    transferred but every native swap quote is zero.
    """

    token: str
    chain_local_decimals: int
    swap_rate: int
    swap_rate_precision: int
    max_native_swap_amount: int
    swap_enabled: bool = True

    def __post_init__(self) -> None:
        ensure_decimals(self.chain_local_decimals, "chain_local_decimals")
        ensure_uint(self.swap_rate, "swap_rate", bits=UINT256_BITS)
        ensure_uint(self.swap_rate_precision, "swap_rate_precision", bits=UINT256_BITS)
        ensure_uint(self.max_native_swap_amount, "max_native_swap_amount", bits=UINT256_BITS)
        if self.swap_rate_precision == 0:
            raise InvalidInputError("swap_rate_precision must be positive")
        if not isinstance(self.swap_enabled, bool):
            raise InvalidInputError(f"swap_enabled must be a bool, got {type(self.swap_enabled).__name__}")


@dataclass(frozen=True)
class RelayerFeeConfig:
    """USD relayer fee charged for deliveries to ``target_chain``."""

    target_chain: int
    relayer_fee_usd: int
    relayer_fee_precision: int

    def __post_init__(self) -> None:
        ensure_chain_id(self.target_chain, "target_chain")
        ensure_uint(self.relayer_fee_usd, "relayer_fee_usd", bits=UINT256_BITS)
        ensure_uint(self.relayer_fee_precision, "relayer_fee_precision", bits=UINT256_BITS)


__all__ = ["RelayerFeeConfig", "TokenMetadata"]
