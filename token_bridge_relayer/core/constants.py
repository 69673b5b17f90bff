"""Protocol constants shared by the normalizer, codec and calculators."""

from __future__ import annotations

from enum import Enum

# Token bridge amounts travel with at most 8 decimals.
WIRE_DECIMALS = 8

PAYLOAD_ID_TRANSFER_WITH_RELAY = 1

UINT256_BYTES = 32
ADDRESS_BYTES = 32
TRANSFER_WITH_RELAY_PAYLOAD_SIZE = 1 + UINT256_BYTES + UINT256_BYTES + ADDRESS_BYTES

# Offset of the relay payload inside an EVM token bridge transfer message.
DEFAULT_PAYLOAD_OFFSET = 133

UINT64_BITS = 64
UINT128_BITS = 128
UINT256_BITS = 256
UINT64_MAX = 2**UINT64_BITS - 1
UINT256_MAX = 2**UINT256_BITS - 1


class ChainFamily(str, Enum):
    """Chain families the relayer programs are deployed on."""

    EVM = "evm"
    SOLANA = "solana"
    SUI = "sui"

    @property
    def native_bits(self) -> int:
        """Width of the chain's native token amount type."""
        return _NATIVE_BITS[self]

    @property
    def intermediate_bits(self) -> int:
        """Width the on-chain program uses for products before dividing."""
        return _INTERMEDIATE_BITS[self]

    @property
    def native_decimals(self) -> int:
        """Decimals of the chain's gas token."""
        return _NATIVE_DECIMALS[self]


_NATIVE_BITS = {
    ChainFamily.EVM: UINT256_BITS,
    ChainFamily.SOLANA: UINT64_BITS,
    ChainFamily.SUI: UINT64_BITS,
}

_INTERMEDIATE_BITS = {
    ChainFamily.EVM: UINT256_BITS,
    ChainFamily.SOLANA: UINT128_BITS,
    ChainFamily.SUI: UINT256_BITS,
}

_NATIVE_DECIMALS = {
    ChainFamily.EVM: 18,
    ChainFamily.SOLANA: 9,
    ChainFamily.SUI: 9,
}


__all__ = [
    "ADDRESS_BYTES",
    "ChainFamily",
    "DEFAULT_PAYLOAD_OFFSET",
    "PAYLOAD_ID_TRANSFER_WITH_RELAY",
    "TRANSFER_WITH_RELAY_PAYLOAD_SIZE",
    "UINT128_BITS",
    "UINT256_BITS",
    "UINT256_BYTES",
    "UINT256_MAX",
    "UINT64_BITS",
    "UINT64_MAX",
    "WIRE_DECIMALS",
]
