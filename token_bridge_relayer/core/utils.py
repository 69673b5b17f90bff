"""Utility helpers shared across relayer core modules."""

from __future__ import annotations

import logging
from typing import Any, Optional

from web3 import Web3

from token_bridge_relayer.core.errors import (
    AmountOverflowError,
    DivisionByZeroError,
    InvalidInputError,
    RemoteQueryError,
)


def get_logger(name: str = "token_bridge_relayer") -> logging.Logger:
    """Return a configured logger that prints to stdout."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


def strip_0x(data: str) -> str:
    return data[2:] if data.startswith(("0x", "0X")) else data


def hex_to_bytes(data: str) -> bytes:
    """Convert a hex string (with or without ``0x``) to bytes."""
    try:
        return bytes.fromhex(strip_0x(data))
    except ValueError as exc:
        raise InvalidInputError(f"Invalid hex string: {data!r}") from exc


def ensure_web3_connected(web3: Web3, *, expected_chain_id: Optional[int] = None) -> None:
    """Validate that ``web3`` is connected and optionally matches the expected chain id."""
    if not web3.is_connected():
        raise RemoteQueryError("Failed to connect to the configured RPC endpoint")
    if expected_chain_id is not None and web3.eth.chain_id != expected_chain_id:
        raise RemoteQueryError(f"RPC chain ID mismatch: expected {expected_chain_id}, got {web3.eth.chain_id}")


def ensure_uint(value: Any, name: str, *, bits: Optional[int] = None) -> int:
    """Return ``value`` if it is a non-negative integer that fits in ``bits``."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidInputError(f"{name} must be non-negative, got {value}")
    if bits is not None and value >> bits:
        raise AmountOverflowError(f"{name} does not fit in uint{bits}: {value}")
    return value


def ensure_decimals(value: Any, name: str = "decimals") -> int:
    """Token decimals are a uint8 on every chain."""
    ensure_uint(value, name)
    if value > 255:
        raise InvalidInputError(f"{name} must be at most 255, got {value}")
    return value


def ensure_chain_id(value: Any, name: str = "chain id") -> int:
    ensure_uint(value, name)
    if value > 0xFFFF:
        raise InvalidInputError(f"{name} is not a Wormhole chain id: {value}")
    return value


def checked_mul(*factors: int, bits: int) -> int:
    """Multiply left to right, failing as soon as a partial product leaves ``bits``."""
    product = 1
    for factor in factors:
        product *= factor
        if product >> bits:
            raise AmountOverflowError(f"Product exceeds uint{bits}")
    return product


def checked_div(numerator: int, denominator: int, *, what: str = "denominator") -> int:
    """Integer division truncating toward zero for unsigned operands."""
    if denominator == 0:
        raise DivisionByZeroError(f"{what} is zero")
    return numerator // denominator


def pow10(exponent: int, *, bits: int) -> int:
    return checked_mul(10**exponent, bits=bits)


__all__ = [
    "checked_div",
    "checked_mul",
    "ensure_chain_id",
    "ensure_decimals",
    "ensure_uint",
    "ensure_web3_connected",
    "get_logger",
    "hex_to_bytes",
    "pow10",
    "strip_0x",
]
