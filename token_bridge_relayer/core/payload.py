"""Transfer-with-relay payload codec.

Layout (97 bytes, big-endian)::

    [0]       payload type, always 1
    [1:33]    target relayer fee (uint256)
    [33:65]   to native token amount (uint256)
    [65:97]   recipient (32 bytes)

The payload sits inside a larger token bridge transfer message; callers pass
the offset at which it starts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from token_bridge_relayer.core.constants import (
    ADDRESS_BYTES,
    PAYLOAD_ID_TRANSFER_WITH_RELAY,
    TRANSFER_WITH_RELAY_PAYLOAD_SIZE,
    UINT256_BITS,
    UINT256_BYTES,
)
from token_bridge_relayer.core.errors import (
    InvalidInputError,
    InvalidRecipientError,
    UnsupportedPayloadTypeError,
)
from token_bridge_relayer.core.utils import ensure_uint, strip_0x

Recipient = Union[bytes, bytearray, str]


def parse_recipient(recipient: Recipient) -> bytes:
    """Return ``recipient`` as 32 raw bytes."""
    if isinstance(recipient, (bytes, bytearray)):
        raw = bytes(recipient)
    elif isinstance(recipient, str):
        digits = strip_0x(recipient)
        if len(digits) != ADDRESS_BYTES * 2:
            raise InvalidRecipientError(
                f"recipient must be {ADDRESS_BYTES * 2} hex characters, got {len(digits)}"
            )
        try:
            raw = bytes.fromhex(digits)
        except ValueError as exc:
            raise InvalidRecipientError(f"recipient is not valid hex: {recipient!r}") from exc
    else:
        raise InvalidRecipientError(f"recipient must be bytes or hex, got {type(recipient).__name__}")

    if len(raw) != ADDRESS_BYTES:
        raise InvalidRecipientError(f"recipient must be {ADDRESS_BYTES} bytes, got {len(raw)}")
    return raw


def encode_transfer_with_relay(
    target_relayer_fee: int,
    to_native_token_amount: int,
    recipient: Recipient,
) -> bytes:
    """Serialize a transfer-with-relay payload."""
    ensure_uint(target_relayer_fee, "target_relayer_fee", bits=UINT256_BITS)
    ensure_uint(to_native_token_amount, "to_native_token_amount", bits=UINT256_BITS)
    recipient_bytes = parse_recipient(recipient)

    return b"".join(
        [
            PAYLOAD_ID_TRANSFER_WITH_RELAY.to_bytes(1, "big"),
            target_relayer_fee.to_bytes(UINT256_BYTES, "big"),
            to_native_token_amount.to_bytes(UINT256_BYTES, "big"),
            recipient_bytes,
        ]
    )


@dataclass(frozen=True)
class TransferWithRelayPayload:
    """Decoded transfer-with-relay message.

    Amounts are in wire precision. ``recipient`` stays raw; turning it into a
    chain-specific address is up to the caller.
    """

    target_relayer_fee: int
    to_native_token_amount: int
    recipient: bytes
    payload_type: int = PAYLOAD_ID_TRANSFER_WITH_RELAY

    def __post_init__(self) -> None:
        ensure_uint(self.target_relayer_fee, "target_relayer_fee", bits=UINT256_BITS)
        ensure_uint(self.to_native_token_amount, "to_native_token_amount", bits=UINT256_BITS)
        if not isinstance(self.recipient, bytes) or len(self.recipient) != ADDRESS_BYTES:
            raise InvalidRecipientError("recipient must be exactly 32 bytes")

    @property
    def recipient_hex(self) -> str:
        return "0x" + self.recipient.hex()

    def encode(self) -> bytes:
        """Serialize to the 97-byte wire layout."""
        return encode_transfer_with_relay(
            self.target_relayer_fee,
            self.to_native_token_amount,
            self.recipient,
        )


def decode_transfer_with_relay(payload: Union[bytes, bytearray], base_offset: int = 0) -> TransferWithRelayPayload:
    """Parse the transfer-with-relay payload starting at ``base_offset``.

    The type byte is checked before the length so a payload from another
    version is reported as unsupported rather than truncated.
    """
    if not isinstance(payload, (bytes, bytearray)):
        raise InvalidInputError(f"payload must be bytes, got {type(payload).__name__}")
    ensure_uint(base_offset, "base_offset")
    if base_offset >= len(payload):
        raise InvalidInputError(f"payload has no data at offset {base_offset}, length is {len(payload)}")

    payload_type = payload[base_offset]
    if payload_type != PAYLOAD_ID_TRANSFER_WITH_RELAY:
        raise UnsupportedPayloadTypeError(payload_type)

    end = base_offset + TRANSFER_WITH_RELAY_PAYLOAD_SIZE
    if len(payload) < end:
        raise InvalidInputError(
            f"payload too short: need {end} bytes from offset {base_offset}, got {len(payload)}"
        )

    cursor = base_offset + 1
    target_relayer_fee = int.from_bytes(payload[cursor : cursor + UINT256_BYTES], "big")
    cursor += UINT256_BYTES
    to_native_token_amount = int.from_bytes(payload[cursor : cursor + UINT256_BYTES], "big")
    cursor += UINT256_BYTES
    recipient = bytes(payload[cursor : cursor + ADDRESS_BYTES])

    return TransferWithRelayPayload(
        target_relayer_fee=target_relayer_fee,
        to_native_token_amount=to_native_token_amount,
        recipient=recipient,
        payload_type=payload_type,
    )


__all__ = [
    "TransferWithRelayPayload",
    "decode_transfer_with_relay",
    "encode_transfer_with_relay",
    "parse_recipient",
]
