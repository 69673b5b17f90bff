"""Outbound transfer-with-relay construction."""

from __future__ import annotations

from dataclasses import dataclass

from token_bridge_relayer.core.amounts import normalize_amount
from token_bridge_relayer.core.constants import ChainFamily
from token_bridge_relayer.core.errors import (
    InsufficientFundsError,
    InvalidInputError,
    InvalidRecipientError,
)
from token_bridge_relayer.core.fees import calculate_relayer_fee_in_token
from token_bridge_relayer.core.models import RelayerFeeConfig, TokenMetadata
from token_bridge_relayer.core.payload import Recipient, encode_transfer_with_relay, parse_recipient
from token_bridge_relayer.core.utils import ensure_chain_id, ensure_uint, get_logger

LOGGER = get_logger("token_bridge_relayer.transfer")


@dataclass(frozen=True)
class OutboundTransfer:
    """Normalized amounts and encoded payload for ``transferTokensWithRelay``."""

    amount: int
    normalized_amount: int
    relayer_fee: int
    normalized_relayer_fee: int
    normalized_to_native_token_amount: int
    recipient_chain: int
    recipient: bytes
    payload: bytes


def prepare_transfer_with_relay(
    *,
    amount: int,
    to_native_token_amount: int,
    recipient_chain: int,
    recipient: Recipient,
    token_meta: TokenMetadata,
    fee_config: RelayerFeeConfig,
    local_chain: int,
    family: ChainFamily = ChainFamily.EVM,
) -> OutboundTransfer:
    """Check an outbound transfer the way the relayer program will and build its payload."""
    bits = family.native_bits
    ensure_uint(amount, "amount", bits=bits)
    ensure_uint(to_native_token_amount, "to_native_token_amount", bits=bits)
    ensure_chain_id(recipient_chain, "recipient_chain")
    recipient_bytes = parse_recipient(recipient)

    if recipient_chain in (0, local_chain) or recipient_bytes == bytes(len(recipient_bytes)):
        raise InvalidRecipientError(f"invalid recipient on chain {recipient_chain}")
    if fee_config.target_chain != recipient_chain:
        raise InvalidInputError(
            f"relayer fee is for chain {fee_config.target_chain}, transfer targets {recipient_chain}"
        )

    decimals = token_meta.chain_local_decimals
    normalized_amount = normalize_amount(amount, decimals, bits=bits)
    if normalized_amount == 0:
        raise InvalidInputError("amount is zero after normalization")

    normalized_to_native = normalize_amount(to_native_token_amount, decimals, bits=bits)
    if to_native_token_amount and not normalized_to_native:
        raise InvalidInputError("to_native_token_amount is below the bridgeable precision")

    relayer_fee = calculate_relayer_fee_in_token(token_meta, fee_config, decimals, family=family)
    normalized_fee = normalize_amount(relayer_fee, decimals, bits=bits)

    if normalized_amount <= normalized_to_native + normalized_fee:
        raise InsufficientFundsError(
            f"normalized amount {normalized_amount} does not cover relayer fee "
            f"{normalized_fee} plus native swap {normalized_to_native}"
        )

    LOGGER.info(
        "Prepared transfer token=%s amount=%s relayerFee=%s toNative=%s targetChain=%s",
        token_meta.token,
        normalized_amount,
        normalized_fee,
        normalized_to_native,
        recipient_chain,
    )

    return OutboundTransfer(
        amount=amount,
        normalized_amount=normalized_amount,
        relayer_fee=relayer_fee,
        normalized_relayer_fee=normalized_fee,
        normalized_to_native_token_amount=normalized_to_native,
        recipient_chain=recipient_chain,
        recipient=recipient_bytes,
        payload=encode_transfer_with_relay(normalized_fee, normalized_to_native, recipient_bytes),
    )


__all__ = ["OutboundTransfer", "prepare_transfer_with_relay"]
