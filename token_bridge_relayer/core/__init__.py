"""Core fee, quote and payload logic for the relayer."""

from .amounts import denormalize_amount, normalize_amount, round_trip_amount
from .fees import (
    OfflineSwapQuerier,
    SwapQuerier,
    calculate_max_swap_amount_in,
    calculate_relayer_fee_in_token,
    calculate_swap_quote,
)
from .models import RelayerFeeConfig, TokenMetadata
from .payload import TransferWithRelayPayload, decode_transfer_with_relay, encode_transfer_with_relay
from .transfer import OutboundTransfer, prepare_transfer_with_relay

__all__ = [
    "OfflineSwapQuerier",
    "OutboundTransfer",
    "RelayerFeeConfig",
    "SwapQuerier",
    "TokenMetadata",
    "TransferWithRelayPayload",
    "calculate_max_swap_amount_in",
    "calculate_relayer_fee_in_token",
    "calculate_swap_quote",
    "decode_transfer_with_relay",
    "denormalize_amount",
    "encode_transfer_with_relay",
    "normalize_amount",
    "prepare_transfer_with_relay",
    "round_trip_amount",
]
