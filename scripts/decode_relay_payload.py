#!/usr/bin/env python3
"""Decode a transfer-with-relay payload from a hex-encoded message."""

import argparse
from pathlib import Path
from typing import List, Optional

from token_bridge_relayer.config import load_config
from token_bridge_relayer.core.payload import decode_transfer_with_relay
from token_bridge_relayer.core.utils import hex_to_bytes


def decode_payload(message_hex: str, offset: int) -> None:
    """Decode the relay payload at ``offset`` and print its fields."""
    payload = decode_transfer_with_relay(hex_to_bytes(message_hex), offset)

    print(f"payloadType: {payload.payload_type}")
    print(f"targetRelayerFee: {payload.target_relayer_fee}")
    print(f"toNativeTokenAmount: {payload.to_native_token_amount}")
    print(f"recipient: {payload.recipient_hex}")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("message", help="hex-encoded message, with or without 0x")
    parser.add_argument("--config", type=Path, default=Path("config.json"))
    parser.add_argument(
        "--chain",
        type=int,
        help="Wormhole chain id whose configured payload_offset locates the payload",
    )
    parser.add_argument(
        "--offset",
        type=int,
        help="byte offset of the relay payload (overrides --chain, default 0)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    offset = args.offset
    if offset is None:
        offset = load_config(args.config).chain(args.chain).payload_offset if args.chain is not None else 0
    decode_payload(args.message, offset)


if __name__ == "__main__":
    main()
