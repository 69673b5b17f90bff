#!/usr/bin/env python3
"""Inspect relayer fee and native swap values for an EVM token, read-only."""

import argparse
from pathlib import Path

from token_bridge_relayer.config import load_config
from token_bridge_relayer.core.amounts import normalize_amount
from token_bridge_relayer.core.fees import (
    calculate_max_swap_amount_in,
    calculate_relayer_fee_in_token,
    calculate_swap_quote,
)
from token_bridge_relayer.core.quotes import EvmRelayerClient


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=Path, default=Path("config.json"))
    parser.add_argument("--chain", type=int, required=True, help="Wormhole chain id of the source relayer")
    parser.add_argument("--target-chain", type=int, required=True, help="Wormhole chain id of the destination")
    parser.add_argument("--token", required=True, help="token address on the source chain")
    parser.add_argument("--to-native", type=int, default=0, help="requested to-native token amount")
    args = parser.parse_args()

    config = load_config(args.config)
    client = EvmRelayerClient.from_config(config, args.chain)

    token_meta = client.fetch_token_metadata(args.token)
    fee_config = client.fetch_relayer_fee_config(args.target_chain)
    decimals = token_meta.chain_local_decimals

    relayer_fee = calculate_relayer_fee_in_token(token_meta, fee_config, decimals)
    on_chain_fee = client.on_chain_relayer_fee(args.target_chain, args.token, decimals)

    print(f"Token: {token_meta.token} (decimals={decimals})")
    print(f"Swap rate: {token_meta.swap_rate} / {token_meta.swap_rate_precision}")
    print(f"Relayer fee USD: {fee_config.relayer_fee_usd} / {fee_config.relayer_fee_precision}")
    print(f"Relayer fee in token: {relayer_fee} (contract says {on_chain_fee})")
    print(f"Normalized relayer fee: {normalize_amount(relayer_fee, decimals)}")

    if args.to_native:
        swap_in = calculate_max_swap_amount_in(decimals, token_meta, args.to_native, querier=client)
        native_out = calculate_swap_quote(swap_in, token_meta, querier=client)
        print(f"Token amount swapped: {swap_in}")
        print(f"Native amount out: {native_out} (cap {token_meta.max_native_swap_amount})")


if __name__ == "__main__":
    main()
