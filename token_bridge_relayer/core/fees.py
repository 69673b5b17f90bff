"""Relayer fee conversion and native swap quotes."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from token_bridge_relayer.core import swap_math
from token_bridge_relayer.core.constants import ChainFamily
from token_bridge_relayer.core.errors import (
    DivisionByZeroError,
    InvalidInputError,
    RelayerError,
    RemoteQueryError,
)
from token_bridge_relayer.core.models import RelayerFeeConfig, TokenMetadata
from token_bridge_relayer.core.utils import checked_mul, ensure_decimals, ensure_uint, get_logger

LOGGER = get_logger("token_bridge_relayer.fees")


@runtime_checkable
class SwapQuerier(Protocol):
    """Read-only view of a relayer program's swap quotes.

    Implementations must only simulate; they are never called from a path
    that submits a transaction.
    """

    def simulate_native_swap_amount_out(self, token: str, to_native_token_amount: int) -> int:
        ...

    def simulate_max_swap_amount_in(self, token: str, token_decimals: int) -> int:
        ...


def calculate_relayer_fee_in_token(
    token_meta: TokenMetadata,
    fee_config: RelayerFeeConfig,
    token_decimals: int,
    *,
    family: ChainFamily = ChainFamily.EVM,
) -> int:
    """Convert the USD relayer fee for ``fee_config.target_chain`` into token units.

    ``10**decimals * fee * swap_rate_precision / (swap_rate * fee_precision)``,
    every multiplication performed before the single truncating division.
    """
    ensure_decimals(token_decimals, "token_decimals")
    if token_meta.swap_rate == 0:
        raise DivisionByZeroError(f"swap rate not set for token {token_meta.token}")
    if fee_config.relayer_fee_precision == 0:
        raise DivisionByZeroError(f"relayer fee precision not set for chain {fee_config.target_chain}")

    bits = family.intermediate_bits
    numerator = checked_mul(
        10**token_decimals,
        fee_config.relayer_fee_usd,
        token_meta.swap_rate_precision,
        bits=bits,
    )
    denominator = checked_mul(token_meta.swap_rate, fee_config.relayer_fee_precision, bits=bits)
    fee = numerator // denominator
    return ensure_uint(fee, "relayer fee", bits=family.native_bits)


def _query(what: str, call, *args) -> int:
    try:
        result = call(*args)
    except RelayerError:
        raise
    except Exception as exc:
        raise RemoteQueryError(f"{what} query failed: {exc}") from exc
    if isinstance(result, bool) or not isinstance(result, int) or result < 0:
        raise RemoteQueryError(f"{what} query returned a malformed value: {result!r}")
    return result


def calculate_swap_quote(
    requested_native_amount: int,
    token_meta: TokenMetadata,
    *,
    querier: SwapQuerier,
) -> int:
    """Native gas a recipient receives for ``requested_native_amount`` of the token.

    The on-chain quote is always clamped to ``token_meta.max_native_swap_amount``.
    Tokens with swaps disabled quote zero without querying.
    """
    ensure_uint(requested_native_amount, "requested_native_amount")
    if not token_meta.swap_enabled:
        LOGGER.debug("Native swaps disabled for %s", token_meta.token)
        return 0
    quote = _query(
        "native swap amount out",
        querier.simulate_native_swap_amount_out,
        token_meta.token,
        requested_native_amount,
    )
    capped = min(quote, token_meta.max_native_swap_amount)
    if capped < quote:
        LOGGER.debug(
            "Native swap quote %s for %s capped at max native swap amount %s",
            quote,
            token_meta.token,
            capped,
        )
    return capped


def calculate_max_swap_amount_in(
    token_decimals: int,
    token_meta: TokenMetadata,
    requested_to_native_token_amount: int,
    *,
    querier: SwapQuerier,
) -> int:
    """Token amount that will actually be swapped, never more than requested."""
    ensure_decimals(token_decimals, "token_decimals")
    ensure_uint(requested_to_native_token_amount, "requested_to_native_token_amount")
    if not token_meta.swap_enabled:
        return 0
    max_in = _query(
        "max swap amount in",
        querier.simulate_max_swap_amount_in,
        token_meta.token,
        token_decimals,
    )
    return min(max_in, requested_to_native_token_amount)


class OfflineSwapQuerier:
    """Answers swap quotes with the programs' own arithmetic instead of a view call.

    Used for chains without a read-only call for quotes (Sui, Solana) and in
    tests. ``tokens`` maps token identifiers to freshly fetched metadata.
    """

    def __init__(
        self,
        *,
        native_swap_rate: int,
        tokens: dict,
        family: ChainFamily = ChainFamily.EVM,
    ) -> None:
        self.native_swap_rate = ensure_uint(native_swap_rate, "native_swap_rate")
        self.tokens = dict(tokens)
        self.family = family

    def _token(self, token: str) -> TokenMetadata:
        try:
            return self.tokens[token]
        except KeyError as exc:
            raise InvalidInputError(f"Token not registered: {token}") from exc

    def _rate(self, meta: TokenMetadata) -> int:
        return swap_math.calculate_native_swap_rate(
            meta.swap_rate,
            self.native_swap_rate,
            meta.swap_rate_precision,
            family=self.family,
        )

    def simulate_native_swap_amount_out(self, token: str, to_native_token_amount: int) -> int:
        meta = self._token(token)
        if not meta.swap_enabled:
            return 0
        return swap_math.calculate_native_swap_amount_out(
            meta.chain_local_decimals,
            to_native_token_amount,
            self._rate(meta),
            meta.swap_rate_precision,
            family=self.family,
        )

    def simulate_max_swap_amount_in(self, token: str, token_decimals: int) -> int:
        meta = self._token(token)
        if not meta.swap_enabled:
            return 0
        return swap_math.calculate_max_swap_amount_in_tokens(
            token_decimals,
            meta.max_native_swap_amount,
            self._rate(meta),
            meta.swap_rate_precision,
            family=self.family,
        )


__all__ = [
    "OfflineSwapQuerier",
    "SwapQuerier",
    "calculate_max_swap_amount_in",
    "calculate_relayer_fee_in_token",
    "calculate_swap_quote",
]
