"""Pytest configuration and fixtures."""

import pytest

from token_bridge_relayer.core.models import RelayerFeeConfig, TokenMetadata

TOKEN_ADDRESS = "0x" + "22" * 20
RECIPIENT = bytes(range(1, 33))


@pytest.fixture
def recipient():
    """A non-zero 32-byte recipient."""
    return RECIPIENT


@pytest.fixture
def dollar_token():
    """An 18-decimal token priced at 1 USD with 1e8 swap rate precision."""
    return TokenMetadata(
        token=TOKEN_ADDRESS,
        chain_local_decimals=18,
        swap_rate=100_000_000,
        swap_rate_precision=100_000_000,
        max_native_swap_amount=10**18,
    )


@pytest.fixture
def one_dollar_fee():
    """A 1 USD relayer fee for deliveries to chain 6."""
    return RelayerFeeConfig(
        target_chain=6,
        relayer_fee_usd=100_000_000,
        relayer_fee_precision=100_000_000,
    )
