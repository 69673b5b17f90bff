"""Configuration utilities for the relayer quote tooling."""

from .loader import (
    ChainConfig,
    ConfigError,
    DefaultsConfig,
    RelayerConfig,
    load_config,
)

__all__ = [
    "ChainConfig",
    "ConfigError",
    "DefaultsConfig",
    "RelayerConfig",
    "load_config",
]
