"""Config loader for the relayer quote tooling."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, MutableMapping, Optional

from dotenv import load_dotenv
from web3 import Web3

from token_bridge_relayer.core.constants import DEFAULT_PAYLOAD_OFFSET, ChainFamily


class ConfigError(ValueError):
    """Raised when configuration data is invalid or missing."""


def _require_keys(data: Mapping[str, Any], keys: Iterable[str], context: str) -> None:
    missing = [key for key in keys if key not in data]
    if missing:
        raise ConfigError(f"{context} missing required keys: {', '.join(missing)}")


def _to_checksum(value: str, *, field_name: str) -> str:
    try:
        return Web3.to_checksum_address(value)
    except Exception as exc:  # web3 raises ValueError for malformed inputs
        raise ConfigError(f"Invalid address for {field_name}: {value}") from exc


@dataclass(frozen=True)
class ChainConfig:
    """Relayer deployment on one chain."""

    wormhole_chain_id: int
    family: ChainFamily
    relayer_address: str
    rpc_url: Optional[str] = None
    evm_chain_id: Optional[int] = None
    payload_offset: int = DEFAULT_PAYLOAD_OFFSET

    def ensure_rpc_url(self) -> str:
        """Return the RPC URL or raise if it is missing."""
        if not self.rpc_url:
            raise ConfigError(f"RPC URL required for chain {self.wormhole_chain_id} but not configured")
        return self.rpc_url


@dataclass(frozen=True)
class DefaultsConfig:
    """Default operational parameters."""

    api_timeout: int


@dataclass(frozen=True)
class RelayerConfig:
    """Typed wrapper around the relayer configuration."""

    chains: Dict[int, ChainConfig]
    defaults: DefaultsConfig
    raw: Mapping[str, Any] = field(repr=False)

    def chain(self, wormhole_chain_id: int) -> ChainConfig:
        try:
            return self.chains[wormhole_chain_id]
        except KeyError as exc:
            raise ConfigError(f"Chain {wormhole_chain_id} is not configured") from exc

    def to_dict(self) -> Dict[str, Any]:
        """Return the original configuration mapping."""
        return dict(self.raw)


def _load_json(path: Path) -> MutableMapping[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Config file contains invalid JSON: {path}") from exc


def _resolve_rpc_url(data: Mapping[str, Any], context: str) -> Optional[str]:
    if data.get("rpc_url"):
        return str(data["rpc_url"])
    env_name = data.get("rpc_url_env")
    if not env_name:
        return None
    value = (os.getenv(str(env_name)) or "").strip()
    if not value:
        raise ConfigError(f"{context} rpc_url_env {env_name} is not set")
    return value


def _parse_chain(key: str, data: Mapping[str, Any]) -> ChainConfig:
    context = f"chain {key}"
    _require_keys(data, ["family", "relayer"], context)

    try:
        wormhole_chain_id = int(key)
    except ValueError as exc:
        raise ConfigError(f"{context} key must be a Wormhole chain id") from exc

    try:
        family = ChainFamily(str(data["family"]).lower())
    except ValueError as exc:
        raise ConfigError(f"{context} has unknown family: {data['family']}") from exc

    relayer = str(data["relayer"])
    evm_chain_id = None
    if family is ChainFamily.EVM:
        relayer = _to_checksum(relayer, field_name=f"{context} relayer")
        if "evm_chain_id" in data:
            evm_chain_id = int(data["evm_chain_id"])

    payload_offset = int(data.get("payload_offset", DEFAULT_PAYLOAD_OFFSET))
    if payload_offset < 0:
        raise ConfigError(f"{context} payload_offset must be non-negative")

    return ChainConfig(
        wormhole_chain_id=wormhole_chain_id,
        family=family,
        relayer_address=relayer,
        rpc_url=_resolve_rpc_url(data, context),
        evm_chain_id=evm_chain_id,
        payload_offset=payload_offset,
    )


def load_config(config_path: Optional[Path] = None) -> RelayerConfig:
    """Load and validate relayer configuration data."""
    load_dotenv()
    config_path = config_path or Path("config.json")
    data = _load_json(config_path)

    _require_keys(data, ["chains", "defaults"], "config")

    chains_data = data["chains"]
    if not isinstance(chains_data, Mapping) or not chains_data:
        raise ConfigError("chains must be a non-empty mapping keyed by Wormhole chain id")
    chains = {}
    for key, chain_data in chains_data.items():
        chain = _parse_chain(str(key), chain_data)
        chains[chain.wormhole_chain_id] = chain

    defaults = data["defaults"]
    _require_keys(defaults, ["api_timeout"], "defaults")
    defaults_config = DefaultsConfig(api_timeout=int(defaults["api_timeout"]))
    if defaults_config.api_timeout <= 0:
        raise ConfigError("defaults.api_timeout must be positive")

    return RelayerConfig(chains=chains, defaults=defaults_config, raw=data)


__all__ = [
    "ChainConfig",
    "ConfigError",
    "DefaultsConfig",
    "RelayerConfig",
    "load_config",
]
