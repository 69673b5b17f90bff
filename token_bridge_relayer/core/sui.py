"""Read-only queries against the Sui token bridge relayer state over JSON-RPC."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional

import requests

from token_bridge_relayer.config import RelayerConfig
from token_bridge_relayer.core.constants import ChainFamily
from token_bridge_relayer.core.errors import AmountOverflowError, InvalidInputError, RemoteQueryError
from token_bridge_relayer.core.fees import OfflineSwapQuerier
from token_bridge_relayer.core.models import RelayerFeeConfig, TokenMetadata
from token_bridge_relayer.core.utils import ensure_decimals, get_logger

LOGGER = get_logger("token_bridge_relayer.sui")

SUI_COIN_TYPE = "0x2::sui::SUI"


def _as_uint(value: Any, what: str) -> int:
    # u64 and wider come back as decimal strings, narrower ints as JSON numbers.
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise RemoteQueryError(f"{what} is not an integer: {value!r}")
    if isinstance(value, str) and not value.isdecimal():
        raise RemoteQueryError(f"{what} is not an unsigned integer: {value!r}")
    result = int(value)
    if result < 0:
        raise RemoteQueryError(f"{what} is negative: {value!r}")
    return result


def _as_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise RemoteQueryError(f"{what} is not a bool: {value!r}")
    return value


def trim_sui_type(type_name: str) -> str:
    """Drop the zero padding the RPC adds to addresses inside type names."""
    return re.sub(r"0x0+", "0x", type_name)


class SuiRelayerClient:
    """View-only access to a Sui relayer ``State`` object.

    Sui has no view call for swap quotes, so quotes are answered by
    :class:`OfflineSwapQuerier` using the state read here.
    """

    def __init__(
        self,
        rpc_url: str,
        state_id: str,
        *,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.rpc_url = rpc_url
        self.state_id = state_id
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(
        cls,
        config: RelayerConfig,
        wormhole_chain_id: int,
        *,
        session: Optional[requests.Session] = None,
    ) -> "SuiRelayerClient":
        chain = config.chain(wormhole_chain_id)
        if chain.family is not ChainFamily.SUI:
            raise InvalidInputError(f"Chain {wormhole_chain_id} is a {chain.family.value} deployment, not Sui")
        return cls(
            chain.ensure_rpc_url(),
            chain.relayer_address,
            timeout=config.defaults.api_timeout,
            session=session,
        )

    def _rpc(self, method: str, params: List[Any]) -> Any:
        body = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        try:
            response = self.session.post(self.rpc_url, json=body, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise RemoteQueryError(f"Sui RPC {method} request to {self.rpc_url} failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteQueryError(f"Sui RPC {method} returned invalid JSON") from exc

        if not isinstance(payload, Mapping):
            raise RemoteQueryError(f"Sui RPC {method} returned an unexpected response")
        if payload.get("error"):
            raise RemoteQueryError(f"Sui RPC {method} responded with error: {payload['error']}")
        if "result" not in payload:
            raise RemoteQueryError(f"Sui RPC {method} response has no result")
        return payload["result"]

    def get_object_fields(self, object_id: str) -> Dict[str, Any]:
        result = self._rpc("sui_getObject", [object_id, {"showContent": True}])
        data = result.get("data") if isinstance(result, Mapping) else None
        if not data:
            raise RemoteQueryError(f"Sui object {object_id} not found")
        content = data.get("content")
        if not content or content.get("dataType") != "moveObject":
            raise RemoteQueryError(f"Sui object {object_id} is not a move object")
        fields = content.get("fields")
        if not isinstance(fields, Mapping):
            raise RemoteQueryError(f"Sui object {object_id} has no fields")
        return dict(fields)

    def get_dynamic_fields(self, parent_id: str) -> List[Dict[str, Any]]:
        result = self._rpc("suix_getDynamicFields", [parent_id])
        if not isinstance(result, Mapping) or not isinstance(result.get("data"), list):
            raise RemoteQueryError(f"Unexpected dynamic fields format for object {parent_id}")
        if result.get("hasNextPage"):
            # TODO: follow nextCursor once a relayer table outgrows one page.
            raise RemoteQueryError(f"Dynamic fields for object {parent_id} span more than one page")
        return result["data"]

    def _dynamic_field_by_name(self, parent_id: str, name: str) -> Dict[str, Any]:
        for entry in self.get_dynamic_fields(parent_id):
            entry_name = entry.get("name", {})
            if entry_name.get("type") == "vector<u8>" and bytes(entry_name.get("value", [])).decode(errors="replace") == name:
                return entry
        raise RemoteQueryError(f"Dynamic field {name} not found on {parent_id}")

    def relayer_state(self) -> Dict[str, Any]:
        return self.get_object_fields(self.state_id)

    def _token_info(self, state: Mapping[str, Any], coin_type: str) -> Dict[str, Any]:
        try:
            table_id = state["registered_tokens"]["fields"]["id"]["id"]
        except (KeyError, TypeError) as exc:
            raise RemoteQueryError("Relayer state has no registered_tokens table") from exc

        wanted = trim_sui_type(coin_type)
        matches = [
            entry
            for entry in self.get_dynamic_fields(table_id)
            if wanted in trim_sui_type(str(entry.get("objectType", "")))
        ]
        if len(matches) != 1:
            raise RemoteQueryError(f"Expected one registered token entry for {coin_type}, found {len(matches)}")

        fields = self.get_object_fields(matches[0]["objectId"])
        try:
            return fields["value"]["fields"]
        except (KeyError, TypeError) as exc:
            raise RemoteQueryError(f"Registered token entry for {coin_type} is malformed") from exc

    def coin_decimals(self, coin_type: str) -> int:
        result = self._rpc("suix_getCoinMetadata", [coin_type])
        if not isinstance(result, Mapping) or "decimals" not in result:
            raise RemoteQueryError(f"No coin metadata for {coin_type}")
        return _as_uint(result["decimals"], f"{coin_type} decimals")

    def fetch_token_metadata(self, coin_type: str, *, decimals: Optional[int] = None) -> TokenMetadata:
        if decimals is not None:
            ensure_decimals(decimals)
        state = self.relayer_state()
        info = self._token_info(state, coin_type)
        try:
            return TokenMetadata(
                token=coin_type,
                chain_local_decimals=self.coin_decimals(coin_type) if decimals is None else decimals,
                swap_rate=_as_uint(info.get("swap_rate"), "swap_rate"),
                swap_rate_precision=_as_uint(state.get("swap_rate_precision"), "swap_rate_precision"),
                max_native_swap_amount=_as_uint(info.get("max_native_swap_amount"), "max_native_swap_amount"),
                swap_enabled=_as_bool(info.get("swap_enabled"), "swap_enabled"),
            )
        except (InvalidInputError, AmountOverflowError) as exc:
            raise RemoteQueryError(f"Relayer state for {coin_type} is malformed: {exc}") from exc

    def fetch_relayer_fees(self) -> Dict[int, int]:
        """USD relayer fee per target chain, keyed by Wormhole chain id."""
        table = self._dynamic_field_by_name(self.state_id, "relayer_fees")
        fees: Dict[int, int] = {}
        for entry in self.get_dynamic_fields(table["objectId"]):
            name = entry.get("name", {})
            if name.get("type") != "u16":
                raise RemoteQueryError(f"Unexpected relayer fee key type: {name.get('type')}")
            fee_fields = self.get_object_fields(entry["objectId"])
            fees[_as_uint(name.get("value"), "chain id")] = _as_uint(fee_fields.get("value"), "relayer fee")
        return fees

    def fetch_relayer_fee_config(self, target_chain: int) -> RelayerFeeConfig:
        state = self.relayer_state()
        fees = self.fetch_relayer_fees()
        if target_chain not in fees:
            raise RemoteQueryError(f"No relayer fee registered for chain {target_chain}")
        try:
            return RelayerFeeConfig(
                target_chain=target_chain,
                relayer_fee_usd=fees[target_chain],
                relayer_fee_precision=_as_uint(state.get("relayer_fee_precision"), "relayer_fee_precision"),
            )
        except (InvalidInputError, AmountOverflowError) as exc:
            raise RemoteQueryError(f"Relayer fee state for chain {target_chain} is malformed: {exc}") from exc

    def swap_querier(self, *coin_types: str) -> OfflineSwapQuerier:
        """Quote swaps for ``coin_types`` against the current SUI swap rate."""
        native = self.fetch_token_metadata(SUI_COIN_TYPE, decimals=ChainFamily.SUI.native_decimals)
        tokens = {coin_type: self.fetch_token_metadata(coin_type) for coin_type in coin_types}
        LOGGER.info("Loaded Sui swap state for %s tokens (SUI swap rate %s)", len(tokens), native.swap_rate)
        return OfflineSwapQuerier(
            native_swap_rate=native.swap_rate,
            tokens=tokens,
            family=ChainFamily.SUI,
        )


__all__ = ["SUI_COIN_TYPE", "SuiRelayerClient"]
