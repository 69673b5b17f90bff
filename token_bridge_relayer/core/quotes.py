"""Read-only queries against an EVM token bridge relayer contract."""

from __future__ import annotations

from typing import Any, Callable, Optional

from web3 import Web3
from web3.contract import Contract

from token_bridge_relayer.config import ChainConfig, RelayerConfig
from token_bridge_relayer.contracts import load_contract_abi
from token_bridge_relayer.core.constants import ChainFamily
from token_bridge_relayer.core.errors import AmountOverflowError, InvalidInputError, RemoteQueryError
from token_bridge_relayer.core.models import RelayerFeeConfig, TokenMetadata
from token_bridge_relayer.core.utils import ensure_chain_id, ensure_decimals, ensure_web3_connected, get_logger

LOGGER = get_logger("token_bridge_relayer.quotes")


def _default_web3_factory(rpc_url: str, timeout: int) -> Web3:
    return Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))


class EvmRelayerClient:
    """View-only access to a deployed relayer contract.

    Every method issues ``eth_call`` requests; nothing here signs or sends a
    transaction. Values are read fresh on each call.
    """

    def __init__(self, web3: Web3, relayer_address: str, *, expected_chain_id: Optional[int] = None) -> None:
        ensure_web3_connected(web3, expected_chain_id=expected_chain_id)
        self.web3 = web3
        self.relayer_address = Web3.to_checksum_address(relayer_address)
        self.contract: Contract = web3.eth.contract(
            address=self.relayer_address,
            abi=load_contract_abi("token_bridge_relayer_abi.json"),
        )

    @classmethod
    def from_config(
        cls,
        config: RelayerConfig,
        wormhole_chain_id: int,
        *,
        web3_factory: Optional[Callable[[str, int], Web3]] = None,
    ) -> "EvmRelayerClient":
        chain: ChainConfig = config.chain(wormhole_chain_id)
        if chain.family is not ChainFamily.EVM:
            raise InvalidInputError(f"Chain {wormhole_chain_id} is a {chain.family.value} deployment, not EVM")
        factory = web3_factory or _default_web3_factory
        web3 = factory(chain.ensure_rpc_url(), config.defaults.api_timeout)
        return cls(web3, chain.relayer_address, expected_chain_id=chain.evm_chain_id)

    def _call(self, fn_name: str, *args: Any) -> Any:
        try:
            return getattr(self.contract.functions, fn_name)(*args).call()
        except Exception as exc:
            raise RemoteQueryError(f"{fn_name} call to {self.relayer_address} failed: {exc}") from exc

    def _call_uint(self, fn_name: str, *args: Any) -> int:
        value = self._call(fn_name, *args)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise RemoteQueryError(f"{fn_name} returned a malformed value: {value!r}")
        return value

    def token_decimals(self, token: str) -> int:
        erc20 = self.web3.eth.contract(
            address=Web3.to_checksum_address(token),
            abi=load_contract_abi("erc20_metadata_abi.json"),
        )
        try:
            decimals = erc20.functions.decimals().call()
        except Exception as exc:
            raise RemoteQueryError(f"decimals call to {token} failed: {exc}") from exc
        if isinstance(decimals, bool) or not isinstance(decimals, int) or not 0 <= decimals <= 255:
            raise RemoteQueryError(f"decimals returned a malformed value: {decimals!r}")
        return decimals

    def native_token(self) -> str:
        return Web3.to_checksum_address(self._call("WETH"))

    def fetch_token_metadata(self, token: str, *, decimals: Optional[int] = None) -> TokenMetadata:
        """Snapshot the registered token state used by fee and quote math."""
        token = Web3.to_checksum_address(token)
        if decimals is not None:
            ensure_decimals(decimals)
        try:
            meta = TokenMetadata(
                token=token,
                chain_local_decimals=self.token_decimals(token) if decimals is None else decimals,
                swap_rate=self._call_uint("swapRate", token),
                swap_rate_precision=self._call_uint("swapRatePrecision"),
                max_native_swap_amount=self._call_uint("maxNativeSwapAmount", token),
            )
        except (InvalidInputError, AmountOverflowError) as exc:
            raise RemoteQueryError(f"Relayer state for {token} is malformed: {exc}") from exc
        LOGGER.debug("Fetched token metadata %s", meta)
        return meta

    def fetch_relayer_fee_config(self, target_chain: int) -> RelayerFeeConfig:
        """Snapshot the USD relayer fee for deliveries to ``target_chain``."""
        ensure_chain_id(target_chain, "target_chain")
        try:
            return RelayerFeeConfig(
                target_chain=target_chain,
                relayer_fee_usd=self._call_uint("relayerFee", target_chain),
                relayer_fee_precision=self._call_uint("relayerFeePrecision"),
            )
        except (InvalidInputError, AmountOverflowError) as exc:
            raise RemoteQueryError(f"Relayer fee state for chain {target_chain} is malformed: {exc}") from exc

    def on_chain_relayer_fee(self, target_chain: int, token: str, decimals: int) -> int:
        """The contract's own relayer fee conversion, for cross-checking."""
        return self._call_uint("calculateRelayerFee", target_chain, Web3.to_checksum_address(token), decimals)

    def native_swap_rate(self, token: str) -> int:
        return self._call_uint("calculateNativeSwapRate", Web3.to_checksum_address(token))

    def max_native_swap_amount(self, token: str) -> int:
        return self._call_uint("maxNativeSwapAmount", Web3.to_checksum_address(token))

    def simulate_native_swap_amount_out(self, token: str, to_native_token_amount: int) -> int:
        return self._call_uint(
            "calculateNativeSwapAmountOut",
            Web3.to_checksum_address(token),
            to_native_token_amount,
        )

    def simulate_max_swap_amount_in(self, token: str, token_decimals: Optional[int] = None) -> int:
        # The contract reads the token's decimals itself.
        return self._call_uint("calculateMaxSwapAmountIn", Web3.to_checksum_address(token))


__all__ = ["EvmRelayerClient"]
