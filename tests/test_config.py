"""Tests for relayer configuration loading."""

import json

import pytest
from web3 import Web3

from token_bridge_relayer.config import ConfigError, load_config
from token_bridge_relayer.core.constants import DEFAULT_PAYLOAD_OFFSET, ChainFamily

RELAYER = "0x" + "ab" * 20
SUI_STATE = "0x" + "cd" * 32


def base_config():
    return {
        "chains": {
            "2": {
                "family": "evm",
                "relayer": RELAYER,
                "rpc_url_env": "TEST_ETH_RPC",
                "evm_chain_id": 1,
            },
            "21": {
                "family": "SUI",
                "relayer": SUI_STATE,
                "rpc_url": "https://sui.test",
                "payload_offset": 0,
            },
        },
        "defaults": {"api_timeout": 10},
    }


@pytest.fixture
def write_config(tmp_path):
    def _write(data):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


class TestLoadConfig:
    """Tests for parsing and validating config files."""

    def test_parses_chains(self, write_config, monkeypatch):
        monkeypatch.setenv("TEST_ETH_RPC", "https://eth.test")

        config = load_config(write_config(base_config()))

        eth = config.chain(2)
        assert eth.family is ChainFamily.EVM
        assert eth.relayer_address == Web3.to_checksum_address(RELAYER)
        assert eth.rpc_url == "https://eth.test"
        assert eth.evm_chain_id == 1
        assert eth.payload_offset == DEFAULT_PAYLOAD_OFFSET

        sui = config.chain(21)
        assert sui.family is ChainFamily.SUI
        assert sui.relayer_address == SUI_STATE
        assert sui.ensure_rpc_url() == "https://sui.test"
        assert sui.payload_offset == 0

        assert config.defaults.api_timeout == 10
        assert config.to_dict()["defaults"] == {"api_timeout": 10}

    def test_unconfigured_chain(self, write_config, monkeypatch):
        monkeypatch.setenv("TEST_ETH_RPC", "https://eth.test")
        config = load_config(write_config(base_config()))

        with pytest.raises(ConfigError):
            config.chain(6)

    def test_missing_rpc_env(self, write_config, monkeypatch):
        monkeypatch.delenv("TEST_ETH_RPC", raising=False)

        with pytest.raises(ConfigError, match="TEST_ETH_RPC"):
            load_config(write_config(base_config()))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)

    def test_unknown_family(self, write_config):
        data = base_config()
        data["chains"] = {"1": {"family": "cosmos", "relayer": "x", "rpc_url": "http://x"}}

        with pytest.raises(ConfigError, match="unknown family"):
            load_config(write_config(data))

    def test_bad_evm_address(self, write_config):
        data = base_config()
        data["chains"] = {"2": {"family": "evm", "relayer": "0x1234", "rpc_url": "http://x"}}

        with pytest.raises(ConfigError):
            load_config(write_config(data))

    def test_negative_payload_offset(self, write_config):
        data = base_config()
        data["chains"]["21"]["payload_offset"] = -1
        del data["chains"]["2"]

        with pytest.raises(ConfigError):
            load_config(write_config(data))

    def test_missing_sections(self, write_config):
        with pytest.raises(ConfigError, match="defaults"):
            load_config(write_config({"chains": base_config()["chains"]}))

    def test_empty_chains(self, write_config):
        with pytest.raises(ConfigError):
            load_config(write_config({"chains": {}, "defaults": {"api_timeout": 10}}))

    def test_non_positive_timeout(self, write_config):
        data = base_config()
        del data["chains"]["2"]
        data["defaults"]["api_timeout"] = 0

        with pytest.raises(ConfigError):
            load_config(write_config(data))
