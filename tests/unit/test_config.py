"""
Configuration Tests
Tests for airdrop/config/runtime.py and airdrop_cli/config.py

Tests:
- defaults, dict and YAML loading
- AIRDROP_* environment overrides
- unknown hasher rejected early
- CLI config file discovery and env precedence
"""
import json

import pytest

from airdrop.config import RuntimeConfig
from airdrop.crypto.hashing import RFC6962_HASHER, SHA256_HASHER
from airdrop_cli.config import (
    CLIConfig,
    get_default_config_template,
    load_config,
    load_config_from_file,
)


class TestRuntimeConfigDefaults:
    """Tests for default values."""

    def test_defaults(self):
        config = RuntimeConfig()

        assert config.hashing.hasher == "sha256"
        assert config.hashing.resolve() is SHA256_HASHER
        assert config.contract.root_hash is None
        assert config.contract.owner == "owner.near"
        assert config.contract.transfer_pool is None
        assert config.api.port == 8000
        assert config.api.caller_header == "X-Account-Id"
        assert config.log_level == "INFO"


class TestRuntimeConfigLoading:
    """Tests for from_dict / from_yaml / to_dict."""

    def test_from_dict_partial(self):
        config = RuntimeConfig.from_dict({"hashing": {"hasher": "sha256-rfc6962"}})

        assert config.hashing.resolve() is RFC6962_HASHER
        assert config.contract.owner == "owner.near"

    def test_from_dict_unknown_hasher(self):
        with pytest.raises(ValueError, match="Unknown hasher"):
            RuntimeConfig.from_dict({"hashing": {"hasher": "md5"}})

    def test_to_dict_round_trip(self):
        data = {
            "hashing": {"hasher": "sha256"},
            "contract": {"root_hash": "0x" + "ab" * 32, "owner": "dao.near", "transfer_pool": 1000},
            "api": {"host": "0.0.0.0", "port": 9000, "caller_header": "X-Caller"},
            "log_level": "DEBUG",
        }
        assert RuntimeConfig.from_dict(data).to_dict() == data

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "airdrop.yaml"
        path.write_text(
            "hashing:\n"
            "  hasher: sha256-rfc6962\n"
            "contract:\n"
            "  owner: dao.near\n"
            "  transfer_pool: 500\n"
            "log_level: WARNING\n"
        )

        config = RuntimeConfig.from_yaml(path)

        assert config.hashing.hasher == "sha256-rfc6962"
        assert config.contract.owner == "dao.near"
        assert config.contract.transfer_pool == 500
        assert config.log_level == "WARNING"

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")


class TestRuntimeConfigEnv:
    """Tests for AIRDROP_* environment overrides."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AIRDROP_HASHER", "sha256-rfc6962")
        monkeypatch.setenv("AIRDROP_ROOT_HASH", "0x" + "00" * 32)
        monkeypatch.setenv("AIRDROP_OWNER", "dao.near")
        monkeypatch.setenv("AIRDROP_TRANSFER_POOL", "1234")
        monkeypatch.setenv("AIRDROP_API_PORT", "9100")
        monkeypatch.setenv("AIRDROP_LOG_LEVEL", "DEBUG")

        config = RuntimeConfig.from_env()

        assert config.hashing.hasher == "sha256-rfc6962"
        assert config.contract.root_hash == "0x" + "00" * 32
        assert config.contract.owner == "dao.near"
        assert config.contract.transfer_pool == 1234
        assert config.api.port == 9100
        assert config.log_level == "DEBUG"

    def test_with_env_overrides_keeps_file_values(self, monkeypatch):
        base = RuntimeConfig.from_dict({"contract": {"owner": "file.near", "transfer_pool": 10}})
        monkeypatch.setenv("AIRDROP_OWNER", "env.near")

        merged = base.with_env_overrides()

        assert merged.contract.owner == "env.near"
        assert merged.contract.transfer_pool == 10
        assert base.contract.owner == "file.near"

    def test_with_env_overrides_no_env_returns_self(self):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base

    def test_env_unknown_hasher_rejected(self, monkeypatch):
        monkeypatch.setenv("AIRDROP_HASHER", "md5")
        with pytest.raises(ValueError):
            RuntimeConfig().with_env_overrides()


class TestCLIConfig:
    """Tests for the CLI's JSON config."""

    def test_defaults(self):
        config = load_config()

        assert config == CLIConfig()

    def test_discovers_local_file(self, tmp_path):
        (tmp_path / "airdrop.json").write_text(json.dumps({"hasher": "sha256-rfc6962"}))

        assert load_config().hasher == "sha256-rfc6962"

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"log_level": "DEBUG", "default_output_format": "json"}))

        config = load_config(path)

        assert config.log_level == "DEBUG"
        assert config.default_output_format == "json"

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_file(tmp_path / "missing.json")

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"hasher": "sha256", "log_level": "DEBUG"}))
        monkeypatch.setenv("AIRDROP_HASHER", "sha256-rfc6962")

        config = load_config(path)

        assert config.hasher == "sha256-rfc6962"
        assert config.log_level == "DEBUG"

    def test_template_is_valid_json(self):
        data = json.loads(get_default_config_template())
        assert data["hasher"] == "sha256"
