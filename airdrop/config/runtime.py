"""
Runtime Configuration

Central configuration for the airdrop service: hashing, the contract's
published root, and API serving.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from airdrop.crypto.hashing import MerkleHasher, get_hasher

load_dotenv()


@dataclass
class HashingConfig:
    """Configuration for Merkle hashing."""
    hasher: str = "sha256"

    def resolve(self) -> MerkleHasher:
        return get_hasher(self.hasher)


@dataclass
class ContractConfig:
    """Configuration for initializing the contract at startup."""
    root_hash: Optional[str] = None  # 0x-prefixed
    owner: str = "owner.near"
    transfer_pool: Optional[int] = None  # None = unlimited


@dataclass
class ApiConfig:
    """Configuration for the HTTP API."""
    host: str = "127.0.0.1"
    port: int = 8000
    caller_header: str = "X-Account-Id"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    contract: ContractConfig = field(default_factory=ContractConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    log_level: str = "INFO"

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - AIRDROP_HASHER: Merkle hasher name
        - AIRDROP_ROOT_HASH: Root to initialize the contract with (0x hex)
        - AIRDROP_OWNER: Owner account id
        - AIRDROP_TRANSFER_POOL: Funds available for payouts
        - AIRDROP_API_HOST / AIRDROP_API_PORT: API bind address
        - AIRDROP_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv("AIRDROP_HASHER"):
            overrides.setdefault("hashing", {})["hasher"] = os.getenv("AIRDROP_HASHER")

        if os.getenv("AIRDROP_ROOT_HASH"):
            overrides.setdefault("contract", {})["root_hash"] = os.getenv("AIRDROP_ROOT_HASH")
        if os.getenv("AIRDROP_OWNER"):
            overrides.setdefault("contract", {})["owner"] = os.getenv("AIRDROP_OWNER")
        if os.getenv("AIRDROP_TRANSFER_POOL"):
            overrides.setdefault("contract", {})["transfer_pool"] = int(
                os.getenv("AIRDROP_TRANSFER_POOL", "0")
            )

        if os.getenv("AIRDROP_API_HOST"):
            overrides.setdefault("api", {})["host"] = os.getenv("AIRDROP_API_HOST")
        if os.getenv("AIRDROP_API_PORT"):
            overrides.setdefault("api", {})["port"] = int(os.getenv("AIRDROP_API_PORT", "8000"))

        if os.getenv("AIRDROP_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("AIRDROP_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        contract_data = data.get("contract", {})
        api_data = data.get("api", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        contract = ContractConfig(**contract_data) if contract_data else ContractConfig()
        api = ApiConfig(**api_data) if api_data else ApiConfig()

        # Fail early on an unknown hasher name
        hashing.resolve()

        return cls(
            hashing=hashing,
            contract=contract,
            api=api,
            log_level=data.get("log_level", "INFO"),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for section in ("hashing", "contract", "api"):
            if section in overrides:
                target = getattr(new_config, section)
                for key, value in overrides[section].items():
                    setattr(target, key, value)

        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        new_config.hashing.resolve()
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "hasher": self.hashing.hasher,
            },
            "contract": {
                "root_hash": self.contract.root_hash,
                "owner": self.contract.owner,
                "transfer_pool": self.contract.transfer_pool,
            },
            "api": {
                "host": self.api.host,
                "port": self.api.port,
                "caller_header": self.api.caller_header,
            },
            "log_level": self.log_level,
        }

