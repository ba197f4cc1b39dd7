"""
API Dependencies

Dependency injection for the API.
Provides the runtime config, the contract, and the caller identity.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Request

from airdrop.config.runtime import RuntimeConfig
from airdrop.ledger import AirdropContract
from airdrop_api.errors import MissingCallerError

logger = logging.getLogger(__name__)


def load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a YAML file, then overlay environment variables.

    Search order for config file:
      1. ./airdrop.yaml
      2. ./.airdrop.yaml
      3. ~/.config/airdrop/runtime.yaml

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by airdrop.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "airdrop.yaml",
        Path.cwd() / ".airdrop.yaml",
        Path.home() / ".config" / "airdrop" / "runtime.yaml",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            config = RuntimeConfig.from_yaml(path)
            logger.info(f"Loaded config from {path}")
            break

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_runtime_config(request: Request) -> RuntimeConfig:
    """The config the app was created with."""
    return request.app.state.config


def get_contract(request: Request) -> AirdropContract:
    """The app's contract instance."""
    return request.app.state.contract


def get_caller(request: Request) -> str:
    """
    Resolve the calling recipient from the configured identity header.

    Raises:
        MissingCallerError: If the header is absent or empty
    """
    header = request.app.state.config.api.caller_header
    caller = request.headers.get(header, "").strip()
    if not caller:
        raise MissingCallerError(header)
    return caller
