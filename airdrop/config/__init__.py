"""
Runtime Configuration Module

Provides configuration loading and management for the airdrop service.
"""

from .runtime import (
    ApiConfig,
    ContractConfig,
    HashingConfig,
    RuntimeConfig,
)

__all__ = [
    "ApiConfig",
    "ContractConfig",
    "HashingConfig",
    "RuntimeConfig",
]
