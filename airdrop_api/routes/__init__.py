"""API route handlers."""

from airdrop_api.routes import contract, health, verify

__all__ = ["contract", "health", "verify"]
