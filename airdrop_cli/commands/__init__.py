"""
CLI command modules.
"""

from airdrop_cli.commands import build, prove, verify

__all__ = ["build", "prove", "verify"]
