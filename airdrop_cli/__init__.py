"""
Airdrop CLI

Command-line interface for building and verifying Merkle airdrops.

Usage:
    python -m airdrop_cli build entitlements.json --out distribution.json
    python -m airdrop_cli prove distribution.json alice.near
    python -m airdrop_cli verify distribution.json
"""

__version__ = "0.1.0"
