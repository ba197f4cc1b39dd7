"""
Test fixtures package for airdrop tests.

Usage:
    from fixtures import make_entitlements, make_distribution

    def test_something():
        dist = make_distribution(make_entitlements(count=3))
"""

from .common import (
    DEFAULT_ENTITLEMENTS,
    make_contract,
    make_distribution,
    make_entitlements,
    write_json,
)

__all__ = [
    "DEFAULT_ENTITLEMENTS",
    "make_contract",
    "make_distribution",
    "make_entitlements",
    "write_json",
]
