"""
Common test fixtures shared by all modules.

Provides factory functions for the airdrop data structures:
- Entitlement lists
- Distribution
- AirdropContract (initialized)
"""

import json
from pathlib import Path
from typing import Any, Optional

from airdrop.artifacts import build_distribution
from airdrop.crypto.hashing import MerkleHasher
from airdrop.ledger import AirdropContract, InMemoryTransfer
from airdrop.schemas.distribution import Distribution
from airdrop.schemas.entitlement import Entitlement


# Five recipients: an odd count, so the tree carries a node upward
DEFAULT_ENTITLEMENTS: list[tuple[str, int]] = [
    ("alice.near", 100),
    ("bob.near", 200),
    ("carol.near", 300),
    ("dave.near", 400),
    ("erin.near", 500),
]


def make_entitlements(
    count: Optional[int] = None,
    pairs: Optional[list[tuple[str, int]]] = None,
) -> list[Entitlement]:
    """
    Create an entitlement list for testing.

    Args:
        count: Generate this many "user<i>.near" recipients instead of
               the default five
        pairs: Explicit (account_id, amount) pairs

    Returns:
        List of Entitlement
    """
    if pairs is None:
        if count is None:
            pairs = DEFAULT_ENTITLEMENTS
        else:
            pairs = [(f"user{i}.near", (i + 1) * 10) for i in range(count)]
    return [Entitlement(account_id=a, amount=v) for a, v in pairs]


def make_distribution(
    entitlements: Optional[list[Entitlement]] = None,
    hasher: Optional[MerkleHasher] = None,
) -> Distribution:
    """Build a distribution over entitlements (defaults to the five above)."""
    return build_distribution(entitlements or make_entitlements(), hasher)


def make_contract(
    distribution: Optional[Distribution] = None,
    owner: str = "owner.near",
    pool: Optional[int] = None,
) -> AirdropContract:
    """Create a contract initialized with distribution's root."""
    distribution = distribution or make_distribution()
    contract = AirdropContract(
        transfer=InMemoryTransfer(pool=pool),
        hasher=distribution.merkle_hasher,
    )
    contract.initialize(distribution.root_bytes, owner=owner)
    return contract


def write_json(path: Path, data: Any) -> Path:
    """Write data as JSON to path and return path."""
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path
