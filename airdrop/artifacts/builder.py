"""
Distribution Artifacts
File: builder.py

Purpose: Build a distribution (root + per-recipient proofs) from an
entitlement list, and re-verify an existing distribution offline.
"""

from __future__ import annotations

import logging
from typing import Sequence

from airdrop.crypto.hashing import MerkleHasher, DEFAULT_HASHER, to_hex
from airdrop.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from airdrop.schemas.distribution import ClaimEntry, Distribution, proof_to_models
from airdrop.schemas.entitlement import Entitlement
from airdrop.schemas.errors import DuplicateRecipientException
from airdrop.schemas.verification import CheckResult, DistributionChecks, VerificationResult


logger = logging.getLogger(__name__)


def find_duplicate_recipients(entitlements: Sequence[Entitlement]) -> dict[str, list[int]]:
    """Map each recipient listed more than once to the indexes it appears at."""
    positions: dict[str, list[int]] = {}
    for i, entitlement in enumerate(entitlements):
        positions.setdefault(entitlement.account_id, []).append(i)
    return {account: idx for account, idx in positions.items() if len(idx) > 1}


def build_distribution(
    entitlements: Sequence[Entitlement],
    hasher: MerkleHasher | None = None,
) -> Distribution:
    """
    Commit to an ordered entitlement list.

    Args:
        entitlements: Entitlements in commitment order.
        hasher: Merkle hasher (defaults to plain SHA-256).

    Returns:
        Distribution with root and one proof per entitlement.

    Raises:
        ValueError: If entitlements is empty.
        DuplicateRecipientException: If a recipient is listed twice. Claims
            are keyed by recipient, so the second entry could never be claimed.
    """
    hasher = hasher or DEFAULT_HASHER

    if len(entitlements) == 0:
        raise ValueError("Cannot build a distribution from an empty entitlement list")

    duplicates = find_duplicate_recipients(entitlements)
    if duplicates:
        account_id, indexes = next(iter(duplicates.items()))
        raise DuplicateRecipientException(account_id, indexes)

    prover = MerkleProver(entitlements, hasher)

    claims = [
        ClaimEntry(
            index=i,
            account_id=entitlement.account_id,
            amount=entitlement.amount,
            proof=proof_to_models(prover.prove(i)),
        )
        for i, entitlement in enumerate(prover.entitlements)
    ]

    distribution = Distribution(
        hasher=hasher.name,
        root=to_hex(prover.root),
        leaf_count=len(claims),
        claims=claims,
    )
    logger.info(
        f"Built distribution: recipients={distribution.leaf_count} "
        f"hasher={hasher.name} root={distribution.root}"
    )
    return distribution


def verify_distribution(distribution: Distribution) -> VerificationResult:
    """
    Re-verify a distribution offline.

    Checks:
    1. root_recomputed: rebuilding the tree from the listed entitlements
       reproduces the published root
    2. claim_proof:<account>: every listed proof verifies against the root
    """
    hasher = distribution.merkle_hasher
    root = distribution.root_bytes
    result = VerificationResult.success()

    entitlements = [claim.entitlement for claim in distribution.claims]
    recomputed = MerkleProver(entitlements, hasher).root
    if recomputed == root:
        result.add_check(CheckResult.passed(
            DistributionChecks.ROOT_RECOMPUTED,
            "Root matches the listed entitlements",
        ))
    else:
        result.add_check(CheckResult.failed(
            DistributionChecks.ROOT_RECOMPUTED,
            "Root does not match the listed entitlements",
            details={"expected": distribution.root, "actual": to_hex(recomputed)},
        ))

    verifier = MerkleVerifier(root, hasher)
    for claim in distribution.claims:
        check_id = DistributionChecks.claim_proof(claim.account_id)
        if verifier.verify_entitlement(claim.account_id, claim.amount, claim.to_proof()):
            result.add_check(CheckResult.passed(check_id, "Proof verifies"))
        else:
            logger.warning(f"Proof for {claim.account_id} (index {claim.index}) does not verify")
            result.add_check(CheckResult.failed(
                check_id,
                "Proof does not verify against root",
                details={"index": claim.index},
            ))

    return result
