"""
CLI Verify Command

Verify claims offline:
- A whole distribution: recompute the root and check every proof
- A single claim: check (account, amount, proof) against a root

Usage:
    airdrop verify distribution.json [--json] [--debug]
    airdrop verify --root 0x... --account alice.near --amount 100 --proof proof.json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from typing import Any

from airdrop.artifacts import DistributionIOError, load_distribution, load_proof, verify_distribution
from airdrop.crypto.hashing import digest_from_hex, get_hasher
from airdrop.merkle.merkle_proofs import MerkleVerifier
from airdrop.schemas.verification import VerificationResult


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of a distribution verification for CLI output."""
    distribution_path: str = ""
    root: str = ""
    hasher: str = ""
    recipients: int = 0
    ok: bool = False
    root_matches: bool = False
    passed_checks: int = 0
    failed_checks: int = 0
    unverified_accounts: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    checks: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if not d["unverified_accounts"]:
            del d["unverified_accounts"]
        if not d["errors"]:
            del d["errors"]
        if not d["checks"]:
            del d["checks"]
        return d


def build_summary(
    path: str,
    root: str,
    hasher: str,
    recipients: int,
    result: VerificationResult,
    debug: bool = False,
) -> VerifySummary:
    """Build a VerifySummary from a verification result."""
    summary = VerifySummary(
        distribution_path=path,
        root=root,
        hasher=hasher,
        recipients=recipients,
        ok=result.ok,
        root_matches=result.root_matches,
        passed_checks=result.passed_count,
        failed_checks=result.error_count,
        unverified_accounts=result.unverified_accounts(),
    )
    for check in result.get_failed_checks():
        summary.errors.append(f"{check.check_id}: {check.message}")
    if debug:
        summary.checks = [
            {"check_id": c.check_id, "ok": c.ok, "message": c.message}
            for c in result.checks
        ]
    return summary


def print_summary_human(summary: VerifySummary) -> None:
    """Print summary in human-readable format."""
    print(f"distribution: {summary.distribution_path}")
    print(f"root: {summary.root}")
    print(f"hasher: {summary.hasher}")
    print(f"recipients: {summary.recipients}")
    print(f"ok: {str(summary.ok).lower()}")
    print(f"root matches: {str(summary.root_matches).lower()}")
    print(f"checks: {summary.passed_checks} passed, {summary.failed_checks} failed")

    if summary.unverified_accounts:
        print(f"unverified: {', '.join(summary.unverified_accounts[:10])}")

    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors[:10]:
            print(f"  ✗ {err}")

    if summary.checks:
        print()
        for check in summary.checks[:50]:
            status = "✓" if check["ok"] else "✗"
            print(f"  {status} {check['check_id']}")


def _verify_single(args: Namespace) -> int:
    """Verify one (account, amount, proof) triple against --root."""
    missing = [
        flag for flag, value in (
            ("--root", args.root),
            ("--account", args.account),
            ("--amount", args.amount),
            ("--proof", args.proof),
        )
        if value is None
    ]
    if missing:
        print(f"Error: missing {', '.join(missing)}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        config = getattr(args, "cli_config", None)
        hasher = get_hasher(args.hasher or (config.hasher if config is not None else None))
        root = digest_from_hex(args.root, hasher)
        proof = load_proof(args.proof)
    except (DistributionIOError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    valid = MerkleVerifier(root, hasher).verify_entitlement(args.account, args.amount, proof)

    if args.json:
        print(json.dumps({
            "root": args.root,
            "account_id": args.account,
            "amount": args.amount,
            "valid": valid,
        }, indent=2))
    else:
        print(f"valid: {str(valid).lower()}")

    if valid:
        logger.info(f"Proof for {args.account} verifies")
        return EXIT_SUCCESS
    logger.warning(f"Proof for {args.account} does not verify")
    return EXIT_VERIFICATION_FAILED


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code
    """
    if args.distribution is None:
        return _verify_single(args)

    try:
        distribution = load_distribution(args.distribution)
    except DistributionIOError as e:
        print(f"Error loading distribution: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    result = verify_distribution(distribution)
    summary = build_summary(
        path=str(args.distribution),
        root=distribution.root,
        hasher=distribution.hasher,
        recipients=distribution.leaf_count,
        result=result,
        debug=args.debug,
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    if summary.ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED
