"""
CLI Build Command

Commit an entitlement list: compute the root and every recipient's proof.

Usage:
    airdrop build entitlements.json --out distribution.json [--hasher NAME] [--json]
    airdrop root entitlements.json [--hasher NAME]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from typing import Any

from airdrop.artifacts import (
    DistributionIOError,
    build_distribution,
    load_entitlements,
    save_distribution,
)
from airdrop.crypto.hashing import get_hasher
from airdrop.merkle.merkle_tree import compute_tree_depth
from airdrop.schemas.errors import AirdropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a build for CLI output."""
    source: str = ""
    output_path: str = ""
    root: str = ""
    hasher: str = ""
    recipients: int = 0
    depth: int = 0
    total_amount: str = "0"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _resolve_hasher_name(args: Namespace) -> str:
    if getattr(args, "hasher", None):
        return args.hasher
    config = getattr(args, "cli_config", None)
    return config.hasher if config is not None else "sha256"


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Returns:
        Exit code
    """
    try:
        hasher = get_hasher(_resolve_hasher_name(args))
        entitlements = load_entitlements(args.entitlements)
        distribution = build_distribution(entitlements, hasher)
        out_path = save_distribution(distribution, args.out)
    except (DistributionIOError, AirdropException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        source=str(args.entitlements),
        output_path=str(out_path),
        root=distribution.root,
        hasher=distribution.hasher,
        recipients=distribution.leaf_count,
        depth=compute_tree_depth(distribution.leaf_count),
        total_amount=str(sum(e.amount for e in entitlements)),
    )

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"hasher: {summary.hasher}")
        print(f"recipients: {summary.recipients}")
        print(f"depth: {summary.depth}")
        print(f"total_amount: {summary.total_amount}")
        print(f"written: {summary.output_path}")

    logger.info(f"Wrote distribution to {out_path}")
    return EXIT_SUCCESS


def root_cmd(args: Namespace) -> int:
    """Print only the root of an entitlement list."""
    try:
        hasher = get_hasher(_resolve_hasher_name(args))
        entitlements = load_entitlements(args.entitlements)
        distribution = build_distribution(entitlements, hasher)
    except (DistributionIOError, AirdropException, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(distribution.root)
    return EXIT_SUCCESS
