"""
CLI Prove Command

Print one recipient's claim (amount, index, proof) from a distribution.

Usage:
    airdrop prove distribution.json alice.near [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from airdrop.artifacts import DistributionIOError, load_distribution


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def prove_cmd(args: Namespace) -> int:
    """Execute the prove command."""
    try:
        distribution = load_distribution(args.distribution)
    except DistributionIOError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    claim = distribution.get_claim(args.account_id)
    if claim is None:
        print(f"Error: {args.account_id} is not in this distribution", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        payload = claim.model_dump(mode="json")
        payload["root"] = distribution.root
        payload["hasher"] = distribution.hasher
        print(json.dumps(payload, indent=2))
    else:
        print(f"account_id: {claim.account_id}")
        print(f"amount: {claim.amount}")
        print(f"index: {claim.index}")
        print(f"root: {distribution.root}")
        print(f"proof ({len(claim.proof)} steps):")
        for step in claim.proof:
            print(f"  {step.side:<5} {step.sibling}")

    return EXIT_SUCCESS
