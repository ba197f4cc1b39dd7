"""
Distribution Artifacts

Offline build step: entitlements in, root and per-recipient proofs out.
"""

from .builder import build_distribution, find_duplicate_recipients, verify_distribution
from .io import (
    DistributionIOError,
    load_distribution,
    load_entitlements,
    load_proof,
    parse_entitlements,
    save_distribution,
)

__all__ = [
    "build_distribution",
    "find_duplicate_recipients",
    "verify_distribution",
    "DistributionIOError",
    "load_distribution",
    "load_entitlements",
    "load_proof",
    "parse_entitlements",
    "save_distribution",
]
