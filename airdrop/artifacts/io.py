"""
Distribution Artifacts
File: io.py

Purpose: Read entitlement lists and proofs, save and load distributions.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from airdrop.merkle.merkle_tree import MerkleProof
from airdrop.schemas.canonical import dumps_canonical
from airdrop.schemas.distribution import Distribution
from airdrop.schemas.entitlement import Entitlement


class DistributionIOError(Exception):
    """Error reading or writing distribution files."""
    pass


def _read_json_file(path: Path) -> Any:
    if not path.exists():
        raise DistributionIOError(f"File not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise DistributionIOError(f"Invalid JSON in {path}: {e}") from e


def parse_entitlements(data: Any) -> list[Entitlement]:
    """
    Parse entitlements from decoded JSON.

    Accepted shapes:
        [{"account_id": "alice.near", "amount": "100"}, ...]
        {"alice.near": "100", "bob.near": 200}

    Mapping input keeps the file's key order.

    Raises:
        DistributionIOError: If the shape or any entry is invalid
    """
    if isinstance(data, dict):
        entries = [{"account_id": k, "amount": v} for k, v in data.items()]
    elif isinstance(data, list):
        entries = data
    else:
        raise DistributionIOError(
            f"Entitlements must be a list or an object, got {type(data).__name__}"
        )

    entitlements: list[Entitlement] = []
    for i, entry in enumerate(entries):
        try:
            entitlements.append(Entitlement.model_validate(entry))
        except ValidationError as e:
            raise DistributionIOError(f"Invalid entitlement at position {i}: {e}") from e
    return entitlements


def load_entitlements(path: str | Path) -> list[Entitlement]:
    """Load an entitlement list from a JSON file."""
    return parse_entitlements(_read_json_file(Path(path)))


def save_distribution(distribution: Distribution, path: str | Path) -> Path:
    """
    Write a distribution as canonical (sorted-key) JSON.

    Returns:
        Path written
    """
    out_path = Path(path)
    if out_path.parent and not out_path.parent.exists():
        out_path.parent.mkdir(parents=True, exist_ok=True)
    content = dumps_canonical(distribution.model_dump(mode="json"), indent=2)
    out_path.write_text(content + "\n", encoding="utf-8")
    return out_path


def load_distribution(path: str | Path) -> Distribution:
    """
    Load and validate a distribution file.

    Raises:
        DistributionIOError: If the file is missing or fails validation
    """
    data = _read_json_file(Path(path))
    try:
        return Distribution.model_validate(data)
    except ValidationError as e:
        raise DistributionIOError(f"Invalid distribution file {path}: {e}") from e


def load_proof(path: str | Path) -> MerkleProof:
    """
    Load a proof from JSON.

    Accepts a bare step list or an object with a "proof" key (such as a
    single claim entry printed by `airdrop prove --json`).
    """
    data = _read_json_file(Path(path))
    if isinstance(data, dict) and "proof" in data:
        data = data["proof"]
    try:
        return MerkleProof.from_list(data)
    except ValueError as e:
        raise DistributionIOError(f"Invalid proof in {path}: {e}") from e
