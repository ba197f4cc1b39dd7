"""
Hashing Utilities
Digest primitives and hasher strategies for the Merkle commitment.

This module provides:
- SHA-256 hashing for raw bytes
- MerkleHasher: leaf/node hashing strategy shared by tree and verifier
- Hex encoding/decoding with 0x prefix

Hashing Rules (Hard Contracts):
1. "sha256" (default): leaf = sha256(item), node = sha256(left + right)
2. "sha256-rfc6962": leaf = sha256(0x00 + item), node = sha256(0x01 + left + right)

The builder and the verifier MUST use the same hasher, otherwise every proof
fails. The hasher name is published alongside the root for that reason.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable


# Domain separation prefixes (RFC 6962 section 2.1)
LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"

_HEX_DIGITS = "0123456789abcdefABCDEF"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    parent = sha256(left + right)
    """
    return sha256(left + right)


@dataclass(frozen=True)
class MerkleHasher:
    """
    Leaf and node hashing strategy for a Merkle tree.

    Attributes:
        name: Stable identifier published next to the root
        digest_size: Length in bytes of every digest this hasher produces
        leaf_fn: Maps an encoded item to its leaf digest
        node_fn: Maps (left, right) child digests to the parent digest
    """
    name: str
    digest_size: int
    leaf_fn: Callable[[bytes], bytes]
    node_fn: Callable[[bytes, bytes], bytes]

    def hash_leaf(self, data: bytes) -> bytes:
        """Hash an encoded item into a leaf digest."""
        return self.leaf_fn(data)

    def hash_node(self, left: bytes, right: bytes) -> bytes:
        """Hash two child digests (left || right) into their parent."""
        return self.node_fn(left, right)


def _rfc6962_leaf(data: bytes) -> bytes:
    return sha256(LEAF_PREFIX + data)


def _rfc6962_node(left: bytes, right: bytes) -> bytes:
    return sha256(NODE_PREFIX + left + right)


SHA256_HASHER = MerkleHasher(
    name="sha256",
    digest_size=32,
    leaf_fn=sha256,
    node_fn=hash_concat,
)

RFC6962_HASHER = MerkleHasher(
    name="sha256-rfc6962",
    digest_size=32,
    leaf_fn=_rfc6962_leaf,
    node_fn=_rfc6962_node,
)

DEFAULT_HASHER: MerkleHasher = SHA256_HASHER

_HASHERS: dict[str, MerkleHasher] = {
    SHA256_HASHER.name: SHA256_HASHER,
    RFC6962_HASHER.name: RFC6962_HASHER,
}


def get_hasher(name: str | None = None) -> MerkleHasher:
    """
    Resolve a hasher by name.

    Args:
        name: Hasher name, or None for the default ("sha256")

    Returns:
        The registered MerkleHasher

    Raises:
        ValueError: If no hasher is registered under that name
    """
    if name is None:
        return DEFAULT_HASHER
    try:
        return _HASHERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown hasher: {name!r}. Available: {sorted(_HASHERS)}"
        ) from None


def available_hashers() -> list[str]:
    """Names of all registered hashers, sorted."""
    return sorted(_HASHERS)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If the value is not a string, doesn't start with 0x,
                   has odd length, or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not isinstance(hex_string, str):
        raise ValueError(
            f"Hex value must be a string, got {type(hex_string).__name__}"
        )

    # Validate 0x prefix
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    # bytes.fromhex tolerates whitespace, so check the characters first
    if hex_content.strip(_HEX_DIGITS):
        raise ValueError(f"Invalid hex characters in string: {hex_string[:20]!r}")

    return bytes.fromhex(hex_content)


def digest_from_hex(hex_string: str, hasher: MerkleHasher | None = None) -> bytes:
    """
    Decode a 0x-prefixed digest and check its length against the hasher.

    Raises:
        ValueError: If decoding fails or the length is not hasher.digest_size
    """
    hasher = hasher or DEFAULT_HASHER
    digest = from_hex(hex_string)
    if len(digest) != hasher.digest_size:
        raise ValueError(
            f"Digest must be {hasher.digest_size} bytes, got {len(digest)}"
        )
    return digest


__all__ = [
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "sha256",
    "hash_concat",
    "MerkleHasher",
    "SHA256_HASHER",
    "RFC6962_HASHER",
    "DEFAULT_HASHER",
    "get_hasher",
    "available_hashers",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
