"""
Core cryptographic utilities.

Provides digest primitives and the Merkle hasher strategies.
"""
from .hashing import (
    LEAF_PREFIX,
    NODE_PREFIX,
    sha256,
    hash_concat,
    MerkleHasher,
    SHA256_HASHER,
    RFC6962_HASHER,
    DEFAULT_HASHER,
    get_hasher,
    available_hashers,
    to_hex,
    from_hex,
    digest_from_hex,
)

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
