"""
Verify Route

Stateless proof verification against an arbitrary root.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from airdrop.crypto.hashing import digest_from_hex, from_hex, get_hasher
from airdrop.merkle.merkle_tree import MerkleProof, verify_merkle_proof
from airdrop_api.errors import InvalidRequestError
from airdrop_api.models.requests import VerifyRequest
from airdrop_api.models.responses import VerifyResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["verification"])


@router.post("/verify", response_model=VerifyResponse)
def verify_proof(body: VerifyRequest) -> VerifyResponse:
    """
    Check that proof connects leaf to root.

    An unknown hasher is a bad request. Anything malformed in the root,
    leaf or proof simply does not verify.
    """
    try:
        hasher = get_hasher(body.hasher)
    except ValueError as e:
        raise InvalidRequestError(str(e), details={"hasher": body.hasher})

    try:
        root = digest_from_hex(body.root, hasher)
        leaf = from_hex(body.leaf)
        proof = MerkleProof.from_list(body.proof_payload())
    except ValueError as e:
        logger.debug(f"Malformed verify request: {e}")
        return VerifyResponse(ok=True, valid=False)

    return VerifyResponse(ok=True, valid=verify_merkle_proof(root, leaf, proof, hasher))
