"""
Contract Routes

Lifecycle, query and claim endpoints for the app's AirdropContract.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from airdrop.crypto.hashing import digest_from_hex
from airdrop.ledger import AirdropContract
from airdrop.merkle.merkle_tree import MerkleProof
from airdrop.schemas.errors import ClaimRejectedException, NotInitializedException
from airdrop_api.deps import get_caller, get_contract
from airdrop_api.errors import InvalidRequestError
from airdrop_api.models.requests import CanClaimRequest, ClaimRequest, InitRequest
from airdrop_api.models.responses import CanClaimResponse, ClaimResponse, StateResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["contract"])


def _state_response(contract: AirdropContract) -> StateResponse:
    return StateResponse(ok=True, **contract.state())


@router.post("/init", response_model=StateResponse)
def init_contract(
    body: InitRequest,
    contract: AirdropContract = Depends(get_contract),
) -> StateResponse:
    """
    Publish the distribution root. Allowed exactly once.

    A second call answers 409 ALREADY_INITIALIZED.
    """
    try:
        root = digest_from_hex(body.root_hash, contract.hasher)
    except ValueError as e:
        raise InvalidRequestError(f"Invalid root_hash: {e}")

    contract.initialize(root, owner=body.owner)
    return _state_response(contract)


@router.get("/state", response_model=StateResponse)
def get_state(contract: AirdropContract = Depends(get_contract)) -> StateResponse:
    """Current contract status."""
    return _state_response(contract)


@router.post("/can_claim", response_model=CanClaimResponse)
def can_claim(
    body: CanClaimRequest,
    contract: AirdropContract = Depends(get_contract),
) -> CanClaimResponse:
    """Whether the claim would be accepted now. Never changes state."""
    if not contract.initialized:
        raise NotInitializedException()

    try:
        proof = MerkleProof.from_list(body.proof_payload())
    except ValueError as e:
        logger.debug(f"Malformed proof for {body.account_id}: {e}")
        return CanClaimResponse(ok=True, can_claim=False)

    return CanClaimResponse(
        ok=True,
        can_claim=contract.can_claim(body.account_id, body.amount, proof),
    )


@router.post("/claim", response_model=ClaimResponse)
def claim(
    body: ClaimRequest,
    caller: str = Depends(get_caller),
    contract: AirdropContract = Depends(get_contract),
) -> ClaimResponse:
    """
    Claim for the caller named in the identity header.

    Rejections answer 409 with ALREADY_CLAIMED or CLAIM_REJECTED.
    """
    if not contract.initialized:
        raise NotInitializedException()

    try:
        proof = MerkleProof.from_list(body.proof_payload())
    except ValueError as e:
        logger.warning(f"Rejected claim from {caller}: malformed proof ({e})")
        raise ClaimRejectedException(caller, "malformed proof")

    receipt = contract.claim(caller, body.amount, proof)
    return ClaimResponse(ok=True, receipt=receipt.model_dump(mode="json"))
