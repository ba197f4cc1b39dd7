"""
Ledger Module

Claim bookkeeping around the Merkle verifier: the published root, the
claimed set, and payouts.
"""

from .contract import AirdropContract
from .store import ClaimStore, InMemoryClaimStore
from .transfer import InMemoryTransfer, TransferRecord, ValueTransfer

__all__ = [
    "AirdropContract",
    "ClaimStore",
    "InMemoryClaimStore",
    "InMemoryTransfer",
    "TransferRecord",
    "ValueTransfer",
]
