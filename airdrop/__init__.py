"""
Merkle airdrop distributor.

Commit a fixed entitlement list to one Merkle root, hand each recipient a
proof, and verify claims against the root alone.

Packages:
    airdrop.crypto     digests and hasher strategies
    airdrop.merkle     tree construction, proofs, verification
    airdrop.schemas    entitlement encoding, distribution artifact, errors
    airdrop.artifacts  offline build / load / save of distributions
    airdrop.ledger     claim state machine (root, claimed set, payouts)
    airdrop.receipts   audit records for accepted claims
    airdrop.config     runtime configuration
"""

__version__ = "0.1.0"
