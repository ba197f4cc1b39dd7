"""
Airdrop HTTP API (FastAPI)

HTTP surface for a single in-process airdrop contract:
- GET /health - Health check
- POST /init - Publish the root (once)
- GET /state - Contract status
- POST /can_claim - Check a claim without changing state
- POST /claim - Claim for the caller named in X-Account-Id
- POST /verify - Stateless proof verification

Usage:
    uvicorn airdrop_api.app:app --reload
"""

__version__ = "0.1.0"
