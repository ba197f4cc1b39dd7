"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn airdrop_api.app:app --reload

    # Or run directly
    python -m airdrop_api.app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from airdrop.config.runtime import RuntimeConfig
from airdrop.crypto.hashing import digest_from_hex
from airdrop.ledger import AirdropContract, InMemoryTransfer
from airdrop.schemas.errors import AirdropException
from airdrop_api.deps import load_runtime_config
from airdrop_api.errors import (
    APIError,
    airdrop_error_handler,
    api_error_handler,
    generic_error_handler,
)
from airdrop_api.routes import contract, health, verify


logger = logging.getLogger(__name__)


def build_contract(config: RuntimeConfig) -> AirdropContract:
    """Create the contract, publishing the configured root if there is one."""
    hasher = config.hashing.resolve()
    instance = AirdropContract(
        transfer=InMemoryTransfer(pool=config.contract.transfer_pool),
        hasher=hasher,
    )
    if config.contract.root_hash:
        instance.initialize(
            digest_from_hex(config.contract.root_hash, hasher),
            owner=config.contract.owner,
        )
    return instance


def create_app(config: RuntimeConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if config is None:
        config = load_runtime_config()
    logger.debug(f"Runtime config: {config.to_dict()}")

    app = FastAPI(
        title="Merkle Airdrop API",
        description="""
HTTP API for a Merkle-committed airdrop.

## Endpoints

- **GET /health** - Health check
- **POST /init** - Publish the distribution root (allowed once)
- **GET /state** - Root, owner, hasher and claimed count
- **POST /can_claim** - Would this claim be accepted right now?
- **POST /claim** - Claim for the caller given in the `X-Account-Id` header
- **POST /verify** - Stateless proof verification against any root
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.config = config
    app.state.contract = build_contract(config)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AirdropException, airdrop_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(contract.router)
    app.include_router(verify.router)

    return app


_config = load_runtime_config()

logging.basicConfig(
    level=getattr(logging, _config.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# Create the application instance
app = create_app(_config)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=_config.api.host, port=_config.api.port)
