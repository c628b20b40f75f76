"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.deps import build_container
from api.errors import (
    APIError,
    api_error_handler,
    generic_error_handler,
    service_error_handler,
)
from api.routes import health, merkle
from core.config.runtime import RuntimeConfig, load_runtime_config
from core.schemas.errors import AllowlistException


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, (level_name or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def create_app(config: Optional[RuntimeConfig] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The config is resolved once here; databases are opened in the lifespan.
    """
    if config is None:
        config = load_runtime_config()
    _configure_logging(config.api.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        container = await build_container(config)
        app.state.container = container
        try:
            yield
        finally:
            await container.close()

    app = FastAPI(
        title="Allowlist Merkle API",
        description="""
HTTP API for merkle-tree allowlists and redemption proofs.

## Endpoints

- **POST /merkle/roots** - Store an address/amount allowlist, return its root
- **GET /merkle/proof** - Proof and remaining allowance for an address
- **POST /merkle/trees** - Store a tree of any supported type
- **GET /merkle/trees/{merkle_root}** - Fetch a stored tree
- **GET /merkle/trees/{merkle_root}/recipients** - Proof for a recipients entry
- **POST /merkle/verify** - Verify a proof against a root
- **GET /health** - Health check
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.config = config

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register exception handlers
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(AllowlistException, service_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(merkle.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
