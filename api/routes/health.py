"""
Health Check Route

Liveness plus the settings that decide which roots this instance produces.
"""

from fastapi import APIRouter, Request

from api.models.responses import HealthResponse


router = APIRouter(tags=["health"])


def _health(request: Request) -> HealthResponse:
    container = getattr(request.app.state, "container", None)
    config = getattr(request.app.state, "config", None)
    return HealthResponse(
        ok=True,
        ready=container is not None,
        odd_node_policy=config.merkle.odd_node_policy.value if config is not None else None,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint.

    `ready` turns true once the stores are open.
    """
    return _health(request)


@router.get("/", response_model=HealthResponse)
async def root(request: Request) -> HealthResponse:
    return _health(request)
