"""HTTP routing for the tour desk."""

from fastapi import APIRouter

from tourdesk.core.config import get_settings

from .v1 import router as v1_router


def build_api_router(prefix: str | None = None) -> APIRouter:
    """Mount the versioned routes under ``prefix`` (the configured v1 prefix by default)."""
    router = APIRouter()
    router.include_router(v1_router, prefix=prefix or get_settings().api_v1_prefix)
    return router


api_router = build_api_router()

__all__ = ["api_router", "build_api_router"]
