"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from secure import Secure
from asgi_correlation_id import CorrelationIdMiddleware

from tourdesk.api import api_router
from tourdesk.core.config import Settings, get_settings
from tourdesk.core.logging import configure_logging
from tourdesk.db.session import dispose_engine
from tourdesk.services.run_locks import close_admission_transaction

logger = logging.getLogger(__name__)

_DEFAULT_ORIGINS = ["http://localhost:5173"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s", app.title)
    try:
        yield
    finally:
        try:
            await close_admission_transaction()
        except Exception:
            logger.exception("Failed to close run lock backend")
        await dispose_engine()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API with CORS, request ids and security headers."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(title=settings.app_name, lifespan=lifespan)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[o for o in settings.cors_allow_origins if o] or _DEFAULT_ORIGINS,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )
    application.add_middleware(CorrelationIdMiddleware, header_name="X-Request-ID")

    secure_headers = Secure()

    @application.middleware("http")
    async def _apply_security_headers(request, call_next):
        response = await call_next(request)
        secure_headers.set_headers(response)
        return response

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        return {"message": settings.app_name}

    application.include_router(api_router)
    return application


app = create_app()
