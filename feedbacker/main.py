from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from .settings import get_settings
from .api.middleware.auth import AuthMiddleware
from .api.middleware.logging import LoggingMiddleware
from .api.middleware.ratelimit import RateLimitMiddleware
from .api.middleware.limits import SizeLimitMiddleware
from .api.middleware.deprecation import DeprecationMiddleware
from .api.routers.health import router as health_router
from .api.routers.topics import router as topics_router
from .api.routers.suggestions import router as suggestions_router
from .api.routers.feedback import router as feedback_router
from .api.models import ErrorCode, error_response

logger = logging.getLogger("feedbacker")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        "startup", extra={"service": settings.SERVICE_NAME, "env": settings.SERVICE_ENV}
    )
    yield
    logger.info("shutdown", extra={"service": settings.SERVICE_NAME})


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.SERVICE_NAME, version=settings.VERSION, lifespan=lifespan)

    if settings.CORS_ALLOWED_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOWED_ORIGINS,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Last added runs first: Deprecation→SizeLimit→RateLimit→Auth→Logging.
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(AuthMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(SizeLimitMiddleware)
    app.add_middleware(DeprecationMiddleware)

    app.include_router(health_router, prefix="/v1", tags=["v1"])
    app.include_router(topics_router, prefix="/v1", tags=["topics"])
    app.include_router(suggestions_router, prefix="/v1", tags=["suggestions"])
    app.include_router(feedback_router, prefix="/v1", tags=["feedback"])

    # Unversioned health aliases (hidden from schema)
    app.include_router(health_router, include_in_schema=False)

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:  # pragma: no cover - simple
        return error_response(
            ErrorCode.validation_error,
            "Invalid request",
            422,
            request_id=getattr(request.state, "request_id", None),
            details={"errors": exc.errors()},
        )

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - simple
        logger.exception("unhandled_error")
        return error_response(
            ErrorCode.internal_error,
            "Internal server error",
            500,
            request_id=getattr(request.state, "request_id", None),
        )

    return app


app = create_app()
