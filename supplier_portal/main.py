import logging
import traceback
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings
from .context import AppContext, build_context
from .errors import ApiError, utc_timestamp
from .logging_setup import setup_logging
from .middleware.rate_limit import create_limiter, rate_limit_exceeded_handler
from .middleware.security_headers import SecurityHeadersMiddleware
from .routers import admin, health, roles, users

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "Invalid request",
                "message": "Request payload failed validation",
                "details": jsonable_encoder(exc.errors()),
                "timestamp": utc_timestamp(),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            content = {
                "error": "Route not found",
                "path": request.url.path,
                "method": request.method,
                "timestamp": utc_timestamp(),
            }
        else:
            content = {"error": str(exc.detail), "timestamp": utc_timestamp()}
        return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        content = {"error": "Internal server error", "timestamp": utc_timestamp()}
        # détails uniquement hors production
        if not settings.is_production:
            content["message"] = str(exc)
            content["stack"] = traceback.format_exception(type(exc), exc, exc.__traceback__)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AppContext] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    ``context`` lets callers (tests, scripts) inject their own collaborators;
    otherwise one is built from ``settings``.
    """
    if context is not None:
        settings = context.settings
    elif settings is None:
        settings = get_settings()

    setup_logging(settings)
    if context is None:
        context = build_context(settings)

    app = FastAPI(
        title="Supplier Portal API",
        version=__version__,
        description="Role checks and user profiles for the supplier portal",
    )
    app.state.context = context

    # Rate limiting middleware (only if enabled) - MUST be added first
    if settings.sp_rate_limit_enabled:
        app.state.limiter = create_limiter(settings)
        app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
        app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list(),
        allow_credentials=False,
        allow_methods=["GET", "PUT", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )

    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)

    register_exception_handlers(app, settings)

    app.include_router(health.router, prefix="/api")
    app.include_router(roles.router, prefix="/api")
    app.include_router(users.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    @app.on_event("shutdown")
    def shutdown_event():
        """Ferme proprement l'app Firebase lors du shutdown."""
        context.close()

    logger.info("Supplier portal API ready (env=%s, store=%s)", settings.sp_env, settings.sp_store_backend)
    return app
