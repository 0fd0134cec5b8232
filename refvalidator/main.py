"""
FastAPI application entry point.

Builds the FastAPI application:
- the provider registry is created in the lifespan hook
- CORS and slowapi rate limiting
- every failure is rendered as the {success: false, ...} envelope
- health, provider, auth, candidate and reference routers

Usage:
    Run with uvicorn:
        uvicorn refvalidator.main:app --host 0.0.0.0 --port 8080

    Or with the server.py entry point:
        python server.py
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_logger, get_settings
from .dependencies import get_client_ip, limiter
from .exceptions import RefCheckException
from .models import ErrorResponse
from .registry import ProviderRegistry
from .routes import auth, candidates, health, providers, references
from .state import AppState

logger = get_logger("refvalidator.main")


# =============================================================================
# FastAPI Application
# =============================================================================

def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ProviderRegistry] = None,
) -> FastAPI:
    """
    Build the application around a settings object and provider registry.

    Args:
        settings: Settings to use (cached settings when omitted)
        registry: Pre-built provider registry; when omitted one is built
            with the mock providers during start-up

    Returns:
        The FastAPI application, not yet started
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting reference validator v%s", __version__)
        try:
            app_state = AppState.create(settings=settings, registry=registry)
            app.state.app_state = app_state
            logger.info(
                "Provider Status | %s",
                " | ".join(
                    f"{category}={info['provider']}({'OK' if info['available'] else 'UNAVAILABLE'})"
                    for category, info in app_state.provider_status().items()
                ),
            )
        except Exception as exc:
            logger.critical("Provider registry could not be built: %s", exc, exc_info=True)
            raise

        yield

        logger.info("Reference validator stopped")

    application = FastAPI(
        title="Reference Validator API",
        description=(
            "Employment reference checking with hot-swappable providers "
            "for auth, persistence, email and text analysis."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    configure_rate_limiting(application)
    configure_cors(application, settings)
    configure_exception_handlers(application)
    configure_routes(application)

    return application


# =============================================================================
# Rate Limiting
# =============================================================================

def configure_rate_limiting(application: FastAPI) -> None:
    application.state.limiter = limiter

    @application.exception_handler(RateLimitExceeded)
    async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        logger.warning(
            "Rate limit exceeded | path=%s | client=%s | limit=%s",
            request.url.path,
            get_client_ip(request),
            exc.detail,
        )
        body = ErrorResponse(
            error=f"Rate limit exceeded: {exc.detail}",
            message="Too many requests, please retry later",
            error_type="RateLimitExceeded",
        )
        response = JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=body.model_dump(),
        )
        view_limit = getattr(request.state, "view_rate_limit", None)
        if view_limit is not None:
            response = request.app.state.limiter._inject_headers(response, view_limit)
        return response


# =============================================================================
# CORS Configuration
# =============================================================================

def configure_cors(application: FastAPI, settings: Settings) -> None:
    """Browser access for the candidate and referee frontends."""
    origins = settings.CORS_ORIGINS_LIST or ["*"]
    wildcard = "*" in origins
    if wildcard:
        logger.warning("CORS open to any origin; cookies and auth headers are not shared")

    application.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=not wildcard,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type"],
    )


# =============================================================================
# Exception Handlers
# =============================================================================

def configure_exception_handlers(application: FastAPI) -> None:
    """Turn every failure into the {success: false, error, message} envelope."""

    @application.exception_handler(RefCheckException)
    async def refcheck_exception_handler(
        request: Request,
        exc: RefCheckException,
    ) -> JSONResponse:
        logger.warning(
            "RefCheckException | path=%s | type=%s | message=%s",
            request.url.path,
            exc.__class__.__name__,
            exc.message,
        )
        body = ErrorResponse(
            error=exc.message,
            message=exc.details or "Request could not be completed",
            error_type=exc.__class__.__name__,
        )
        return JSONResponse(status_code=exc.status_code, content=body.model_dump())

    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        body = ErrorResponse(
            error=str(exc.detail),
            message="Request could not be completed",
            error_type="HTTPException",
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @application.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        errors = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        body = ErrorResponse(
            error=errors or "Invalid request",
            message="Request validation failed",
            error_type="RequestValidationError",
        )
        return JSONResponse(
            status_code=422,
            content=body.model_dump(),
        )

    @application.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception | path=%s | type=%s | error=%s",
            request.url.path,
            type(exc).__name__,
            exc,
            exc_info=True,
        )
        body = ErrorResponse(
            error="Internal server error",
            message="Request could not be completed",
            error_type="InternalError",
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(),
        )


# =============================================================================
# Route Configuration
# =============================================================================

def configure_routes(application: FastAPI) -> None:
    application.include_router(health.router)
    application.include_router(providers.router)
    application.include_router(auth.router)
    application.include_router(candidates.router)
    application.include_router(references.router)


# =============================================================================
# Application Instance
# =============================================================================

app = create_app()
