"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import Settings, get_settings
from shared.exceptions import (
    AutostyleError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.logging import configure_logging
from modules.orders.routes import router as orders_router

from .dependencies import ServiceContainer
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health, users

logger = logging.getLogger(__name__)

# First match wins; anything else is a 500
ERROR_STATUS_CODES: list[tuple[type[AutostyleError], int]] = [
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
]


def status_code_for(exc: AutostyleError) -> int:
    """HTTP status code for a domain exception."""
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


async def handle_domain_error(request: Request, exc: AutostyleError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code == 500:
        logger.error(f"Unhandled domain error on {request.method} {request.url.path}: {exc.code}")

    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    body = ErrorResponse(**exc.to_dict())
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(body),
        headers=headers,
    )


async def handle_request_validation_error(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    body = ValidationErrorResponse(details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=400, content=jsonable_encoder(body))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unexpected error on {request.method} {request.url.path}")
    body = ErrorResponse(error="INTERNAL_ERROR", message="Internal server error")
    return JSONResponse(status_code=500, content=jsonable_encoder(body))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings: Settings = app.state.container.settings
    logger.info(f"Starting {settings.app_name} ({settings.environment}) on {settings.host}:{settings.port}")
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment-derived ones

    Returns:
        Configured FastAPI instance

    Raises:
        ConfigurationError: The token signing secret is missing in production
    """
    settings = settings or get_settings()
    configure_logging(settings)

    container = ServiceContainer(settings)
    # Fail now rather than on the first request
    codec = container.token_codec
    logger.debug(f"Access tokens live for {codec.ttl}")

    app = FastAPI(
        title=settings.app_name,
        description="User accounts and order management API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )
    app.state.container = container

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)"
        )
        return response

    # Error mapping
    app.add_exception_handler(AutostyleError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Register routes
    app.include_router(health.info_router, tags=["health"])
    app.include_router(health.router, tags=["health"])
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(orders_router, prefix="/api/orders", tags=["orders"])

    return app


# Application instance for uvicorn
app = create_app()
