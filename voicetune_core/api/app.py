"""
FastAPI Application Module

Application factory for the settings service: routes, exception handlers,
database lifecycle and the health check.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, get_settings
from ..core.logging import setup_logging
from ..database import close_database, get_database, init_database
from ..provider import VoiceAgentProvider
from ..settings import AgentSettings, required_message
from ..sync import SettingsStore, SqlSettingsStore
from .base import APIException, ErrorCode, ServiceError, error_response
from .routes import agent_router, settings_router


logger = logging.getLogger(__name__)


# =============================================================================
# Health Check Models
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str
    timestamp: datetime
    checks: Dict[str, Any] = {}


# =============================================================================
# Exception Handlers
# =============================================================================


async def api_exception_handler(request: Request, exc: APIException):
    """Handle API exceptions."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def _describe_error(error: Dict[str, Any]) -> Dict[str, Any]:
    # The rejected input is left out; it may not be JSON serializable (NaN).
    return {
        "loc": [str(part) for part in error.get("loc", ())],
        "msg": error.get("msg"),
        "type": error.get("type"),
    }


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies as a 400."""
    errors = exc.errors()
    field = None
    message = "Invalid request body"

    if errors:
        location = errors[0].get("loc", ())
        if location and location[-1] in AgentSettings.field_names():
            field = str(location[-1])
            if errors[0].get("type") == "missing":
                message = required_message(field)
            else:
                message = f"Invalid value for {field}"

    return JSONResponse(
        status_code=400,
        content=error_response(
            message,
            code=ErrorCode.INVALID_REQUEST_BODY,
            field=field,
            details={"errors": [_describe_error(error) for error in errors]},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    error_codes = {
        400: ErrorCode.VALIDATION_ERROR,
        401: ErrorCode.AUTHENTICATION_REQUIRED,
        500: ErrorCode.INTERNAL_ERROR,
    }

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            str(exc.detail),
            code=error_codes.get(exc.status_code),
        ),
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=500,
        content=ServiceError().to_dict(),
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app(
    settings: Optional[Settings] = None,
    provider: Optional[VoiceAgentProvider] = None,
    store: Optional[SettingsStore] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (read from the environment if omitted)
        provider: Voice agent provider (built from settings on first use if omitted)
        store: Settings store (SQL store on the configured database if omitted)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level, settings.log_format, service_name=settings.service_name)
        logger.info("Starting Voicetune API...")

        if app.state.store is None:
            db = init_database(settings.database_url, echo=settings.debug)

            # Create tables if they don't exist (for development)
            if settings.debug or "sqlite" in settings.database_url:
                logger.info("Creating database tables...")
                await db.create_all()

            if await db.health_check():
                logger.info("Database connection established successfully")
            else:
                logger.error("Database connection failed!")

            app.state.store = SqlSettingsStore(db)

        yield

        logger.info("Shutting down Voicetune API...")
        if app.state.provider is not None:
            await app.state.provider.close()
        await close_database()

    app = FastAPI(
        title="Voicetune API",
        description="Voice agent settings service",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.provider = provider
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIException, api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        try:
            db_healthy = await get_database().health_check()
        except RuntimeError:
            db_healthy = None

        if db_healthy is None:
            database_check = "not_configured"
        else:
            database_check = "ok" if db_healthy else "error"

        provider_ready = app.state.provider is not None or not settings.missing_provider_settings()

        return HealthResponse(
            status="degraded" if db_healthy is False else "healthy",
            version=__version__,
            timestamp=datetime.utcnow(),
            checks={
                "api": "ok",
                "database": database_check,
                "provider": "ok" if provider_ready else "not_configured",
            },
        )

    app.include_router(agent_router, prefix="/api")
    app.include_router(settings_router, prefix="/api")

    return app


# =============================================================================
# Entry Point
# =============================================================================


def run_server(
    host: Optional[str] = None,
    port: Optional[int] = None,
    reload: bool = False,
):
    """Run the API server on the configured host and port unless overridden."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "voicetune_core.api.app:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server(reload=True)
