"""
FastAPI application for meetdown.

This is the main entry point for the HTTP API, providing:
- Proposal creation behind a short share id
- Proposal lookup by share id
- Health and status endpoints
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from meetdown import __version__
from meetdown.api.dependencies import (
    get_app_settings,
    get_database,
    get_proposal_store,
)
from meetdown.api.middleware import RequestLoggingMiddleware
from meetdown.api.models import (
    CreateProposalRequest,
    CreateProposalResponse,
    ErrorResponse,
    HealthResponse,
    ProposalResponse,
)
from meetdown.config import Settings, get_settings
from meetdown.database import Database, database_from_settings
from meetdown.exceptions import (
    ProposalError,
    ProposalNotFoundError,
    ProposalValidationError,
)
from meetdown.services.proposals import ProposalStore, lookup_proposal

logger = logging.getLogger(__name__)


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    logging.getLogger("meetdown").setLevel(settings.log_level)

    logger.info("Starting meetdown API")
    owns_database = app.state.database is None
    if owns_database:
        app.state.database = database_from_settings(settings)
        if settings.is_development:
            app.state.database.create_all()
    logger.info("meetdown API started")

    yield

    logger.info("Shutting down meetdown API")
    if owns_database:
        app.state.database.dispose()
        app.state.database = None


# =============================================================================
# Exception Handlers
# =============================================================================


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_type": "http_error",
            "message": exc.detail,
            "retryable": exc.status_code >= 500,
        },
    )


async def proposal_exception_handler(request: Request, exc: ProposalError):
    """Map proposal errors to status codes."""
    if isinstance(exc, ProposalNotFoundError):
        status_code, error_type = 404, "not_found"
    elif isinstance(exc, ProposalValidationError):
        status_code, error_type = 422, "validation_error"
    else:
        status_code, error_type = (503 if exc.retryable else 500), "storage_error"

    return JSONResponse(
        status_code=status_code,
        content={
            "error_type": error_type,
            "message": exc.message,
            "retryable": exc.retryable,
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error_type": "internal_error",
            "message": "An unexpected error occurred",
            "retryable": True,
        },
    )


# =============================================================================
# Endpoints
# =============================================================================


def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    """
    Check API health status.

    Returns:
        Health status including database connectivity
    """
    connected = database.check_connection()
    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database_connected=connected,
    )


def create_proposal(
    request: CreateProposalRequest,
    store: ProposalStore = Depends(get_proposal_store),
    settings: Settings = Depends(get_app_settings),
) -> CreateProposalResponse:
    """
    Persist a proposal and return its share link.

    Runs in the threadpool since storage calls are synchronous.
    """
    logger.info(f"Creating proposal '{request.name[:50]}' with {len(request.day_ranges)} ranges")
    short_id = store.create(request)
    return CreateProposalResponse(short_id=short_id, url=settings.share_url(short_id))


def get_proposal(
    short_id: str,
    store: ProposalStore = Depends(get_proposal_store),
) -> ProposalResponse:
    """Resolve a share id to its proposal."""
    return ProposalResponse.from_record(lookup_proposal(store, short_id))


# =============================================================================
# FastAPI Application
# =============================================================================


def create_app(
    database: Optional[Database] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the API application.

    Args:
        database: Storage handle to serve from. When omitted, one is built
            from settings at startup and disposed at shutdown.
        settings: Application settings (default: environment)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="meetdown API",
        description="""
# meetdown API

Propose candidate dates and times for an event and share them by link.

- **POST /proposals** - Persist a proposal, receive a short share link
- **GET /proposals/{short_id}** - Resolve a share link back to its proposal

## Error Handling

- **201** - Proposal created
- **404** - Unknown share id
- **422** - Validation error
- **500** - Server error
- **503** - Storage unavailable (retryable)
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.database = database

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(ProposalError, proposal_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.add_api_route(
        "/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        summary="Health check",
        tags=["System"],
    )
    app.add_api_route(
        "/proposals",
        create_proposal,
        methods=["POST"],
        status_code=201,
        response_model=CreateProposalResponse,
        responses={
            422: {"model": ErrorResponse, "description": "Validation error"},
            503: {"model": ErrorResponse, "description": "Storage unavailable"},
        },
        summary="Create proposal",
        tags=["Proposals"],
    )
    app.add_api_route(
        "/proposals/{short_id}",
        get_proposal,
        methods=["GET"],
        response_model=ProposalResponse,
        responses={404: {"model": ErrorResponse, "description": "Unknown share id"}},
        summary="Look up proposal",
        tags=["Proposals"],
    )

    return app


app = create_app()


# =============================================================================
# Run with Uvicorn
# =============================================================================


def run_server(host: str = "0.0.0.0", port: int = 8000, reload: bool = False):
    """Run the API server with Uvicorn."""
    import uvicorn

    uvicorn.run(
        "meetdown.api.main:app",
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    settings = get_settings()
    run_server(host=settings.api_host, port=settings.api_port, reload=settings.api_reload)
