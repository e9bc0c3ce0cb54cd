"""
FastAPI dependency injection providers.

Provides settings, the application's Database handle, and a ProposalStore
bound to it.
"""

import logging

from fastapi import Depends, HTTPException, Request

from meetdown.config import Settings, get_settings
from meetdown.database import Database
from meetdown.services.proposals import ProposalStore

logger = logging.getLogger(__name__)


def get_app_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


def get_database(request: Request) -> Database:
    """
    Dependency injection for the storage handle.

    Raises:
        HTTPException: If the database was not initialized at startup
    """
    database = getattr(request.app.state, "database", None)
    if database is None:
        logger.error("Database not initialized")
        raise HTTPException(
            status_code=503,
            detail="Service temporarily unavailable - database not initialized",
        )
    return database


def get_proposal_store(
    database: Database = Depends(get_database),
    settings: Settings = Depends(get_app_settings),
) -> ProposalStore:
    """ProposalStore bound to the request's Database."""
    return ProposalStore(database, short_id_length=settings.short_id_length)
