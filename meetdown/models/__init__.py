"""
SQLAlchemy models for meetdown.

This module exports all database models for easy importing and
ensures Alembic can discover them for migrations.
"""

from meetdown.models.base import Base, BaseModel, GUID, get_json_type
from meetdown.models.proposals import Proposal

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    "GUID",
    "get_json_type",
    # Proposal model
    "Proposal",
]
