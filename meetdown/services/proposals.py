"""
Proposal storage service.

Persists proposals behind random short ids and resolves ids back to
records. Each call acquires its own session from an injected Database.
"""

import logging
import re
import secrets
from datetime import datetime
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from meetdown.database import Database
from meetdown.exceptions import (
    ProposalError,
    ProposalNotFoundError,
    ProposalValidationError,
)
from meetdown.models.proposals import Proposal
from meetdown.services.ranges import expand_date_range, parse_date_range

logger = logging.getLogger(__name__)

DEFAULT_SHORT_ID_LENGTH = 21
MAX_ID_ATTEMPTS = 3

# Upper bound on candidate days per proposal, summed over all ranges
MAX_PROPOSAL_DAYS = 366

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$|^24:00$")


def generate_short_id(length: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """Random URL-safe token of exactly `length` characters."""
    return secrets.token_urlsafe(length)[:length]


# =============================================================================
# Schemas
# =============================================================================


class ProposalDraft(BaseModel):
    """Validated proposal contents ready to persist."""

    name: str = Field(..., min_length=1, max_length=200)
    day_ranges: list[str] = Field(..., min_length=1)
    start_time: str
    end_time: str

    @field_validator("name")
    @classmethod
    def validate_name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("day_ranges")
    @classmethod
    def validate_day_ranges(cls, v: list[str]) -> list[str]:
        ranges = []
        total_days = 0
        for text in v:
            first, last = parse_date_range(text)
            total_days += (last.to_date() - first.to_date()).days + 1
            if total_days > MAX_PROPOSAL_DAYS:
                raise ValueError(f"A proposal can cover at most {MAX_PROPOSAL_DAYS} days")
            ranges.append(text.strip())
        return ranges

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time(cls, v: str) -> str:
        if not TIME_PATTERN.match(v):
            raise ValueError(f"Expected HH:MM, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_window(self) -> "ProposalDraft":
        # HH:MM strings order lexically
        if self.start_time == "24:00":
            raise ValueError("start_time cannot be 24:00")
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class ProposalRecord(BaseModel):
    """Proposal as returned by lookup."""

    model_config = ConfigDict(from_attributes=True)

    short_id: str
    name: str
    day_ranges: list[str]
    start_time: str
    end_time: str
    created_at: Optional[datetime] = None

    @property
    def days(self) -> list[str]:
        """Every candidate day as an ISO date, ascending and de-duplicated."""
        days = {day for r in self.day_ranges for day in expand_date_range(r)}
        return [day.isoformat() for day in sorted(days)]


# =============================================================================
# Store
# =============================================================================


class ProposalStore:
    """
    Create and look up proposals.

    Args:
        database: Injected storage handle
        short_id_length: Length of generated share ids
    """

    def __init__(self, database: Database, short_id_length: int = DEFAULT_SHORT_ID_LENGTH):
        self.database = database
        self.short_id_length = short_id_length

    def create(self, draft: ProposalDraft) -> str:
        """
        Persist a proposal under a fresh short id.

        Returns:
            The short id

        Raises:
            ProposalError: If the database fails or no unique id could be
                allocated
        """
        last_error: Optional[Exception] = None
        for attempt in range(1, MAX_ID_ATTEMPTS + 1):
            short_id = generate_short_id(self.short_id_length)
            try:
                with self.database.session() as session:
                    session.add(
                        Proposal(
                            short_id=short_id,
                            name=draft.name,
                            day_ranges=list(draft.day_ranges),
                            start_time=draft.start_time,
                            end_time=draft.end_time,
                        )
                    )
            except IntegrityError as e:
                logger.warning(f"Short id collision on attempt {attempt}: {short_id}")
                last_error = e
                continue
            except SQLAlchemyError as e:
                logger.error(f"Failed to persist proposal: {e}", exc_info=True)
                raise ProposalError("Failed to persist proposal", e, retryable=True)

            logger.info(f"Created proposal {short_id} ({len(draft.day_ranges)} day ranges)")
            return short_id

        raise ProposalError(
            f"Could not allocate a unique short id after {MAX_ID_ATTEMPTS} attempts",
            last_error,
            retryable=True,
        )

    def get(self, short_id: str) -> ProposalRecord:
        """
        Look up a proposal by short id.

        Raises:
            ProposalNotFoundError: If no proposal has this id
            ProposalError: If the database fails
        """
        try:
            with self.database.session() as session:
                proposal = session.scalars(
                    select(Proposal).where(Proposal.short_id == short_id)
                ).first()
                if proposal is None:
                    logger.warning(f"Proposal not found: {short_id}")
                    raise ProposalNotFoundError(short_id)
                return ProposalRecord.model_validate(proposal)
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up proposal {short_id}: {e}", exc_info=True)
            raise ProposalError("Failed to look up proposal", e, retryable=True)


# =============================================================================
# Collaborator Functions
# =============================================================================


def persist_proposal(
    store: ProposalStore,
    name: str,
    day_ranges: list[str],
    start_time: str,
    end_time: str,
) -> str:
    """
    Validate and persist a proposal.

    Returns:
        The new proposal's short id

    Raises:
        ProposalValidationError: If the fields are malformed
        ProposalError: If persistence fails
    """
    try:
        draft = ProposalDraft(
            name=name,
            day_ranges=day_ranges,
            start_time=start_time,
            end_time=end_time,
        )
    except ValidationError as e:
        raise ProposalValidationError(f"Invalid proposal: {e}", e)
    return store.create(draft)


def lookup_proposal(store: ProposalStore, short_id: str) -> ProposalRecord:
    """
    Resolve a short id to its proposal.

    Raises:
        ProposalNotFoundError: If the id is unknown
    """
    return store.get(short_id)
