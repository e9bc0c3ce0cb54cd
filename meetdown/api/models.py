"""
Pydantic request and response models for the meetdown API.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from meetdown.services.proposals import ProposalDraft, ProposalRecord


# =============================================================================
# Request Models
# =============================================================================


class CreateProposalRequest(ProposalDraft):
    """Request to persist a new proposal."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "name": "Team dinner",
                    "day_ranges": ["[2025-01-05,2025-01-05]", "[2025-01-10,2025-01-12]"],
                    "start_time": "18:00",
                    "end_time": "21:30",
                }
            ]
        }
    )


# =============================================================================
# Response Models
# =============================================================================


class CreateProposalResponse(BaseModel):
    """Share details for a newly created proposal."""

    short_id: str = Field(..., description="Public share id")
    url: str = Field(..., description="Shareable link")


class ProposalResponse(BaseModel):
    """Proposal resolved from a share id."""

    short_id: str = Field(..., description="Public share id")
    name: str = Field(..., description="Event name")
    day_ranges: list[str] = Field(..., description="Inclusive date ranges")
    days: list[str] = Field(..., description="Every candidate day (ISO 8601), ascending")
    start_time: str = Field(..., description="Window start (HH:MM)")
    end_time: str = Field(..., description="Window end (HH:MM)")
    created_at: Optional[str] = Field(None, description="Creation timestamp")

    @classmethod
    def from_record(cls, record: ProposalRecord) -> "ProposalResponse":
        return cls(
            short_id=record.short_id,
            name=record.name,
            day_ranges=record.day_ranges,
            days=record.days,
            start_time=record.start_time,
            end_time=record.end_time,
            created_at=record.created_at.isoformat() if record.created_at else None,
        )


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    database_connected: bool


class ErrorResponse(BaseModel):
    """Error response body."""

    error_type: str
    message: str
    retryable: bool = False
