"""
Proposal model.

A proposal is an event name plus candidate day ranges and a time-of-day
window, addressed publicly by a short URL-safe id.
"""

from sqlalchemy import String, Index
from sqlalchemy.orm import Mapped, mapped_column

from meetdown.models.base import BaseModel, get_json_type


class Proposal(BaseModel):
    """
    Persisted event proposal.

    Attributes:
        short_id: Random URL-safe token used in share links
        name: Event name
        day_ranges: Postgres daterange text literals, e.g. "[2025-01-10,2025-01-12]"
        start_time: Earliest selected slot start (HH:MM)
        end_time: Latest selected slot end (HH:MM)
    """

    __tablename__ = "proposals"

    short_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        doc="Public share id"
    )

    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        doc="Event name"
    )

    day_ranges: Mapped[list] = mapped_column(
        get_json_type(),
        nullable=False,
        default=list,
        doc="Inclusive date ranges as '[YYYY-MM-DD,YYYY-MM-DD]' strings"
    )

    start_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        doc="Window start (HH:MM)"
    )

    end_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        doc="Window end (HH:MM)"
    )

    __table_args__ = (
        Index("idx_proposal_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Proposal(short_id='{self.short_id}', name='{self.name}')>"
