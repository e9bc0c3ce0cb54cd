"""
Service layer for meetdown.

Provides:
- Date range conversion between selections and stored proposals
- Proposal persistence behind short share ids
"""

from meetdown.services.ranges import (
    collapse_to_ranges,
    format_date_range,
    parse_date_range,
    expand_date_range,
    format_selection,
    slot_bounds,
)

from meetdown.services.proposals import (
    ProposalDraft,
    ProposalRecord,
    ProposalStore,
    generate_short_id,
    persist_proposal,
    lookup_proposal,
)

__all__ = [
    # Ranges
    "collapse_to_ranges",
    "format_date_range",
    "parse_date_range",
    "expand_date_range",
    "format_selection",
    "slot_bounds",
    # Proposals
    "ProposalDraft",
    "ProposalRecord",
    "ProposalStore",
    "generate_short_id",
    "persist_proposal",
    "lookup_proposal",
]
