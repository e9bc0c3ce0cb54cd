"""
Custom exceptions for meetdown.

Provides structured error handling with retryable flags.
"""


class MeetdownError(Exception):
    """Base exception for all meetdown errors."""

    retryable: bool = False

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


# =============================================================================
# Selection Errors
# =============================================================================


class SelectionError(MeetdownError):
    """Base exception for date/time selection widgets."""

    retryable = False


class InvalidCellError(SelectionError):
    """
    A pointer event referenced a cell the widget does not render.

    Causes:
    - Grid index outside the 42-cell month matrix
    - Placeholder cell before day 1 or after the last day
    - Day not shown in any visible month panel
    - Time that is not the start of a generated slot

    The gesture is rejected and widget state is left untouched.
    """

    retryable = False


# =============================================================================
# Proposal Errors
# =============================================================================


class ProposalError(MeetdownError):
    """
    Base exception for proposal persistence.

    Causes:
    - Database unavailable
    - Short id space exhausted after repeated collisions
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        retryable: bool = False,
    ):
        super().__init__(message, original_error)
        self.retryable = retryable


class ProposalNotFoundError(ProposalError):
    """
    No proposal exists for the requested short id.

    Causes:
    - Mistyped or truncated share link
    - Proposal was never created
    """

    def __init__(self, short_id: str):
        super().__init__(f"Proposal not found: {short_id}")
        self.short_id = short_id


class ProposalValidationError(ProposalError):
    """
    Proposal data is incomplete or malformed.

    Causes:
    - Blank event name
    - No days or no time slots selected
    - Malformed date range or time string
    """
