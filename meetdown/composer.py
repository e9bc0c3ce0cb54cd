"""
Proposal composer.

Wires a DaySelector and a TimeSlotSelector to a name field and turns their
committed selections into a persisted proposal with a share link.
"""

import logging
from typing import Optional

from pydantic import ValidationError

from meetdown.config import Settings, get_settings
from meetdown.exceptions import ProposalValidationError
from meetdown.selection.days import DaySelector
from meetdown.selection.primitives import CalendarDate
from meetdown.selection.slots import TimeSlot, TimeSlotSelector
from meetdown.services.proposals import ProposalDraft, ProposalStore
from meetdown.services.ranges import format_selection, slot_bounds

logger = logging.getLogger(__name__)


class ProposalComposer:
    """
    Compose an event proposal from the selection widgets.

    The composer subscribes to both widgets and keeps the latest committed
    selections; it never reads in-progress gesture state.

    Example:
        >>> composer = ProposalComposer(start=CalendarDate(2025, 1, 1))
        >>> composer.set_name("Team dinner")
        >>> composer.days.pointer_down(CalendarDate(2025, 1, 5))
        >>> composer.days.pointer_up(CalendarDate(2025, 1, 5))
        >>> composer.times.pointer_down(36)
        >>> composer.times.pointer_up(36)
        >>> url = composer.submit(store)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        start: Optional[CalendarDate] = None,
    ):
        self.settings = settings or get_settings()
        self.name = ""
        self.selected_days: list[CalendarDate] = []
        self.selected_slots: list[TimeSlot] = []

        self.days = DaySelector(
            self._on_days_changed,
            start=start,
            visible_months=self.settings.visible_months,
        )
        self.times = TimeSlotSelector(
            self._on_slots_changed,
            slot_duration=self.settings.slot_duration_minutes,
        )

    def _on_days_changed(self, days: list[CalendarDate]) -> None:
        self.selected_days = days

    def _on_slots_changed(self, slots: list[TimeSlot]) -> None:
        self.selected_slots = slots

    def set_name(self, name: str) -> None:
        self.name = name

    def build_draft(self) -> ProposalDraft:
        """
        Validate the current inputs.

        A proposal stores one time window per event. A slot selection with
        gaps is widened to span its earliest start through its latest end.

        Raises:
            ProposalValidationError: If the name is blank or no day or no
                time slot is selected
        """
        if not self.name.strip():
            raise ProposalValidationError("Event name is required")
        if not self.selected_days:
            raise ProposalValidationError("Select at least one day")
        if not self.selected_slots:
            raise ProposalValidationError("Select at least one time slot")

        start_time, end_time = slot_bounds(self.selected_slots)
        try:
            return ProposalDraft(
                name=self.name,
                day_ranges=format_selection(self.selected_days),
                start_time=start_time,
                end_time=end_time,
            )
        except ValidationError as e:
            raise ProposalValidationError(f"Invalid proposal: {e}", e)

    def submit(self, store: ProposalStore) -> str:
        """
        Persist the proposal.

        Returns:
            Shareable URL for the new proposal
        """
        draft = self.build_draft()
        short_id = store.create(draft)
        url = self.settings.share_url(short_id)
        logger.info(f"Proposal '{draft.name}' submitted: {url}")
        return url
