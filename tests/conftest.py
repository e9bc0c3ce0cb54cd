"""
Pytest configuration and fixtures for meetdown tests.

Provides database, store, settings and selector fixtures.
"""

from typing import Generator

import pytest

from meetdown.config import Settings
from meetdown.database import Database
from meetdown.selection.days import DaySelector
from meetdown.selection.primitives import CalendarDate
from meetdown.selection.slots import TimeSlotSelector
from meetdown.services.proposals import ProposalDraft, ProposalStore


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        public_base_url="https://meetdown.test",
    )


@pytest.fixture(scope="function")
def database() -> Generator[Database, None, None]:
    """
    Create a clean in-memory database for each test.

    Yields:
        Database: storage handle with all tables created
    """
    db = Database("sqlite:///:memory:")
    db.create_all()
    try:
        yield db
    finally:
        db.drop_all()
        db.dispose()


@pytest.fixture
def store(database: Database) -> ProposalStore:
    return ProposalStore(database, short_id_length=12)


@pytest.fixture
def sample_draft() -> ProposalDraft:
    return ProposalDraft(
        name="Team dinner",
        day_ranges=["[2025-01-05,2025-01-05]", "[2025-01-10,2025-01-12]"],
        start_time="18:00",
        end_time="21:30",
    )


class Recorder:
    """Collects every selection emitted by a widget callback."""

    def __init__(self):
        self.calls: list[list] = []

    def __call__(self, selection: list) -> None:
        self.calls.append(selection)

    @property
    def last(self) -> list:
        return self.calls[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def january_selector(recorder: Recorder) -> DaySelector:
    """DaySelector showing January 2025 with a recording callback."""
    return DaySelector(recorder, start=CalendarDate(2025, 1, 1))


@pytest.fixture
def slot_selector(recorder: Recorder) -> TimeSlotSelector:
    """TimeSlotSelector with 30-minute slots and a recording callback."""
    return TimeSlotSelector(recorder, slot_duration=30)
