from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from household_profiler.domain.members import MemberPayload
from household_profiler.domain.value_objects import ActivityLevel, Role, Sex
from household_profiler.repositories.memory import InMemoryMemberRepository
from household_profiler.repositories.sqlite import (
    SQLiteDatabase,
    SQLiteMemberRepository,
)


class FakeClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def member_data() -> dict[str, Any]:
    """A complete wire-format request body."""
    return {
        "name": "Ana",
        "role": "mom",
        "sex": "female",
        "activityLevel": "moderate",
        "dateOfBirth": "1985-04-12",
        "heightFeet": 5,
        "heightInches": 6,
        "weight": 140,
        "allergens": ["peanuts"],
        "likes": ["pasta", "salad"],
        "incomeSources": [
            {"source": "Salary", "amount": 5000, "frequency": "monthly"},
        ],
        "medicalNotes": "None",
    }


@pytest.fixture
def minimal_data() -> dict[str, Any]:
    return {
        "name": "Ana",
        "role": "mom",
        "sex": "female",
        "activityLevel": "moderate",
    }


@pytest.fixture
def make_payload() -> Callable[..., MemberPayload]:
    def _make(name: str = "Ana", **overrides: Any) -> MemberPayload:
        values: dict[str, Any] = {
            "name": name,
            "role": Role.MOM,
            "sex": Sex.FEMALE,
            "activity_level": ActivityLevel.MODERATE,
        }
        values.update(overrides)
        return MemberPayload(**values)

    return _make


@pytest.fixture
def sqlite_db() -> Iterator[SQLiteDatabase]:
    """In-memory database with thread-safety disabled for the test client."""
    db = SQLiteDatabase(":memory:", check_same_thread=False)
    db.initialize()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def sqlite_repo(sqlite_db: SQLiteDatabase, clock: FakeClock) -> SQLiteMemberRepository:
    return SQLiteMemberRepository(sqlite_db, clock=clock)


@pytest.fixture
def memory_repo(clock: FakeClock) -> InMemoryMemberRepository:
    return InMemoryMemberRepository(clock=clock)


@pytest.fixture(params=["sqlite", "memory"])
def member_repo(request, sqlite_repo, memory_repo):
    """Each repository implementation in turn."""
    if request.param == "sqlite":
        return sqlite_repo
    return memory_repo
