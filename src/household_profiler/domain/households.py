"""Synthetic household view over the member roster."""

from dataclasses import dataclass, field
from datetime import datetime

from household_profiler.domain.members import HouseholdMember

HOUSEHOLD_ID = 1
DEFAULT_HOUSEHOLD_NAME = "My Household"


@dataclass(frozen=True)
class HouseholdOverview:
    """Derived at read time; there is no households table.

    The identity is fixed (a single household per database) and
    ``created_at`` tracks the earliest member.
    """

    name: str
    timezone: str
    created_at: datetime
    members: list[HouseholdMember] = field(default_factory=list)
    id: int = HOUSEHOLD_ID
