"""Household overview derived from the member roster."""

from __future__ import annotations

import os
from collections.abc import Sequence
from datetime import datetime

from household_profiler.domain.households import (
    DEFAULT_HOUSEHOLD_NAME,
    HouseholdOverview,
)
from household_profiler.domain.members import HouseholdMember
from household_profiler.exceptions import NoHouseholdFoundError
from household_profiler.logging_config import get_logger
from household_profiler.repositories.interfaces import MemberRepository

logger = get_logger(__name__)


def resolve_timezone(configured: str | None = None) -> str:
    """Timezone name reported for the household.

    Order: explicit configuration, the ``TZ`` environment variable, then the
    serving host's local zone abbreviation.
    """
    if configured:
        return configured
    env_tz = os.environ.get("TZ", "").lstrip(":")
    if env_tz:
        return env_tz
    return datetime.now().astimezone().tzname() or "UTC"


def build_household_overview(
    members: Sequence[HouseholdMember],
    *,
    name: str = DEFAULT_HOUSEHOLD_NAME,
    timezone: str = "UTC",
) -> HouseholdOverview:
    """Compute the household view over ``members``.

    Raises:
        NoHouseholdFoundError: if ``members`` is empty.
    """
    if not members:
        raise NoHouseholdFoundError()
    created_at = min(member.created_at for member in members)
    return HouseholdOverview(
        name=name,
        timezone=timezone,
        created_at=created_at,
        members=list(members),
    )


class HouseholdService:
    def __init__(
        self,
        member_repo: MemberRepository,
        *,
        name: str = DEFAULT_HOUSEHOLD_NAME,
        timezone: str | None = None,
    ) -> None:
        self._member_repo = member_repo
        self._name = name
        self._timezone = timezone

    def get_household_overview(self) -> HouseholdOverview:
        members = self._member_repo.list_members()
        overview = build_household_overview(
            members,
            name=self._name,
            timezone=resolve_timezone(self._timezone),
        )
        logger.debug("household_overview_built", member_count=len(members))
        return overview
