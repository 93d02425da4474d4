"""In-memory member repository.

Behaves like the SQLite repository without a data file; swap it in through
``app.dependency_overrides[get_member_repository]``.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from datetime import UTC, datetime

from household_profiler.domain.members import HouseholdMember, MemberPayload
from household_profiler.exceptions import MemberNotFoundError
from household_profiler.repositories.interfaces import MemberRepository


def _utc_now() -> datetime:
    return datetime.now(UTC)


class InMemoryMemberRepository(MemberRepository):
    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._members: dict[int, HouseholdMember] = {}
        self._next_id = 1

    def list_members(self) -> list[HouseholdMember]:
        members = sorted(self._members.values(), key=lambda m: (m.created_at, m.id))
        return [copy.deepcopy(m) for m in members]

    def get_member(self, member_id: int) -> HouseholdMember | None:
        member = self._members.get(member_id)
        return copy.deepcopy(member) if member is not None else None

    def create_member(self, payload: MemberPayload) -> HouseholdMember:
        now = self._clock()
        member = HouseholdMember.from_payload(
            copy.deepcopy(payload),
            member_id=self._next_id,
            created_at=now,
            updated_at=now,
        )
        self._members[member.id] = member
        self._next_id += 1
        return copy.deepcopy(member)

    def update_member(self, member_id: int, payload: MemberPayload) -> HouseholdMember:
        existing = self._members.get(member_id)
        if existing is None:
            raise MemberNotFoundError(member_id)
        member = HouseholdMember.from_payload(
            copy.deepcopy(payload),
            member_id=member_id,
            created_at=existing.created_at,
            updated_at=self._clock(),
        )
        self._members[member_id] = member
        return copy.deepcopy(member)

    def delete_member(self, member_id: int) -> HouseholdMember:
        member = self._members.pop(member_id, None)
        if member is None:
            raise MemberNotFoundError(member_id)
        return member

    def count_members(self) -> int:
        return len(self._members)
