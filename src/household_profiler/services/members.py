"""Member service: validates raw input, then calls the repository."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from household_profiler.domain.members import HouseholdMember
from household_profiler.logging_config import LogContext, get_logger
from household_profiler.repositories.interfaces import MemberRepository
from household_profiler.services.validation import validate_member

logger = get_logger(__name__)


class MemberService:
    def __init__(self, member_repo: MemberRepository) -> None:
        self._member_repo = member_repo

    def list_members(self) -> list[HouseholdMember]:
        return self._member_repo.list_members()

    def get_member(self, member_id: int) -> HouseholdMember | None:
        return self._member_repo.get_member(member_id)

    def create_member(self, data: Mapping[str, Any]) -> HouseholdMember:
        payload = validate_member(data)
        member = self._member_repo.create_member(payload)
        logger.info(
            "member_created",
            member_id=member.id,
            role=member.role.value,
        )
        return member

    def update_member(self, member_id: int, data: Mapping[str, Any]) -> HouseholdMember:
        payload = validate_member(data)
        with LogContext(member_id=member_id):
            member = self._member_repo.update_member(member_id, payload)
            logger.info("member_updated", role=member.role.value)
        return member

    def delete_member(self, member_id: int) -> HouseholdMember:
        member = self._member_repo.delete_member(member_id)
        logger.info("member_deleted", member_id=member_id)
        return member
