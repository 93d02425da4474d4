from abc import ABC, abstractmethod

from household_profiler.domain.members import HouseholdMember, MemberPayload


class MemberRepository(ABC):
    """Persistence gateway for household member rows.

    Implementations stamp ``id``, ``created_at`` and ``updated_at``; callers
    only ever supply validated ``MemberPayload`` values.
    """

    @abstractmethod
    def list_members(self) -> list[HouseholdMember]:
        """All members ordered by ``created_at`` ascending."""

    @abstractmethod
    def get_member(self, member_id: int) -> HouseholdMember | None:
        pass

    @abstractmethod
    def create_member(self, payload: MemberPayload) -> HouseholdMember:
        pass

    @abstractmethod
    def update_member(self, member_id: int, payload: MemberPayload) -> HouseholdMember:
        """Replace every mutable field of ``member_id``.

        Raises:
            MemberNotFoundError: if no row matches; nothing is written.
        """

    @abstractmethod
    def delete_member(self, member_id: int) -> HouseholdMember:
        """Hard-delete ``member_id`` and return the removed row.

        Raises:
            MemberNotFoundError: if no row matches.
        """

    @abstractmethod
    def count_members(self) -> int:
        pass
