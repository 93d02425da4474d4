"""Household member record and the unit helpers shared by API and UI."""

from dataclasses import dataclass, field, fields
from datetime import UTC, date, datetime

from dateutil.relativedelta import relativedelta  # type: ignore[import-untyped]

from household_profiler.domain.value_objects import (
    ActivityLevel,
    IncomeFrequency,
    Role,
    Sex,
)

INCHES_PER_FOOT = 12

NAME_MAX_LENGTH = 100
HEIGHT_FEET_RANGE = (1, 10)
HEIGHT_INCHES_RANGE = (0, 11)
HEIGHT_TOTAL_RANGE = (12, 120)
WEIGHT_RANGE = (1, 2000)

SEQUENCE_FIELDS = ("allergens", "exclusions", "likes", "dislikes", "medications")


def _utc_now() -> datetime:
    return datetime.now(UTC)


@dataclass
class IncomeSource:
    source: str
    amount: float | None = None
    frequency: IncomeFrequency | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"source": self.source}
        if self.amount is not None:
            data["amount"] = self.amount
        if self.frequency is not None:
            data["frequency"] = self.frequency.value
        return data


@dataclass
class MemberPayload:
    """Validated, normalised mutable fields of a member.

    Produced by the validation layer and consumed by repositories. Sequence
    fields are always lists here, never None.
    """

    name: str
    role: Role
    sex: Sex
    activity_level: ActivityLevel
    photo: str | None = None
    date_of_birth: date | None = None
    height: float | None = None
    weight: float | None = None
    allergens: list[str] = field(default_factory=list)
    exclusions: list[str] = field(default_factory=list)
    likes: list[str] = field(default_factory=list)
    dislikes: list[str] = field(default_factory=list)
    medications: list[str] = field(default_factory=list)
    income_sources: list[IncomeSource] = field(default_factory=list)
    medical_notes: str | None = None


MUTABLE_FIELDS = tuple(f.name for f in fields(MemberPayload))


@dataclass
class HouseholdMember(MemberPayload):
    """A stored member row."""

    id: int = 0
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)

    @classmethod
    def from_payload(
        cls,
        payload: MemberPayload,
        *,
        member_id: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "HouseholdMember":
        values = {name: getattr(payload, name) for name in MUTABLE_FIELDS}
        return cls(
            **values, id=member_id, created_at=created_at, updated_at=updated_at
        )

    def to_payload(self) -> MemberPayload:
        return MemberPayload(**{name: getattr(self, name) for name in MUTABLE_FIELDS})

    @property
    def age(self) -> int | None:
        if self.date_of_birth is None:
            return None
        return age_on(self.date_of_birth)


def feet_inches_to_inches(feet: float | None, inches: float | None) -> float | None:
    """Combine a feet/inches entry into total inches.

    Missing parts count as zero. A total of zero means "not specified".
    """
    total = (feet or 0) * INCHES_PER_FOOT + (inches or 0)
    if total == 0:
        return None
    return total


def inches_to_feet_inches(total: float | None) -> tuple[int, int] | None:
    """Split total inches into whole feet and remaining inches."""
    if not total:
        return None
    feet, inches = divmod(int(round(total)), INCHES_PER_FOOT)
    return feet, inches


def format_height(total: float | None) -> str:
    parts = inches_to_feet_inches(total)
    if parts is None:
        return "Not specified"
    feet, inches = parts
    return f"{feet}'{inches}\""


def age_on(date_of_birth: date, today: date | None = None) -> int:
    """Completed years between ``date_of_birth`` and ``today``."""
    today = today or date.today()
    return relativedelta(today, date_of_birth).years
