"""Validation and normalisation of member input.

``validate_member`` is the only way raw input becomes a ``MemberPayload``.
It either returns a fully normalised payload or raises
``MemberValidationError`` with one message per offending field; nothing is
written before it succeeds.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from household_profiler.domain.members import (
    HEIGHT_FEET_RANGE,
    HEIGHT_INCHES_RANGE,
    HEIGHT_TOTAL_RANGE,
    NAME_MAX_LENGTH,
    WEIGHT_RANGE,
    IncomeSource,
    MemberPayload,
    feet_inches_to_inches,
)
from household_profiler.domain.value_objects import (
    ActivityLevel,
    IncomeFrequency,
    Role,
    Sex,
)
from household_profiler.exceptions import MemberValidationError

_REQUIRED_MESSAGES = {
    "name": "Name is required",
    "role": "Role is required",
    "sex": "Sex is required",
    "activityLevel": "Activity level is required",
}

_ENUM_FIELDS: dict[str, type] = {
    "role": Role,
    "sex": Sex,
    "activityLevel": ActivityLevel,
}


def _empty_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _coerce_list(value: Any) -> Any:
    # Accepts the stored-row shape too, where lists arrive as JSON text.
    if value is None:
        return []
    if isinstance(value, str):
        if not value.strip():
            return []
        try:
            decoded = json.loads(value)
        except ValueError as e:
            raise ValueError("must be a list") from e
        if not isinstance(decoded, list):
            raise ValueError("must be a list")
        return decoded
    return value


class IncomeSourceInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    source: str
    amount: float | None = Field(default=None, ge=0)
    frequency: IncomeFrequency | None = None

    @field_validator("amount", "frequency", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        return _empty_to_none(v)


class MemberInput(BaseModel):
    """Wire-level member fields (camelCase or snake_case keys)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    role: Role
    photo: str | None = None
    date_of_birth: date | None = None
    sex: Sex
    height_feet: int | None = Field(
        default=None, ge=HEIGHT_FEET_RANGE[0], le=HEIGHT_FEET_RANGE[1]
    )
    height_inches: int | None = Field(
        default=None, ge=HEIGHT_INCHES_RANGE[0], le=HEIGHT_INCHES_RANGE[1]
    )
    height: float | None = Field(
        default=None, ge=HEIGHT_TOTAL_RANGE[0], le=HEIGHT_TOTAL_RANGE[1]
    )
    weight: float | None = Field(default=None, ge=WEIGHT_RANGE[0], le=WEIGHT_RANGE[1])
    activity_level: ActivityLevel
    allergens: list[str] = Field(default_factory=list)
    exclusions: list[str] = Field(default_factory=list)
    likes: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    medications: list[str] = Field(default_factory=list)
    income_sources: list[IncomeSourceInput] = Field(default_factory=list)
    medical_notes: str | None = None

    @field_validator("photo", "date_of_birth", "weight", "medical_notes", mode="before")
    @classmethod
    def blank_is_absent(cls, v: Any) -> Any:
        return _empty_to_none(v)

    @field_validator("height", "height_feet", mode="before")
    @classmethod
    def zero_is_absent(cls, v: Any) -> Any:
        v = _empty_to_none(v)
        if v == 0:
            return None
        return v

    @field_validator("height_inches", mode="before")
    @classmethod
    def blank_inches_is_absent(cls, v: Any) -> Any:
        return _empty_to_none(v)

    @field_validator(
        "allergens",
        "exclusions",
        "likes",
        "dislikes",
        "medications",
        "income_sources",
        mode="before",
    )
    @classmethod
    def coerce_list(cls, v: Any) -> Any:
        return _coerce_list(v)

    @field_validator(
        "allergens", "exclusions", "likes", "dislikes", "medications", mode="after"
    )
    @classmethod
    def drop_blank_items(cls, v: list[str]) -> list[str]:
        return [item for item in v if item]

    @field_validator("date_of_birth", mode="after")
    @classmethod
    def not_in_future(cls, v: date | None) -> date | None:
        if v is not None and v > date.today():
            raise ValueError("Date of birth cannot be in the future")
        return v


def _field_key(loc: tuple[int | str, ...]) -> str:
    parts = []
    for part in loc:
        if isinstance(part, str):
            head, *rest = part.split("_")
            part = head + "".join(word.title() for word in rest)
        parts.append(str(part))
    return ".".join(parts) or "body"


def _message_for(key: str, error: dict[str, Any]) -> str:
    error_type = error["type"]
    if error_type == "missing" and key in _REQUIRED_MESSAGES:
        return _REQUIRED_MESSAGES[key]
    if key == "name":
        if error_type == "string_too_short":
            return _REQUIRED_MESSAGES["name"]
        if error_type == "string_too_long":
            return f"Name must be less than {NAME_MAX_LENGTH} characters"
    if error_type == "enum" and key in _ENUM_FIELDS:
        allowed = ", ".join(member.value for member in _ENUM_FIELDS[key])
        return f"Must be one of: {allowed}"
    message = str(error["msg"])
    return message.removeprefix("Value error, ")


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        key = _field_key(tuple(error["loc"]))
        # First message per field wins.
        errors.setdefault(key, _message_for(key, error))
    return errors


def _resolve_height(member: MemberInput) -> tuple[float | None, dict[str, str]]:
    if member.height_feet is None and member.height_inches is None:
        return member.height, {}
    total = feet_inches_to_inches(member.height_feet, member.height_inches)
    low, high = HEIGHT_TOTAL_RANGE
    if total is not None and not low <= total <= high:
        return None, {"height": f"Height must be between {low} and {high} inches"}
    return total, {}


def validate_member(data: Any) -> MemberPayload:
    """Validate raw member input and return the normalised payload.

    Raises:
        MemberValidationError: with a message per offending field.
    """
    if not isinstance(data, Mapping):
        raise MemberValidationError({"body": "Expected a JSON object"})

    try:
        member = MemberInput.model_validate(dict(data))
    except ValidationError as e:
        raise MemberValidationError(_field_errors(e)) from e

    height, height_errors = _resolve_height(member)
    if height_errors:
        raise MemberValidationError(height_errors)

    return MemberPayload(
        name=member.name,
        role=member.role,
        sex=member.sex,
        activity_level=member.activity_level,
        photo=member.photo,
        date_of_birth=member.date_of_birth,
        height=height,
        weight=member.weight,
        allergens=list(member.allergens),
        exclusions=list(member.exclusions),
        likes=list(member.likes),
        dislikes=list(member.dislikes),
        medications=list(member.medications),
        income_sources=[
            IncomeSource(
                source=item.source,
                amount=item.amount,
                frequency=item.frequency,
            )
            for item in member.income_sources
        ],
        medical_notes=member.medical_notes,
    )
