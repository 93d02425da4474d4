"""Pydantic v2 schemas for API responses.

Field names go over the wire in camelCase. Request bodies are plain JSON
objects handed to ``services.validation.validate_member``.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(CamelModel):
    """Schema for health check response."""

    ok: bool
    message: str


class MessageResponse(CamelModel):
    message: str


class ErrorResponse(CamelModel):
    """Error body shared by every failure status."""

    error: str
    code: str | None = None
    field_errors: dict[str, str] | None = Field(default=None, alias="fields")
    details: str | None = None


class MemberResponse(CamelModel):
    """A stored member row.

    List-valued fields are JSON-encoded strings, exactly as stored, so
    existing clients can keep decoding them themselves.
    """

    id: int
    name: str
    role: str
    photo: str | None
    date_of_birth: str | None
    sex: str
    height: float | None
    weight: float | None
    activity_level: str
    allergens: str
    exclusions: str
    likes: str
    dislikes: str
    medications: str
    income_sources: str
    medical_notes: str | None
    created_at: datetime
    updated_at: datetime


class HouseholdResponse(CamelModel):
    """Schema for the synthetic household overview."""

    id: int
    name: str
    timezone: str
    created_at: datetime
    members: list[MemberResponse]
