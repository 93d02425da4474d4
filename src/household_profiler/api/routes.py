"""API routes for Household Profiler."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, status

from household_profiler.api.schemas import (
    ErrorResponse,
    HealthResponse,
    HouseholdResponse,
    MemberResponse,
    MessageResponse,
)
from household_profiler.config import get_settings
from household_profiler.container import get_member_repository
from household_profiler.domain.encoding import encode_sequence
from household_profiler.domain.households import HouseholdOverview
from household_profiler.domain.members import HouseholdMember
from household_profiler.repositories.interfaces import MemberRepository
from household_profiler.services.household import HouseholdService
from household_profiler.services.members import MemberService

HEALTH_MESSAGE = "Household Profiler API is live"

health_router = APIRouter(tags=["health"])
household_router = APIRouter(prefix="/household", tags=["household"])
member_router = APIRouter(prefix="/members", tags=["members"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


# Dependency injection functions
def get_member_service(
    member_repo: Annotated[MemberRepository, Depends(get_member_repository)],
) -> MemberService:
    """Get member service instance."""
    return MemberService(member_repo)


def get_household_service(
    member_repo: Annotated[MemberRepository, Depends(get_member_repository)],
) -> HouseholdService:
    """Get household service instance."""
    settings = get_settings()
    return HouseholdService(
        member_repo,
        name=settings.household_name,
        timezone=settings.timezone,
    )


# Helper functions
def _member_to_response(member: HouseholdMember) -> MemberResponse:
    """Convert a HouseholdMember to its stored-row response shape."""
    return MemberResponse(
        id=member.id,
        name=member.name,
        role=member.role.value,
        photo=member.photo,
        date_of_birth=member.date_of_birth.isoformat()
        if member.date_of_birth
        else None,
        sex=member.sex.value,
        height=member.height,
        weight=member.weight,
        activity_level=member.activity_level.value,
        allergens=encode_sequence(member.allergens),
        exclusions=encode_sequence(member.exclusions),
        likes=encode_sequence(member.likes),
        dislikes=encode_sequence(member.dislikes),
        medications=encode_sequence(member.medications),
        income_sources=encode_sequence(member.income_sources),
        medical_notes=member.medical_notes,
        created_at=member.created_at,
        updated_at=member.updated_at,
    )


def _household_to_response(household: HouseholdOverview) -> HouseholdResponse:
    return HouseholdResponse(
        id=household.id,
        name=household.name,
        timezone=household.timezone,
        created_at=household.created_at,
        members=[_member_to_response(m) for m in household.members],
    )


# Health endpoint
@health_router.get("/healthcheck", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(ok=True, message=HEALTH_MESSAGE)


# Household endpoint
@household_router.get(
    "",
    response_model=HouseholdResponse,
    responses=_ERROR_RESPONSES,
)
def get_household(
    household_service: Annotated[HouseholdService, Depends(get_household_service)],
) -> HouseholdResponse:
    """Synthetic household view over all members."""
    return _household_to_response(household_service.get_household_overview())


# Member endpoints
@member_router.get(
    "",
    response_model=list[MemberResponse],
    responses=_ERROR_RESPONSES,
)
def list_members(
    member_service: Annotated[MemberService, Depends(get_member_service)],
) -> list[MemberResponse]:
    """List all members, oldest first."""
    return [_member_to_response(m) for m in member_service.list_members()]


@member_router.post(
    "",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
def create_member(
    payload: Annotated[dict[str, Any], Body()],
    member_service: Annotated[MemberService, Depends(get_member_service)],
) -> MemberResponse:
    """Create a new member."""
    return _member_to_response(member_service.create_member(payload))


@member_router.put(
    "/{member_id}",
    response_model=MemberResponse,
    responses=_ERROR_RESPONSES,
)
def update_member(
    member_id: int,
    payload: Annotated[dict[str, Any], Body()],
    member_service: Annotated[MemberService, Depends(get_member_service)],
) -> MemberResponse:
    """Replace every mutable field of a member."""
    return _member_to_response(member_service.update_member(member_id, payload))


@member_router.delete(
    "/{member_id}",
    response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
)
def delete_member(
    member_id: int,
    member_service: Annotated[MemberService, Depends(get_member_service)],
) -> MessageResponse:
    """Hard-delete a member."""
    member_service.delete_member(member_id)
    return MessageResponse(message="Member deleted successfully")
