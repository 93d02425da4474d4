from household_profiler.services.household import (
    HouseholdService,
    build_household_overview,
    resolve_timezone,
)
from household_profiler.services.members import MemberService
from household_profiler.services.validation import validate_member

__all__ = [
    "HouseholdService",
    "MemberService",
    "build_household_overview",
    "resolve_timezone",
    "validate_member",
]
