from household_profiler.domain.households import HouseholdOverview
from household_profiler.domain.members import (
    HouseholdMember,
    IncomeSource,
    MemberPayload,
    age_on,
    feet_inches_to_inches,
    format_height,
    inches_to_feet_inches,
)
from household_profiler.domain.value_objects import (
    ActivityLevel,
    IncomeFrequency,
    Role,
    Sex,
)

__all__ = [
    "ActivityLevel",
    "HouseholdMember",
    "HouseholdOverview",
    "IncomeFrequency",
    "IncomeSource",
    "MemberPayload",
    "Role",
    "Sex",
    "age_on",
    "feet_inches_to_inches",
    "format_height",
    "inches_to_feet_inches",
]
