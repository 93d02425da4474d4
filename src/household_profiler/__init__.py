from household_profiler.domain.households import HouseholdOverview
from household_profiler.domain.members import (
    HouseholdMember,
    IncomeSource,
    MemberPayload,
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
]

__version__ = "0.1.0"
