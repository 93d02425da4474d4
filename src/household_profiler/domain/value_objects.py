from enum import Enum


class Role(str, Enum):
    DAD = "dad"
    MOM = "mom"
    CHILD = "child"
    GRANDPARENT = "grandparent"
    FAMILY_MEMBER = "family_member"
    ROOMMATE = "roommate"
    OTHER = "other"


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, Enum):
    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class IncomeFrequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    BI_MONTHLY = "bi-monthly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUALLY = "semi-annually"
    ANNUALLY = "annually"


ROLE_LABELS: dict[Role, str] = {
    Role.DAD: "Dad",
    Role.MOM: "Mom",
    Role.CHILD: "Child",
    Role.GRANDPARENT: "Grandparent",
    Role.FAMILY_MEMBER: "Family Member",
    Role.ROOMMATE: "Roommate",
    Role.OTHER: "Other",
}

ACTIVITY_LEVEL_LABELS: dict[ActivityLevel, str] = {
    ActivityLevel.SEDENTARY: "Sedentary",
    ActivityLevel.LIGHT: "Light Exercise",
    ActivityLevel.MODERATE: "Moderate Exercise",
    ActivityLevel.ACTIVE: "Active",
    ActivityLevel.VERY_ACTIVE: "Very Active",
}

# Hyphenated activity values written by older clients.
ACTIVITY_LEVEL_ALIASES: dict[str, ActivityLevel] = {
    "lightly-active": ActivityLevel.LIGHT,
    "moderately-active": ActivityLevel.MODERATE,
    "very-active": ActivityLevel.VERY_ACTIVE,
    "extremely-active": ActivityLevel.VERY_ACTIVE,
}
