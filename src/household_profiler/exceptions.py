"""Exception hierarchy for Household Profiler.

All application exceptions inherit from HouseholdProfilerError, which carries
the HTTP status and error code the API layer renders. Catching the base class
catches every error this package raises on purpose.
"""

from typing import Any


class HouseholdProfilerError(Exception):
    """Base exception for all Household Profiler errors."""

    error_code: str = "HOUSEHOLD_PROFILER_ERROR"
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code:
            self.status_code = status_code
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.message,
            "code": self.error_code,
        }


# =============================================================================
# Validation Errors
# =============================================================================


class MemberValidationError(HouseholdProfilerError):
    """Raised when member input fails validation.

    ``field_errors`` maps each offending field (camelCase, with dotted paths
    for nested income sources) to a human-readable message.
    """

    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, field_errors: dict[str, str]) -> None:
        super().__init__(
            "Invalid member data",
            context={"fields": sorted(field_errors)},
        )
        self.field_errors = dict(field_errors)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["fields"] = self.field_errors
        return data


# =============================================================================
# Lookup Errors
# =============================================================================


class MemberNotFoundError(HouseholdProfilerError):
    """Raised when no member row matches the requested id."""

    error_code = "MEMBER_NOT_FOUND"
    status_code = 404

    def __init__(self, member_id: int) -> None:
        super().__init__(
            "Member not found",
            context={"member_id": member_id},
        )
        self.member_id = member_id


class NoHouseholdFoundError(HouseholdProfilerError):
    """Raised when the household view is requested with zero members."""

    error_code = "NO_HOUSEHOLD"
    status_code = 404

    def __init__(self) -> None:
        super().__init__("No household found")


# =============================================================================
# Persistence Errors
# =============================================================================


class PersistenceError(HouseholdProfilerError):
    """Raised when the underlying store fails a read or write.

    ``message`` is safe to show to clients; ``details`` is a short string
    describing the failure class and never includes query text.
    """

    error_code = "PERSISTENCE_ERROR"
    status_code = 500

    def __init__(self, message: str, *, details: str = "") -> None:
        super().__init__(message, context={"details": details})
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.details:
            data["details"] = self.details
        return data
