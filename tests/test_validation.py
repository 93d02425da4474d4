"""Tests for member input validation."""

from datetime import date, timedelta
from typing import Any

import pytest

from household_profiler.domain.value_objects import (
    ActivityLevel,
    IncomeFrequency,
    Role,
    Sex,
)
from household_profiler.exceptions import MemberValidationError
from household_profiler.services.validation import validate_member


def _errors(data: Any) -> dict[str, str]:
    with pytest.raises(MemberValidationError) as exc_info:
        validate_member(data)
    return exc_info.value.field_errors


class TestRequiredFields:
    def test_minimal_member_gets_defaults(self, minimal_data) -> None:
        payload = validate_member(minimal_data)

        assert payload.name == "Ana"
        assert payload.role is Role.MOM
        assert payload.sex is Sex.FEMALE
        assert payload.activity_level is ActivityLevel.MODERATE
        assert payload.allergens == []
        assert payload.exclusions == []
        assert payload.likes == []
        assert payload.dislikes == []
        assert payload.medications == []
        assert payload.income_sources == []
        assert payload.height is None
        assert payload.weight is None
        assert payload.date_of_birth is None

    def test_empty_body_reports_every_required_field(self) -> None:
        errors = _errors({})

        assert errors == {
            "name": "Name is required",
            "role": "Role is required",
            "sex": "Sex is required",
            "activityLevel": "Activity level is required",
        }

    def test_blank_name_is_required_error(self, minimal_data) -> None:
        errors = _errors({**minimal_data, "name": "   "})
        assert errors == {"name": "Name is required"}

    def test_name_is_trimmed(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "name": "  Ana  "})
        assert payload.name == "Ana"

    def test_name_too_long(self, minimal_data) -> None:
        errors = _errors({**minimal_data, "name": "x" * 101})
        assert errors["name"] == "Name must be less than 100 characters"

    def test_name_at_limit(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "name": "x" * 100})
        assert len(payload.name) == 100

    def test_unknown_role_lists_allowed_values(self, minimal_data) -> None:
        errors = _errors({**minimal_data, "role": "uncle"})
        assert errors["role"].startswith("Must be one of: dad, mom, child")

    def test_non_object_body(self) -> None:
        assert _errors(["Ana"]) == {"body": "Expected a JSON object"}

    def test_snake_case_keys_accepted(self) -> None:
        payload = validate_member(
            {
                "name": "Ana",
                "role": "mom",
                "sex": "female",
                "activity_level": "very_active",
                "medical_notes": "asthma",
            }
        )
        assert payload.activity_level is ActivityLevel.VERY_ACTIVE
        assert payload.medical_notes == "asthma"


class TestHeight:
    def test_feet_and_inches_combine(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "heightFeet": 5, "heightInches": 6})
        assert payload.height == 66

    def test_feet_and_inches_supersede_total(self, minimal_data) -> None:
        payload = validate_member(
            {**minimal_data, "height": 70, "heightFeet": 5, "heightInches": 6}
        )
        assert payload.height == 66

    def test_total_inches(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "height": 64.5})
        assert payload.height == 64.5

    def test_zero_height_is_not_specified(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "height": 0})
        assert payload.height is None

    def test_zero_feet_and_inches_is_not_specified(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "heightFeet": 0, "heightInches": 0})
        assert payload.height is None

    @pytest.mark.parametrize(
        ("field", "value"),
        [
            ("heightFeet", 11),
            ("heightInches", 12),
            ("heightInches", -1),
            ("height", 121),
            ("height", 11),
        ],
    )
    def test_out_of_range(self, minimal_data, field: str, value: int) -> None:
        errors = _errors({**minimal_data, field: value})
        assert field in errors

    def test_combined_total_range_checked(self, minimal_data) -> None:
        errors = _errors({**minimal_data, "heightInches": 8})
        assert errors == {"height": "Height must be between 12 and 120 inches"}


class TestWeight:
    @pytest.mark.parametrize("value", [1, 140.5, 2000])
    def test_in_range(self, minimal_data, value: float) -> None:
        assert validate_member({**minimal_data, "weight": value}).weight == value

    @pytest.mark.parametrize("value", [0, 0.5, 2001, -3])
    def test_out_of_range(self, minimal_data, value: float) -> None:
        assert "weight" in _errors({**minimal_data, "weight": value})

    def test_blank_weight_is_absent(self, minimal_data) -> None:
        assert validate_member({**minimal_data, "weight": ""}).weight is None


class TestDates:
    def test_parses_iso_date(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "dateOfBirth": "1985-04-12"})
        assert payload.date_of_birth == date(1985, 4, 12)

    def test_blank_date_is_absent(self, minimal_data) -> None:
        assert validate_member({**minimal_data, "dateOfBirth": ""}).date_of_birth is None

    def test_invalid_date(self, minimal_data) -> None:
        assert "dateOfBirth" in _errors({**minimal_data, "dateOfBirth": "1985-02-30"})

    def test_future_date(self, minimal_data) -> None:
        tomorrow = (date.today() + timedelta(days=1)).isoformat()
        errors = _errors({**minimal_data, "dateOfBirth": tomorrow})
        assert errors == {"dateOfBirth": "Date of birth cannot be in the future"}


class TestSequences:
    def test_null_lists_default_to_empty(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "allergens": None, "likes": None})
        assert payload.allergens == []
        assert payload.likes == []

    def test_blank_items_dropped(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "dislikes": ["olives", "  ", ""]})
        assert payload.dislikes == ["olives"]

    def test_json_text_lists_accepted(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "medications": '["ibuprofen"]'})
        assert payload.medications == ["ibuprofen"]

    def test_non_list(self, minimal_data) -> None:
        errors = _errors({**minimal_data, "allergens": '{"a": 1}'})
        assert errors == {"allergens": "must be a list"}


class TestIncomeSources:
    def test_valid_sources(self, member_data) -> None:
        payload = validate_member(member_data)

        assert len(payload.income_sources) == 1
        source = payload.income_sources[0]
        assert source.source == "Salary"
        assert source.amount == 5000
        assert source.frequency is IncomeFrequency.MONTHLY

    def test_each_element_validated_independently(self, minimal_data) -> None:
        errors = _errors(
            {
                **minimal_data,
                "incomeSources": [
                    {"source": "Salary", "amount": 100, "frequency": "monthly"},
                    {"source": "Gig", "amount": -5},
                    {"amount": 10, "frequency": "hourly"},
                ],
            }
        )

        assert set(errors) == {
            "incomeSources.1.amount",
            "incomeSources.2.source",
            "incomeSources.2.frequency",
        }

    def test_optional_amount_and_frequency(self, minimal_data) -> None:
        payload = validate_member(
            {**minimal_data, "incomeSources": [{"source": "Gift", "amount": ""}]}
        )
        assert payload.income_sources[0].amount is None
        assert payload.income_sources[0].frequency is None

    def test_hyphenated_frequencies(self, minimal_data) -> None:
        payload = validate_member(
            {
                **minimal_data,
                "incomeSources": [{"source": "Pay", "frequency": "semi-annually"}],
            }
        )
        assert payload.income_sources[0].frequency is IncomeFrequency.SEMI_ANNUALLY


class TestOptionalText:
    def test_blank_photo_and_notes_become_none(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "photo": "", "medicalNotes": " "})
        assert payload.photo is None
        assert payload.medical_notes is None

    def test_unknown_keys_ignored(self, minimal_data) -> None:
        payload = validate_member({**minimal_data, "id": 99, "createdAt": "x"})
        assert payload.name == "Ana"
