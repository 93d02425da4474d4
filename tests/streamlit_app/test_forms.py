"""Tests for the form conversion helpers behind the members page."""

from __future__ import annotations

import math
from datetime import date

from household_profiler.streamlit_app.forms import (
    ACTIVITY_OPTIONS,
    FREQUENCY_OPTIONS,
    activity_label,
    age_label,
    client_side_errors,
    form_to_payload,
    height_label,
    member_to_form_defaults,
    parse_list_field,
    photo_to_data_url,
    role_label,
)

STORED_ROW = {
    "id": 1,
    "name": "Ana",
    "role": "mom",
    "photo": None,
    "dateOfBirth": "1985-04-12",
    "sex": "female",
    "height": 66.0,
    "weight": 140.0,
    "activityLevel": "moderate",
    "allergens": '["peanuts", "shellfish"]',
    "exclusions": "[]",
    "likes": '["pasta"]',
    "dislikes": "not json",
    "medications": "[]",
    "incomeSources": '[{"source": "Salary", "amount": 5000.0, "frequency": "monthly"}]',
    "medicalNotes": None,
    "createdAt": "2025-01-01T12:00:00Z",
    "updatedAt": "2025-01-01T12:00:00Z",
}


class TestLabels:
    def test_role_label(self) -> None:
        assert role_label("family_member") == "Family Member"
        assert role_label("unknown") == "unknown"

    def test_activity_label(self) -> None:
        assert activity_label("very_active") == "Very Active"

    def test_options_use_canonical_values(self) -> None:
        assert ACTIVITY_OPTIONS == [
            "sedentary",
            "light",
            "moderate",
            "active",
            "very_active",
        ]
        assert "bi-weekly" in FREQUENCY_OPTIONS

    def test_age_label(self) -> None:
        assert age_label("1985-04-12", today=date(2025, 4, 12)) == "40 years old"
        assert age_label(None) == "Date of birth not specified"
        assert age_label("garbage") == "Date of birth not specified"

    def test_height_label(self) -> None:
        assert height_label(66.0) == "5'6\""
        assert height_label(None) == "Not specified"


class TestParseListField:
    def test_splits_and_trims(self) -> None:
        assert parse_list_field(" peanuts,  tree nuts ,, ") == ["peanuts", "tree nuts"]

    def test_empty(self) -> None:
        assert parse_list_field("") == []
        assert parse_list_field(None) == []


class TestMemberToFormDefaults:
    def test_new_member_defaults(self) -> None:
        defaults = member_to_form_defaults(None)

        assert defaults["name"] == ""
        assert defaults["height_feet"] == 0
        assert defaults["height_inches"] == 0
        assert defaults["allergens"] == ""
        assert defaults["income_sources"] == []

    def test_decodes_stored_row(self) -> None:
        defaults = member_to_form_defaults(STORED_ROW)

        assert defaults["date_of_birth"] == date(1985, 4, 12)
        assert (defaults["height_feet"], defaults["height_inches"]) == (5, 6)
        assert defaults["weight"] == 140.0
        assert defaults["allergens"] == "peanuts, shellfish"
        assert defaults["likes"] == "pasta"
        assert defaults["dislikes"] == ""
        assert defaults["activity_level"] == "moderate"
        assert defaults["income_sources"] == [
            {"source": "Salary", "amount": 5000.0, "frequency": "monthly"}
        ]
        assert defaults["medical_notes"] == ""

    def test_accepts_decoded_lists(self) -> None:
        row = {**STORED_ROW, "allergens": ["peanuts"], "incomeSources": []}

        defaults = member_to_form_defaults(row)

        assert defaults["allergens"] == "peanuts"
        assert defaults["income_sources"] == []


class TestFormToPayload:
    def test_round_trip_from_stored_row(self) -> None:
        payload = form_to_payload(member_to_form_defaults(STORED_ROW))

        assert payload["name"] == "Ana"
        assert payload["activityLevel"] == "moderate"
        assert payload["dateOfBirth"] == "1985-04-12"
        assert payload["heightFeet"] == 5
        assert payload["heightInches"] == 6
        assert payload["weight"] == 140.0
        assert payload["allergens"] == ["peanuts", "shellfish"]
        assert payload["dislikes"] == []
        assert payload["incomeSources"] == [
            {"source": "Salary", "amount": 5000.0, "frequency": "monthly"}
        ]
        assert payload["medicalNotes"] is None

    def test_unset_values(self) -> None:
        values = {**member_to_form_defaults(None), "name": " Ben "}

        payload = form_to_payload(values)

        assert payload["name"] == "Ben"
        assert payload["weight"] is None
        assert payload["dateOfBirth"] is None
        assert payload["photo"] is None
        assert payload["heightFeet"] == 0
        assert payload["incomeSources"] == []

    def test_income_rows_cleaned(self) -> None:
        values = {
            **member_to_form_defaults(None),
            "name": "Ben",
            "income_sources": [
                {"source": " Paper route ", "amount": math.nan, "frequency": None},
                {"source": "", "amount": 10, "frequency": "weekly"},
                {"source": "Tips", "amount": "12.5", "frequency": "weekly"},
            ],
        }

        payload = form_to_payload(values)

        assert payload["incomeSources"] == [
            {"source": "Paper route"},
            {"source": "Tips", "amount": 12.5, "frequency": "weekly"},
        ]


class TestClientSideErrors:
    def test_name_required(self) -> None:
        errors = client_side_errors(member_to_form_defaults(None))
        assert errors == {"name": "Name is required"}

    def test_inches_without_feet(self) -> None:
        values = {**member_to_form_defaults(None), "name": "Ana", "height_inches": 4}
        assert "heightFeet" in client_side_errors(values)

    def test_valid(self) -> None:
        assert client_side_errors(member_to_form_defaults(STORED_ROW)) == {}


class TestPhotoToDataUrl:
    def test_encodes_bytes(self) -> None:
        assert photo_to_data_url(b"abc", "image/jpeg") == "data:image/jpeg;base64,YWJj"

    def test_default_mime_type(self) -> None:
        assert photo_to_data_url(b"", None) == "data:image/png;base64,"
