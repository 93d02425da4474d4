"""Conversions between API member rows and the Streamlit form.

Kept free of Streamlit calls so the page stays thin and the conversions
are testable on their own.
"""

from __future__ import annotations

import base64
import math
from datetime import date
from typing import Any

from household_profiler.domain.encoding import decode_sequence, decode_strings
from household_profiler.domain.members import (
    SEQUENCE_FIELDS,
    age_on,
    format_height,
    inches_to_feet_inches,
)
from household_profiler.domain.value_objects import (
    ACTIVITY_LEVEL_LABELS,
    ROLE_LABELS,
    ActivityLevel,
    IncomeFrequency,
    Role,
    Sex,
)

ROLE_OPTIONS = [r.value for r in Role]
SEX_OPTIONS = [s.value for s in Sex]
ACTIVITY_OPTIONS = [a.value for a in ActivityLevel]
FREQUENCY_OPTIONS = [f.value for f in IncomeFrequency]


def role_label(value: str) -> str:
    try:
        return ROLE_LABELS[Role(value)]
    except ValueError:
        return value


def activity_label(value: str) -> str:
    try:
        return ACTIVITY_LEVEL_LABELS[ActivityLevel(value)]
    except ValueError:
        return value


def parse_list_field(text: str | None) -> list[str]:
    """Split a comma separated entry into trimmed, non-empty items."""
    if not text:
        return []
    return [item.strip() for item in text.split(",") if item.strip()]


def join_list(items: list[str]) -> str:
    return ", ".join(items)


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def age_label(date_of_birth: str | None, today: date | None = None) -> str:
    born = parse_date(date_of_birth)
    if born is None:
        return "Date of birth not specified"
    return f"{age_on(born, today)} years old"


def height_label(height: float | None) -> str:
    return format_height(height)


def photo_to_data_url(data: bytes, mime_type: str | None) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'image/png'};base64,{encoded}"


def decode_income_rows(value: Any) -> list[dict[str, Any]]:
    """Income sources from a row (JSON text or list) as editor rows."""
    items = decode_sequence(value) if isinstance(value, str) else (value or [])
    rows = []
    for item in items:
        if isinstance(item, dict) and item.get("source"):
            rows.append(
                {
                    "source": item["source"],
                    "amount": item.get("amount"),
                    "frequency": item.get("frequency"),
                }
            )
    return rows


def member_to_form_defaults(row: dict[str, Any] | None) -> dict[str, Any]:
    """Initial form values for creating (``row is None``) or editing a member."""
    if row is None:
        return {
            "name": "",
            "role": Role.OTHER.value,
            "sex": Sex.OTHER.value,
            "activity_level": ActivityLevel.SEDENTARY.value,
            "photo": None,
            "date_of_birth": None,
            "height_feet": 0,
            "height_inches": 0,
            "weight": 0.0,
            **{key: "" for key in SEQUENCE_FIELDS},
            "income_sources": [],
            "medical_notes": "",
        }

    feet, inches = inches_to_feet_inches(row.get("height")) or (0, 0)
    defaults: dict[str, Any] = {
        "name": row.get("name", ""),
        "role": row.get("role", Role.OTHER.value),
        "sex": row.get("sex", Sex.OTHER.value),
        "activity_level": row.get("activityLevel", ActivityLevel.SEDENTARY.value),
        "photo": row.get("photo"),
        "date_of_birth": parse_date(row.get("dateOfBirth")),
        "height_feet": feet,
        "height_inches": inches,
        "weight": float(row.get("weight") or 0.0),
        "income_sources": decode_income_rows(row.get("incomeSources")),
        "medical_notes": row.get("medicalNotes") or "",
    }
    for key in SEQUENCE_FIELDS:
        value = row.get(key)
        items = decode_strings(value) if isinstance(value, str) else list(value or [])
        defaults[key] = join_list(items)
    return defaults


def _clean_amount(value: Any) -> float | None:
    if value is None or value == "":
        return None
    amount = float(value)
    if math.isnan(amount):
        return None
    return amount


def _clean_income_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    sources = []
    for row in rows:
        source = str(row.get("source") or "").strip()
        if not source:
            continue
        item: dict[str, Any] = {"source": source}
        amount = _clean_amount(row.get("amount"))
        if amount is not None:
            item["amount"] = amount
        frequency = row.get("frequency")
        if isinstance(frequency, str) and frequency:
            item["frequency"] = frequency
        sources.append(item)
    return sources


def form_to_payload(values: dict[str, Any]) -> dict[str, Any]:
    """Build the API request body from submitted form values.

    Height goes over as ``heightFeet``/``heightInches``; the server combines
    them into total inches. A zero weight means "not specified".
    """
    date_of_birth = values.get("date_of_birth")
    weight = values.get("weight") or None
    payload: dict[str, Any] = {
        "name": (values.get("name") or "").strip(),
        "role": values.get("role"),
        "sex": values.get("sex"),
        "activityLevel": values.get("activity_level"),
        "photo": values.get("photo") or None,
        "dateOfBirth": date_of_birth.isoformat() if date_of_birth else None,
        "heightFeet": int(values.get("height_feet") or 0),
        "heightInches": int(values.get("height_inches") or 0),
        "weight": float(weight) if weight else None,
        "incomeSources": _clean_income_rows(values.get("income_sources") or []),
        "medicalNotes": (values.get("medical_notes") or "").strip() or None,
    }
    for key in SEQUENCE_FIELDS:
        payload[key] = parse_list_field(values.get(key))
    return payload


def client_side_errors(values: dict[str, Any]) -> dict[str, str]:
    """Checks the form can make before calling the API."""
    errors: dict[str, str] = {}
    if not (values.get("name") or "").strip():
        errors["name"] = "Name is required"
    feet = int(values.get("height_feet") or 0)
    inches = int(values.get("height_inches") or 0)
    if feet == 0 and inches > 0:
        errors["heightFeet"] = "Enter feet as well as inches"
    return errors
