"""JSON text encoding for list-valued member fields.

Sequence fields are stored as JSON text columns and returned to API clients
in the same encoded form. Decoding is total: a missing, corrupted or
non-list value decodes to an empty list so a bad row never breaks a read.
"""

import json
from collections.abc import Iterable
from typing import Any

from household_profiler.domain.members import IncomeSource
from household_profiler.domain.value_objects import IncomeFrequency
from household_profiler.logging_config import get_logger

logger = get_logger(__name__)


def encode_sequence(values: Iterable[Any] | None) -> str:
    """Encode a list of strings (or income sources) as JSON text."""
    if values is None:
        return "[]"
    items = [v.to_dict() if isinstance(v, IncomeSource) else v for v in values]
    return json.dumps(items)


def decode_sequence(text: str | None) -> list[Any]:
    """Decode JSON text into a list, falling back to ``[]``."""
    if not text:
        return []
    try:
        value = json.loads(text)
    except (TypeError, ValueError):
        logger.warning("sequence_decode_failed", reason="invalid_json")
        return []
    if not isinstance(value, list):
        logger.warning(
            "sequence_decode_failed",
            reason="not_a_list",
            value_type=type(value).__name__,
        )
        return []
    return value


def decode_strings(text: str | None) -> list[str]:
    return [str(item) for item in decode_sequence(text) if item is not None]


def decode_income_sources(text: str | None) -> list[IncomeSource]:
    """Decode stored income sources, dropping entries without a ``source``."""
    sources: list[IncomeSource] = []
    for item in decode_sequence(text):
        if not isinstance(item, dict) or not isinstance(item.get("source"), str):
            continue
        amount = item.get("amount")
        frequency = item.get("frequency")
        try:
            parsed_frequency = IncomeFrequency(frequency) if frequency else None
        except ValueError:
            parsed_frequency = None
        sources.append(
            IncomeSource(
                source=item["source"],
                amount=float(amount) if isinstance(amount, int | float) else None,
                frequency=parsed_frequency,
            )
        )
    return sources
