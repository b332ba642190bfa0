"""Classify bulk-update result items into :class:`UpdateOutcome` values.

The backend encodes success or failure per record with a leading marker
(``✅`` / ``❌``) on each message. Structured items of the form
``{"id": ..., "success": bool, "message": ...}`` are accepted as well.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .entities import UpdateOutcome

SUCCESS_MARKER = "✅"
FAILURE_MARKER = "❌"


def is_success_message(message: str) -> bool:
    """Return True when the message carries the success marker."""
    return str(message).startswith(SUCCESS_MARKER)


def outcome_from_item(item: Any) -> UpdateOutcome:
    """Convert one raw result item into an outcome."""
    if isinstance(item, Mapping):
        message = str(item.get("message") or "")
        record_id: Optional[str] = None
        raw_id = item.get("id", item.get("Id"))
        if raw_id is not None:
            record_id = str(raw_id)
        if "success" in item:
            success = bool(item.get("success"))
        else:
            success = is_success_message(message)
        return UpdateOutcome(message=message, success=success, record_id=record_id)
    message = "" if item is None else str(item)
    return UpdateOutcome(message=message, success=is_success_message(message))


def classify_outcomes(items: Iterable[Any]) -> List[UpdateOutcome]:
    """Return outcomes in the order received, duplicates included."""
    return [outcome_from_item(item) for item in items]


__all__ = [
    "FAILURE_MARKER",
    "SUCCESS_MARKER",
    "classify_outcomes",
    "is_success_message",
    "outcome_from_item",
]
