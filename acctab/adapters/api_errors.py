"""Typed failures raised by the account REST adapter.

Record APIs report errors as a JSON list of objects such as
``[{"errorCode": "UNABLE_TO_LOCK_ROW", "message": "...", "fields": []}]``;
plain ``{"code": ..., "message": ...}`` bodies and raw text are accepted too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

_MAX_TEXT = 200
_CODE_KEYS = ("errorCode", "code", "error_code")
_MESSAGE_KEYS = ("message", "detail", "error", "title")


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.code = code
        self.hint = hint
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the accounts API."""


class ApiServerError(ApiError):
    """HTTP 5xx from the accounts API."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


@dataclass(frozen=True)
class RecordApiError:
    """One entry of a record API error body."""

    code: Optional[str] = None
    message: Optional[str] = None
    fields: Tuple[str, ...] = field(default_factory=tuple)


def parse_error_payload(resp: Any) -> Any:
    """Return the decoded error body, the leading text, or ``None``."""
    try:
        return resp.json()
    except ValueError:
        text = (getattr(resp, "text", "") or "").strip()
        return text[:400] or None


def record_errors(payload: Any) -> List[RecordApiError]:
    """Normalize an error body into :class:`RecordApiError` entries."""
    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, dict):
        nested = payload.get("errors")
        items = nested if isinstance(nested, list) and nested else [payload]
    elif isinstance(payload, str) and payload.strip():
        return [RecordApiError(message=_clip(payload))]
    else:
        return []

    errors: List[RecordApiError] = []
    for item in items:
        if isinstance(item, str):
            if item.strip():
                errors.append(RecordApiError(message=_clip(item)))
            continue
        if not isinstance(item, dict):
            continue
        code = next((str(item[key]) for key in _CODE_KEYS if item.get(key)), None)
        message = next(
            (_clip(item[key]) for key in _MESSAGE_KEYS if isinstance(item.get(key), str) and item[key].strip()),
            None,
        )
        raw_fields = item.get("fields")
        fields = tuple(str(f) for f in raw_fields if f) if isinstance(raw_fields, list) else ()
        if code or message or fields:
            errors.append(RecordApiError(code=code, message=message, fields=fields))
    return errors


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    errors = record_errors(payload)
    detail = next((err.message for err in errors if err.message), None)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def extract_error_code(payload: Any) -> Optional[str]:
    return next((err.code for err in record_errors(payload) if err.code), None)


def extract_error_hint(payload: Any) -> Optional[str]:
    """Join up to three error messages, with affected fields, into one hint."""
    parts: List[str] = []
    for err in record_errors(payload):
        text = err.message or err.code
        if not text:
            continue
        if err.fields:
            text = f"{text} [{', '.join(err.fields)}]"
        parts.append(text)
    if not parts:
        return None
    return "; ".join(parts[:3])[:_MAX_TEXT]


def _clip(text: str) -> str:
    return text.strip()[:_MAX_TEXT]


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "RecordApiError",
    "build_error_message",
    "extract_error_code",
    "extract_error_hint",
    "parse_error_payload",
    "record_errors",
]
