"""Translate account API failures into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from acctab.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    ApiTimeoutError,
    extract_error_hint,
)
from acctab.domain.ports import UseCaseError

# Record API error codes -> (use case code, message prefix).
_RECORD_API_CODES: Dict[str, Tuple[str, str]] = {
    "INVALID_SESSION_ID": ("AUTH_FAILED", "Auth failed / session expired"),
    "INSUFFICIENT_ACCESS": ("AUTH_FAILED", "Not allowed to change these accounts"),
    "UNABLE_TO_LOCK_ROW": ("RECORD_LOCKED", "Record locked"),
    "ENTITY_IS_DELETED": ("RECORD_NOT_FOUND", "Account no longer exists"),
    "REQUEST_LIMIT_EXCEEDED": ("RATE_LIMITED", "Too many requests, try again later"),
}

# HTTP status -> (use case code, message prefix) when no record code matched.
_STATUS_CODES: Dict[int, Tuple[str, str]] = {
    401: ("AUTH_FAILED", "Auth failed / session expired"),
    403: ("AUTH_FAILED", "Auth failed / session expired"),
    404: ("RECORD_NOT_FOUND", "Account no longer exists"),
    409: ("RECORD_LOCKED", "Record locked"),
    429: ("RATE_LIMITED", "Too many requests, try again later"),
}


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    Record API error codes (``errorCode`` in the response body) win over the
    HTTP status. Auth failures never carry the server hint.

    Args:
        exc: Exception raised by an adapter or port implementation.
        default_code: Code used when ``exc`` is not a known adapter error.
        default_message: Message used with ``default_code``; falls back to
            ``str(exc)``.

    Returns:
        UseCaseError: ``exc`` itself when it already is one, else a new error.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiTimeoutError):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, ApiClientError):
        return _map_client_error(exc)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", "Account service error, try again.")
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _map_client_error(exc: ApiClientError) -> UseCaseError:
    status = exc.status or 0
    hint = exc.hint or extract_error_hint(exc.payload)
    mapped = _RECORD_API_CODES.get((exc.code or "").upper()) or _STATUS_CODES.get(status)
    if mapped is not None:
        code, base = mapped
        if code == "AUTH_FAILED":
            return UseCaseError(code, f"{base}.")
        return UseCaseError(code, _compose_error_message(base, hint))
    label = f"Request failed (HTTP {status})" if status else "Request failed"
    return UseCaseError("REQUEST_FAILED", _compose_error_message(label, hint))


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
