"""Domain-level error types shared by use cases and the update orchestrator.

Each error keeps a stable ``code`` so callers can branch without parsing
messages; ``message`` is always safe to show to the user.
"""
from __future__ import annotations

from typing import Optional

from .ports import UseCaseError

EMPTY_SELECTION_MESSAGE = "Select at least one account."
UPDATE_FAILED_MESSAGE = "There was a problem updating the accounts."
FETCH_FAILED_MESSAGE = "Could not load accounts."


class ValidationError(UseCaseError):
    """Submitted input is unusable, e.g. an empty selection."""

    def __init__(self, message: str = EMPTY_SELECTION_MESSAGE, code: str = "EMPTY_SELECTION"):
        super().__init__(code, message)


class FetchError(UseCaseError):
    """Initial or refresh load failed; the previous store stays in place."""

    def __init__(self, message: str = FETCH_FAILED_MESSAGE, *, cause: Optional[UseCaseError] = None):
        super().__init__("FETCH_FAILED", message)
        self.cause = cause


class UpdateTransportError(UseCaseError):
    """The bulk update call itself failed (not a per-record outcome)."""

    def __init__(self, message: str = UPDATE_FAILED_MESSAGE, *, cause: Optional[UseCaseError] = None):
        super().__init__("UPDATE_FAILED", message)
        self.cause = cause


__all__ = [
    "EMPTY_SELECTION_MESSAGE",
    "FETCH_FAILED_MESSAGE",
    "FetchError",
    "UPDATE_FAILED_MESSAGE",
    "UpdateTransportError",
    "ValidationError",
]
