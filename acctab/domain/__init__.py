
"""Domain package exports for value objects and the table pipeline."""

from .entities import (
    AccountId,
    AccountRecord,
    Column,
    FilterCriteria,
    PageState,
    SortDirection,
    SortSpec,
    UpdateOutcome,
    UserRef,
)
from .errors import FetchError, UpdateTransportError, ValidationError
from .table_pipeline import TableState, TableView, recompute
from .update_outcome import classify_outcomes

__all__ = [
    "AccountId",
    "AccountRecord",
    "Column",
    "FetchError",
    "FilterCriteria",
    "PageState",
    "SortDirection",
    "SortSpec",
    "TableState",
    "TableView",
    "UpdateOutcome",
    "UpdateTransportError",
    "UserRef",
    "ValidationError",
    "classify_outcomes",
    "recompute",
]
