from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

DEFAULT_LEVEL_CATEGORIES: Tuple[str, ...] = ("Level 1", "Level 2")
DEFAULT_PAGE_SIZE = 5


@dataclass(frozen=True)
class AccountId:
    """Backend identifier of an account record."""

    value: str
    """Identifier string preserved verbatim from the backend payload."""

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("AccountId must be a non-empty string.")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UserRef:
    """Nested user reference such as ``LastModifiedBy``."""

    name: Optional[str] = None
    user_id: Optional[str] = None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _lookup_path(data: Mapping[str, Any], path: str) -> Any:
    current: Any = data
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


@dataclass(frozen=True)
class AccountRecord:
    """Immutable account row owned by the record store.

    Records are replaced wholesale whenever the store is refreshed; nothing
    edits them field by field.
    """

    id: AccountId
    name: Optional[str] = None
    phone: Optional[str] = None
    owner_id: Optional[str] = None
    level: Optional[str] = None
    last_modified_by: Optional[UserRef] = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    """Backend fields without a dedicated attribute, kept for dotted lookups."""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "AccountRecord":
        """Build a record from a backend account object.

        Accepts ``Level__c`` (custom field naming) or ``Level`` for the
        category and a nested ``LastModifiedBy`` mapping.
        """
        if not isinstance(payload, Mapping):
            raise TypeError("Account payload must be a mapping.")
        raw_id = payload.get("Id")
        if raw_id is None:
            raise ValueError("Account payload is missing 'Id'.")

        modified = payload.get("LastModifiedBy")
        last_modified_by: Optional[UserRef] = None
        if isinstance(modified, Mapping):
            last_modified_by = UserRef(
                name=_optional_str(modified.get("Name")),
                user_id=_optional_str(modified.get("Id")),
            )

        level = payload.get("Level__c", payload.get("Level"))
        known = {"Id", "Name", "Phone", "OwnerId", "Level__c", "Level", "LastModifiedBy"}
        extra = {key: value for key, value in payload.items() if key not in known}
        return cls(
            id=AccountId(str(raw_id)),
            name=_optional_str(payload.get("Name")),
            phone=_optional_str(payload.get("Phone")),
            owner_id=_optional_str(payload.get("OwnerId")),
            level=_optional_str(level),
            last_modified_by=last_modified_by,
            extra=extra,
        )

    def field_value(self, field_name: str) -> Any:
        """Resolve a column field name, including dotted paths, to a value."""
        if field_name == "Id":
            return str(self.id)
        if field_name == "Name":
            return self.name
        if field_name == "Phone":
            return self.phone
        if field_name == "OwnerId":
            return self.owner_id
        if field_name in {"Level", "Level__c"}:
            return self.level
        if field_name == "LastModifiedBy.Name":
            return self.last_modified_by.name if self.last_modified_by else None
        return _lookup_path(self.extra, field_name)

    def to_row(self) -> Dict[str, Any]:
        """Flatten to the dict shape table widgets bind to."""
        row: Dict[str, Any] = dict(self.extra)
        row.update(
            {
                "Id": str(self.id),
                "Name": self.name,
                "Phone": self.phone,
                "OwnerId": self.owner_id,
                "Level": self.level,
                "LastModifiedBy.Name": self.field_value("LastModifiedBy.Name"),
            }
        )
        return row


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Any) -> "SortDirection":
        if isinstance(value, SortDirection):
            return value
        text = str(value or "").strip().lower()
        if text in {"asc", "ascending"}:
            return cls.ASC
        if text in {"desc", "descending"}:
            return cls.DESC
        raise ValueError(f"Unsupported sort direction: {value!r}")


@dataclass(frozen=True)
class SortSpec:
    """Single active sort column and direction."""

    field: str = "Name"
    direction: SortDirection = SortDirection.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.field, str) or not self.field.strip():
            raise ValueError("SortSpec.field must be a non-empty string.")

    @property
    def ascending(self) -> bool:
        return self.direction is SortDirection.ASC


FILTER_FIELDS: Tuple[str, ...] = ("name", "phone", "owner")


@dataclass(frozen=True)
class FilterCriteria:
    """Three independent predicates; an empty string disables the predicate."""

    name: str = ""
    phone: str = ""
    owner: str = ""

    def with_field(self, field_name: str, value: Any) -> "FilterCriteria":
        key = str(field_name or "").strip().lower()
        if key not in FILTER_FIELDS:
            raise ValueError(f"Unknown filter field: {field_name!r}")
        return replace(self, **{key: "" if value is None else str(value)})

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.phone or self.owner)


@dataclass(frozen=True)
class PageState:
    """Shared page cursor for every level; page size stays fixed."""

    page_number: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if isinstance(self.page_number, bool) or int(self.page_number) < 1:
            raise ValueError("page_number must be >= 1.")
        if isinstance(self.page_size, bool) or int(self.page_size) <= 0:
            raise ValueError("page_size must be > 0.")


@dataclass(frozen=True)
class Column:
    """Column metadata consumed by table widgets."""

    label: str
    field_name: str
    sortable: bool = False


DEFAULT_COLUMNS: Tuple[Column, ...] = (
    Column(label="Account Name", field_name="Name", sortable=True),
    Column(label="Phone Number", field_name="Phone"),
    Column(label="Last Modified By", field_name="LastModifiedBy.Name", sortable=True),
)


@dataclass(frozen=True)
class UpdateOutcome:
    """One per-record result message returned by the bulk update."""

    message: str
    success: bool
    record_id: Optional[str] = None

    @property
    def severity(self) -> str:
        return "success" if self.success else "error"


__all__ = [
    "AccountId",
    "AccountRecord",
    "Column",
    "DEFAULT_COLUMNS",
    "DEFAULT_LEVEL_CATEGORIES",
    "DEFAULT_PAGE_SIZE",
    "FILTER_FIELDS",
    "FilterCriteria",
    "PageState",
    "SortDirection",
    "SortSpec",
    "UpdateOutcome",
    "UserRef",
]
