"""Filter, sort, partition and paginate pipeline for the account tables.

All functions are pure: they take sequences and return new lists without
mutating their inputs. :func:`recompute` chains them in the fixed order
filter -> sort -> partition -> page and is called explicitly after every
state mutation by :class:`acctab.viewmodels.account_tables_vm.AccountTablesVM`.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Mapping, Sequence, Tuple

from .entities import (
    DEFAULT_LEVEL_CATEGORIES,
    AccountRecord,
    FilterCriteria,
    PageState,
    SortSpec,
)


@dataclass
class TableState:
    """Mutable state owned by the view-model facade."""

    records: List[AccountRecord] = field(default_factory=list)
    criteria: FilterCriteria = field(default_factory=FilterCriteria)
    sort: SortSpec = field(default_factory=SortSpec)
    page: PageState = field(default_factory=PageState)
    selection: FrozenSet[str] = frozenset()
    busy: bool = False
    categories: Tuple[str, ...] = DEFAULT_LEVEL_CATEGORIES


@dataclass(frozen=True)
class TableView:
    """Derived, read-only projection of a :class:`TableState`."""

    levels: Mapping[str, List[AccountRecord]]
    pages: Mapping[str, List[AccountRecord]]
    total_pages: Mapping[str, int]
    page_number: int
    filtered_count: int


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------
def _matches(record: AccountRecord, criteria: FilterCriteria, name_needle: str) -> bool:
    if name_needle:
        if not record.name or name_needle not in record.name.lower():
            return False
    if criteria.phone:
        if not record.phone or criteria.phone not in record.phone:
            return False
    if criteria.owner:
        if record.owner_id != criteria.owner:
            return False
    return True


def filter_records(
    records: Iterable[AccountRecord], criteria: FilterCriteria
) -> List[AccountRecord]:
    """Keep records satisfying every active criterion, in input order."""
    name_needle = criteria.name.lower()
    return [record for record in records if _matches(record, criteria, name_needle)]


# ---------------------------------------------------------------------------
# Sort
# ---------------------------------------------------------------------------
def sort_key(record: AccountRecord, field_name: str) -> str:
    """Case-insensitive string key; missing values sort as ``""``."""
    value = record.field_value(field_name)
    if value is None or value == "":
        return ""
    return str(value).lower()


def sort_records(records: Iterable[AccountRecord], spec: SortSpec) -> List[AccountRecord]:
    # sorted() is stable and keeps ties in input order for reverse=True too.
    return sorted(
        records,
        key=lambda record: sort_key(record, spec.field),
        reverse=not spec.ascending,
    )


# ---------------------------------------------------------------------------
# Partition
# ---------------------------------------------------------------------------
def partition_by_level(
    records: Iterable[AccountRecord],
    categories: Sequence[str] = DEFAULT_LEVEL_CATEGORIES,
) -> Dict[str, List[AccountRecord]]:
    """Split records by ``level``; unknown categories are dropped."""
    levels: Dict[str, List[AccountRecord]] = {category: [] for category in categories}
    for record in records:
        bucket = levels.get(record.level) if record.level is not None else None
        if bucket is not None:
            bucket.append(record)
    return levels


# ---------------------------------------------------------------------------
# Paginate
# ---------------------------------------------------------------------------
def _check_page_args(page_number: int, page_size: int) -> None:
    if page_number < 1:
        raise ValueError("page_number must be >= 1.")
    if page_size <= 0:
        raise ValueError("page_size must be > 0.")


def page_slice(
    records: Sequence[AccountRecord], page_number: int, page_size: int
) -> List[AccountRecord]:
    """Return page ``page_number`` (1-based), possibly short or empty."""
    _check_page_args(page_number, page_size)
    start = (page_number - 1) * page_size
    return list(records[start : start + page_size])


def total_pages(records: Sequence[AccountRecord], page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be > 0.")
    return math.ceil(len(records) / page_size)


def next_page_number(current: int, totals: Iterable[int]) -> int:
    """Advance the shared cursor unless it would pass every level's last page."""
    candidate = current + 1
    if any(candidate <= total for total in totals):
        return candidate
    return current


def prev_page_number(current: int) -> int:
    return current - 1 if current > 1 else current


# ---------------------------------------------------------------------------
# Recompute
# ---------------------------------------------------------------------------
def recompute(state: TableState) -> TableView:
    """Run the whole pipeline for ``state`` and return the derived view."""
    filtered = filter_records(state.records, state.criteria)
    ordered = sort_records(filtered, state.sort)
    levels = partition_by_level(ordered, state.categories)
    page_number = state.page.page_number
    page_size = state.page.page_size
    return TableView(
        levels=levels,
        pages={
            category: page_slice(rows, page_number, page_size)
            for category, rows in levels.items()
        },
        total_pages={category: total_pages(rows, page_size) for category, rows in levels.items()},
        page_number=page_number,
        filtered_count=len(filtered),
    )


__all__ = [
    "TableState",
    "TableView",
    "filter_records",
    "next_page_number",
    "page_slice",
    "partition_by_level",
    "prev_page_number",
    "recompute",
    "sort_key",
    "sort_records",
    "total_pages",
]
