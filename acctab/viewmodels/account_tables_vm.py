"""View-model facade for the two-level account tables.

Call context:
    ``acctab.web_ui.runtime.WebRuntime`` builds one instance per page and
    forwards widget events (filter edits, sort header clicks, row selection,
    paging, update submit) to the ``handle_*`` / command methods below.

State model:
    Every mutable input lives in one :class:`TableState`. Each mutator changes
    that state and then calls :meth:`apply_filters`, which runs the pure
    :func:`acctab.domain.table_pipeline.recompute` and stores the resulting
    :class:`TableView`. Nothing is recomputed implicitly.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..app.update_orchestrator import UpdateOrchestrator
from ..domain.entities import (
    DEFAULT_COLUMNS,
    DEFAULT_LEVEL_CATEGORIES,
    DEFAULT_PAGE_SIZE,
    AccountRecord,
    Column,
    PageState,
    SortDirection,
    SortSpec,
    UpdateOutcome,
)
from ..domain.errors import FetchError
from ..domain.ports import NotificationPort
from ..domain.table_pipeline import (
    TableState,
    TableView,
    next_page_number,
    prev_page_number,
    recompute,
)
from ..usecases.fetch_accounts import FetchAccounts
from ..usecases.update_accounts import UpdateAccounts

LOGGER = logging.getLogger(__name__)

ERROR_TITLE = "Error"


class AccountTablesVM:
    """Owns the record store, criteria, paging and selection for both levels."""

    def __init__(
        self,
        *,
        uc_fetch: FetchAccounts,
        uc_update: UpdateAccounts,
        notifier: NotificationPort,
        page_size: int = DEFAULT_PAGE_SIZE,
        categories: Sequence[str] = DEFAULT_LEVEL_CATEGORIES,
        columns: Sequence[Column] = DEFAULT_COLUMNS,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self.uc_fetch = uc_fetch
        self.notifier = notifier
        self.columns: List[Column] = list(columns)
        self.on_change = on_change
        self.state = TableState(
            page=PageState(page_number=1, page_size=page_size),
            categories=tuple(categories),
        )
        self.orchestrator = UpdateOrchestrator(
            uc_update,
            notifier,
            refresh=self.refresh,
            on_state_change=self._emit_change,
        )
        self.view: TableView = recompute(self.state)

    # ------------------------------------------------------------------
    # Read-only surface for the rendering layer
    # ------------------------------------------------------------------
    @property
    def categories(self) -> Sequence[str]:
        return self.state.categories

    @property
    def busy(self) -> bool:
        return self.state.busy

    @property
    def page_number(self) -> int:
        return self.state.page.page_number

    @property
    def selected_ids(self) -> List[str]:
        return sorted(self.state.selection)

    @property
    def sort(self) -> SortSpec:
        return self.state.sort

    def level_rows(self, category: str) -> List[AccountRecord]:
        """Full filtered+sorted sequence for one level."""
        return list(self.view.levels.get(category, []))

    def page_rows(self, category: str) -> List[AccountRecord]:
        """Records on the current page for one level."""
        return list(self.view.pages.get(category, []))

    def page_row_dicts(self, category: str) -> List[Dict[str, Any]]:
        return [record.to_row() for record in self.page_rows(category)]

    def total_pages(self, category: str) -> int:
        return int(self.view.total_pages.get(category, 0))

    @property
    def paginated_level1(self) -> List[AccountRecord]:
        return self.page_rows(self._category_at(0))

    @property
    def paginated_level2(self) -> List[AccountRecord]:
        return self.page_rows(self._category_at(1))

    @property
    def total_pages_level1(self) -> int:
        return self.total_pages(self._category_at(0))

    @property
    def total_pages_level2(self) -> int:
        return self.total_pages(self._category_at(1))

    def _category_at(self, index: int) -> str:
        categories = self.state.categories
        return categories[index] if index < len(categories) else ""

    def column_dicts(self) -> List[Dict[str, Any]]:
        return [
            {"label": col.label, "fieldName": col.field_name, "sortable": col.sortable}
            for col in self.columns
        ]

    # ------------------------------------------------------------------
    # Record store
    # ------------------------------------------------------------------
    def set_records(self, records: Iterable[AccountRecord]) -> None:
        """Replace the store wholesale and rerun the pipeline."""
        self.state.records = list(records)
        self.apply_filters()

    async def refresh(self) -> bool:
        """Re-issue the fetch and replace the store.

        On failure the previous records stay in place, the error is logged
        and reported once through the notifier, and ``False`` is returned.
        """
        try:
            records = await self.uc_fetch()
        except FetchError as exc:
            LOGGER.warning("Account fetch failed: %s", exc.message, exc_info=exc)
            self.notifier.notify(ERROR_TITLE, exc.message, "error")
            return False
        LOGGER.debug("Loaded %d accounts", len(records))
        self.set_records(records)
        return True

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def apply_filters(self) -> TableView:
        self.view = recompute(self.state)
        self._emit_change()
        return self.view

    def handle_filter_change(self, field_name: str, value: Any) -> None:
        """Apply one filter input edit (``name``, ``phone`` or ``owner``)."""
        try:
            self.state.criteria = self.state.criteria.with_field(field_name, value)
        except ValueError:
            LOGGER.debug("Ignoring filter edit for unknown field %r", field_name)
            return
        self.apply_filters()

    def handle_sort(self, field_name: str, sort_direction: Any = SortDirection.ASC) -> None:
        """Apply a sort request from a column header."""
        self.state.sort = SortSpec(field=field_name, direction=SortDirection.parse(sort_direction))
        self.apply_filters()

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------
    def next_page(self) -> int:
        current = self.state.page.page_number
        target = next_page_number(current, self.view.total_pages.values())
        if target != current:
            self._set_page(target)
        return self.state.page.page_number

    def prev_page(self) -> int:
        current = self.state.page.page_number
        target = prev_page_number(current)
        if target != current:
            self._set_page(target)
        return self.state.page.page_number

    def _set_page(self, page_number: int) -> None:
        self.state.page = PageState(page_number=page_number, page_size=self.state.page.page_size)
        self.apply_filters()

    # ------------------------------------------------------------------
    # Selection and update
    # ------------------------------------------------------------------
    def handle_row_selection(self, rows: Iterable[Any]) -> None:
        """Replace the selection with the ids of ``rows``.

        Rows may be records, row mappings carrying ``Id`` or plain ids.
        """
        ids = set()
        for row in rows or []:
            row_id = self._row_id(row)
            if row_id:
                ids.add(row_id)
        self.state.selection = frozenset(ids)
        self._emit_change()

    async def submit_update(self) -> List[UpdateOutcome]:
        return await self.orchestrator.submit(self.state)

    @staticmethod
    def _row_id(row: Any) -> str:
        if isinstance(row, AccountRecord):
            return str(row.id)
        if isinstance(row, Mapping):
            return str(row.get("Id") or "").strip()
        if row is None:
            return ""
        return str(row).strip()

    def _emit_change(self) -> None:
        if self.on_change:
            self.on_change()


__all__ = ["AccountTablesVM"]
