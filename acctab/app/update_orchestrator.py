"""Selection -> bulk update -> refresh workflow with user notifications.

The orchestrator owns the busy-flag discipline for one submission at a time:
a second ``submit`` while the first is awaiting the backend is ignored, not
queued. It mutates only ``selection`` and ``busy`` on the shared
:class:`acctab.domain.table_pipeline.TableState`.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List

from acctab.domain.entities import UpdateOutcome
from acctab.domain.errors import UpdateTransportError, ValidationError
from acctab.domain.ports import NotificationPort
from acctab.domain.table_pipeline import TableState
from acctab.usecases.update_accounts import UpdateAccounts

LOGGER = logging.getLogger(__name__)

RESULT_TITLE = "Result"
ERROR_TITLE = "Error"


def _noop() -> None:
    """Default state-change hook."""


class UpdateOrchestrator:
    """Run a bulk update for the current selection and report each outcome."""

    def __init__(
        self,
        uc_update: UpdateAccounts,
        notifier: NotificationPort,
        refresh: Callable[[], Awaitable[object]],
        on_state_change: Callable[[], None] = _noop,
    ) -> None:
        """
        Args:
            uc_update: Batched update use case (validation + delay + port call).
            notifier: Toast sink for outcomes and errors.
            refresh: Reloads the record store; must report its own fetch
                failures instead of raising them.
            on_state_change: Called whenever ``busy`` or ``selection`` change.
        """
        self.uc_update = uc_update
        self.notifier = notifier
        self.refresh = refresh
        self.on_state_change = on_state_change or _noop

    async def submit(self, state: TableState) -> List[UpdateOutcome]:
        """Submit ``state.selection`` as one batch.

        Returns the outcomes in the order the backend sent them, or an empty
        list when the submission was ignored, rejected or failed.
        """
        if state.busy:
            LOGGER.debug("Update already in flight; ignoring duplicate submit")
            return []

        state.busy = True
        self.on_state_change()
        try:
            try:
                outcomes = await self.uc_update(state.selection)
            except ValidationError as exc:
                self.notifier.notify(ERROR_TITLE, exc.message, "error")
                return []
            except UpdateTransportError as exc:
                # Selection stays as-is so the user can retry.
                self.notifier.notify(ERROR_TITLE, exc.message, "error")
                return []

            for outcome in outcomes:
                LOGGER.debug("Update outcome (%s): %s", outcome.severity, outcome.message)
                self.notifier.notify(RESULT_TITLE, outcome.message, outcome.severity)

            state.selection = frozenset()
            self.on_state_change()
            await self.refresh()
            return outcomes
        finally:
            state.busy = False
            self.on_state_change()


__all__ = ["ERROR_TITLE", "RESULT_TITLE", "UpdateOrchestrator"]
