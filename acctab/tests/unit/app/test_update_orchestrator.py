from __future__ import annotations

import asyncio
from typing import List

from acctab.adapters.api_errors import ApiTimeoutError
from acctab.app.update_orchestrator import UpdateOrchestrator
from acctab.domain.table_pipeline import TableState
from acctab.tests.unit.fakes import NotifierSpy, UpdateSpy, record
from acctab.usecases.update_accounts import UpdateAccounts


class _RefreshSpy:
    def __init__(self, state: TableState) -> None:
        self.state = state
        self.calls = 0
        self.busy_seen: List[bool] = []

    async def __call__(self) -> bool:
        self.calls += 1
        self.busy_seen.append(self.state.busy)
        return True


def _setup(messages=None, selection=frozenset()):
    state = TableState(records=[record("001", "Acme")], selection=frozenset(selection))
    port = UpdateSpy(messages)
    notifier = NotifierSpy()
    refresh = _RefreshSpy(state)
    busy_trace: List[bool] = []
    orchestrator = UpdateOrchestrator(
        UpdateAccounts(port),
        notifier,
        refresh=refresh,
        on_state_change=lambda: busy_trace.append(state.busy),
    )
    return state, port, notifier, refresh, orchestrator, busy_trace


def test_happy_path_notifies_each_outcome_clears_selection_and_refreshes_once() -> None:
    state, port, notifier, refresh, orchestrator, _ = _setup(
        ["✅ 001 updated", "❌ 002 failed: locked"], {"001", "002"}
    )

    outcomes = asyncio.run(orchestrator.submit(state))

    assert port.calls == [["001", "002"]]
    assert notifier.calls == [
        ("Result", "✅ 001 updated", "success"),
        ("Result", "❌ 002 failed: locked", "error"),
    ]
    assert [o.success for o in outcomes] == [True, False]
    assert state.selection == frozenset()
    assert refresh.calls == 1
    assert state.busy is False


def test_empty_selection_reports_one_error_and_changes_nothing() -> None:
    state, port, notifier, refresh, orchestrator, busy_trace = _setup(["✅ x"])
    records_before = list(state.records)

    outcomes = asyncio.run(orchestrator.submit(state))

    assert outcomes == []
    assert port.calls == []
    assert notifier.calls == [("Error", "Select at least one account.", "error")]
    assert refresh.calls == 0
    assert state.selection == frozenset()
    assert state.records == records_before
    assert busy_trace == [True, False]
    assert state.busy is False


def test_transport_failure_keeps_selection_and_skips_refresh() -> None:
    state, port, notifier, refresh, orchestrator, busy_trace = _setup(selection={"001"})
    port.error = ApiTimeoutError("down")

    outcomes = asyncio.run(orchestrator.submit(state))

    assert outcomes == []
    assert notifier.calls == [("Error", "There was a problem updating the accounts.", "error")]
    assert state.selection == frozenset({"001"})
    assert refresh.calls == 0
    assert busy_trace[0] is True and busy_trace[-1] is False
    assert state.busy is False


def test_busy_flag_is_true_while_awaiting_and_blocks_duplicates() -> None:
    state, port, notifier, refresh, orchestrator, busy_trace = _setup(["✅ 001 updated"], {"001"})

    async def scenario() -> None:
        port.gate = asyncio.Event()
        port.entered = asyncio.Event()
        first = asyncio.create_task(orchestrator.submit(state))
        await port.entered.wait()
        assert state.busy is True

        duplicate = await orchestrator.submit(state)
        assert duplicate == []
        assert len(port.calls) == 1

        port.gate.set()
        await first

    asyncio.run(scenario())

    assert state.busy is False
    assert refresh.calls == 1
    assert refresh.busy_seen == [True]
    assert busy_trace[0] is True and busy_trace[-1] is False


def test_mismatched_outcome_count_is_rendered_as_received() -> None:
    state, port, notifier, refresh, orchestrator, _ = _setup(
        ["✅ 001 updated", "✅ 001 updated", "❌ 003 failed"], {"001"}
    )

    asyncio.run(orchestrator.submit(state))

    assert notifier.severities() == ["success", "success", "error"]
    assert refresh.calls == 1
