from __future__ import annotations

import asyncio

import pytest

from acctab.adapters.api_errors import ApiServerError, ApiTimeoutError
from acctab.domain.errors import UpdateTransportError, ValidationError
from acctab.tests.unit.fakes import UpdateSpy
from acctab.usecases.update_accounts import FixedDelay, UpdateAccounts, delay_from_ms, no_delay


def test_empty_selection_raises_without_calling_port() -> None:
    port = UpdateSpy()
    uc = UpdateAccounts(port)

    with pytest.raises(ValidationError) as excinfo:
        asyncio.run(uc([]))

    assert excinfo.value.code == "EMPTY_SELECTION"
    assert port.calls == []


def test_blank_ids_count_as_empty_selection() -> None:
    port = UpdateSpy()

    with pytest.raises(ValidationError):
        asyncio.run(UpdateAccounts(port)(["", "  "]))

    assert port.calls == []


def test_selection_is_sent_as_one_batch() -> None:
    port = UpdateSpy(["✅ 001 updated", "❌ 002 failed: locked"])
    uc = UpdateAccounts(port)

    outcomes = asyncio.run(uc(frozenset({"002", "001"})))

    assert port.calls == [["001", "002"]]
    assert [o.severity for o in outcomes] == ["success", "error"]


def test_delay_policy_runs_before_port_call() -> None:
    order = []
    port = UpdateSpy(["✅ ok"])

    async def delay() -> None:
        order.append(("delay", len(port.calls)))

    asyncio.run(UpdateAccounts(port, delay=delay)(["001"]))

    assert order == [("delay", 0)]
    assert len(port.calls) == 1


@pytest.mark.parametrize("error", [ApiTimeoutError("down"), ApiServerError("boom", status=500), RuntimeError("x")])
def test_port_failure_becomes_transport_error(error: Exception) -> None:
    port = UpdateSpy()
    port.error = error

    with pytest.raises(UpdateTransportError) as excinfo:
        asyncio.run(UpdateAccounts(port)(["001"]))

    assert excinfo.value.code == "UPDATE_FAILED"
    assert excinfo.value.cause is not None


def test_outcome_count_is_not_reconciled_with_selection() -> None:
    port = UpdateSpy(["✅ a", "✅ a", "❌ b"])

    outcomes = asyncio.run(UpdateAccounts(port)(["001"]))

    assert len(outcomes) == 3


def test_delay_from_ms() -> None:
    assert delay_from_ms(0) is no_delay
    assert delay_from_ms(1500) == FixedDelay(1.5)
    with pytest.raises(ValueError):
        FixedDelay(-1)
