from __future__ import annotations

import asyncio

import pytest

from acctab.adapters.api_errors import ApiClientError
from acctab.domain.errors import FetchError
from acctab.tests.unit.fakes import QuerySpy, account
from acctab.usecases.fetch_accounts import FetchAccounts


def test_fetch_returns_typed_records_and_skips_bad_rows() -> None:
    port = QuerySpy([account("001", "Acme"), {"Name": "no id"}, account("002", "Blue")])

    records = asyncio.run(FetchAccounts(port)())

    assert [str(r.id) for r in records] == ["001", "002"]
    assert port.calls == 1


def test_fetch_failure_is_mapped_to_fetch_error() -> None:
    port = QuerySpy()
    port.error = ApiClientError("nope", status=401)

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(FetchAccounts(port)())

    assert excinfo.value.code == "FETCH_FAILED"
    assert excinfo.value.cause.code == "AUTH_FAILED"
    assert "Auth failed" in excinfo.value.message


def test_unknown_failure_uses_generic_message() -> None:
    port = QuerySpy()
    port.error = RuntimeError("")

    with pytest.raises(FetchError) as excinfo:
        asyncio.run(FetchAccounts(port)())

    assert excinfo.value.message == "Could not load accounts."
