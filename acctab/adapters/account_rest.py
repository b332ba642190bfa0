# acctab/adapters/account_rest.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Sequence

from acctab.domain.ports import AccountQueryPort, AccountUpdatePort

from .api_errors import ApiError
from .http_client import HttpConfig, RetryingSession

LOGGER = logging.getLogger(__name__)


class AccountRestAdapter(AccountQueryPort, AccountUpdatePort):
    """REST implementation of the account query and bulk update ports.

    Endpoints (relative to ``base_url``):
        ``GET accounts``         -> list of account objects
        ``POST accounts/update`` -> ``{"accountIds": [...]}`` in, list of
                                    result messages out

    ``requests`` is blocking, so the async port methods hand the call to a
    worker thread.
    """

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        *,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not str(base_url).strip():
            raise ValueError("AccountRestAdapter requires a base_url.")
        self.base_url = str(base_url).strip().rstrip("/")
        self.session = RetryingSession(
            api_key or None,
            HttpConfig(request_timeout_s=request_timeout_s, retries=retries),
        )

    # ------------------------------------------------------------------
    # Ports
    # ------------------------------------------------------------------
    async def fetch_all(self) -> List[Mapping[str, Any]]:
        return await asyncio.to_thread(self.fetch_all_sync)

    async def update_many(self, account_ids: Sequence[str]) -> List[Any]:
        return await asyncio.to_thread(self.update_many_sync, list(account_ids))

    # ------------------------------------------------------------------
    # Blocking implementations
    # ------------------------------------------------------------------
    def fetch_all_sync(self) -> List[Mapping[str, Any]]:
        url = self._make_url("accounts")
        ctx = "Fetch accounts"
        resp = self.session.get(url)
        RetryingSession.ensure_ok(resp, ctx)
        data = RetryingSession.json_any(resp, ctx)
        if isinstance(data, Mapping):
            data = data.get("records", data.get("accounts"))
        if not isinstance(data, list):
            raise ApiError("Invalid accounts response: expected a list", context=ctx)
        rows = [row for row in data if isinstance(row, Mapping)]
        if len(rows) != len(data):
            LOGGER.warning("Skipped %d non-object account rows", len(data) - len(rows))
        LOGGER.debug("Fetched %d accounts from %s", len(rows), url)
        return rows

    def update_many_sync(self, account_ids: List[str]) -> List[Any]:
        url = self._make_url("accounts/update")
        ctx = "Update accounts"
        resp = self.session.post(url, json_body={"accountIds": account_ids})
        RetryingSession.ensure_ok(resp, ctx)
        data = RetryingSession.json_any(resp, ctx)
        if isinstance(data, Mapping):
            data = data.get("messages", data.get("results"))
        if not isinstance(data, list):
            raise ApiError("Invalid update response: expected a list", context=ctx)
        LOGGER.debug("Bulk update of %d accounts returned %d results", len(account_ids), len(data))
        return data

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


__all__ = ["AccountRestAdapter"]
