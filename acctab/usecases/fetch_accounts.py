"""Use case for loading the full account collection into the record store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from acctab.domain.entities import AccountRecord
from acctab.domain.errors import FETCH_FAILED_MESSAGE, FetchError
from acctab.domain.ports import AccountQueryPort
from acctab.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass
class FetchAccounts:
    """Use-case callable returning typed records for every backend account.

    Rows that cannot be converted (missing ``Id``, not an object) are skipped
    with a warning instead of failing the whole load.
    """

    query_port: AccountQueryPort

    async def __call__(self) -> List[AccountRecord]:
        try:
            payload = await self.query_port.fetch_all()
        except Exception as exc:
            mapped = map_api_error(
                exc,
                default_code="FETCH_FAILED",
                default_message=FETCH_FAILED_MESSAGE,
            )
            message = FETCH_FAILED_MESSAGE
            if mapped.message and mapped.message != FETCH_FAILED_MESSAGE:
                message = f"{FETCH_FAILED_MESSAGE} {mapped.message}"
            raise FetchError(message, cause=mapped) from exc

        records: List[AccountRecord] = []
        for row in payload or []:
            try:
                records.append(AccountRecord.from_payload(row))
            except (TypeError, ValueError) as exc:
                LOGGER.warning("Skipping account row: %s", exc)
        return records


__all__ = ["FetchAccounts"]
