"""Use case for the batched account update."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, List

from acctab.domain.entities import UpdateOutcome
from acctab.domain.errors import UpdateTransportError, ValidationError
from acctab.domain.ports import AccountUpdatePort, DelayPolicy
from acctab.domain.update_outcome import classify_outcomes
from acctab.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


async def no_delay() -> None:
    """Delay policy that returns immediately."""
    return None


@dataclass(frozen=True)
class FixedDelay:
    """Delay policy sleeping a fixed number of seconds before the update."""

    seconds: float

    def __post_init__(self) -> None:
        if self.seconds < 0:
            raise ValueError("FixedDelay.seconds must be >= 0.")

    async def __call__(self) -> None:
        if self.seconds:
            await asyncio.sleep(self.seconds)


def delay_from_ms(delay_ms: int) -> DelayPolicy:
    """Build the delay policy configured by ``update_delay_ms``."""
    if delay_ms <= 0:
        return no_delay
    return FixedDelay(delay_ms / 1000.0)


@dataclass
class UpdateAccounts:
    """Submit one batched update for the selected account ids.

    Raises:
        ValidationError: The selection is empty; the port is not called.
        UpdateTransportError: The batch call itself failed.
    """

    update_port: AccountUpdatePort
    delay: DelayPolicy = no_delay

    async def __call__(self, account_ids: Iterable[str]) -> List[UpdateOutcome]:
        ids = sorted({str(item).strip() for item in account_ids if str(item).strip()})
        if not ids:
            raise ValidationError()

        await self.delay()
        try:
            items = await self.update_port.update_many(ids)
        except Exception as exc:
            mapped = map_api_error(exc, default_code="UPDATE_FAILED")
            LOGGER.warning("Bulk update of %d accounts failed: %s", len(ids), mapped.message)
            raise UpdateTransportError(cause=mapped) from exc
        return classify_outcomes(items or [])


__all__ = ["FixedDelay", "UpdateAccounts", "delay_from_ms", "no_delay"]
