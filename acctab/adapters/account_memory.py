from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set

from acctab.domain.ports import AccountQueryPort, AccountUpdatePort
from acctab.domain.update_outcome import FAILURE_MARKER, SUCCESS_MARKER


def _demo_accounts() -> List[Dict[str, Any]]:
    owners = ("005A1", "005B2")
    names = (
        "Acme Corp", "Blue Harbor", "Cobalt Labs", "Delta Freight", "Evergreen Farms",
        "Falcon Air", "Granite Works", "Helios Energy", "Iris Optics", "Juniper Health",
        "Keystone Bank", "Lumen Retail", "Maple Foods", "Northwind", "Orion Media",
    )
    rows: List[Dict[str, Any]] = []
    for idx, name in enumerate(names, start=1):
        rows.append(
            {
                "Id": f"001{idx:03d}",
                "Name": name,
                "Phone": f"555-01{idx:02d}" if idx % 4 else None,
                "OwnerId": owners[idx % 2],
                "Level__c": "Level 1" if idx % 3 else "Level 2",
                "LastModifiedBy": {"Name": "Integration User"},
            }
        )
    return rows


@dataclass
class InMemoryAccountBackend(AccountQueryPort, AccountUpdatePort):
    """Offline substitute for ``AccountRestAdapter`` with deterministic responses.

    ``update_many`` promotes each known account one level and answers with
    marker-prefixed messages; ids listed in ``locked_ids`` fail.
    """

    accounts: List[Dict[str, Any]] = field(default_factory=_demo_accounts)
    locked_ids: Set[str] = field(default_factory=set)
    modified_by: str = "Bulk Updater"
    fail_next_fetch: Optional[Exception] = None
    fail_next_update: Optional[Exception] = None

    # ---------- AccountQueryPort ----------

    async def fetch_all(self) -> List[Mapping[str, Any]]:
        if self.fail_next_fetch is not None:
            exc, self.fail_next_fetch = self.fail_next_fetch, None
            raise exc
        return copy.deepcopy(self.accounts)

    # ---------- AccountUpdatePort ----------

    async def update_many(self, account_ids: Sequence[str]) -> List[Any]:
        if self.fail_next_update is not None:
            exc, self.fail_next_update = self.fail_next_update, None
            raise exc
        by_id = {str(row.get("Id")): row for row in self.accounts}
        messages: List[str] = []
        for account_id in account_ids:
            row = by_id.get(str(account_id))
            if row is None:
                messages.append(f"{FAILURE_MARKER} {account_id} failed: not found")
                continue
            if str(account_id) in self.locked_ids:
                messages.append(f"{FAILURE_MARKER} {account_id} failed: locked")
                continue
            row["Level__c"] = "Level 2" if row.get("Level__c") == "Level 1" else "Level 1"
            row["LastModifiedBy"] = {"Name": self.modified_by}
            messages.append(f"{SUCCESS_MARKER} {account_id} updated")
        return messages


__all__ = ["InMemoryAccountBackend"]
