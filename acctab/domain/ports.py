from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Literal, Mapping, Protocol, Sequence

Severity = Literal["success", "error"]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class AccountQueryPort(Protocol):
    """Loads the full, unfiltered account collection."""

    async def fetch_all(self) -> List[Mapping[str, Any]]: ...  # backend account objects


class AccountUpdatePort(Protocol):
    """Bulk update of a batch of accounts, one call per submission."""

    async def update_many(
        self, account_ids: Sequence[str]
    ) -> List[Any]: ...  # marker-prefixed strings or {"id", "success", "message"}


class NotificationPort(Protocol):
    """Fire-and-forget user-visible toasts."""

    def notify(self, title: str, message: str, severity: Severity) -> None: ...


class SettingsStoragePort(Protocol):
    """Persistence for user settings."""

    def save_user_prefs(self, prefs: Dict) -> None: ...
    def load_user_prefs(self) -> Dict: ...


DelayPolicy = Callable[[], Awaitable[None]]
