from __future__ import annotations

import logging
from typing import List, Tuple

from acctab.domain.ports import NotificationPort, Severity

LOGGER = logging.getLogger(__name__)


class LoggingNotifier(NotificationPort):
    """Notification sink that writes toasts to the log.

    Used when no UI is attached (headless runs, smoke tests). The last few
    notifications are kept so callers can show them later.
    """

    def __init__(self, keep: int = 50) -> None:
        self.keep = max(0, int(keep))
        self.history: List[Tuple[str, str, Severity]] = []

    def notify(self, title: str, message: str, severity: Severity) -> None:
        level = logging.INFO if severity == "success" else logging.WARNING
        LOGGER.log(level, "%s: %s", title, message)
        if self.keep:
            self.history.append((title, message, severity))
            del self.history[: -self.keep]
