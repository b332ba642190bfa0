"""NiceGUI runtime orchestration for the account tables.

This module composes the settings, controller and tables view-model for the
web runtime. It holds no widget code so it can be exercised without a browser.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Dict, Mapping, Optional

from acctab.adapters.storage_local import StorageLocal
from acctab.app.controller import AccountBackend, AppController
from acctab.domain.ports import NotificationPort, Severity
from acctab.utils.logging import apply_debug_preference
from acctab.viewmodels.account_tables_vm import AccountTablesVM
from acctab.viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)

_NOTIFY_TYPES: Dict[str, str] = {"success": "positive", "error": "negative"}


class NiceGuiNotifier(NotificationPort):
    """Notification sink rendering toasts through an injected ``notify`` call.

    ``acctab.web_ui.main`` passes ``nicegui.ui.notify``; the indirection keeps
    this module importable without a running NiceGUI app.
    """

    def __init__(self, notify: Callable[..., Any]) -> None:
        self._notify = notify

    def notify(self, title: str, message: str, severity: Severity) -> None:
        self._notify(
            message,
            caption=title,
            type=_NOTIFY_TYPES.get(severity, "info"),
            close_button="OK" if severity == "error" else False,
        )


class WebRuntime:
    """Settings and wiring shared by every browser session."""

    def __init__(
        self,
        *,
        storage: Optional[StorageLocal] = None,
        backend: Optional[AccountBackend] = None,
    ) -> None:
        self.status_message = "Ready."
        self.settings_vm = SettingsVM()
        self.storage = storage or StorageLocal(root_dir=os.environ.get("ACCTAB_STORAGE_ROOT") or ".")
        self._load_settings_defaults()
        self.controller = AppController(self.settings_vm, backend=backend)

    def settings_payload(self) -> Dict[str, Any]:
        return self.settings_vm.to_dict()

    def apply_settings_payload(self, payload: Mapping[str, Any], *, persist: bool = False) -> None:
        self.settings_vm.apply_dict(payload)
        apply_debug_preference(self.settings_vm.debug_logging)
        self.controller.reset()
        if persist:
            self.storage.save_user_prefs(self.settings_vm.to_dict())
        self.status_message = "Settings applied."

    def create_tables_vm(
        self,
        notifier: NotificationPort,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ) -> AccountTablesVM:
        """Build the per-session tables view-model."""
        vm = self.controller.build_tables_vm(notifier, on_change=on_change)
        if self.controller.demo_mode:
            self.status_message = "Demo data (no api_base_url configured)."
        else:
            self.status_message = f"Connected to {self.settings_vm.api_base_url}"
        return vm

    def _load_settings_defaults(self) -> None:
        try:
            payload = self.storage.load_user_prefs()
        except (OSError, ValueError) as exc:
            LOGGER.warning("Could not load local settings defaults: %s", exc)
            return
        try:
            self.settings_vm.apply_dict(payload)
        except ValueError as exc:
            LOGGER.warning("Could not apply local settings defaults: %s", exc)
        apply_debug_preference(self.settings_vm.debug_logging)


__all__ = ["NiceGuiNotifier", "WebRuntime"]
