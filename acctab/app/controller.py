"""Adapter and use-case wiring for the account tables runtime.

This module owns lazy construction of the backend adapter and the use-case
objects that depend on values in
:class:`acctab.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Union

from ..adapters.account_memory import InMemoryAccountBackend
from ..adapters.account_rest import AccountRestAdapter
from ..domain.ports import NotificationPort
from ..usecases.fetch_accounts import FetchAccounts
from ..usecases.update_accounts import UpdateAccounts, delay_from_ms
from ..viewmodels.account_tables_vm import AccountTablesVM
from ..viewmodels.settings_vm import SettingsVM

LOGGER = logging.getLogger(__name__)

AccountBackend = Union[AccountRestAdapter, InMemoryAccountBackend]


class AppController:
    """Create and cache the backend adapter and use cases from settings state.

    Without an ``api_base_url`` the controller falls back to the in-memory
    demo backend so the UI stays usable offline.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        backend: Optional[AccountBackend] = None,
    ) -> None:
        self.settings_vm = settings_vm
        self._injected_backend = backend
        self._backend: Optional[AccountBackend] = backend
        self.uc_fetch: Optional[FetchAccounts] = None
        self.uc_update: Optional[UpdateAccounts] = None

    @property
    def backend(self) -> Optional[AccountBackend]:
        """Return the cached adapter serving both account ports."""
        return self._backend

    @property
    def demo_mode(self) -> bool:
        return isinstance(self._backend, InMemoryAccountBackend)

    def reset(self) -> None:
        """Drop cached adapters and use cases so the next call rebuilds them.

        A backend passed to the constructor survives the reset.
        """
        self._backend = self._injected_backend
        self.uc_fetch = None
        self.uc_update = None

    def ensure_ready(self) -> bool:
        """Ensure the backend and use cases exist for the current settings."""
        if self._backend is None:
            base_url = self.settings_vm.api_base_url
            if base_url:
                self._backend = AccountRestAdapter(
                    base_url,
                    self.settings_vm.api_key or None,
                    request_timeout_s=self.settings_vm.request_timeout_s,
                    retries=self.settings_vm.retries,
                )
            else:
                LOGGER.info("No api_base_url configured; using in-memory demo accounts")
                self._backend = InMemoryAccountBackend()

        if self.uc_fetch is None:
            self.uc_fetch = FetchAccounts(self._backend)
        if self.uc_update is None:
            self.uc_update = UpdateAccounts(
                self._backend,
                delay=delay_from_ms(self.settings_vm.update_delay_ms),
            )
        return True

    def build_tables_vm(
        self,
        notifier: NotificationPort,
        *,
        on_change: Optional[Callable[[], None]] = None,
    ) -> AccountTablesVM:
        """Return a fresh tables view-model bound to the cached use cases."""
        self.ensure_ready()
        return AccountTablesVM(
            uc_fetch=self.uc_fetch,
            uc_update=self.uc_update,
            notifier=notifier,
            page_size=self.settings_vm.page_size,
            categories=self.settings_vm.level_categories,
            on_change=on_change,
        )


__all__ = ["AppController"]
