from __future__ import annotations

from acctab.adapters.account_memory import InMemoryAccountBackend
from acctab.adapters.account_rest import AccountRestAdapter
from acctab.app.controller import AppController
from acctab.tests.unit.fakes import NotifierSpy
from acctab.usecases.update_accounts import FixedDelay, no_delay
from acctab.viewmodels.settings_vm import SettingsVM


def test_controller_without_url_uses_demo_backend() -> None:
    settings = SettingsVM()
    settings.update_delay_ms = 0

    controller = AppController(settings)

    assert controller.ensure_ready() is True
    assert isinstance(controller.backend, InMemoryAccountBackend)
    assert controller.demo_mode
    assert controller.uc_update.delay is no_delay


def test_controller_builds_rest_adapter_from_settings() -> None:
    settings = SettingsVM()
    settings.api_base_url = "http://crm.local/api"
    settings.api_key = "token"
    settings.request_timeout_s = 4
    settings.update_delay_ms = 250

    controller = AppController(settings)
    controller.ensure_ready()

    adapter = controller.backend
    assert isinstance(adapter, AccountRestAdapter)
    assert adapter.base_url == "http://crm.local/api"
    assert adapter.session.api_key == "token"
    assert adapter.session.cfg.request_timeout_s == 4
    assert controller.uc_update.delay == FixedDelay(0.25)
    assert not controller.demo_mode

    controller.reset()
    assert controller.backend is None
    assert controller.uc_fetch is None


def test_build_tables_vm_uses_page_size_and_categories() -> None:
    settings = SettingsVM()
    settings.page_size = 3
    settings.level_categories = ["Gold", "Silver", "Bronze"]

    vm = AppController(settings).build_tables_vm(NotifierSpy())

    assert vm.state.page.page_size == 3
    assert list(vm.categories) == ["Gold", "Silver", "Bronze"]
