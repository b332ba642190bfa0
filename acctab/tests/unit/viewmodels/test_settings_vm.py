from __future__ import annotations

import json

import pytest

from acctab.viewmodels.settings_vm import SettingsVM, default_settings_payload, parse_settings_json


def test_apply_dict_and_to_dict_roundtrip() -> None:
    vm = SettingsVM()

    vm.apply_dict(
        {
            "api_base_url": " https://crm.example.com/api/ ",
            "api_key": " token ",
            "request_timeout_s": "15",
            "retries": 0,
            "page_size": 10,
            "update_delay_ms": 0,
            "level_categories": "Gold, Silver, Gold",
            "debug_logging": "yes",
        }
    )

    payload = vm.to_dict()
    assert payload["api_base_url"] == "https://crm.example.com/api"
    assert payload["api_key"] == "token"
    assert payload["request_timeout_s"] == 15
    assert payload["page_size"] == 10
    assert payload["level_categories"] == ["Gold", "Silver"]
    assert payload["debug_logging"] is True

    other = SettingsVM()
    other.apply_dict(payload)
    assert other.to_dict() == payload


def test_apply_dict_rejects_unknown_keys_and_bad_values() -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError, match="Unsupported settings keys"):
        vm.apply_dict({"api_base_urls": {}})
    with pytest.raises(ValueError):
        vm.apply_dict({"page_size": 0})
    with pytest.raises(ValueError):
        vm.apply_dict({"update_delay_ms": -5})
    with pytest.raises(ValueError):
        vm.apply_dict({"retries": True})
    with pytest.raises(ValueError):
        vm.apply_dict({"level_categories": []})


def test_cmd_save_validates_url() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)

    vm.api_base_url = "crm.example.com"
    with pytest.raises(ValueError):
        vm.cmd_save()

    vm.api_base_url = "http://crm.example.com"
    vm.cmd_save()
    assert saved[0]["api_base_url"] == "http://crm.example.com"


def test_defaults() -> None:
    payload = default_settings_payload()

    assert payload["page_size"] == 5
    assert payload["update_delay_ms"] == 2000
    assert payload["level_categories"] == ["Level 1", "Level 2"]


def test_parse_settings_json_rejects_non_object() -> None:
    assert parse_settings_json(json.dumps({"page_size": 3})) == {"page_size": 3}
    with pytest.raises(ValueError):
        parse_settings_json(json.dumps(["not", "an", "object"]))
