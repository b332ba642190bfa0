from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..domain.entities import DEFAULT_LEVEL_CATEGORIES, DEFAULT_PAGE_SIZE
from ..utils.logging import env_requests_debug


@dataclass
class SettingsConfig:
    """Typed runtime settings that persist via StorageLocal."""

    api_base_url: str = ""
    request_timeout_s: int = 10
    retries: int = 2
    page_size: int = DEFAULT_PAGE_SIZE
    update_delay_ms: int = 2000
    level_categories: Tuple[str, ...] = DEFAULT_LEVEL_CATEGORIES


def _default_debug_logging() -> bool:
    return env_requests_debug()


class SettingsVM:
    """Keeps app settings state and validation, no I/O here."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save

        self.api_key: str = ""
        self.debug_logging: bool = _default_debug_logging()

    # ------------------------------------------------------------------
    # Properties bridging to the typed config
    # ------------------------------------------------------------------
    @property
    def api_base_url(self) -> str:
        return self.config.api_base_url

    @api_base_url.setter
    def api_base_url(self, value: str) -> None:
        self.config = replace(self.config, api_base_url=self._coerce_url(value))

    @property
    def request_timeout_s(self) -> int:
        return self.config.request_timeout_s

    @request_timeout_s.setter
    def request_timeout_s(self, value: int) -> None:
        coerced = self._coerce_int("request_timeout_s", value, minimum=1)
        self.config = replace(self.config, request_timeout_s=coerced)

    @property
    def retries(self) -> int:
        return self.config.retries

    @retries.setter
    def retries(self, value: int) -> None:
        self.config = replace(self.config, retries=self._coerce_int("retries", value, minimum=0))

    @property
    def page_size(self) -> int:
        return self.config.page_size

    @page_size.setter
    def page_size(self, value: int) -> None:
        self.config = replace(self.config, page_size=self._coerce_int("page_size", value, minimum=1))

    @property
    def update_delay_ms(self) -> int:
        return self.config.update_delay_ms

    @update_delay_ms.setter
    def update_delay_ms(self, value: int) -> None:
        coerced = self._coerce_int("update_delay_ms", value, minimum=0)
        self.config = replace(self.config, update_delay_ms=coerced)

    @property
    def level_categories(self) -> Tuple[str, ...]:
        return self.config.level_categories

    @level_categories.setter
    def level_categories(self, value: Any) -> None:
        self.config = replace(self.config, level_categories=self._coerce_categories(value))

    # ------------------------------------------------------------------
    def is_valid(self) -> bool:
        if self.api_base_url and not self.api_base_url.startswith(("http://", "https://")):
            return False
        return self.page_size > 0 and bool(self.level_categories)

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply persisted settings to the view-model."""

        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping of flat keys.")

        allowed_keys = {*SettingsConfig.__annotations__.keys(), "api_key", "debug_logging"}
        unknown = set(payload.keys()) - allowed_keys
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(sorted(str(key) for key in unknown))}")

        updates: Dict[str, Any] = {}
        for cfg_key in SettingsConfig.__annotations__.keys():
            if cfg_key in payload:
                updates[cfg_key] = self._coerce_config_value(cfg_key, payload[cfg_key])

        if updates:
            self.config = replace(self.config, **updates)

        if "api_key" in payload:
            self.api_key = self._coerce_optional_str(payload["api_key"])

        if "debug_logging" in payload:
            self.debug_logging = self._coerce_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["level_categories"] = list(self.config.level_categories)
        snapshot.update(
            {
                "api_key": self.api_key,
                "debug_logging": bool(self.debug_logging),
            }
        )
        return snapshot

    def cmd_save(self) -> None:
        if not self.is_valid():
            raise ValueError("Settings invalid")
        if self.on_save:
            self.on_save(self.to_dict())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _coerce_config_value(self, key: str, raw: Any) -> Any:
        if key == "api_base_url":
            return self._coerce_url(raw)
        if key == "request_timeout_s":
            return self._coerce_int(key, raw, minimum=1)
        if key == "page_size":
            return self._coerce_int(key, raw, minimum=1)
        if key in {"retries", "update_delay_ms"}:
            return self._coerce_int(key, raw, minimum=0)
        if key == "level_categories":
            return self._coerce_categories(raw)
        raise ValueError(f"Unhandled config field: {key}")

    @staticmethod
    def _coerce_url(value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise ValueError("api_base_url must be a string.")
        return value.strip().rstrip("/")

    @staticmethod
    def _coerce_optional_str(value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    @staticmethod
    def _coerce_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, (int, float)):
            return bool(value)
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)

    @staticmethod
    def _coerce_int(name: str, value: Any, *, minimum: Optional[int] = None) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        if isinstance(value, (int, float)):
            coerced = int(value)
        elif isinstance(value, str):
            try:
                coerced = int(value.strip())
            except (TypeError, ValueError) as exc:
                raise ValueError(f"{name} must be an integer.") from exc
        else:
            raise ValueError(f"{name} must be an integer.")
        if minimum is not None and coerced < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return coerced

    @staticmethod
    def _coerce_categories(value: Any) -> Tuple[str, ...]:
        if isinstance(value, str):
            items = [part.strip() for part in value.split(",")]
        elif isinstance(value, (list, tuple)):
            items = [str(part).strip() for part in value]
        else:
            raise ValueError("level_categories must be a list of names.")
        categories = tuple(dict.fromkeys(item for item in items if item))
        if not categories:
            raise ValueError("level_categories must not be empty.")
        return categories


def parse_settings_json(text: str) -> Dict[str, Any]:
    """Parse imported settings JSON into a mapping payload."""
    raw = json.loads(text)
    if not isinstance(raw, dict):
        raise ValueError("Imported settings must be a JSON object.")
    return dict(raw)


def default_settings_payload() -> dict:
    """Return a fresh snapshot containing the default settings payload."""
    return SettingsVM().to_dict()
