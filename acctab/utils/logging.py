from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"
LEVEL_ENV = "ACCTAB_LOG_LEVEL"
DEBUG_ENVS = ("ACCTAB_DEBUG_LOGGING", "ACCTAB_DEBUG")

# Third-party loggers that flood DEBUG output with per-request noise.
_TRANSPORT_LOGGERS = ("urllib3", "requests", "httpx", "uvicorn.access")


def _parse_level(value: Optional[str]) -> Optional[int]:
    text = (value or "").strip()
    if not text:
        return None
    if text.isdigit():
        return int(text)
    candidate = logging.getLevelName(text.upper())
    return candidate if isinstance(candidate, int) else None


def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def env_level() -> Optional[int]:
    """Level forced by the environment, or ``None`` when nothing is set.

    ``ACCTAB_LOG_LEVEL`` wins; an unparsable value means INFO. Otherwise any
    truthy ``ACCTAB_DEBUG_LOGGING`` / ``ACCTAB_DEBUG`` means DEBUG.
    """
    raw = os.getenv(LEVEL_ENV)
    if raw and raw.strip():
        parsed = _parse_level(raw)
        return logging.INFO if parsed is None else parsed
    if any(_truthy(os.getenv(name)) for name in DEBUG_ENVS):
        return logging.DEBUG
    return None


def _quiet_transport(level: int) -> None:
    floor = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(max(level, floor))


def configure_root(default_level: int | str = logging.INFO) -> int:
    """
    Configure the root logger once with a compact format.

    Environment overrides:
      - ACCTAB_LOG_LEVEL: explicit log level (name or number)
      - ACCTAB_DEBUG_LOGGING / ACCTAB_DEBUG: truthy -> DEBUG

    HTTP client loggers stay at WARNING unless DEBUG is in effect.
    """
    if isinstance(default_level, str):
        fallback = _parse_level(default_level) or logging.INFO
    else:
        fallback = int(default_level)
    forced = env_level()
    effective = forced if forced is not None else fallback

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
    root.setLevel(effective)
    _quiet_transport(effective)
    return effective


def apply_debug_preference(debug_enabled: bool) -> int:
    """Apply the ``debug_logging`` setting to the root logger; env overrides win."""
    forced = env_level()
    if forced is not None:
        level = forced
    else:
        level = logging.DEBUG if debug_enabled else logging.INFO
    logging.getLogger().setLevel(level)
    _quiet_transport(level)
    return level


def level_name(level: int) -> str:
    return logging.getLevelName(level)


def env_requests_debug() -> bool:
    """Return True if environment variables force DEBUG logging."""
    forced = env_level()
    return forced is not None and forced <= logging.DEBUG
