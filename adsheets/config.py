"""
adsheets/config.py

Environment-driven configuration for sheet fetching and tab discovery.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import TypeVar

DEFAULT_SHEETS_BASE_URL = "https://docs.google.com/spreadsheets"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
ENV_FILENAMES: tuple[str, ...] = (".env", ".env.local")
TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

_T = TypeVar("_T")


def parse_env_line(line: str) -> tuple[str, str] | None:
    """
    Split one ``KEY=VALUE`` line; comments, blanks and bare words give ``None``.
    """

    stripped = line.strip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return None
    key, value = (part.strip() for part in stripped.split("=", 1))
    if not key:
        return None
    return key, value.strip("\"'")


def load_env_files(project_root: Path | None = None) -> None:
    """
    Copy ``.env`` / ``.env.local`` entries into the process environment.

    Variables already set in the environment win.
    """

    root = project_root or Path(__file__).resolve().parents[1]
    for env_path in (root / filename for filename in ENV_FILENAMES):
        if not env_path.is_file():
            continue
        for line in env_path.read_text(encoding="utf-8").splitlines():
            entry = parse_env_line(line)
            if entry is not None:
                os.environ.setdefault(*entry)


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _read_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_typed_env(name: str, default: _T, cast: Callable[[str], _T]) -> _T:
    raw_value = _read_env(name)
    if raw_value is None:
        return default
    try:
        return cast(raw_value)
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    return _get_typed_env(name, default, lambda raw: raw.lower() in TRUTHY_VALUES)


def _get_int_env(name: str, default: int) -> int:
    return _get_typed_env(name, default, int)


def _get_float_env(name: str, default: float) -> float:
    return _get_typed_env(name, default, float)


def _get_str_env(name: str, default: str) -> str:
    return _get_typed_env(name, default, str)


@dataclass(frozen=True)
class SheetsHTTPSettings:
    """
    HTTP behavior settings for the Google Sheets document fetcher.

    ``max_retries`` defaults to 0: a failed fetch is reported straight back
    so the discovery chain can move on to its next strategy.
    ``rate_limit_per_second`` of 0 disables request spacing.
    """

    base_url: str = DEFAULT_SHEETS_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 15.0
    max_retries: int = 0
    backoff_initial_seconds: float = 0.5
    backoff_multiplier: float = 2.0
    rate_limit_per_second: float = 0.0


@dataclass(frozen=True)
class TabDiscoverySettings:
    """
    Runtime settings for tab discovery.
    """

    probe_max_gid: int = 20
    hydrate_tabs: bool = True


@lru_cache(maxsize=1)
def get_sheets_http_settings() -> SheetsHTTPSettings:
    """
    Return cached fetcher HTTP settings from environment variables.
    """

    return SheetsHTTPSettings(
        base_url=_get_str_env("SHEETS_BASE_URL", DEFAULT_SHEETS_BASE_URL).rstrip("/"),
        user_agent=_get_str_env("SHEETS_HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        timeout_seconds=max(1.0, _get_float_env("SHEETS_HTTP_TIMEOUT_SECONDS", 15.0)),
        max_retries=max(0, _get_int_env("SHEETS_HTTP_MAX_RETRIES", 0)),
        backoff_initial_seconds=max(0.1, _get_float_env("SHEETS_HTTP_BACKOFF_INITIAL_SECONDS", 0.5)),
        backoff_multiplier=max(1.0, _get_float_env("SHEETS_HTTP_BACKOFF_MULTIPLIER", 2.0)),
        rate_limit_per_second=max(0.0, _get_float_env("SHEETS_HTTP_RATE_LIMIT_PER_SECOND", 0.0)),
    )


@lru_cache(maxsize=1)
def get_tab_discovery_settings() -> TabDiscoverySettings:
    """
    Return cached tab discovery settings from environment variables.
    """

    return TabDiscoverySettings(
        probe_max_gid=max(0, _get_int_env("TAB_DISCOVERY_PROBE_MAX_GID", 20)),
        hydrate_tabs=_get_bool_env("TAB_DISCOVERY_HYDRATE", True),
    )
