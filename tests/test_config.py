"""
tests/test_config.py

Pytest unit tests for env-driven settings.

Coverage
--------
- .env line parsing and file loading (existing environment wins)
- Typed readers fall back to defaults on blank or malformed values
- Settings factories read and clamp environment values
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from adsheets.config import (
    _get_bool_env,
    _get_float_env,
    _get_int_env,
    _get_str_env,
    get_sheets_http_settings,
    get_tab_discovery_settings,
    load_env_files,
    parse_env_line,
)


@pytest.fixture()
def fresh_settings() -> Iterator[None]:
    get_sheets_http_settings.cache_clear()
    get_tab_discovery_settings.cache_clear()
    yield
    get_sheets_http_settings.cache_clear()
    get_tab_discovery_settings.cache_clear()


class TestEnvFiles:
    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("KEY=value", ("KEY", "value")),
            ('  QUOTED = "spaced value" ', ("QUOTED", "spaced value")),
            ("URL=https://x.test/?a=b", ("URL", "https://x.test/?a=b")),
            ("# comment=ignored", None),
            ("", None),
            ("no_equals_sign", None),
            ("=orphan", None),
        ],
    )
    def test_parse_env_line(self, line: str, expected: tuple[str, str] | None) -> None:
        assert parse_env_line(line) == expected

    def test_load_env_files_keeps_existing_values(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("ADSHEETS_A=from_env\nADSHEETS_B=from_env\n", encoding="utf-8")
        (tmp_path / ".env.local").write_text("ADSHEETS_C=from_local\n", encoding="utf-8")
        monkeypatch.setenv("ADSHEETS_A", "from_process")
        for name in ("ADSHEETS_B", "ADSHEETS_C"):
            monkeypatch.setenv(name, "placeholder")
            monkeypatch.delenv(name)

        load_env_files(tmp_path)

        assert os.environ["ADSHEETS_A"] == "from_process"
        assert os.environ["ADSHEETS_B"] == "from_env"
        assert os.environ["ADSHEETS_C"] == "from_local"


class TestTypedReaders:
    def test_missing_and_blank_values_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("ADSHEETS_MISSING", raising=False)
        monkeypatch.setenv("ADSHEETS_BLANK", "   ")

        assert _get_int_env("ADSHEETS_MISSING", 3) == 3
        assert _get_str_env("ADSHEETS_BLANK", "fallback") == "fallback"
        assert _get_bool_env("ADSHEETS_BLANK", True) is True

    def test_malformed_numbers_use_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ADSHEETS_NUMBER", "fifteen")

        assert _get_int_env("ADSHEETS_NUMBER", 7) == 7
        assert _get_float_env("ADSHEETS_NUMBER", 1.5) == 1.5

    def test_values_are_parsed(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ADSHEETS_INT", " 12 ")
        monkeypatch.setenv("ADSHEETS_FLOAT", "2.5")
        monkeypatch.setenv("ADSHEETS_BOOL", "Yes")
        monkeypatch.setenv("ADSHEETS_OFF", "off")

        assert _get_int_env("ADSHEETS_INT", 0) == 12
        assert _get_float_env("ADSHEETS_FLOAT", 0.0) == 2.5
        assert _get_bool_env("ADSHEETS_BOOL", False) is True
        assert _get_bool_env("ADSHEETS_OFF", True) is False


class TestSettingsFactories:
    def test_http_settings_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, fresh_settings: None
    ) -> None:
        monkeypatch.setenv("SHEETS_BASE_URL", "https://sheets.test/spreadsheets/")
        monkeypatch.setenv("SHEETS_HTTP_TIMEOUT_SECONDS", "0.2")
        monkeypatch.setenv("SHEETS_HTTP_MAX_RETRIES", "-4")
        monkeypatch.setenv("SHEETS_HTTP_RATE_LIMIT_PER_SECOND", "2")

        settings = get_sheets_http_settings()

        assert settings.base_url == "https://sheets.test/spreadsheets"
        assert settings.timeout_seconds == 1.0
        assert settings.max_retries == 0
        assert settings.rate_limit_per_second == 2.0

    def test_discovery_settings_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, fresh_settings: None
    ) -> None:
        monkeypatch.setenv("TAB_DISCOVERY_PROBE_MAX_GID", "5")
        monkeypatch.setenv("TAB_DISCOVERY_HYDRATE", "false")

        settings = get_tab_discovery_settings()

        assert settings.probe_max_gid == 5
        assert settings.hydrate_tabs is False
