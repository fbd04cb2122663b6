from __future__ import annotations

from pathlib import Path

import pytest

from linkedviews.core.constants import EXIT_MS
from linkedviews.io.config import NYT_DATA_BASE_URL, DashboardSettings
from linkedviews.io.errors import ConfigError

_ENV_KEYS = [
    "LV_LOCALE",
    "LV_EXIT_MS",
    "LV_STATES_SOURCE",
    "LV_WIDTH",
    "LV_LOG_LEVEL",
    "LV_CACHE_TTL",
]


def _write_settings_toml(tmp: Path, content: str) -> Path:
    p = tmp / "linkedviews.toml"
    p.write_text(content)
    return p


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_settings_toml(
        tmp_path,
        """
        [dashboard]
        locale = "fr_FR"
        exit_ms = 250
        states_source = "toml-states.csv"
        """.strip(),
    )
    # Ensure cwd for DashboardSettings.from_toml() search
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("LV_LOCALE", "de_DE")
    monkeypatch.setenv("LV_EXIT_MS", "600")

    # Act
    s = DashboardSettings.load()

    # Assert precedence: env > TOML
    assert s.locale == "de_DE"
    assert s.exit_ms == 600.0  # env override
    assert s.states_source == "toml-states.csv"  # TOML only


def test_settings_from_toml_when_no_env(tmp_path: Path, monkeypatch) -> None:
    _write_settings_toml(
        tmp_path,
        """
        width = 1200
        log_level = "debug"
        cache_ttl = 0
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    s = DashboardSettings.load()

    # top-level keys are accepted without a [dashboard] table
    assert s.width == 1200.0
    assert s.log_level == "DEBUG"
    assert s.cache_ttl == 0


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        """
        [project]
        name = "demo"

        [tool.linkedviews]
        topology_path = "geo/us.json"
        """.strip()
    )
    monkeypatch.chdir(tmp_path)

    assert DashboardSettings.load().topology_path == "geo/us.json"


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    # No TOML, no env
    monkeypatch.chdir(tmp_path)

    s = DashboardSettings.load()

    # Defaults from DashboardSettings / linkedviews.core.constants
    assert s.data_base_url == NYT_DATA_BASE_URL
    assert s.exit_ms == EXIT_MS
    assert s.locale == "en_US"
    assert s.states_url == f"{NYT_DATA_BASE_URL}/us-states.csv"


def test_invalid_values_raise_config_error(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    monkeypatch.setenv("LV_WIDTH", "wide")
    with pytest.raises(ConfigError, match="width"):
        DashboardSettings.load()

    monkeypatch.setenv("LV_WIDTH", "800")
    monkeypatch.setenv("LV_LOG_LEVEL", "LOUD")
    with pytest.raises(ConfigError, match="log_level"):
        DashboardSettings.load()


def test_explicit_missing_or_broken_toml_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        DashboardSettings.from_toml(tmp_path / "nope.toml")

    broken = _write_settings_toml(tmp_path, "locale = ")
    with pytest.raises(ConfigError, match="cannot read"):
        DashboardSettings.from_toml(broken)


def test_local_sources_are_not_joined_to_base_url(tmp_path: Path) -> None:
    local = tmp_path / "states.csv"
    local.write_text("date,state,fips,cases,deaths\n")
    s = DashboardSettings(states_source=str(local), national_source="https://x.test/us.csv")

    assert s.states_url == str(local)
    assert s.national_url == "https://x.test/us.csv"
