"""
Configuration for the linkedviews.io module and the dashboard shell.

Defines DashboardSettings, a frozen dataclass carrying runtime configuration for
data sources, geometry, locale, logging, animation durations and layout. Animation
defaults are sourced from linkedviews.core.constants (the single source of truth).

Precedence
- environment (LV_ prefix) > TOML > defaults.
- TOML search order: ./linkedviews.toml ([dashboard] table or top-level keys),
  then ./pyproject.toml under [tool.linkedviews].

Import DAG discipline
- Depends only on stdlib and linkedviews.core.constants.
- Does not import higher layers (viz, views, app).
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from linkedviews.core.constants import ENTER_MS, EXIT_MS, UPDATE_MS

from .errors import ConfigError

__all__ = ["NYT_DATA_BASE_URL", "DashboardSettings"]

NYT_DATA_BASE_URL = "https://raw.githubusercontent.com/nytimes/covid-19-data/master"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _positive(v: Any) -> float:
    out = float(v)
    if out <= 0:
        raise ValueError(f"must be > 0, got {out}")
    return out


def _non_negative(v: Any) -> float:
    out = float(v)
    if out < 0:
        raise ValueError(f"must be >= 0, got {out}")
    return out


def _level(v: Any) -> str:
    out = str(v).strip().upper()
    if out not in _LOG_LEVELS:
        raise ValueError(f"unknown log level {v!r}")
    return out


def _optional_str(v: Any) -> str | None:
    out = str(v).strip()
    return out or None


@dataclass(frozen=True)
class DashboardSettings:
    """
    Runtime settings for the data layer and the dashboard shell.

    Attributes:
        data_base_url (str): Base URL joined with relative CSV sources.
        states_source (str): Per-state daily CSV (relative name, URL or local path).
        national_source (str): National daily CSV (relative name, URL or local path).
        topology_path (str): TopoJSON boundary file.
        topology_object (str): Geometry collection name inside the topology.
        locale (str): Locale for tooltip number separators (e.g. "en_US", "de_DE").
        log_level (str): Root log level for setup_logging.
        log_file (str | None): Optional log file path.
        enter_ms (float): Entry animation duration.
        update_ms (float): Update animation duration.
        exit_ms (float): Exit animation duration.
        width (float): Dashboard container width in pixels.
        chart_height (float): Height of each bubble chart in pixels.
        request_timeout (float): Seconds before a remote CSV fetch gives up.
        cache_ttl (int): Seconds the shell keeps fetched data (0 = forever).

    Examples:
        >>> DashboardSettings().source_url("us.csv")
        'https://raw.githubusercontent.com/nytimes/covid-19-data/master/us.csv'
    """

    data_base_url: str = NYT_DATA_BASE_URL
    states_source: str = "us-states.csv"
    national_source: str = "us.csv"
    topology_path: str = "data/states-10m.json"
    topology_object: str = "states"
    locale: str = "en_US"
    log_level: str = "INFO"
    log_file: str | None = None
    enter_ms: float = ENTER_MS
    update_ms: float = UPDATE_MS
    exit_ms: float = EXIT_MS
    width: float = 960.0
    chart_height: float = 400.0
    request_timeout: float = 30.0
    cache_ttl: int = 3600

    def source_url(self, source: str) -> str:
        """Resolve a source: URLs and existing local paths as-is, else joined to the base URL."""
        if "://" in source or Path(source).exists():
            return source
        return f"{self.data_base_url.rstrip('/')}/{source.lstrip('/')}"

    @property
    def states_url(self) -> str:
        return self.source_url(self.states_source)

    @property
    def national_url(self) -> str:
        return self.source_url(self.national_source)

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(
        cls, base: DashboardSettings, cfg: dict[str, Any] | None
    ) -> DashboardSettings:
        """Apply a loose config mapping onto settings, returning a new instance.

        Unknown keys are ignored; values that cannot be converted raise ConfigError.
        """
        if not isinstance(cfg, dict):
            return base
        s = base
        for name, convert in _CONVERTERS.items():
            if name not in cfg:
                continue
            try:
                s = replace(s, **{name: convert(cfg[name])})
            except (TypeError, ValueError) as exc:
                raise ConfigError(f"invalid value for {name!r}: {cfg[name]!r} ({exc})") from exc
        return s

    @classmethod
    def from_env(
        cls, base: DashboardSettings | None = None, prefix: str = "LV_"
    ) -> DashboardSettings:
        """
        Build settings from environment variables. Precedence is env > base > defaults.

        Every field is recognized as <prefix><FIELD_NAME>, e.g. LV_LOCALE, LV_EXIT_MS,
        LV_STATES_SOURCE. Empty variables are ignored.
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for f in fields(cls):
            v = os.getenv(prefix + f.name.upper())
            if v:
                mapping[f.name] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> DashboardSettings:
        """
        Build settings from a TOML file.

        Search order when `path` is None:
            1) ./linkedviews.toml (with either a [dashboard] table or top-level keys)
            2) ./pyproject.toml under [tool.linkedviews]

        Returns defaults if no file is present. An explicit path that does not exist,
        or any file that is not valid TOML, raises ConfigError.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any]:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError) as exc:
                raise ConfigError(f"cannot read settings from {p}: {exc}") from exc

        cand: list[Path] = []
        if path is not None:
            explicit = Path(path)
            if not explicit.exists():
                raise ConfigError(f"settings file not found: {explicit}")
            cand.append(explicit)
        else:
            cand.append(Path.cwd() / "linkedviews.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("linkedviews") if isinstance(tool, dict) else None
            elif isinstance(data.get("dashboard"), dict):
                cfg = data["dashboard"]
            else:
                cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> DashboardSettings:
        """
        Load settings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (linkedviews.toml, pyproject.toml).

        Returns:
            DashboardSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s


_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "data_base_url": str,
    "states_source": str,
    "national_source": str,
    "topology_path": str,
    "topology_object": str,
    "locale": str,
    "log_level": _level,
    "log_file": _optional_str,
    "enter_ms": _non_negative,
    "update_ms": _non_negative,
    "exit_ms": _non_negative,
    "width": _positive,
    "chart_height": _positive,
    "request_timeout": _positive,
    "cache_ttl": int,
}
