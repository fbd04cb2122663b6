"""
Custom exceptions for the linkedviews.io module.

Purpose
- Provide data-layer error types for the collaborator that feeds the views.
- Keep linkedviews.core as the source of truth for schema/topology errors
  (see linkedviews.core.errors).

Source of truth and boundaries
- The visualization core never raises on malformed data; it degrades per mark.
- linkedviews.io raises Data* errors for fetch/shape/config concerns:
  - ConfigError: invalid settings value or unreadable settings file.
  - DataFetchError: a source could not be read (network, missing file, bad CSV).
  - DataShapeError: a source was read but lacks required columns.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations

__all__ = ["DataError", "ConfigError", "DataFetchError", "DataShapeError"]


class DataError(Exception):
    """
    Base class for data-layer errors in linkedviews.io.

    Notes:
        The Streamlit shell catches this to show one error panel instead of charts.
    """


class ConfigError(DataError):
    """
    Raised when dashboard configuration is invalid.

    Examples:
        - A non-numeric LV_WIDTH
        - A linkedviews.toml that is not valid TOML
    """


class DataFetchError(DataError):
    """
    Raised when a CSV source cannot be fetched or parsed.

    Notes:
        Wraps the underlying requests/polars/OS error as __cause__.
    """


class DataShapeError(DataError):
    """
    Raised when a parsed source is missing required columns.
    """
