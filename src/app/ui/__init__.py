"""
Dashboard UI package.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - helpers: Small cross-cutting helpers (KPIs, chart selection events, widget keys).

Usage:
    from app.ui import streamlit_app
    streamlit_app(settings_path="linkedviews.toml", default_width=1100)
"""

from __future__ import annotations

from .app import streamlit_app

__all__ = [
    "streamlit_app",
]
