"""
Dashboard app entrypoint.

This module provides the CLI entrypoint to launch the Streamlit UI. It defers
all UI composition to the app.ui package and exists solely to start Streamlit
programmatically or render directly when already running under Streamlit.

Usage:
    - Python execution (hands process to Streamlit):
        uv run python -m app.main --config linkedviews.toml --width 1100

    - Streamlit direct:
        streamlit run src/app/main.py -- --config linkedviews.toml --width 1100
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

from app.ui import streamlit_app


def _parser(add_help: bool = True) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Linked-views COVID-19 dashboard", add_help=add_help
    )
    parser.add_argument("--config", default=None, help="Settings TOML file (default: discovery)")
    parser.add_argument(
        "--width",
        type=float,
        default=None,
        help="Container width in pixels (default: settings.width).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint that launches Streamlit with the dashboard UI.

    If already executing within a Streamlit server (environment variable
    STREAMLIT_SERVER_PORT is set), this function renders the app directly.
    Otherwise, it execs "python -m streamlit run <this_module>" to leverage
    Streamlit's reloader and argument parsing, passing through any supported
    options after "--".

    Args:
        argv (list[str] | None): Optional list of CLI arguments. If None,
            sys.argv[1:] is used.
    """
    args = list(sys.argv[1:] if argv is None else argv)
    ns = _parser().parse_args(args)

    # If invoked within Streamlit, just render
    if os.environ.get("STREAMLIT_SERVER_PORT"):
        streamlit_app(settings_path=ns.config, default_width=ns.width)
        return

    # Otherwise, exec streamlit run on this module to take over the process
    app_path = Path(__file__).resolve()
    cmd = [sys.executable, "-m", "streamlit", "run", str(app_path)]

    passthrough: list[str] = []
    if ns.config:
        passthrough += ["--config", ns.config]
    if ns.width is not None:
        passthrough += ["--width", str(ns.width)]
    if passthrough:
        cmd += ["--"] + passthrough

    try:
        os.execv(sys.executable, cmd)
    except OSError:
        subprocess.run(cmd, check=False)


if __name__ == "__main__":
    # Options arrive after '--' when using `streamlit run`
    known, _ = _parser(add_help=False).parse_known_args(sys.argv[1:])
    streamlit_app(settings_path=known.config, default_width=known.width)
