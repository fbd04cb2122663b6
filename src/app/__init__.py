"""
Top-level Streamlit app package.

This package hosts the interactive COVID-19 dashboard (Streamlit) decoupled from
the linkedviews.* library modules. The headless views, scales and interaction
state live under linkedviews.*; the Streamlit UI shell, Altair rendering and
cached data access live here.

CLI entrypoint (configured in pyproject.toml):
    linkedviews-app = app.main:main
"""
