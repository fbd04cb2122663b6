"""
linkedviews — Coordinated statistical views over a shared, derived dataset.

## Responsibilities
- Turn a dataset (and a static boundary topology) into keyed visual marks.
- Animate marks in, out and between datasets without recreating persisting marks.
- Keep every view synchronized on a single hover/selection state.
- Derive scales, colours and emphasis deterministically from data and interaction state.

## Subpackages
- core — constants, typing aliases, view schema, errors (zero-IO).
- viz — scales, palette, encoding policy, interaction state, reconciliation, tooltip.
- geo — topology decoding, region tables, geometry projector.
- scene — headless retained-mode substrate (frame scheduler, scene graph).
- views — bubble chart, choropleth and the dashboard that links them.
- io — data-pipeline collaborator (settings, cache, CSV loaders, daily metrics).

## Import DAG discipline
- core depends on stdlib + pydantic only.
- viz/scene/geo depend on core; views depend on viz/scene/geo.
- io depends on core and polars; it never imports views.
"""

from __future__ import annotations

__version__ = "0.1.0"
