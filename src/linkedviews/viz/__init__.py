"""
linkedviews.viz — Scales, colour tables, encoding policy, shared interaction state,
keyed reconciliation and tooltips.

## Responsibilities
- scales — padded numeric domains, immutable linear scales, ticks, SI labels.
- palette — order-stable categorical colour tables.
- encoding — pure (datum, scales, interaction) -> VisualAttributes policy.
- interaction — one hover/selection cell with synchronous publish/subscribe.
- reconcile — enter/update/exit state machine per key with cancellable timers.
- tooltip — tooltip content and deterministic placement.

## Import DAG discipline
- Depends on: linkedviews.core, linkedviews.scene, linkedviews.geo.regions.
- Must not import linkedviews.views or linkedviews.io.

## Examples
```python
from linkedviews.core import ViewSchema
from linkedviews.scene import FrameScheduler, SceneGraph
from linkedviews.viz import InteractionState, Reconciler, compute_scales, encode, state_color_table

schema = ViewSchema(key_field="abbr", x_field="cases", y_field="deaths")
scheduler = FrameScheduler()
engine = Reconciler(SceneGraph(scheduler), scheduler, schema.key_of)
state = InteractionState()
data = [{"abbr": "CA", "cases": 10, "deaths": 1}]
scales = compute_scales(data, schema, 400, 300, state_color_table())
engine.reconcile(data, lambda d, s: encode(d, scales, s), state.snapshot())
```
"""

from __future__ import annotations

from .encoding import CHART_STYLE, MAP_STYLE, MarkStyle, emphasis, encode, encode_region
from .interaction import InteractionChange, InteractionSnapshot, InteractionState
from .palette import ColorTable, state_color_table, year_color_table
from .reconcile import JoinResult, Mark, MarkCallbacks, Phase, Reconciler, Timings
from .scales import AxisDomain, LinearScale, ScaleSet, compute_axis_domain, compute_scales
from .tooltip import Tooltip, TooltipContent, place_tooltip, tooltip_content

__all__ = [
    "AxisDomain",
    "CHART_STYLE",
    "ColorTable",
    "InteractionChange",
    "InteractionSnapshot",
    "InteractionState",
    "JoinResult",
    "LinearScale",
    "MAP_STYLE",
    "Mark",
    "MarkCallbacks",
    "MarkStyle",
    "Phase",
    "Reconciler",
    "ScaleSet",
    "Timings",
    "Tooltip",
    "TooltipContent",
    "compute_axis_domain",
    "compute_scales",
    "emphasis",
    "encode",
    "encode_region",
    "place_tooltip",
    "state_color_table",
    "tooltip_content",
    "year_color_table",
]
