"""S2.01 — Archetype Match.

Nearest archetype by weighted distance; confidence capped at 45%.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.matcher import match_archetype
from lithoscope.engine.registry import Layer, stage


@stage(
    id="S2.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["S1.02"],
    description="Match features against the archetype table",
)
def archetype_match(ctx: PipelineContext) -> None:
    ctx.match = match_archetype(ctx.require("features"), ctx.archetypes)
