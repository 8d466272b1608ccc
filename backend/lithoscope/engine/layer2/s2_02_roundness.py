"""S2.02 — Roundness Class."""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.labels import classify_roundness
from lithoscope.engine.registry import Layer, stage


@stage(
    id="S2.02",
    layer=Layer.CLASSIFICATION,
    dependencies=["S1.02"],
    description="Classify clast roundness from edge density",
)
def roundness(ctx: PipelineContext) -> None:
    ctx.roundness = classify_roundness(ctx.require("features").normalized_edge_density)
