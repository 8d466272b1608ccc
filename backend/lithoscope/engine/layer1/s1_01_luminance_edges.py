"""S1.01 — Luminance & Edge Planes.

BT.601 luminance per pixel, then |discrete Laplacian| on the interior.
Both planes are kept on the context for the feature vector stage.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.features import edge_map, luminance_plane
from lithoscope.engine.registry import Layer, stage


@stage(
    id="S1.01",
    layer=Layer.FEATURES,
    dependencies=["S0.01"],
    description="Compute luminance and Laplacian edge planes",
)
def luminance_edges(ctx: PipelineContext) -> None:
    sampled = ctx.require("sampled")
    ctx.luminance = luminance_plane(sampled.pixels)
    ctx.edges = edge_map(ctx.luminance)
