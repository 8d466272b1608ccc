"""S1.02 — Feature Vector.

Channel averages, luminance mean/std, normalised edge density,
biomorphic index over the coarse cell grid, and color bias.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.features import extract_features
from lithoscope.engine.registry import Layer, stage


@stage(
    id="S1.02",
    layer=Layer.FEATURES,
    dependencies=["S1.01"],
    description="Reduce the sampled grid to a feature vector",
)
def feature_vector(ctx: PipelineContext) -> None:
    ctx.features = extract_features(
        ctx.require("sampled"),
        ctx.config,
        lum=ctx.require("luminance"),
        edges=ctx.require("edges"),
    )
