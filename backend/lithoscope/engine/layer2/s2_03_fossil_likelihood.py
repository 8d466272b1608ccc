"""S2.03 — Fossil Likelihood.

High spatial unevenness of edge energy is read as a weak hint of
biomorphic structure. The stricter "high" threshold is checked first.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.labels import classify_fossil_likelihood
from lithoscope.engine.registry import Layer, stage


@stage(
    id="S2.03",
    layer=Layer.CLASSIFICATION,
    dependencies=["S1.02"],
    description="Grade fossil likelihood from the biomorphic index",
)
def fossil_likelihood(ctx: PipelineContext) -> None:
    features = ctx.require("features")
    ctx.fossil_likelihood = classify_fossil_likelihood(
        features.biomorphic_index, features.normalized_edge_density
    )
