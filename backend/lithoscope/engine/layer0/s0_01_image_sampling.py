"""S0.01 — Image Sampling.

Read pixels from the injected source and box-resample them to the S×S grid.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.errors import ImageDecodeError
from lithoscope.engine.registry import Layer, stage
from lithoscope.engine.sampler import sample_image


@stage(
    id="S0.01",
    layer=Layer.SAMPLING,
    description="Resample the input image to the fixed analysis grid",
)
def image_sampling(ctx: PipelineContext) -> None:
    if ctx.source is None:
        raise ImageDecodeError("no image source supplied")
    ctx.sampled = sample_image(ctx.source.read_pixels(), size=ctx.config.sample_size)
