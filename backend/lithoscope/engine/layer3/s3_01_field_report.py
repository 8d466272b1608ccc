"""S3.01 — Field Report.

Seven numbered sections behind the offline marker, same layout as the
cloud report so renderers can treat both alike.
"""

from __future__ import annotations

from lithoscope.engine.context import PipelineContext
from lithoscope.engine.registry import Layer, stage
from lithoscope.engine.report import compose_report


@stage(
    id="S3.01",
    layer=Layer.REPORTING,
    dependencies=["S2.01", "S2.02", "S2.03"],
    description="Compose the seven-section field report",
)
def field_report(ctx: PipelineContext) -> None:
    ctx.report = compose_report(
        ctx.require("match"),
        ctx.require("roundness"),
        ctx.require("fossil_likelihood"),
        ctx.require("features"),
    )
