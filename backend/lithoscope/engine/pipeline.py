"""Pipeline orchestrator — runs the analysis stages in dependency order.

A failing stage aborts the run: its exception propagates to the caller
unchanged (ImageDecodeError, ConfigurationError, ...).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Generator, Sequence
from typing import Any

from lithoscope.engine.archetypes import DEFAULT_ARCHETYPES, Archetype
from lithoscope.engine.config import PipelineConfig
from lithoscope.engine.context import PipelineContext
from lithoscope.engine.registry import StageRegistry, StageSpec, load_stages
from lithoscope.engine.sampler import ArrayPixelSource, EncodedImageSource, PixelSource

logger = logging.getLogger(__name__)


class Pipeline:
    """Runs the offline heuristic analysis over one image at a time.

    Holds only static configuration; every call builds its own context, so a
    single instance can serve concurrent callers.
    """

    def __init__(
        self,
        registry: StageRegistry | None = None,
        config: PipelineConfig | None = None,
        archetypes: Sequence[Archetype] | None = None,
    ) -> None:
        self.registry = registry or load_stages()
        self.config = config or PipelineConfig()
        self.config.validate()
        self.archetypes = tuple(archetypes) if archetypes is not None else DEFAULT_ARCHETYPES

    def new_context(self, source: PixelSource) -> PipelineContext:
        return PipelineContext(source=source, config=self.config, archetypes=self.archetypes)

    def run(self, ctx: PipelineContext) -> PipelineContext:
        """Run every stage on ``ctx`` and return it."""
        start = time.perf_counter()
        ordered = self.registry.resolve_order()
        logger.debug("Pipeline: %d stages queued", len(ordered))

        for spec in ordered:
            self._run_stage(ctx, spec)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Pipeline complete: %d stages in %.1fms",
            len(ctx.completed_stages),
            total,
        )
        return ctx

    def run_streaming(self, ctx: PipelineContext) -> Generator[dict[str, Any], None, None]:
        """Run the pipeline, yielding a progress dict before and after each stage.

        ``ctx`` is mutated in place, so once the generator is exhausted it holds
        the same results as ``run()``. A failing stage yields an ``error``
        event and then re-raises.
        """
        ordered = self.registry.resolve_order()
        total = len(ordered)

        for i, spec in enumerate(ordered):
            event = {
                "stage_id": spec.id,
                "description": spec.description,
                "layer": spec.layer.name,
                "index": i,
                "total": total,
                "elapsed_ms": 0.0,
                "status": "running",
                "error": "",
            }
            yield event

            try:
                self._run_stage(ctx, spec)
            except Exception as e:
                yield {**event, "status": "error", "error": str(e)}
                raise

            yield {**event, "status": "ok", "elapsed_ms": ctx.timings_ms[spec.id]}

    def analyze(self, source: PixelSource) -> PipelineContext:
        return self.run(self.new_context(source))

    def analyze_bytes(self, data: bytes) -> str:
        """Encoded image bytes in, field report out."""
        return self.analyze(EncodedImageSource(data)).report

    def analyze_pixels(self, pixels: Any) -> str:
        """Decoded H×W×3 pixel array in, field report out."""
        return self.analyze(ArrayPixelSource(pixels)).report

    def _run_stage(self, ctx: PipelineContext, spec: StageSpec) -> None:
        t0 = time.perf_counter()
        try:
            spec.fn(ctx)
        except Exception as e:
            logger.warning("  %s FAILED: %s", spec.id, e)
            raise
        elapsed = round((time.perf_counter() - t0) * 1000, 3)
        ctx.completed_stages.add(spec.id)
        ctx.timings_ms[spec.id] = elapsed
        logger.debug("  %s completed in %.1fms", spec.id, elapsed)


def create_pipeline(
    config: PipelineConfig | None = None,
    archetypes: Sequence[Archetype] | None = None,
) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(config=config, archetypes=archetypes)
