"""PipelineContext — the per-invocation state flowing through all stages.

Created fresh for every analysis and discarded once the report is returned.
Intermediate planes (luminance, edges) live here so later stages reuse them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from lithoscope.engine.archetypes import DEFAULT_ARCHETYPES, Archetype
from lithoscope.engine.config import PipelineConfig
from lithoscope.engine.features import FeatureVector
from lithoscope.engine.labels import FossilLikelihood, Roundness
from lithoscope.engine.matcher import MatchResult
from lithoscope.engine.sampler import PixelSource, SampledImage


@dataclass
class PipelineContext:
    """Shared state for one analysis run."""

    # Where the pixels come from (decoded bytes, synthetic array, ...)
    source: PixelSource | None = None
    config: PipelineConfig = field(default_factory=PipelineConfig)
    archetypes: tuple[Archetype, ...] = DEFAULT_ARCHETYPES

    # --- Layer 0 ---
    sampled: SampledImage | None = None

    # --- Layer 1 ---
    luminance: NDArray[np.float64] | None = None
    edges: NDArray[np.float64] | None = None
    features: FeatureVector | None = None

    # --- Layer 2 ---
    match: MatchResult | None = None
    roundness: Roundness | None = None
    fossil_likelihood: FossilLikelihood | None = None

    # --- Layer 3 ---
    report: str = ""

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    timings_ms: dict[str, float] = field(default_factory=dict)

    def require(self, name: str) -> Any:
        """Return an upstream result, failing loudly if its stage did not run."""
        value = getattr(self, name)
        if value is None:
            raise RuntimeError(f"pipeline context has no '{name}'; upstream stage missing")
        return value
