"""Archetype matching — nearest archetype by weighted feature distance.

  dB    = |luminance − mid(luminance_range)| / 255
  dT    = |texture   − mid(texture_range)|   / 100
  dE    = |edge      − mid(edge_range)|      / 0.3
  dBias = 0 if color bias matches, else 0.5 (flat)
  distance = √(dB² + dT² + dE²) + dBias
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from lithoscope.engine.archetypes import Archetype
from lithoscope.engine.errors import ConfigurationError
from lithoscope.engine.features import FeatureVector

# Normalisers: full 8-bit luminance span, typical texture ceiling,
# typical edge-density ceiling.
_LUMINANCE_SCALE = 255.0
_TEXTURE_SCALE = 100.0
_EDGE_SCALE = 0.3

_BIAS_PENALTY = 0.5

# Offline confidence is capped below 50% so it never reads as cloud-grade.
_CONFIDENCE_FLOOR = 15
_CONFIDENCE_CEILING = 45
_CONFIDENCE_SCALE = 50.0


@dataclass(frozen=True)
class MatchResult:
    archetype: Archetype
    distance: float
    confidence: int


def _midpoint(bounds: tuple[float, float]) -> float:
    return (bounds[0] + bounds[1]) / 2


def archetype_distance(features: FeatureVector, archetype: Archetype) -> float:
    d_brightness = abs(features.avg_luminance - _midpoint(archetype.luminance_range)) / _LUMINANCE_SCALE
    d_texture = abs(features.texture_score - _midpoint(archetype.texture_range)) / _TEXTURE_SCALE
    d_edge = abs(features.normalized_edge_density - _midpoint(archetype.edge_range)) / _EDGE_SCALE
    d_bias = 0.0 if features.color_bias == archetype.color_bias else _BIAS_PENALTY
    return math.sqrt(d_brightness**2 + d_texture**2 + d_edge**2) + d_bias


def confidence_from_distance(distance: float) -> int:
    """clamp(round((1 − d/2) · 50), 15, 45), rounding halves up."""
    raw = math.floor((1 - distance / 2) * _CONFIDENCE_SCALE + 0.5)
    return max(_CONFIDENCE_FLOOR, min(_CONFIDENCE_CEILING, raw))


def match_archetype(features: FeatureVector, archetypes: Sequence[Archetype]) -> MatchResult:
    if not archetypes:
        raise ConfigurationError("archetype table is empty; cannot classify")

    best = archetypes[0]
    lowest = math.inf
    for archetype in archetypes:
        distance = archetype_distance(features, archetype)
        # Strict < keeps the earliest entry on ties
        if distance < lowest:
            lowest = distance
            best = archetype

    return MatchResult(archetype=best, distance=lowest, confidence=confidence_from_distance(lowest))
