"""Feature extraction — photometric and structural statistics of a sampled grid.

All statistics derive from one luminance plane (ITU-R BT.601 weights):
  texture    = population std of luminance
  edges      = |4·L(x,y) − N − S − E − W| on the (S−2)×(S−2) interior
  density    = Σ edges / (S² · 255)      ← full pixel count, not the interior
  biomorphic = std(cell sums) / mean(cell sums) over G×G cells
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from lithoscope.engine.config import PipelineConfig
from lithoscope.engine.sampler import SampledImage

# ITU-R BT.601 luma weights
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114

# 8-bit channel ceiling, used to normalise edge energy
_CHANNEL_MAX = 255.0

# Color bias margins. Red needs a wider margin over both other channels;
# green/blue need 10 over red but only 5 over the remaining channel.
_RED_MARGIN = 15
_GREEN_OVER_RED = 10
_GREEN_OVER_BLUE = 5
_BLUE_OVER_RED = 10
_BLUE_OVER_GREEN = 5


class ColorBias(str, enum.Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class FeatureVector:
    avg_r: float
    avg_g: float
    avg_b: float
    avg_luminance: float
    texture_score: float
    normalized_edge_density: float
    biomorphic_index: float
    color_bias: ColorBias

    @property
    def rgb(self) -> tuple[int, int, int]:
        """Channel averages rounded half-up for display."""
        return (_round_half_up(self.avg_r), _round_half_up(self.avg_g), _round_half_up(self.avg_b))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def luminance_plane(pixels: NDArray[np.uint8]) -> NDArray[np.float64]:
    """Per-pixel perceptual luminance, computed once and reused."""
    rgb = pixels.astype(np.float64)
    return _LUMA_R * rgb[:, :, 0] + _LUMA_G * rgb[:, :, 1] + _LUMA_B * rgb[:, :, 2]


def edge_map(lum: NDArray[np.float64]) -> NDArray[np.float64]:
    """Discrete Laplacian magnitude; the 1-pixel border stays zero."""
    edges = np.zeros_like(lum)
    center = lum[1:-1, 1:-1]
    # Paired sums keep a uniform plane exactly zero: (x+x)+(x+x) == 4x
    neighbors = (lum[:-2, 1:-1] + lum[2:, 1:-1]) + (lum[1:-1, :-2] + lum[1:-1, 2:])
    edges[1:-1, 1:-1] = np.abs(4.0 * center - neighbors)
    return edges


def cell_edge_sums(edges: NDArray[np.float64], cell_size: int) -> NDArray[np.float64]:
    """Sum edge energy into a G×G grid of cell_size×cell_size cells."""
    size = edges.shape[0]
    g = size // cell_size
    return edges.reshape(g, cell_size, g, cell_size).sum(axis=(1, 3))


def biomorphic_index(cell_sums: NDArray[np.float64]) -> float:
    """Coefficient of variation of cell edge energy; 0 when there is no energy."""
    mean = float(np.mean(cell_sums))
    if mean <= 0.0:
        return 0.0
    return float(np.std(cell_sums) / mean)


def detect_color_bias(avg_r: float, avg_g: float, avg_b: float) -> ColorBias:
    if avg_r > avg_g + _RED_MARGIN and avg_r > avg_b + _RED_MARGIN:
        return ColorBias.RED
    if avg_g > avg_r + _GREEN_OVER_RED and avg_g > avg_b + _GREEN_OVER_BLUE:
        return ColorBias.GREEN
    if avg_b > avg_r + _BLUE_OVER_RED and avg_b > avg_g + _BLUE_OVER_GREEN:
        return ColorBias.BLUE
    return ColorBias.NEUTRAL


def extract_features(
    sampled: SampledImage,
    config: PipelineConfig | None = None,
    *,
    lum: NDArray[np.float64] | None = None,
    edges: NDArray[np.float64] | None = None,
) -> FeatureVector:
    """Compute the FeatureVector of a sampled grid.

    ``lum`` and ``edges`` may be passed in when a caller already holds them,
    so the luminance plane is never computed twice.
    """
    config = config or PipelineConfig()
    pixels = sampled.pixels
    size = pixels.shape[0]
    count = size * size

    if lum is None:
        lum = luminance_plane(pixels)
    if edges is None:
        edges = edge_map(lum)

    avg_r = float(np.mean(pixels[:, :, 0], dtype=np.float64))
    avg_g = float(np.mean(pixels[:, :, 1], dtype=np.float64))
    avg_b = float(np.mean(pixels[:, :, 2], dtype=np.float64))

    avg_lum = float(np.mean(lum))
    texture = float(np.sqrt(np.mean((lum - avg_lum) ** 2)))
    density = float(np.sum(edges)) / (count * _CHANNEL_MAX)
    bio = biomorphic_index(cell_edge_sums(edges, config.cell_size))

    return FeatureVector(
        avg_r=avg_r,
        avg_g=avg_g,
        avg_b=avg_b,
        avg_luminance=avg_lum,
        texture_score=texture,
        normalized_edge_density=density,
        biomorphic_index=bio,
        color_bias=detect_color_bias(avg_r, avg_g, avg_b),
    )
