"""Archetype table — ordered reference classes the matcher compares against.

Order is a priority ranking: on equal distance the earlier entry wins.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, FiniteFloat, ValidationError, model_validator

from lithoscope.engine.errors import ConfigurationError
from lithoscope.engine.features import ColorBias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Archetype:
    name: str
    luminance_range: tuple[float, float]
    texture_range: tuple[float, float]
    edge_range: tuple[float, float]
    color_bias: ColorBias
    description: str
    heavy_mineral_potential: str = "Low"


DEFAULT_ARCHETYPES: tuple[Archetype, ...] = (
    Archetype(
        name="Felsic Igneous (Granite/Rhyolite)",
        luminance_range=(150, 255),
        texture_range=(40, 100),
        edge_range=(0.06, 0.15),
        color_bias=ColorBias.NEUTRAL,
        description="High-albedo crystalline structure with visible phaneritic speckling.",
        heavy_mineral_potential="Moderate",
    ),
    Archetype(
        name="Mafic Igneous (Basalt/Gabbro)",
        luminance_range=(0, 80),
        texture_range=(10, 45),
        edge_range=(0.04, 0.12),
        color_bias=ColorBias.NEUTRAL,
        description="Low-albedo, fine-grained melanocratic composition.",
        heavy_mineral_potential="Moderate",
    ),
    Archetype(
        name="Siliciclastic (Sandstone/Quartzite)",
        luminance_range=(120, 220),
        texture_range=(20, 50),
        edge_range=(0.03, 0.09),
        color_bias=ColorBias.NEUTRAL,
        description="Granular sedimentary texture with moderate fluvial rounding.",
    ),
    Archetype(
        name="Microcrystalline (Chert/Jasper)",
        luminance_range=(80, 180),
        texture_range=(5, 25),
        edge_range=(0.12, 0.25),
        color_bias=ColorBias.RED,
        description="Dense, non-granular silica with sharp edge retention.",
    ),
    Archetype(
        name="Metamorphic (Schist/Slate/Phyllite)",
        luminance_range=(50, 140),
        texture_range=(30, 70),
        edge_range=(0.10, 0.20),
        color_bias=ColorBias.BLUE,
        description="Foliated or slaty cleavage planes creating linear edge artifacts.",
    ),
    Archetype(
        name="Ultramafic (Serpentinite)",
        luminance_range=(60, 130),
        texture_range=(15, 40),
        edge_range=(0.05, 0.13),
        color_bias=ColorBias.GREEN,
        description="Low-to-mid albedo with characteristic waxy luster and greenish hue.",
    ),
    Archetype(
        name="Ferruginous / Gossanous Material",
        luminance_range=(60, 150),
        texture_range=(30, 80),
        edge_range=(0.08, 0.18),
        color_bias=ColorBias.RED,
        description="Oxidized iron-rich crusting or staining on parent lithology.",
    ),
)


class ArchetypeRecord(BaseModel):
    """One entry of an archetype table file."""

    name: str = Field(..., min_length=1)
    luminance_range: tuple[FiniteFloat, FiniteFloat]
    texture_range: tuple[FiniteFloat, FiniteFloat]
    edge_range: tuple[FiniteFloat, FiniteFloat]
    color_bias: ColorBias = ColorBias.NEUTRAL
    description: str = ""
    heavy_mineral_potential: str = "Low"

    @model_validator(mode="after")
    def _ordered_ranges(self) -> ArchetypeRecord:
        for label in ("luminance_range", "texture_range", "edge_range"):
            lo, hi = getattr(self, label)
            if lo > hi:
                raise ValueError(f"{label} min {lo} exceeds max {hi}")
        return self

    def to_archetype(self) -> Archetype:
        return Archetype(
            name=self.name,
            luminance_range=self.luminance_range,
            texture_range=self.texture_range,
            edge_range=self.edge_range,
            color_bias=self.color_bias,
            description=self.description,
            heavy_mineral_potential=self.heavy_mineral_potential,
        )


def load_archetypes(path: str | Path) -> tuple[Archetype, ...]:
    """Read an ordered archetype table from a JSON list of records."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"cannot read archetype table {path}: {e}") from e

    if not isinstance(raw, list):
        raise ConfigurationError(f"archetype table {path} must be a JSON list")

    try:
        records = [ArchetypeRecord.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ConfigurationError(f"invalid archetype table {path}: {e}") from e

    if not records:
        raise ConfigurationError(f"archetype table {path} is empty")

    logger.info("Loaded %d archetypes from %s", len(records), path)
    return tuple(r.to_archetype() for r in records)


def resolve_archetypes(path: str | Path | None = None) -> tuple[Archetype, ...]:
    """The table from ``path`` when given, otherwise the built-in one."""
    if path:
        return load_archetypes(path)
    return DEFAULT_ARCHETYPES
