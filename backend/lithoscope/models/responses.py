"""API response models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from lithoscope.engine.archetypes import Archetype
from lithoscope.engine.context import PipelineContext
from lithoscope.engine.report import ReportSection


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0
    archetypes: int = 0
    cloud_configured: bool = False


class ArchetypeInfo(BaseModel):
    name: str
    luminance_range: tuple[float, float]
    texture_range: tuple[float, float]
    edge_range: tuple[float, float]
    color_bias: str
    description: str
    heavy_mineral_potential: str

    @classmethod
    def from_archetype(cls, a: Archetype) -> ArchetypeInfo:
        return cls(
            name=a.name,
            luminance_range=a.luminance_range,
            texture_range=a.texture_range,
            edge_range=a.edge_range,
            color_bias=a.color_bias.value,
            description=a.description,
            heavy_mineral_potential=a.heavy_mineral_potential,
        )


class SectionInfo(BaseModel):
    number: int
    title: str = ""
    body: str = ""

    @classmethod
    def from_section(cls, s: ReportSection) -> SectionInfo:
        return cls(number=s.number, title=s.title, body=s.body)


class FeatureInfo(BaseModel):
    avg_rgb: tuple[float, float, float]
    avg_luminance: float
    texture_score: float
    normalized_edge_density: float
    biomorphic_index: float
    color_bias: str


class MatchInfo(BaseModel):
    archetype: str
    distance: float
    confidence: int
    roundness: str
    fossil_likelihood: str


class OfflineAnalysisResponse(BaseModel):
    report: str
    sections: list[SectionInfo] = Field(default_factory=list)
    features: FeatureInfo
    match: MatchInfo
    stage_timings_ms: dict[str, float] = Field(default_factory=dict)
    processing_time_ms: float = 0.0

    @classmethod
    def from_context(cls, ctx: PipelineContext, sections: list[ReportSection], elapsed_ms: float) -> OfflineAnalysisResponse:
        f = ctx.features
        return cls(
            report=ctx.report,
            sections=[SectionInfo.from_section(s) for s in sections],
            features=FeatureInfo(
                avg_rgb=(round(f.avg_r, 2), round(f.avg_g, 2), round(f.avg_b, 2)),
                avg_luminance=round(f.avg_luminance, 3),
                texture_score=round(f.texture_score, 3),
                normalized_edge_density=round(f.normalized_edge_density, 5),
                biomorphic_index=round(f.biomorphic_index, 4),
                color_bias=f.color_bias.value,
            ),
            match=MatchInfo(
                archetype=ctx.match.archetype.name,
                distance=round(ctx.match.distance, 5),
                confidence=ctx.match.confidence,
                roundness=ctx.roundness.label,
                fossil_likelihood=ctx.fossil_likelihood.label,
            ),
            stage_timings_ms=ctx.timings_ms,
            processing_time_ms=round(elapsed_ms, 1),
        )


class AnalyzeResponse(BaseModel):
    report: str
    source: Literal["cloud", "offline"]
    sections: list[SectionInfo] = Field(default_factory=list)
    fallback_reason: str = ""
    processing_time_ms: float = 0.0
