"""API request models."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class AnalysisMode(str, enum.Enum):
    TEACHING = "Teaching Mode"
    PROFESSIONAL = "Professional Mode"
    EXPLORATION = "Exploration Mode"


class ImagePayload(BaseModel):
    data: str = Field(..., description="Base64 image bytes or a data: URL")
    mime_type: str = Field(default="image/jpeg", description="MIME type of the encoded image")


class FieldLog(BaseModel):
    texture_notes: str = ""
    mineral_observations: str = ""


class OfflineAnalyzeRequest(BaseModel):
    image: ImagePayload


class AnalyzeRequest(BaseModel):
    images: list[ImagePayload] = Field(..., min_length=1, description="Specimen photographs")
    mode: AnalysisMode = AnalysisMode.PROFESSIONAL
    sensitivity: int = Field(default=50, ge=0, le=100, description="0 = speculative, 100 = conservative")
    field_log: FieldLog | None = None
    offline_only: bool = Field(default=False, description="Skip the cloud model entirely")
