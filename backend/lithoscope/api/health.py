"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from lithoscope.dependencies import get_archetypes
from lithoscope.engine.registry import load_stages
from lithoscope.llm.client import is_cloud_configured
from lithoscope.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        stages_registered=load_stages().count,
        archetypes=len(get_archetypes()),
        cloud_configured=is_cloud_configured(),
    )
