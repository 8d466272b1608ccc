"""GET /api/archetypes — the active archetype table, in match priority order."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lithoscope.dependencies import get_archetypes
from lithoscope.models.responses import ArchetypeInfo

router = APIRouter()


@router.get("/archetypes", response_model=list[ArchetypeInfo])
async def list_archetypes(table=Depends(get_archetypes)) -> list[ArchetypeInfo]:
    return [ArchetypeInfo.from_archetype(a) for a in table]
