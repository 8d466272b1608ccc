"""POST /api/analyze — cloud analysis with offline fallback, plus the offline engine alone."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from lithoscope.config import settings
from lithoscope.dependencies import get_pipeline
from lithoscope.engine.context import PipelineContext
from lithoscope.engine.errors import CloudAnalysisError, ImageDecodeError
from lithoscope.engine.pipeline import Pipeline
from lithoscope.engine.report import split_sections
from lithoscope.engine.sampler import ArrayPixelSource, decode_base64_image
from lithoscope.llm.client import analyze_with_cloud
from lithoscope.models.requests import AnalyzeRequest, ImagePayload, OfflineAnalyzeRequest
from lithoscope.models.responses import AnalyzeResponse, OfflineAnalysisResponse, SectionInfo

logger = logging.getLogger(__name__)

router = APIRouter()

_SENTINEL = object()  # marks end of queue


async def _decode(image: ImagePayload):
    """Decode off the event loop; the only step with a timeout."""
    try:
        return await asyncio.wait_for(
            asyncio.to_thread(decode_base64_image, image.data),
            timeout=settings.decode_timeout_s,
        )
    except asyncio.TimeoutError as e:
        raise ImageDecodeError(f"image decode exceeded {settings.decode_timeout_s}s") from e


async def _run_offline(image: ImagePayload, pipeline: Pipeline) -> tuple[PipelineContext, float]:
    start = time.perf_counter()
    pixels = await _decode(image)
    ctx = await asyncio.to_thread(pipeline.analyze, ArrayPixelSource(pixels))
    return ctx, (time.perf_counter() - start) * 1000


def _sections(text: str) -> list[SectionInfo]:
    return [SectionInfo.from_section(s) for s in split_sections(text)]


@router.post("/analyze/offline", response_model=OfflineAnalysisResponse)
async def analyze_offline(
    req: OfflineAnalyzeRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> OfflineAnalysisResponse:
    ctx, elapsed = await _run_offline(req.image, pipeline)
    return OfflineAnalysisResponse.from_context(ctx, split_sections(ctx.report), elapsed)


async def _stream_offline(image: ImagePayload, pipeline: Pipeline) -> AsyncGenerator[str, None]:
    """Drive pipeline.run_streaming() in a thread, yielding SSE events as they arrive."""
    start = time.perf_counter()

    try:
        pixels = await _decode(image)
    except ImageDecodeError as e:
        data = json.dumps({"type": "error", "message": str(e)})
        yield f"event: error\ndata: {data}\n\n"
        return

    ctx = pipeline.new_context(ArrayPixelSource(pixels))
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue = asyncio.Queue()

    def _run_pipeline() -> None:
        """Sync pipeline in thread — pushes progress dicts onto the async queue."""
        try:
            for progress in pipeline.run_streaming(ctx):
                loop.call_soon_threadsafe(queue.put_nowait, progress)
        except Exception as e:
            logger.warning("Streaming analysis aborted: %s", e)
        finally:
            loop.call_soon_threadsafe(queue.put_nowait, _SENTINEL)

    loop.run_in_executor(None, _run_pipeline)

    error = ""
    while True:
        item = await queue.get()
        if item is _SENTINEL:
            break
        if item["status"] == "error":
            error = f"{item['stage_id']}: {item['error']}"
        yield f"event: progress\ndata: {json.dumps(item)}\n\n"

    if error:
        data = json.dumps({"type": "error", "message": error})
        yield f"event: error\ndata: {data}\n\n"
        return

    elapsed = (time.perf_counter() - start) * 1000
    response = OfflineAnalysisResponse.from_context(ctx, split_sections(ctx.report), elapsed)
    yield f"event: result\ndata: {response.model_dump_json()}\n\n"
    yield f"event: done\ndata: {json.dumps({'type': 'done'})}\n\n"


@router.post("/analyze/offline/stream")
async def analyze_offline_stream(
    req: OfflineAnalyzeRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> StreamingResponse:
    return StreamingResponse(
        _stream_offline(req.image, pipeline),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    req: AnalyzeRequest,
    pipeline: Pipeline = Depends(get_pipeline),
) -> AnalyzeResponse:
    start = time.perf_counter()

    if req.offline_only:
        reason = "offline mode requested"
    else:
        try:
            text = await analyze_with_cloud(req.images, req.mode, req.sensitivity, req.field_log)
            return AnalyzeResponse(
                report=text,
                source="cloud",
                sections=_sections(text),
                processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
            )
        except CloudAnalysisError as e:
            logger.warning("Cloud analysis unavailable, using offline engine: %s", e)
            reason = str(e)

    # Offline engine reads one image; extra images only inform the cloud model
    ctx, _ = await _run_offline(req.images[0], pipeline)
    return AnalyzeResponse(
        report=ctx.report,
        source="offline",
        sections=_sections(ctx.report),
        fallback_reason=reason,
        processing_time_ms=round((time.perf_counter() - start) * 1000, 1),
    )
