"""LangChain ChatAnthropic wrapper for cloud specimen analysis.

Contract: images + parameters in, report text out, or CloudAnalysisError.
"""

from __future__ import annotations

import logging

from lithoscope.config import settings
from lithoscope.engine.errors import CloudAnalysisError
from lithoscope.llm.prompts import SYSTEM_PROMPT, build_analysis_prompt, temperature_for
from lithoscope.models.requests import AnalysisMode, FieldLog, ImagePayload

logger = logging.getLogger(__name__)


def is_cloud_configured() -> bool:
    return bool(settings.anthropic_api_key)


def _image_block(image: ImagePayload) -> dict:
    data = image.data
    if data.startswith("data:"):
        url = data
    else:
        url = f"data:{image.mime_type};base64,{data}"
    return {"type": "image_url", "image_url": {"url": url}}


def _response_text(content) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for block in content:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
        elif isinstance(block, str):
            parts.append(block)
    return "".join(parts)


async def analyze_with_cloud(
    images: list[ImagePayload],
    mode: AnalysisMode,
    sensitivity: int,
    field_log: FieldLog | None = None,
) -> str:
    """Ask the cloud model for a seven-section field report."""
    if not is_cloud_configured():
        raise CloudAnalysisError("cloud analysis not configured; set ANTHROPIC_API_KEY in .env")
    if not images:
        raise CloudAnalysisError("no images to analyse")

    from langchain_anthropic import ChatAnthropic
    from langchain_core.messages import HumanMessage, SystemMessage

    llm = ChatAnthropic(
        model=settings.model_analysis,
        api_key=settings.anthropic_api_key,
        max_tokens=settings.cloud_max_tokens,
        temperature=temperature_for(sensitivity),
    )

    content: list = [_image_block(img) for img in images]
    content.append({"type": "text", "text": build_analysis_prompt(mode, sensitivity, field_log)})
    messages = [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=content)]

    try:
        response = await llm.ainvoke(messages)
    except Exception as e:
        raise CloudAnalysisError(f"failed to communicate with the cloud model: {e}") from e

    text = _response_text(response.content).strip()
    if not text:
        raise CloudAnalysisError("cloud model returned no text")
    logger.info("Cloud analysis returned %d chars (%d images)", len(text), len(images))
    return text
