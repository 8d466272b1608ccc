"""Tests for the cloud analysis client (ChatAnthropic is faked)."""

import asyncio

import langchain_anthropic
import pytest

from lithoscope.config import settings
from lithoscope.engine.errors import CloudAnalysisError
from lithoscope.llm import client
from lithoscope.models.requests import AnalysisMode, ImagePayload

_IMAGES = [ImagePayload(data="aGVsbG8=", mime_type="image/png")]


class _FakeReply:
    def __init__(self, content):
        self.content = content


def _fake_chat(reply=None, error=None):
    calls = {}

    class FakeChat:
        def __init__(self, **kwargs):
            calls["kwargs"] = kwargs

        async def ainvoke(self, messages):
            calls["messages"] = messages
            if error is not None:
                raise error
            return _FakeReply(reply)

    return FakeChat, calls


def _run(**kwargs):
    return asyncio.run(client.analyze_with_cloud(_IMAGES, AnalysisMode.EXPLORATION, 20, **kwargs))


def test_unconfigured_raises(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "")
    assert client.is_cloud_configured() is False
    with pytest.raises(CloudAnalysisError, match="not configured"):
        _run()


def test_returns_text_blocks(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
    fake, calls = _fake_chat(reply=[{"type": "text", "text": "1. Identification Summary: Jasper"}])
    monkeypatch.setattr(langchain_anthropic, "ChatAnthropic", fake)

    assert _run() == "1. Identification Summary: Jasper"
    assert calls["kwargs"]["temperature"] == 0.7
    human = calls["messages"][1]
    assert human.content[0]["image_url"]["url"] == "data:image/png;base64,aGVsbG8="
    assert "Exploration Mode" in human.content[-1]["text"]


def test_transport_failure_wrapped(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
    fake, _ = _fake_chat(error=RuntimeError("network unreachable"))
    monkeypatch.setattr(langchain_anthropic, "ChatAnthropic", fake)
    with pytest.raises(CloudAnalysisError, match="network unreachable"):
        _run()


def test_empty_reply_raises(monkeypatch):
    monkeypatch.setattr(settings, "anthropic_api_key", "test-key")
    fake, _ = _fake_chat(reply="   ")
    monkeypatch.setattr(langchain_anthropic, "ChatAnthropic", fake)
    with pytest.raises(CloudAnalysisError, match="no text"):
        _run()


def test_data_url_passed_through():
    block = client._image_block(ImagePayload(data="data:image/jpeg;base64,AAAA"))
    assert block["image_url"]["url"] == "data:image/jpeg;base64,AAAA"
