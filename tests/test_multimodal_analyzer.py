import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from config import settings
from linter.analyzer import VideoAnalyzer
from linter.errors import AnalyzerFailureError
from linter.parsing import parse_lint_response
from multimodal.llm import GeminiVideoAnalyzer, MockVideoAnalyzer, get_video_analyzer, is_remote_source


def _gemini_client(text="{}", candidates=None, usage=None):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(
        return_value=SimpleNamespace(text=text, candidates=candidates or [], usage_metadata=usage)
    )
    client.aio.files.upload = AsyncMock()
    client.aio.files.get = AsyncMock()
    return client


def test_without_gemini_key_falls_back_to_mock(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
    assert isinstance(get_video_analyzer(), MockVideoAnalyzer)

    monkeypatch.setattr(settings, "GEMINI_API_KEY", "your_gemini_api_key")
    assert isinstance(get_video_analyzer(), MockVideoAnalyzer)


@pytest.mark.asyncio
async def test_mock_analyzer_returns_parseable_lint_json():
    analyzer = MockVideoAnalyzer()
    assert isinstance(analyzer, VideoAnalyzer)

    response = await analyzer.analyze_video("https://example.com/v.mp4", "prompt")
    findings, summary = parse_lint_response(response.content)
    assert len(findings) == 1
    assert findings[0]["category"] == "hook"
    assert "GEMINI_API_KEY" in summary


def test_is_remote_source():
    assert is_remote_source("https://youtu.be/abc")
    assert is_remote_source("gs://bucket/video.mp4")
    assert not is_remote_source("/tmp/video.mp4")


@pytest.mark.asyncio
async def test_gemini_passes_remote_video_as_file_uri():
    usage = SimpleNamespace(prompt_token_count=120, candidates_token_count=30, total_token_count=150)
    client = _gemini_client(text=json.dumps({"violations": []}), usage=usage)
    analyzer = GeminiVideoAnalyzer(api_key="unused", model_name="gemini-test", client=client)

    response = await analyzer.analyze_video(
        "https://example.com/v.mp4", "Lint this", temperature=0.3, max_output_tokens=512
    )

    assert response.model == "gemini-test"
    assert response.usage.total_tokens == 150
    kwargs = client.aio.models.generate_content.await_args.kwargs
    assert kwargs["model"] == "gemini-test"
    parts = kwargs["contents"][0].parts
    assert parts[0].text == "Lint this"
    assert parts[1].file_data.file_uri == "https://example.com/v.mp4"
    assert kwargs["config"].temperature == 0.3
    assert kwargs["config"].max_output_tokens == 512
    client.aio.files.upload.assert_not_awaited()


@pytest.mark.asyncio
async def test_gemini_uploads_local_file_and_waits_for_processing(tmp_path):
    video = tmp_path / "clip.mp4"
    video.write_bytes(b"fake-video-binary")

    client = _gemini_client(text="{}")
    client.aio.files.upload.return_value = SimpleNamespace(
        name="files/clip", state="PROCESSING", uri=None, mime_type=None
    )
    client.aio.files.get.return_value = SimpleNamespace(
        name="files/clip", state="ACTIVE", uri="https://files.example/clip", mime_type="video/mp4"
    )
    analyzer = GeminiVideoAnalyzer(api_key="unused", client=client, poll_interval_seconds=0)

    await analyzer.analyze_video(str(video), "Lint this")

    client.aio.files.upload.assert_awaited_once_with(file=str(video))
    client.aio.files.get.assert_awaited_once_with(name="files/clip")
    parts = client.aio.models.generate_content.await_args.kwargs["contents"][0].parts
    assert parts[1].file_data.file_uri == "https://files.example/clip"
    assert parts[1].file_data.mime_type == "video/mp4"


@pytest.mark.asyncio
async def test_gemini_failed_processing_raises(tmp_path):
    video = tmp_path / "clip.mp4"
    video.write_bytes(b"fake-video-binary")

    client = _gemini_client()
    client.aio.files.upload.return_value = SimpleNamespace(name="files/clip", state="FAILED")
    analyzer = GeminiVideoAnalyzer(api_key="unused", client=client, poll_interval_seconds=0)

    with pytest.raises(AnalyzerFailureError, match="could not process"):
        await analyzer.analyze_video(str(video), "Lint this")
    client.aio.models.generate_content.assert_not_awaited()


@pytest.mark.asyncio
async def test_gemini_gives_up_after_max_poll_attempts(tmp_path):
    video = tmp_path / "clip.mp4"
    video.write_bytes(b"fake-video-binary")

    processing = SimpleNamespace(name="files/clip", state="PROCESSING")
    client = _gemini_client()
    client.aio.files.upload.return_value = processing
    client.aio.files.get.return_value = processing
    analyzer = GeminiVideoAnalyzer(api_key="unused", client=client, poll_interval_seconds=0, poll_max_attempts=3)

    with pytest.raises(AnalyzerFailureError, match="not ready after 3 checks"):
        await analyzer.analyze_video(str(video), "Lint this")
    assert client.aio.files.get.await_count == 3


@pytest.mark.asyncio
async def test_gemini_missing_local_file_raises(tmp_path):
    analyzer = GeminiVideoAnalyzer(api_key="unused", client=_gemini_client())
    with pytest.raises(AnalyzerFailureError, match="not found"):
        await analyzer.analyze_video(str(tmp_path / "missing.mp4"), "Lint this")


@pytest.mark.asyncio
async def test_gemini_blocked_response_raises():
    client = _gemini_client(text="", candidates=[SimpleNamespace(finish_reason="SAFETY")])
    analyzer = GeminiVideoAnalyzer(api_key="unused", client=client)

    with pytest.raises(AnalyzerFailureError, match="SAFETY"):
        await analyzer.analyze_video("https://example.com/v.mp4", "Lint this")
