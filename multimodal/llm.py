import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

from google import genai
from google.genai import types

from config import settings, has_gemini_api_key
from linter.errors import AnalyzerFailureError
from .models import AnalyzerResponse, TokenUsage

logger = logging.getLogger(__name__)

REMOTE_SOURCE_PREFIXES = ("http://", "https://", "gs://")


def is_remote_source(video_source: str) -> bool:
    return video_source.strip().lower().startswith(REMOTE_SOURCE_PREFIXES)


def _file_state(file: Any) -> str:
    state = getattr(file, "state", None)
    return str(getattr(state, "name", state) or "").upper()


class GeminiVideoAnalyzer:
    """Runs lint prompts against a video with Gemini."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        poll_interval_seconds: float = 1.0,
        poll_max_attempts: int = 60,
        client: Optional[genai.Client] = None,
    ):
        self.model_name = model_name
        self.poll_interval_seconds = poll_interval_seconds
        self.poll_max_attempts = poll_max_attempts
        self.client = client or genai.Client(api_key=api_key)

        logger.info(f"Initialized Gemini video analyzer with model: {model_name}")

    async def _wait_until_active(self, file: Any) -> Any:
        """Poll an uploaded file until Gemini finishes processing it."""
        for _ in range(max(self.poll_max_attempts, 1)):
            state = _file_state(file)
            if state == "ACTIVE":
                return file
            if state == "FAILED":
                raise AnalyzerFailureError(f"Gemini could not process uploaded video {file.name}")
            await asyncio.sleep(self.poll_interval_seconds)
            file = await self.client.aio.files.get(name=file.name)

        if _file_state(file) == "ACTIVE":
            return file
        raise AnalyzerFailureError(
            f"Uploaded video {file.name} was not ready after {self.poll_max_attempts} checks"
        )

    async def _video_part(self, video_source: str) -> types.Part:
        if is_remote_source(video_source):
            return types.Part(file_data=types.FileData(file_uri=video_source.strip()))

        path = Path(video_source)
        if not path.is_file():
            raise AnalyzerFailureError(f"Video file not found: {video_source}")

        uploaded = await self.client.aio.files.upload(file=str(path))
        active = await self._wait_until_active(uploaded)
        return types.Part(file_data=types.FileData(file_uri=active.uri, mime_type=active.mime_type))

    async def analyze_video(
        self,
        video_source: str,
        prompt: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 4096,
    ) -> AnalyzerResponse:
        video_part = await self._video_part(video_source)

        response = await self.client.aio.models.generate_content(
            model=self.model_name,
            contents=[types.Content(role="user", parts=[types.Part(text=prompt), video_part])],
            config=types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            ),
        )

        # Safety blocks come back as an empty candidate list or empty text
        text = response.text
        if not text:
            candidates = response.candidates or []
            reason = getattr(candidates[0], "finish_reason", None) if candidates else None
            raise AnalyzerFailureError(f"Gemini response blocked or empty. Reason: {reason or 'UNKNOWN'}")

        usage_metadata = response.usage_metadata
        usage = None
        if usage_metadata is not None:
            usage = TokenUsage(
                prompt_tokens=usage_metadata.prompt_token_count or 0,
                completion_tokens=usage_metadata.candidates_token_count or 0,
                total_tokens=usage_metadata.total_token_count or 0,
            )

        return AnalyzerResponse(content=text, model=self.model_name, usage=usage)


class MockVideoAnalyzer:
    """Deterministic local stand-in used when no Gemini key is configured."""

    model_name = "local-mock"

    async def analyze_video(
        self,
        video_source: str,
        prompt: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 4096,
    ) -> AnalyzerResponse:
        logger.warning("Using MOCK video analysis.")
        payload = {
            "violations": [
                {
                    "message": "Opening seconds do not state what the viewer will get",
                    "severity": "minor",
                    "category": "hook",
                    "timestamp": "0:00-0:03",
                    "suggestion": "Add a one-line promise as text overlay at 0:00",
                    "confidence": 0.5,
                }
            ],
            "summary": "Local fallback analysis: no model was called, configure GEMINI_API_KEY for real lint results.",
        }
        return AnalyzerResponse(content=json.dumps(payload), model=self.model_name)


def get_video_analyzer():
    """Return the configured analyzer, falling back to the local mock."""
    if not has_gemini_api_key():
        return MockVideoAnalyzer()
    return GeminiVideoAnalyzer(
        api_key=settings.GEMINI_API_KEY,
        model_name=settings.LLM_MODEL,
        poll_interval_seconds=settings.ANALYZER_POLL_INTERVAL_SECONDS,
        poll_max_attempts=settings.ANALYZER_POLL_MAX_ATTEMPTS,
    )
