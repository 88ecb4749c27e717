"""Interface of the video analysis capability the engine calls."""

from typing import Protocol, runtime_checkable

from multimodal.models import AnalyzerResponse


@runtime_checkable
class VideoAnalyzer(Protocol):
    """Given a video and lint instructions, return the model's raw text answer."""

    async def analyze_video(
        self,
        video_source: str,
        prompt: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 4096,
    ) -> AnalyzerResponse:
        ...
