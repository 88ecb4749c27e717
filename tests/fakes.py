import json
from typing import Any, Dict, List, Optional

from multimodal.models import AnalyzerResponse


class FakeAnalyzer:
    """Returns canned analyzer text and records every call."""

    def __init__(self, payload: Any = None, content: Optional[str] = None, error: Optional[Exception] = None):
        if content is None:
            content = json.dumps(payload if payload is not None else {"violations": [], "summary": "Clean"})
        self.content = content
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def analyze_video(self, video_source, prompt, *, temperature=0.2, max_output_tokens=4096):
        self.calls.append(
            {
                "video_source": video_source,
                "prompt": prompt,
                "temperature": temperature,
                "max_output_tokens": max_output_tokens,
            }
        )
        if self.error is not None:
            raise self.error
        return AnalyzerResponse(content=self.content, model="fake")
