"""
Cache of raw analyzer output, keyed by video source, prompt, model and
generation settings.

Only analyzer text that parses as a lint response is cached. Preferences and
scoring are re-applied on every lint, so a cached analysis still reflects the
caller's latest votes.
"""

from __future__ import annotations

import hashlib
import logging
import time
from collections import OrderedDict
from typing import Optional, Tuple

import redis.asyncio as redis

from linter.errors import AnalyzerFailureError
from linter.parsing import parse_lint_response
from multimodal.models import AnalyzerResponse

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "vlint:analysis"
LOCAL_CACHE_MAX_ENTRIES = 256


def analysis_cache_key(
    video_source: str,
    prompt: str,
    model_name: str = "",
    temperature: float = 0.2,
    max_output_tokens: int = 4096,
) -> str:
    material = "\n".join(
        [video_source.strip(), model_name, f"{float(temperature):g}", str(int(max_output_tokens)), prompt]
    )
    digest = hashlib.sha256(material.encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}:{digest}"


class AnalysisCache:
    """Redis SETEX cache with a bounded in-process fallback when Redis is unreachable."""

    def __init__(self, ttl_seconds: int, redis_url: Optional[str] = None):
        self.ttl_seconds = max(int(ttl_seconds), 0)
        self.redis_url = redis_url
        self._local: "OrderedDict[str, Tuple[float, str]]" = OrderedDict()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    async def _redis_get(self, key: str) -> Optional[str]:
        client = redis.from_url(self.redis_url, decode_responses=True)
        try:
            return await client.get(key)
        finally:
            await client.aclose()

    async def _redis_set(self, key: str, value: str) -> None:
        client = redis.from_url(self.redis_url, decode_responses=True)
        try:
            await client.setex(key, self.ttl_seconds, value)
        finally:
            await client.aclose()

    def _local_get(self, key: str) -> Optional[str]:
        entry = self._local.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if time.monotonic() >= expires_at:
            self._local.pop(key, None)
            return None
        self._local.move_to_end(key)
        return value

    def _local_set(self, key: str, value: str) -> None:
        self._local[key] = (time.monotonic() + self.ttl_seconds, value)
        self._local.move_to_end(key)
        while len(self._local) > LOCAL_CACHE_MAX_ENTRIES:
            self._local.popitem(last=False)

    async def get(self, key: str) -> Optional[str]:
        if not self.enabled:
            return None
        if self.redis_url:
            try:
                return await self._redis_get(key)
            except (redis.RedisError, OSError) as exc:
                logger.debug("Analysis cache read fell back to memory: %s", exc)
        return self._local_get(key)

    async def set(self, key: str, value: str) -> None:
        if not self.enabled:
            return
        if self.redis_url:
            try:
                await self._redis_set(key, value)
                return
            except (redis.RedisError, OSError) as exc:
                logger.debug("Analysis cache write fell back to memory: %s", exc)
        self._local_set(key, value)


class CachedVideoAnalyzer:
    """Wraps any VideoAnalyzer so repeated lints of the same video skip the model call."""

    def __init__(self, inner, cache: AnalysisCache):
        self.inner = inner
        self.cache = cache

    async def analyze_video(
        self,
        video_source: str,
        prompt: str,
        *,
        temperature: float = 0.2,
        max_output_tokens: int = 4096,
    ) -> AnalyzerResponse:
        key = analysis_cache_key(
            video_source,
            prompt,
            model_name=str(getattr(self.inner, "model_name", "") or type(self.inner).__name__),
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        cached = await self.cache.get(key)
        if cached is not None:
            logger.info("Analysis cache hit for %s", video_source)
            return AnalyzerResponse(content=cached, cached=True)

        response = await self.inner.analyze_video(
            video_source,
            prompt,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
        )
        try:
            parse_lint_response(response.content)
        except AnalyzerFailureError:
            # Unusable output must not be replayed; the next lint asks the analyzer again
            logger.warning("Not caching unparseable analysis for %s", video_source)
            return response
        await self.cache.set(key, response.content)
        return response
