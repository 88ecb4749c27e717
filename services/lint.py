"""Lint orchestration for the API: preferences, caching and error mapping around VideoLinter."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from linter import (
    AnalyzerFailureError,
    InvalidFormatError,
    LintResult,
    VideoLinter,
    adjust_lint_result,
    validate_format,
)
from linter.analyzer import VideoAnalyzer
from services.analysis_cache import AnalysisCache, CachedVideoAnalyzer
from services.issue_preferences import get_issue_preferences

logger = logging.getLogger(__name__)


def build_linter(analyzer: VideoAnalyzer, cache: Optional[AnalysisCache] = None) -> VideoLinter:
    if cache is not None and cache.enabled:
        analyzer = CachedVideoAnalyzer(analyzer, cache)
    return VideoLinter(
        analyzer,
        timeout_seconds=settings.LINT_TIMEOUT_SECONDS,
        temperature=settings.LINT_TEMPERATURE,
        max_output_tokens=settings.LINT_MAX_OUTPUT_TOKENS,
        score_weighting=settings.LINT_SCORE_WEIGHTING,
    )


def serialize_lint_result(result: LintResult) -> Dict[str, Any]:
    return result.model_dump(by_alias=True, mode="json")


async def lint_video_service(
    *,
    video_url: str,
    video_format: str,
    db: AsyncSession,
    analyzer: VideoAnalyzer,
    user_id: Optional[str] = None,
    cache: Optional[AnalysisCache] = None,
) -> Dict[str, Any]:
    """Lint one video for an optional user and return the API payload."""
    try:
        resolved_format = validate_format(video_format)
    except InvalidFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    source = str(video_url or "").strip()
    if not source:
        raise HTTPException(status_code=400, detail="video_url is required")

    preferences = await get_issue_preferences(user_id, db) if user_id else {}
    linter = build_linter(analyzer, cache)

    try:
        result = await linter.lint(source, resolved_format, preferences)
    except AnalyzerFailureError as exc:
        logger.error("Lint failed for %s (%s): %s", source, resolved_format.value, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    logger.info(
        "Lint complete for %s user=%s score=%d overall=%.1f overrides=%d",
        source,
        user_id or "anonymous",
        result.lint_score,
        result.scores.overall,
        sum(1 for v in result.violations if v.overridden),
    )
    return {
        "video_url": source,
        "format": resolved_format.value,
        "lint_result": serialize_lint_result(result),
    }


async def rescore_lint_service(
    *,
    lint_result: Dict[str, Any],
    db: AsyncSession,
    user_id: str,
) -> Dict[str, Any]:
    """Re-apply the user's current preferences to a previously returned lint result."""
    try:
        stored = LintResult.model_validate(lint_result)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail="lint_result is not a valid lint result") from exc

    preferences = await get_issue_preferences(user_id, db)
    adjusted = adjust_lint_result(stored, preferences, settings.LINT_SCORE_WEIGHTING)
    return {
        "format": adjusted.format.value,
        "lint_result": serialize_lint_result(adjusted),
        "previous_lint_score": stored.lint_score,
    }
