"""Video lint router."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from database import get_db
from linter import InvalidFormatError, get_rule_set, validate_format
from linter.analyzer import VideoAnalyzer
from multimodal.llm import get_video_analyzer
from routers.auth_scope import AuthContext, get_auth_context, get_optional_auth_context
from routers.rate_limit import rate_limit
from services.analysis_cache import AnalysisCache
from services.lint import lint_video_service, rescore_lint_service

router = APIRouter()
logger = logging.getLogger(__name__)


class LintVideoRequest(BaseModel):
    video_url: str
    format: str


class RescoreRequest(BaseModel):
    lint_result: Dict[str, Any]


def get_analysis_cache(request: Request) -> AnalysisCache:
    """One cache per app so the in-process fallback survives between requests."""
    cache = getattr(request.app.state, "analysis_cache", None)
    if cache is None:
        cache = AnalysisCache(settings.LINT_CACHE_TTL_SECONDS, settings.REDIS_URL)
        request.app.state.analysis_cache = cache
    return cache


@router.post("/video")
async def lint_video(
    request: LintVideoRequest,
    _rate_limit: None = Depends(rate_limit("lint_video", limit=settings.LINT_RATE_LIMIT_PER_MINUTE)),
    auth: Optional[AuthContext] = Depends(get_optional_auth_context),
    analyzer: VideoAnalyzer = Depends(get_video_analyzer),
    cache: AnalysisCache = Depends(get_analysis_cache),
    db: AsyncSession = Depends(get_db),
):
    return await lint_video_service(
        video_url=request.video_url,
        video_format=request.format,
        db=db,
        analyzer=analyzer,
        user_id=auth.user_id if auth else None,
        cache=cache,
    )


@router.post("/rescore")
async def rescore_lint(
    request: RescoreRequest,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
):
    return await rescore_lint_service(
        lint_result=request.lint_result,
        db=db,
        user_id=auth.user_id,
    )


@router.get("/rules/{video_format}")
async def list_rules(video_format: str) -> Dict[str, List[Dict[str, Any]]]:
    try:
        rule_set = get_rule_set(validate_format(video_format))
    except InvalidFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"rules": [rule.model_dump(mode="json", exclude_none=True) for rule in rule_set.rules]}
