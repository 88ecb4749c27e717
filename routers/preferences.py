"""Issue severity preference router."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from linter.errors import PreferenceValidationError
from routers.auth_scope import AuthContext, get_auth_context, get_optional_auth_context
from routers.rate_limit import rate_limit
from services.issue_preferences import (
    delete_issue_preference,
    get_issue_preferences,
    preference_to_dict,
    save_issue_preference,
    vote_issue_severity,
)

router = APIRouter()
logger = logging.getLogger(__name__)


class SavePreferenceRequest(BaseModel):
    issue_key: str
    severity: str
    original_severity: str


class VoteRequest(BaseModel):
    rule_id: Optional[str] = None
    message: str
    severity: str
    direction: Literal["up", "down"]


@router.get("/issues")
async def list_issue_preferences(
    auth: Optional[AuthContext] = Depends(get_optional_auth_context),
    db: AsyncSession = Depends(get_db),
):
    if auth is None:
        return {"preferences": {}}
    preferences = await get_issue_preferences(auth.user_id, db)
    return {
        "preferences": {
            key: preference.model_dump(mode="json") for key, preference in preferences.items()
        }
    }


@router.post("/issues")
async def save_preference(
    request: SavePreferenceRequest,
    _rate_limit: None = Depends(rate_limit("preferences_write", limit=120)),
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        row = await save_issue_preference(
            auth.user_id,
            db,
            issue_key=request.issue_key,
            severity=request.severity,
            original_severity=request.original_severity,
        )
    except PreferenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "preference": preference_to_dict(row)}


@router.post("/issues/vote")
async def vote_issue(
    request: VoteRequest,
    _rate_limit: None = Depends(rate_limit("preferences_write", limit=120)),
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        row, changed = await vote_issue_severity(
            auth.user_id,
            db,
            message=request.message,
            severity=request.severity,
            direction=request.direction,
            rule_id=request.rule_id,
        )
    except PreferenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "changed": changed,
        "preference": preference_to_dict(row) if row is not None else None,
    }


@router.delete("/issues/{issue_key}")
async def reset_preference(
    issue_key: str,
    auth: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_db),
):
    try:
        removed = await delete_issue_preference(auth.user_id, db, issue_key)
    except PreferenceValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "removed": removed}
