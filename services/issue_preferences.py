"""User issue severity preferences: reads for the linter, votes and resets for the API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple
import uuid

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from linter.errors import PreferenceValidationError, UnknownSeverityError
from linter.issue_key import get_issue_key
from linter.severity import (
    ASSIGNABLE_SEVERITIES,
    SEVERITY_ORDER,
    get_next_severity,
    get_prev_severity,
    resolve_effective_severity,
)
from linter.types import IssuePreference, Severity
from models.issue_preference import UserIssuePreference

logger = logging.getLogger(__name__)

VOTE_DIRECTIONS = ("up", "down")


def _severity_list(severities) -> str:
    return ", ".join(s.value for s in severities)


def validate_preference_values(
    issue_key: Any,
    severity: Any,
    original_severity: Any,
) -> Tuple[str, Severity, Severity]:
    """Validate a preference write and return normalized values."""
    key = str(issue_key or "").strip()
    if not key or not severity or not original_severity:
        raise PreferenceValidationError(
            "Missing required fields: issue_key, severity, original_severity"
        )

    valid = {s.value: s for s in SEVERITY_ORDER}
    if severity not in valid:
        raise PreferenceValidationError(
            f"Invalid severity. Must be one of: {_severity_list(SEVERITY_ORDER)}"
        )

    valid_original = {s.value: s for s in ASSIGNABLE_SEVERITIES}
    if original_severity not in valid_original:
        raise PreferenceValidationError(
            f"Invalid original_severity. Must be one of: {_severity_list(ASSIGNABLE_SEVERITIES)}"
        )

    return key, valid[severity], valid_original[original_severity]


def preference_to_dict(row: UserIssuePreference) -> Dict[str, Any]:
    return {
        "issue_key": row.issue_key,
        "severity": row.severity,
        "original_severity": row.original_severity,
        "updated_at": row.updated_at.isoformat() if row.updated_at else None,
    }


async def _get_row(user_id: str, issue_key: str, db: AsyncSession) -> Optional[UserIssuePreference]:
    result = await db.execute(
        select(UserIssuePreference).where(
            UserIssuePreference.user_id == user_id,
            UserIssuePreference.issue_key == issue_key,
        )
    )
    return result.scalar_one_or_none()


async def get_issue_preferences(user_id: str, db: AsyncSession) -> Dict[str, IssuePreference]:
    """Return issue_key -> preference for a user. Rows with bad values are skipped."""
    result = await db.execute(
        select(UserIssuePreference).where(UserIssuePreference.user_id == user_id)
    )
    preferences: Dict[str, IssuePreference] = {}
    for row in result.scalars().all():
        try:
            preferences[row.issue_key] = IssuePreference(
                severity=row.severity,
                original_severity=row.original_severity,
            )
        except ValueError:
            logger.warning("Ignoring stored preference %s for user %s with invalid severity", row.issue_key, user_id)
    return preferences


async def save_issue_preference(
    user_id: str,
    db: AsyncSession,
    *,
    issue_key: str,
    severity: str,
    original_severity: str,
) -> UserIssuePreference:
    """
    Upsert one preference. ``original_severity`` is only written when the row
    is created; later votes change ``severity`` alone.
    """
    key, new_severity, new_original = validate_preference_values(issue_key, severity, original_severity)

    row = await _get_row(user_id, key, db)
    if row is None:
        row = UserIssuePreference(
            id=str(uuid.uuid4()),
            user_id=user_id,
            issue_key=key,
            severity=new_severity.value,
            original_severity=new_original.value,
        )
        db.add(row)
        try:
            await db.commit()
        except IntegrityError:
            # A concurrent vote created the row first
            await db.rollback()
            row = await _get_row(user_id, key, db)
            if row is None:
                raise
            row.severity = new_severity.value
            await db.commit()
    else:
        row.severity = new_severity.value
        await db.commit()

    await db.refresh(row)
    logger.info(
        "User %s set %s: %s -> %s", user_id, key, row.original_severity, row.severity
    )
    return row


async def delete_issue_preference(user_id: str, db: AsyncSession, issue_key: str) -> bool:
    """Remove a preference, restoring the rule-assigned severity. Returns True if a row existed."""
    key = str(issue_key or "").strip()
    if not key:
        raise PreferenceValidationError("Missing issue_key parameter")

    result = await db.execute(
        delete(UserIssuePreference).where(
            UserIssuePreference.user_id == user_id,
            UserIssuePreference.issue_key == key,
        )
    )
    await db.commit()
    removed = bool(result.rowcount)
    logger.info("User %s reset preference for %s (existed=%s)", user_id, key, removed)
    return removed


async def vote_issue_severity(
    user_id: str,
    db: AsyncSession,
    *,
    message: str,
    severity: str,
    direction: str,
    rule_id: Optional[str] = None,
) -> Tuple[Optional[UserIssuePreference], bool]:
    """
    Move an issue one step up (more severe) or down (less severe) from its
    current effective severity.

    ``severity`` is the rule/analyzer assigned value shown with the issue.
    Returns ``(row, changed)``; a vote past either end of the scale writes
    nothing and returns the existing row, if any.
    """
    if direction not in VOTE_DIRECTIONS:
        raise PreferenceValidationError("Invalid direction. Must be one of: up, down")
    if severity not in {s.value for s in ASSIGNABLE_SEVERITIES}:
        raise PreferenceValidationError(
            f"Invalid severity. Must be one of: {_severity_list(ASSIGNABLE_SEVERITIES)}"
        )

    issue_key = get_issue_key(message, rule_id)
    existing = await _get_row(user_id, issue_key, db)
    preference = None
    if existing is not None:
        preference = {"severity": existing.severity, "original_severity": existing.original_severity}

    try:
        current = resolve_effective_severity(severity, preference)
    except UnknownSeverityError as exc:
        raise PreferenceValidationError(str(exc)) from exc

    target = get_prev_severity(current) if direction == "up" else get_next_severity(current)
    if target is None:
        logger.info("Vote %s on %s ignored: already at %s", direction, issue_key, current.value)
        return existing, False

    row = await save_issue_preference(
        user_id,
        db,
        issue_key=issue_key,
        severity=target.value,
        original_severity=severity,
    )
    return row, True


async def vote_up(user_id: str, db: AsyncSession, *, message: str, severity: str, rule_id: Optional[str] = None):
    """Mark an issue as more severe."""
    return await vote_issue_severity(
        user_id, db, message=message, severity=severity, direction="up", rule_id=rule_id
    )


async def vote_down(user_id: str, db: AsyncSession, *, message: str, severity: str, rule_id: Optional[str] = None):
    """Mark an issue as less severe."""
    return await vote_issue_severity(
        user_id, db, message=message, severity=severity, direction="down", rule_id=rule_id
    )


async def reset_issue_preference(
    user_id: str,
    db: AsyncSession,
    *,
    message: str,
    rule_id: Optional[str] = None,
) -> bool:
    return await delete_issue_preference(user_id, db, get_issue_key(message, rule_id))


class SqlPreferenceSource:
    """PreferenceSource backed by the user_issue_preferences table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_preferences(self, user_id: str) -> Dict[str, IssuePreference]:
        return await get_issue_preferences(user_id, self.db)
