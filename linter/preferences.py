"""Read side of the user preference store, as seen by the engine."""

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from pydantic import ValidationError

from .types import IssuePreference

logger = logging.getLogger(__name__)

PreferenceMap = Dict[str, IssuePreference]


class PreferenceSource(Protocol):
    async def get_preferences(self, user_id: str) -> PreferenceMap:
        ...


def coerce_preferences(raw: Optional[Mapping[str, Any]]) -> PreferenceMap:
    """
    Accept IssuePreference objects or plain ``{severity, original_severity}``
    dicts keyed by issue key. Entries with unknown severities are skipped.
    """
    if not raw:
        return {}

    preferences: PreferenceMap = {}
    for issue_key, value in raw.items():
        if isinstance(value, IssuePreference):
            preferences[issue_key] = value
            continue
        try:
            preferences[issue_key] = IssuePreference.model_validate(value)
        except ValidationError as exc:
            logger.warning("Skipping invalid preference for %s: %s", issue_key, exc.errors()[0].get("msg"))
    return preferences
