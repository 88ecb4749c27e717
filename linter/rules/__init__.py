"""Static rule catalog, one rule set per video format."""

from typing import Dict, List, Optional, Union

from ..types import Rule, RuleSet, VideoFormat
from .demo import DEMO_RULES
from .gameplay import GAMEPLAY_RULES
from .other import OTHER_RULES
from .talking_head import TALKING_HEAD_RULES

RULE_SETS: Dict[VideoFormat, RuleSet] = {
    VideoFormat.TALKING_HEAD: TALKING_HEAD_RULES,
    VideoFormat.GAMEPLAY: GAMEPLAY_RULES,
    VideoFormat.OTHER: OTHER_RULES,
    VideoFormat.DEMO: DEMO_RULES,
}


def get_rule_set(video_format: Union[VideoFormat, str]) -> RuleSet:
    return RULE_SETS[VideoFormat(video_format)]


def get_rules(video_format: Union[VideoFormat, str]) -> List[Rule]:
    return list(get_rule_set(video_format).rules)


def get_rule(video_format: Union[VideoFormat, str], rule_id: str) -> Optional[Rule]:
    for rule in get_rule_set(video_format).rules:
        if rule.id == rule_id:
            return rule
    return None


__all__ = [
    "RULE_SETS",
    "TALKING_HEAD_RULES",
    "GAMEPLAY_RULES",
    "OTHER_RULES",
    "DEMO_RULES",
    "get_rule_set",
    "get_rules",
    "get_rule",
]
