"""
Linter models and schemas.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class VideoFormat(str, Enum):
    TALKING_HEAD = "talking_head"
    GAMEPLAY = "gameplay"
    OTHER = "other"
    DEMO = "demo"           # Screen recordings, product walkthroughs


class Severity(str, Enum):
    CRITICAL = "critical"   # -10
    MODERATE = "moderate"   # -5
    MINOR = "minor"         # -2
    IGNORED = "ignored"     # 0, only reachable through a user override


class RuleCategory(str, Enum):
    HOOK = "hook"
    RETENTION = "retention"
    AUDIO = "audio"
    VISUAL = "visual"
    PACING = "pacing"
    STRUCTURE = "structure"
    CTA = "cta"


class ScoreBucket(str, Enum):
    HOOK_STRENGTH = "hook_strength"
    STRUCTURE_PACING = "structure_pacing"
    DELIVERY_PERFORMANCE = "delivery_performance"
    VALUE_CLARITY = "value_clarity"


class Rule(BaseModel):
    """A named deterministic check the analyzer evaluates."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    severity: Severity
    category: RuleCategory
    check: str  # What to look for in the video
    good_example: Optional[str] = None
    bad_example: Optional[str] = None
    # Overrides the category's default scoring bucket
    bucket: Optional[ScoreBucket] = None


class RuleSet(BaseModel):
    model_config = ConfigDict(frozen=True)

    format: VideoFormat
    rules: List[Rule]
    prompt_template: str  # Must contain {{RULES_LIST}}


class IssuePreference(BaseModel):
    """A user's override for one issue key."""
    severity: Severity
    original_severity: Severity


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Violation(_CamelModel):
    """A validated, severity-resolved finding."""
    rule_id: Optional[str] = None
    rule_name: Optional[str] = None
    message: str
    evidence: str = ""  # e.g. "0:03" or "0:00-0:05"
    severity: Severity  # effective severity
    original_severity: Severity  # rule or analyzer assigned
    category: RuleCategory
    bucket: ScoreBucket
    issue_key: str
    suggestion: Optional[str] = None
    confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    overridden: bool = False


class LintScores(_CamelModel):
    hook_strength: int
    structure_pacing: int
    delivery_performance: int
    value_clarity: int
    overall: float


class LintResult(_CamelModel):
    """Final output of a lint run."""
    format: VideoFormat
    total_rules: int
    passed: int
    critical: int
    moderate: int
    minor: int
    ignored: int
    lint_score: int  # 0-100 across all buckets
    scores: LintScores
    violations: List[Violation]
    summary: str
