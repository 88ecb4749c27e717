"""Rule-based linting of short-form videos."""

from .engine import VideoLinter, adjust_lint_result, normalize_finding, validate_format
from .errors import (
    AnalyzerFailureError,
    InvalidFormatError,
    LinterError,
    MalformedFindingError,
    PreferenceValidationError,
    UnknownSeverityError,
)
from .issue_key import get_issue_key
from .rules import get_rule, get_rule_set, get_rules
from .severity import (
    SEVERITY_ORDER,
    SEVERITY_POINTS,
    get_next_severity,
    get_prev_severity,
    points_for,
    resolve_effective_severity,
)
from .types import (
    IssuePreference,
    LintResult,
    LintScores,
    Rule,
    RuleCategory,
    RuleSet,
    ScoreBucket,
    Severity,
    VideoFormat,
    Violation,
)
