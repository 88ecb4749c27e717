"""
Severity scale, point deductions and override resolution.
"""

from typing import Any, Mapping, Optional, Union

from .errors import UnknownSeverityError
from .types import IssuePreference, Severity

# Most severe first. "Up" moves toward index 0, "down" toward IGNORED.
SEVERITY_ORDER = (Severity.CRITICAL, Severity.MODERATE, Severity.MINOR, Severity.IGNORED)

SEVERITY_RANK = {severity: rank for rank, severity in enumerate(SEVERITY_ORDER)}

SEVERITY_POINTS = {
    Severity.CRITICAL: -10,
    Severity.MODERATE: -5,
    Severity.MINOR: -2,
    Severity.IGNORED: 0,
}

# A rule or the analyzer never assigns IGNORED on its own.
ASSIGNABLE_SEVERITIES = (Severity.CRITICAL, Severity.MODERATE, Severity.MINOR)

SeverityLike = Union[Severity, str]


def parse_severity(value: Any) -> Severity:
    """Return the Severity for ``value`` or raise UnknownSeverityError."""
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity(value.strip().lower())
        except ValueError:
            pass
    raise UnknownSeverityError(value)


def _canonical(value: Any) -> Optional[Severity]:
    # Navigation accepts only the exact stored values, unlike parse_severity
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity(value)
        except ValueError:
            return None
    return None


def get_next_severity(current: SeverityLike) -> Optional[Severity]:
    """Next less severe level, or None at IGNORED / for an invalid value."""
    severity = _canonical(current)
    if severity is None:
        return None
    rank = SEVERITY_RANK[severity]
    if rank >= len(SEVERITY_ORDER) - 1:
        return None
    return SEVERITY_ORDER[rank + 1]


def get_prev_severity(current: SeverityLike) -> Optional[Severity]:
    """Next more severe level, or None at CRITICAL / for an invalid value."""
    severity = _canonical(current)
    if severity is None:
        return None
    rank = SEVERITY_RANK[severity]
    if rank <= 0:
        return None
    return SEVERITY_ORDER[rank - 1]


def resolve_effective_severity(
    rule_severity: SeverityLike,
    preference: Optional[Union[IssuePreference, Mapping[str, Any]]] = None,
) -> Severity:
    """A stored preference wins over the rule/analyzer assigned severity."""
    if preference is None:
        return parse_severity(rule_severity)
    if isinstance(preference, IssuePreference):
        return preference.severity
    return parse_severity(preference.get("severity"))


def points_for(severity: SeverityLike) -> int:
    return SEVERITY_POINTS[parse_severity(severity)]


def severity_rank(severity: SeverityLike) -> int:
    return SEVERITY_RANK[parse_severity(severity)]
