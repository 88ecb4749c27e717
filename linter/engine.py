"""
Video linting engine.

select rules by format -> ask the analyzer -> normalize findings into
violations -> attach issue keys -> apply user overrides -> score.
"""

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Union

from .analyzer import VideoAnalyzer
from .errors import AnalyzerFailureError, InvalidFormatError, MalformedFindingError, UnknownSeverityError
from .issue_key import get_issue_key
from .parsing import parse_lint_response
from .preferences import PreferenceMap, coerce_preferences
from .prompts import build_prompt
from .rules import get_rule_set
from .scoring import ScoreWeights, bucket_for_category, compute_scores, lint_score
from .severity import parse_severity, resolve_effective_severity, severity_rank
from .types import LintResult, Rule, RuleCategory, RuleSet, Severity, VideoFormat, Violation

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 120.0
DEFAULT_TEMPERATURE = 0.2  # Low temperature for consistent linting
DEFAULT_MAX_OUTPUT_TOKENS = 4096
DEFAULT_FINDING_CATEGORY = RuleCategory.RETENTION


def validate_format(value: Any) -> VideoFormat:
    """Return the VideoFormat for ``value`` or raise InvalidFormatError."""
    if isinstance(value, VideoFormat):
        return value
    if isinstance(value, str):
        try:
            return VideoFormat(value)
        except ValueError:
            pass
    raise InvalidFormatError(value)


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_category(value: Any) -> RuleCategory:
    text = _clean_text(value).lower()
    if not text:
        return DEFAULT_FINDING_CATEGORY
    try:
        return RuleCategory(text)
    except ValueError:
        logger.debug("Unknown finding category '%s', using %s", text, DEFAULT_FINDING_CATEGORY.value)
        return DEFAULT_FINDING_CATEGORY


def _parse_confidence(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return None
    return max(0.0, min(1.0, confidence))


def _find_rule(rule_set: RuleSet, rule_id: str) -> Optional[Rule]:
    for rule in rule_set.rules:
        if rule.id == rule_id:
            return rule
    return None


def normalize_finding(raw: Any, rule_set: RuleSet) -> Violation:
    """
    Validate one raw analyzer finding.

    A finding naming a catalog rule takes its severity, category and name from
    the catalog. Anything else relies on the analyzer's suggested values.

    Raises:
        MalformedFindingError: when the finding cannot become a violation
    """
    if not isinstance(raw, Mapping):
        raise MalformedFindingError(f"Finding is a {type(raw).__name__}, not an object")

    rule_id = _clean_text(raw.get("ruleId") or raw.get("rule_id")) or None
    message = _clean_text(raw.get("message"))
    rule = _find_rule(rule_set, rule_id) if rule_id else None

    if not message:
        if rule_id is None:
            raise MalformedFindingError("Finding has neither a message nor a ruleId")
        message = rule.description if rule else rule_id

    if rule is not None:
        severity = rule.severity
        category = rule.category
        bucket = rule.bucket or bucket_for_category(rule.category)
        rule_name = rule.name
    else:
        try:
            severity = parse_severity(raw.get("severity"))
        except UnknownSeverityError as exc:
            raise MalformedFindingError(str(exc)) from exc
        category = _parse_category(raw.get("category"))
        bucket = bucket_for_category(category)
        rule_name = _clean_text(raw.get("ruleName") or raw.get("rule_name")) or None

    return Violation(
        rule_id=rule_id,
        rule_name=rule_name,
        message=message,
        evidence=_clean_text(raw.get("timestamp") or raw.get("evidence")),
        severity=severity,
        original_severity=severity,
        category=category,
        bucket=bucket,
        issue_key=get_issue_key(message, rule_id),
        suggestion=_clean_text(raw.get("suggestion")) or None,
        confidence=_parse_confidence(raw.get("confidence")),
    )


def apply_preference(violation: Violation, preferences: PreferenceMap) -> Violation:
    preference = preferences.get(violation.issue_key)
    effective = resolve_effective_severity(violation.original_severity, preference)
    return violation.model_copy(
        update={"severity": effective, "overridden": preference is not None}
    )


def assemble_result(
    video_format: VideoFormat,
    rule_set: RuleSet,
    violations: List[Violation],
    summary: str,
    weighting: Union[str, ScoreWeights, None] = None,
) -> LintResult:
    ordered = sorted(violations, key=lambda v: severity_rank(v.severity))
    catalog_ids = {rule.id for rule in rule_set.rules}
    violated_ids = {v.rule_id for v in ordered if v.rule_id in catalog_ids}
    counts = {severity: 0 for severity in Severity}
    for violation in ordered:
        counts[violation.severity] += 1

    return LintResult(
        format=video_format,
        total_rules=len(rule_set.rules),
        passed=max(len(rule_set.rules) - len(violated_ids), 0),
        critical=counts[Severity.CRITICAL],
        moderate=counts[Severity.MODERATE],
        minor=counts[Severity.MINOR],
        ignored=counts[Severity.IGNORED],
        lint_score=lint_score(ordered),
        scores=compute_scores(ordered, video_format, weighting),
        violations=ordered,
        summary=summary,
    )


def adjust_lint_result(
    result: LintResult,
    preferences: Optional[Mapping[str, Any]],
    weighting: Union[str, ScoreWeights, None] = None,
) -> LintResult:
    """Re-resolve a stored result against a newer preference map, without re-analyzing."""
    prefs = coerce_preferences(preferences)
    violations = [apply_preference(v, prefs) for v in result.violations]
    return assemble_result(result.format, get_rule_set(result.format), violations, result.summary, weighting)


class VideoLinter:
    """Lints short-form videos against format-specific rules."""

    def __init__(
        self,
        analyzer: VideoAnalyzer,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
        score_weighting: Union[str, ScoreWeights, None] = "mean",
    ):
        self.analyzer = analyzer
        self.timeout_seconds = timeout_seconds
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self.score_weighting = score_weighting

    def get_rule_set(self, video_format: Union[VideoFormat, str]) -> RuleSet:
        return get_rule_set(validate_format(video_format))

    def get_rules(self, video_format: Union[VideoFormat, str]) -> List[Rule]:
        return list(self.get_rule_set(video_format).rules)

    def get_rule(self, video_format: Union[VideoFormat, str], rule_id: str) -> Optional[Rule]:
        return _find_rule(self.get_rule_set(video_format), rule_id)

    async def _analyze(self, video_source: str, prompt: str, timeout_seconds: float) -> str:
        try:
            response = await asyncio.wait_for(
                self.analyzer.analyze_video(
                    video_source,
                    prompt,
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.error("Video analysis timed out after %.1fs for %s", timeout_seconds, video_source)
            raise AnalyzerFailureError(f"Video analysis timed out after {timeout_seconds:.0f}s") from exc
        except AnalyzerFailureError:
            raise
        except Exception as exc:
            logger.error("Video analysis failed for %s: %s", video_source, exc)
            raise AnalyzerFailureError(f"Video analysis failed: {exc}") from exc
        return response.content

    def build_result(
        self,
        video_format: VideoFormat,
        content: str,
        preferences: Optional[Mapping[str, Any]] = None,
    ) -> LintResult:
        """Turn raw analyzer text into a LintResult."""
        rule_set = get_rule_set(video_format)
        raw_findings, summary = parse_lint_response(content)
        prefs = coerce_preferences(preferences)

        violations: List[Violation] = []
        for index, raw in enumerate(raw_findings):
            try:
                violation = normalize_finding(raw, rule_set)
            except MalformedFindingError as exc:
                logger.warning("Dropping malformed finding #%d: %s", index, exc)
                continue
            violations.append(apply_preference(violation, prefs))

        return assemble_result(video_format, rule_set, violations, summary, self.score_weighting)

    async def lint(
        self,
        video_source: str,
        video_format: Union[VideoFormat, str],
        preferences: Optional[Mapping[str, Any]] = None,
        timeout_seconds: Optional[float] = None,
    ) -> LintResult:
        """
        Lint a video and return structured results.

        Args:
            video_source: Video URL or analyzer file reference
            video_format: talking_head, gameplay, other or demo
            preferences: issue_key -> {severity, original_severity} overrides
            timeout_seconds: Upper bound on the analyzer call

        Raises:
            InvalidFormatError: before the analyzer is called
            AnalyzerFailureError: analyzer error, timeout or unusable output
        """
        resolved_format = validate_format(video_format)
        video_source = _clean_text(video_source)
        if not video_source:
            raise ValueError("video_source is required")

        rule_set = get_rule_set(resolved_format)
        prompt = build_prompt(rule_set)
        timeout = timeout_seconds if timeout_seconds is not None else self.timeout_seconds

        content = await self._analyze(video_source, prompt, timeout)
        result = self.build_result(resolved_format, content, preferences)

        logger.info(
            "Linted %s video: %d violations, lint score %d",
            resolved_format.value,
            len(result.violations),
            result.lint_score,
        )
        return result
