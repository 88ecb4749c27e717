import asyncio
import json

import pytest

from linter import (
    AnalyzerFailureError,
    InvalidFormatError,
    LintResult,
    VideoLinter,
    adjust_lint_result,
    normalize_finding,
    validate_format,
)
from linter.errors import MalformedFindingError
from linter.rules import get_rule, get_rule_set
from linter.types import RuleCategory, ScoreBucket, Severity, VideoFormat
from tests.fakes import FakeAnalyzer

WEAK_HOOK = {"ruleId": "weak_hook", "severity": "critical"}


def _linter(payload=None, **kwargs) -> VideoLinter:
    return VideoLinter(FakeAnalyzer(payload), **kwargs)


def test_validate_format():
    assert validate_format("demo") == VideoFormat.DEMO
    assert validate_format(VideoFormat.GAMEPLAY) == VideoFormat.GAMEPLAY
    for value in ("spreadsheet", "Talking_Head", "", None, 3):
        with pytest.raises(InvalidFormatError):
            validate_format(value)


@pytest.mark.asyncio
async def test_single_unknown_rule_finding_deducts_ten_points():
    linter = _linter({"violations": [WEAK_HOOK]})
    result = await linter.lint("https://example.com/v.mp4", "talking_head")

    assert len(result.violations) == 1
    violation = result.violations[0]
    assert violation.severity == Severity.CRITICAL
    assert violation.issue_key == "weak_hook"
    assert violation.category == RuleCategory.RETENTION
    assert result.scores.structure_pacing == 90
    assert result.scores.hook_strength == 100
    assert result.lint_score == 90
    assert result.critical == 1


@pytest.mark.asyncio
async def test_preference_downgrades_deduction():
    linter = _linter({"violations": [WEAK_HOOK]})
    preferences = {"weak_hook": {"severity": "minor", "original_severity": "critical"}}
    result = await linter.lint("https://example.com/v.mp4", "talking_head", preferences)

    violation = result.violations[0]
    assert violation.severity == Severity.MINOR
    assert violation.original_severity == Severity.CRITICAL
    assert violation.overridden is True
    assert result.scores.structure_pacing == 98
    assert result.critical == 0
    assert result.minor == 1


@pytest.mark.asyncio
async def test_ignored_preference_removes_deduction():
    linter = _linter({"violations": [WEAK_HOOK]})
    preferences = {"weak_hook": {"severity": "ignored", "original_severity": "critical"}}
    result = await linter.lint("https://example.com/v.mp4", "talking_head", preferences)

    assert result.violations[0].severity == Severity.IGNORED
    assert result.ignored == 1
    assert result.lint_score == 100


@pytest.mark.asyncio
async def test_invalid_format_fails_before_analyzer_call():
    analyzer = FakeAnalyzer({"violations": []})
    linter = VideoLinter(analyzer)
    with pytest.raises(InvalidFormatError):
        await linter.lint("https://example.com/v.mp4", "spreadsheet")
    assert analyzer.calls == []


@pytest.mark.asyncio
async def test_blank_source_is_rejected():
    analyzer = FakeAnalyzer()
    with pytest.raises(ValueError):
        await VideoLinter(analyzer).lint("   ", "demo")
    assert analyzer.calls == []


@pytest.mark.asyncio
async def test_malformed_findings_are_dropped():
    payload = {
        "violations": [
            {"message": "", "severity": "critical"},
            {"message": "Music drowns out the voice", "severity": "loud"},
            "not an object",
            {"message": "Captions cover the face", "severity": "moderate", "category": "visual"},
        ],
        "summary": "Mixed",
    }
    result = await _linter(payload).lint("https://example.com/v.mp4", "other")

    assert [v.message for v in result.violations] == ["Captions cover the face"]
    assert result.violations[0].bucket == ScoreBucket.DELIVERY_PERFORMANCE
    assert result.summary == "Mixed"


@pytest.mark.asyncio
async def test_catalog_rule_uses_catalog_metadata():
    payload = {
        "violations": [
            {
                "ruleId": "th_hook_timing",
                "severity": "minor",
                "category": "cta",
                "message": "Hook lands at 0:05",
                "timestamp": "0:05",
                "suggestion": "Cut the first 5 seconds",
                "confidence": 1.7,
            }
        ]
    }
    result = await _linter(payload).lint("https://example.com/v.mp4", "talking_head")

    violation = result.violations[0]
    assert violation.severity == Severity.CRITICAL
    assert violation.category == RuleCategory.HOOK
    assert violation.bucket == ScoreBucket.HOOK_STRENGTH
    assert violation.rule_name
    assert violation.evidence == "0:05"
    assert violation.confidence == 1.0
    assert result.passed == result.total_rules - 1


@pytest.mark.asyncio
async def test_violations_sorted_most_severe_first_and_counted():
    payload = {
        "violations": [
            {"message": "minor thing", "severity": "minor"},
            {"message": "critical thing", "severity": "critical"},
            {"message": "moderate thing", "severity": "moderate"},
        ]
    }
    result = await _linter(payload).lint("https://example.com/v.mp4", "gameplay")

    assert [v.severity for v in result.violations] == [Severity.CRITICAL, Severity.MODERATE, Severity.MINOR]
    assert (result.critical, result.moderate, result.minor, result.ignored) == (1, 1, 1, 0)
    assert result.total_rules == len(get_rule_set("gameplay").rules)
    assert result.passed == result.total_rules


@pytest.mark.asyncio
async def test_analyzer_error_becomes_analyzer_failure():
    linter = VideoLinter(FakeAnalyzer(error=RuntimeError("quota exceeded")))
    with pytest.raises(AnalyzerFailureError, match="quota exceeded"):
        await linter.lint("https://example.com/v.mp4", "demo")


@pytest.mark.asyncio
async def test_analyzer_timeout_becomes_analyzer_failure():
    class SlowAnalyzer(FakeAnalyzer):
        async def analyze_video(self, video_source, prompt, **kwargs):
            await asyncio.sleep(5)

    linter = VideoLinter(SlowAnalyzer())
    with pytest.raises(AnalyzerFailureError, match="timed out"):
        await linter.lint("https://example.com/v.mp4", "demo", timeout_seconds=0.01)


@pytest.mark.asyncio
async def test_unparseable_output_is_an_analyzer_failure():
    linter = VideoLinter(FakeAnalyzer(content="I could not watch this video."))
    with pytest.raises(AnalyzerFailureError):
        await linter.lint("https://example.com/v.mp4", "demo")


@pytest.mark.asyncio
async def test_prompt_and_generation_settings_reach_analyzer():
    analyzer = FakeAnalyzer()
    linter = VideoLinter(analyzer, temperature=0.1, max_output_tokens=1024)
    await linter.lint(" https://example.com/v.mp4 ", VideoFormat.DEMO)

    call = analyzer.calls[0]
    assert "dm_hook_outcome_first" in call["prompt"]
    assert call["temperature"] == 0.1
    assert call["max_output_tokens"] == 1024


def test_normalize_finding_without_message_uses_rule_description():
    rule_set = get_rule_set("talking_head")
    violation = normalize_finding({"ruleId": "th_lighting"}, rule_set)
    assert violation.message == get_rule("talking_head", "th_lighting").description

    with pytest.raises(MalformedFindingError):
        normalize_finding({"severity": "minor"}, rule_set)


def test_free_form_finding_gets_hashed_issue_key():
    rule_set = get_rule_set("other")
    violation = normalize_finding({"message": "ab", "severity": "minor", "category": "unknown"}, rule_set)
    assert violation.issue_key == "ai_2e9"
    assert violation.category == RuleCategory.RETENTION


def test_result_serializes_with_camel_case_aliases():
    linter = _linter()
    result = linter.build_result(VideoFormat.OTHER, json.dumps({"violations": [WEAK_HOOK]}))
    dumped = result.model_dump(by_alias=True, mode="json")

    assert dumped["lintScore"] == 90
    assert dumped["scores"]["structurePacing"] == 90
    assert dumped["violations"][0]["ruleId"] == "weak_hook"
    assert dumped["violations"][0]["issueKey"] == "weak_hook"
    assert LintResult.model_validate(dumped) == result


def test_adjust_lint_result_reapplies_new_preferences():
    linter = _linter()
    original = linter.build_result(VideoFormat.TALKING_HEAD, json.dumps({"violations": [WEAK_HOOK]}))

    adjusted = adjust_lint_result(
        original, {"weak_hook": {"severity": "moderate", "original_severity": "critical"}}
    )
    assert adjusted.violations[0].severity == Severity.MODERATE
    assert adjusted.lint_score == 95

    restored = adjust_lint_result(adjusted, {})
    assert restored.violations[0].severity == Severity.CRITICAL
    assert restored.lint_score == 90
