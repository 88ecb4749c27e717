import pytest

from linter import get_rule, get_rule_set, get_rules
from linter.prompts import RULES_PLACEHOLDER, build_prompt, format_rules_list
from linter.rules import RULE_SETS
from linter.severity import ASSIGNABLE_SEVERITIES
from linter.types import ScoreBucket, Severity, VideoFormat


def test_every_format_has_a_rule_set():
    assert set(RULE_SETS) == set(VideoFormat)
    for video_format, rule_set in RULE_SETS.items():
        assert rule_set.format == video_format
        assert rule_set.rules


@pytest.mark.parametrize("video_format", list(VideoFormat))
def test_rule_ids_are_unique_and_severities_assignable(video_format):
    rules = get_rules(video_format)
    ids = [rule.id for rule in rules]
    assert len(ids) == len(set(ids))
    assert all(rule.severity in ASSIGNABLE_SEVERITIES for rule in rules)


@pytest.mark.parametrize("video_format", list(VideoFormat))
def test_prompt_lists_every_rule(video_format):
    rule_set = get_rule_set(video_format)
    assert RULES_PLACEHOLDER in rule_set.prompt_template

    prompt = build_prompt(rule_set)
    assert RULES_PLACEHOLDER not in prompt
    for rule in rule_set.rules:
        assert f"({rule.id})" in prompt


def test_rules_list_format():
    rule_set = get_rule_set("talking_head")
    rendered = format_rules_list(rule_set)
    first = rendered.split("\n\n")[0]
    assert first.startswith("1. [CRITICAL] ")
    assert "(th_hook_timing)" in first
    assert "   Category: hook" in first
    assert "   Check: " in first


def test_get_rule_lookup():
    rule = get_rule(VideoFormat.TALKING_HEAD, "th_hook_timing")
    assert rule is not None
    assert rule.severity == Severity.CRITICAL
    assert get_rule("talking_head", "gp_hook_action") is None


def test_payoff_rules_score_as_value_clarity():
    payoff = get_rule("talking_head", "gen_no_payoff")
    assert payoff.bucket == ScoreBucket.VALUE_CLARITY
    assert get_rule("talking_head", "th_hook_timing").bucket is None


def test_get_rules_returns_a_copy():
    rules = get_rules("demo")
    rules.clear()
    assert get_rules("demo")


def test_prompt_asks_for_uncatalogued_findings():
    # Findings without a ruleId are how the analyzer reports issues the rules miss
    for rule_set in RULE_SETS.values():
        assert "ruleId" in rule_set.prompt_template


def test_rule_ids_are_disjoint_across_formats():
    seen = {}
    for video_format, rule_set in RULE_SETS.items():
        for rule in rule_set.rules:
            assert rule.id not in seen, f"{rule.id} in both {seen.get(rule.id)} and {video_format}"
            seen[rule.id] = video_format
