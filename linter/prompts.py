"""Prompt assembly for the analyzer."""

from .types import RuleSet

RULES_PLACEHOLDER = "{{RULES_LIST}}"


def format_rules_list(rule_set: RuleSet) -> str:
    """Render the numbered rule list injected into a format's prompt template."""
    blocks = []
    for idx, rule in enumerate(rule_set.rules, start=1):
        lines = [
            f"{idx}. [{rule.severity.value.upper()}] {rule.name} ({rule.id})",
            f"   Category: {rule.category.value}",
            f"   Check: {rule.check}",
        ]
        if rule.good_example:
            lines.append(f"   Good: {rule.good_example}")
        if rule.bad_example:
            lines.append(f"   Bad: {rule.bad_example}")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


def build_prompt(rule_set: RuleSet) -> str:
    return rule_set.prompt_template.replace(RULES_PLACEHOLDER, format_rules_list(rule_set))
