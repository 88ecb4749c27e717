"""Rules for general short-form videos that fit no other format."""

from ..types import Rule, RuleCategory, RuleSet, ScoreBucket, Severity, VideoFormat

OTHER_PROMPT = """You are a VIDEO LINTER for general short-form content.

Analyze the video against these specific rules. For EACH rule, determine if it PASSES or FAILS.

RULES TO CHECK:
{{RULES_LIST}}

For each violation found, provide:
1. Rule ID that was violated
2. Specific timestamp where issue occurs (if applicable)
3. Clear description of what's wrong
4. Actionable suggestion to fix it
5. Confidence score (0.0-1.0)

If you notice a serious problem that no rule covers, report it without a ruleId and pick
the closest category and a severity of critical, moderate or minor.

Return VALID JSON ONLY in this format:
{
  "violations": [
    {
      "ruleId": "ot_hook_timing",
      "ruleName": "Hook Within 3 Seconds",
      "severity": "critical",
      "category": "hook",
      "message": "First 3 seconds show intro text with no hook",
      "timestamp": "0:00-0:03",
      "suggestion": "Remove intro card. Start with the most interesting moment",
      "confidence": 0.92
    }
  ],
  "summary": "Brief 2-3 sentence summary of overall video quality and main issues"
}

Be specific. Reference actual moments in the video. Provide actionable feedback."""

OTHER_RULES = RuleSet(
    format=VideoFormat.OTHER,
    rules=[
        Rule(
            id="ot_hook_timing",
            name="Hook Within 3 Seconds",
            description="Must grab attention within first 3 seconds",
            severity=Severity.CRITICAL,
            category=RuleCategory.HOOK,
            check="Does the video have a compelling hook in the first 0-3 seconds?",
        ),
        Rule(
            id="ot_visual_interest",
            name="Consistent Visual Interest",
            description="Visuals should maintain interest throughout",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Are the visuals consistently interesting? Any boring static moments?",
        ),
        Rule(
            id="ot_visual_quality",
            name="Good Visual Quality",
            description="Video should be well-lit, in-focus, and high quality",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Is the video quality good? Proper lighting? In focus?",
        ),
        Rule(
            id="ot_audio_quality",
            name="Clear Audio",
            description="Audio should be clear and well-mixed",
            severity=Severity.CRITICAL,
            category=RuleCategory.AUDIO,
            check="Is audio clear? Any background noise or mixing issues?",
        ),
        Rule(
            id="ot_pacing",
            name="Fast Pacing",
            description="Short-form content requires fast pacing",
            severity=Severity.MODERATE,
            category=RuleCategory.PACING,
            check="Is the pacing fast enough for short-form? Any slow moments?",
        ),
        Rule(
            id="ot_cuts",
            name="Dynamic Editing",
            description="Should use cuts to maintain energy",
            severity=Severity.MINOR,
            category=RuleCategory.PACING,
            check="Are cuts used effectively to maintain pace and energy?",
        ),
        Rule(
            id="ot_payoff",
            name="Clear Payoff",
            description="Should deliver on the hook promise",
            severity=Severity.CRITICAL,
            category=RuleCategory.RETENTION,
            check="Does the video deliver on what the hook promises?",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        Rule(
            id="ot_length",
            name="Appropriate Length",
            description="Should be 15-60 seconds based on content",
            severity=Severity.MINOR,
            category=RuleCategory.STRUCTURE,
            check="Is the video length appropriate for the content type?",
        ),
        Rule(
            id="ot_clear_message",
            name="Clear Core Message",
            description="Video should have one clear message or purpose",
            severity=Severity.MODERATE,
            category=RuleCategory.STRUCTURE,
            check="Is there a clear message or purpose? Not too scattered?",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
    ],
    prompt_template=OTHER_PROMPT,
)
