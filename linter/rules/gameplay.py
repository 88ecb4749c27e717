"""Rules for gameplay short-form videos."""

from ..types import Rule, RuleCategory, RuleSet, ScoreBucket, Severity, VideoFormat

GAMEPLAY_PROMPT = """You are a VIDEO LINTER for GAMEPLAY format short-form content.

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
      "ruleId": "gp_hook_action",
      "ruleName": "Immediate Action",
      "severity": "critical",
      "category": "hook",
      "message": "Video starts with a menu screen for 4 seconds before action",
      "timestamp": "0:00-0:04",
      "suggestion": "Cut the menu screen. Start immediately with the kill/play moment at 0:04",
      "confidence": 0.98
    }
  ],
  "summary": "Brief 2-3 sentence summary of overall video quality and main issues"
}

Be specific. Reference actual moments in the video. Provide actionable feedback."""

GAMEPLAY_RULES = RuleSet(
    format=VideoFormat.GAMEPLAY,
    rules=[
        # Hook
        Rule(
            id="gp_hook_action",
            name="Immediate Action",
            description="Hook should show exciting gameplay moment within first 2 seconds",
            severity=Severity.CRITICAL,
            category=RuleCategory.HOOK,
            check="Does the video start with immediate action or an exciting gameplay moment in 0-2s?",
        ),
        Rule(
            id="gp_hook_text_overlay",
            name="Hook Text Overlay",
            description="Text overlay in first 3 seconds increases retention",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check="Is there text overlay in the first 0-3 seconds explaining what will happen?",
        ),
        # Visual
        Rule(
            id="gp_gameplay_clarity",
            name="Clear Gameplay Visibility",
            description="Game UI and action should be clearly visible",
            severity=Severity.CRITICAL,
            category=RuleCategory.VISUAL,
            check="Is the gameplay clear and easy to see? UI elements readable?",
        ),
        Rule(
            id="gp_facecam_size",
            name="Facecam Not Blocking Action",
            description="If facecam present, it should not block critical gameplay",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="If there is a facecam, does it block important game UI or action?",
        ),
        Rule(
            id="gp_visual_quality",
            name="High Visual Quality",
            description="Gameplay footage should be high quality (1080p+, smooth)",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Is the gameplay footage high quality? Smooth framerate? Good resolution?",
        ),
        # Audio
        Rule(
            id="gp_audio_mix",
            name="Balanced Audio Mix",
            description="Game audio and commentary should be balanced",
            severity=Severity.CRITICAL,
            category=RuleCategory.AUDIO,
            check="Is the audio mix balanced? Can you hear both commentary and game sounds clearly?",
        ),
        Rule(
            id="gp_commentary_energy",
            name="Energetic Commentary",
            description="Commentary should match the intensity of gameplay",
            severity=Severity.MODERATE,
            category=RuleCategory.AUDIO,
            check="Does the commentary energy match the gameplay intensity?",
        ),
        # Retention
        Rule(
            id="gp_highlight_moment",
            name="Clear Highlight Moment",
            description="Video should build to or feature a clear highlight moment",
            severity=Severity.CRITICAL,
            category=RuleCategory.RETENTION,
            check="Is there a clear highlight or climax moment? When does it occur?",
        ),
        Rule(
            id="gp_pacing",
            name="Fast Pacing",
            description="Gameplay should be edited for fast pacing, no dead moments",
            severity=Severity.MODERATE,
            category=RuleCategory.PACING,
            check="Is the pacing fast? Any slow moments or dead air that should be cut?",
        ),
        Rule(
            id="gp_music_sync",
            name="Music Synced to Action",
            description="Background music should sync with key gameplay moments",
            severity=Severity.MINOR,
            category=RuleCategory.RETENTION,
            check="If background music is present, does it sync with the action?",
        ),
        # Structure
        Rule(
            id="gp_context_quick",
            name="Quick Context Setup",
            description="Context should be established in first 5 seconds",
            severity=Severity.MODERATE,
            category=RuleCategory.STRUCTURE,
            check="Is the context/setup established quickly (within 5s)? What game? What is happening?",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        Rule(
            id="gp_payoff_clear",
            name="Clear Payoff",
            description="The promised moment or outcome should be shown",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check=(
                "Does the video truly deliver on the hook promise? Is there ANY payoff shown at all? "
                "This is CRITICAL - only flag if NO payoff is delivered. If payoff is shown but "
                "clarity/impact comes later, this is less severe."
            ),
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        Rule(
            id="gp_duration",
            name="Optimal Duration",
            description="Gameplay shorts should be 10-30 seconds for peak retention",
            severity=Severity.MINOR,
            category=RuleCategory.STRUCTURE,
            check="Is the video length optimal (10-30s for most gameplay)?",
        ),
    ],
    prompt_template=GAMEPLAY_PROMPT,
)
