"""Rules for demo and screen-recording short-form videos."""

from ..types import Rule, RuleCategory, RuleSet, ScoreBucket, Severity, VideoFormat

DEMO_PROMPT = """You are a VIDEO LINTER for DEMO/SCREEN RECORDING format short-form content.

This includes: software demos, product walkthroughs, tool tutorials, screen recordings, app showcases,
and any video where the PRIMARY visual is a screen, UI, or product being demonstrated.

Analyze the video against these specific rules. For EACH rule, determine if it PASSES or FAILS.

RULES TO CHECK:
{{RULES_LIST}}

DEMO-SPECIFIC CONTEXT:
- The #1 retention killer in demos is DEAD TIME (loading, typing, navigating)
- Screen readability on MOBILE is critical, most viewers watch on phones
- Showing the outcome/result FIRST is the most effective hook pattern for demos
- Annotations and zoom-ins are essential because raw screen recordings are hard to follow
- Voiceover should explain the "why" while the screen shows the "what"

For each violation found, provide:
1. Rule ID that was violated
2. Specific timestamp where issue occurs (if applicable)
3. What's wrong - be specific and reference actual content
4. How to fix it - start with an action verb (Cut, Replace, Add, Move, Show, Speed up, Zoom into),
   state exactly what to change, keep under 15 words, no vague words like "consider" or "maybe"
5. Confidence score (0.0-1.0)

If you notice a serious problem that no rule covers, report it without a ruleId and pick
the closest category and a severity of critical, moderate or minor.

Return VALID JSON ONLY in this format:
{
  "violations": [
    {
      "ruleId": "dm_hook_outcome_first",
      "ruleName": "Show Outcome First",
      "severity": "critical",
      "category": "hook",
      "message": "Video starts with opening a browser and navigating to the tool, no outcome shown in first 3 seconds",
      "timestamp": "0:00-0:05",
      "suggestion": "Move the final result from 0:45 to 0:00",
      "confidence": 0.95
    }
  ],
  "summary": "Brief 2-3 sentence summary of overall video quality and main issues"
}

Be direct. Use imperative verbs. Give specific examples. Reference actual screen content."""

DEMO_RULES = RuleSet(
    format=VideoFormat.DEMO,
    rules=[
        # Hook
        Rule(
            id="dm_hook_outcome_first",
            name="Show Outcome First",
            description='Demo videos must show the end result or "wow moment" within the first 3 seconds',
            severity=Severity.CRITICAL,
            category=RuleCategory.HOOK,
            check=(
                "Does the video show the final result, outcome, or most impressive moment in the first 0-3 seconds? "
                "Demo videos that start with setup (opening apps, navigating menus) instead of the payoff lose viewers instantly."
            ),
            good_example='Start with the finished result: "Watch this AI generate a full website in 10 seconds" + show the result',
            bad_example="Starting with: opening a browser, typing a URL, logging in, or navigating to a feature",
        ),
        Rule(
            id="dm_hook_text_overlay",
            name="Hook Text Overlay",
            description="Text overlay in first 3 seconds explaining what the viewer will see",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check=(
                "Is there text overlay in the first 0-3 seconds that tells the viewer what they are about to see? "
                "Screen recordings are hard to parse without context."
            ),
        ),
        Rule(
            id="dm_hook_clear_promise",
            name="Clear Value Promise",
            description="Viewer should know what they will learn or see within first 2 seconds",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check=(
                "Within the first 2 seconds, does the viewer understand what they will learn, see, or gain from watching? "
                "Is there a clear promise via text, voiceover, or visual?"
            ),
        ),
        # Visual
        Rule(
            id="dm_screen_readability",
            name="Screen Content Readable",
            description="Text, UI elements, and code on screen must be clearly readable",
            severity=Severity.CRITICAL,
            category=RuleCategory.VISUAL,
            check=(
                "Is the screen content (text, code, UI) clearly readable? Is the font size large enough? "
                "Small text on a phone screen is a major issue for demo videos."
            ),
            good_example="Zoomed-in view of the relevant UI area, large font size, high contrast",
            bad_example="Full desktop screenshot at 1080p where text is tiny and unreadable on mobile",
        ),
        Rule(
            id="dm_zoom_focus",
            name="Strategic Zoom and Focus",
            description="Should zoom into relevant areas rather than showing full screen",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Does the video zoom into or highlight the relevant area of the screen when showing important actions?",
        ),
        Rule(
            id="dm_cursor_highlight",
            name="Cursor/Action Visibility",
            description="Cursor or highlighted area should guide viewer attention",
            severity=Severity.MINOR,
            category=RuleCategory.VISUAL,
            check="Is the cursor clearly visible? Are click actions highlighted or annotated?",
        ),
        # Audio
        Rule(
            id="dm_voiceover_clarity",
            name="Clear Voiceover",
            description="Voiceover or narration should be clear and well-paced",
            severity=Severity.CRITICAL,
            category=RuleCategory.AUDIO,
            check=(
                "If there is voiceover, is it clear and easy to understand? For demos without voiceover, "
                "is there background music or sound design that maintains engagement?"
            ),
        ),
        Rule(
            id="dm_audio_action_sync",
            name="Audio Synced to Actions",
            description="Voiceover or sound effects should sync with on-screen actions",
            severity=Severity.MODERATE,
            category=RuleCategory.AUDIO,
            check="Does the voiceover explain what is happening on screen as it happens? Are sound effects synced with key moments?",
        ),
        # Pacing
        Rule(
            id="dm_dead_time",
            name="No Dead Time",
            description="Loading screens, slow typing, and idle moments must be cut or sped up",
            severity=Severity.CRITICAL,
            category=RuleCategory.PACING,
            check=(
                "Are there any dead moments? Loading screens, slow page loads, long typing sequences, idle navigation, "
                "or waiting for responses should be cut or shown in fast-forward."
            ),
            good_example="Speed up typing sequences 4x, cut loading screens, jump-cut between steps",
            bad_example="Watching a page load for 3 seconds, real-time typing, waiting for AI to generate",
        ),
        Rule(
            id="dm_step_pacing",
            name="Fast Step Transitions",
            description="Transitions between steps should be quick with no unnecessary pauses",
            severity=Severity.MODERATE,
            category=RuleCategory.PACING,
            check="Are transitions between demo steps fast? No lingering on completed steps?",
        ),
        # Structure
        Rule(
            id="dm_setup_too_long",
            name="Setup Too Long",
            description="Context or setup should not exceed 20% of total video for demos",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check="Does the setup/context take more than 20% of the video before the actual demo begins?",
            good_example="Show result in first 3s, then \"Here's how:\" and jump into the demo",
            bad_example="Spending 15+ seconds explaining why the tool exists before showing it",
        ),
        Rule(
            id="dm_one_workflow",
            name="Single Clear Workflow",
            description="Demo should show ONE clear workflow or feature, not multiple unrelated things",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check="Does the demo focus on ONE clear workflow, feature, or use case? Or does it jump between unrelated features?",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        Rule(
            id="dm_payoff_delivered",
            name="Demo Payoff Delivered",
            description="The promised result should be clearly shown",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check=(
                "Does the video clearly show the promised result or outcome? Is there a satisfying reveal moment? "
                "Only flag if NO result is shown."
            ),
            good_example="Show the final output: generated code running, designed page live, tool producing the result",
            bad_example="Video ends mid-demo without showing the final result",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        # Retention
        Rule(
            id="dm_annotations",
            name="On-Screen Annotations",
            description="Text overlays, arrows, or highlights should guide the viewer through the demo",
            severity=Severity.MODERATE,
            category=RuleCategory.RETENTION,
            check="Are there helpful annotations (text overlays, arrows, circles, highlights) that guide the viewer?",
        ),
        Rule(
            id="dm_duration",
            name="Optimal Duration",
            description="Demo shorts should be 15-120 seconds for optimal retention",
            severity=Severity.MINOR,
            category=RuleCategory.STRUCTURE,
            check="Is the video length appropriate for a demo? 15-120 seconds is ideal for short-form demos.",
        ),
        # CTA
        Rule(
            id="dm_cta_try_it",
            name="Try-It CTA",
            description="Should end with a clear way for viewers to try the tool/product",
            severity=Severity.MINOR,
            category=RuleCategory.CTA,
            check='Does the video end with a clear way for viewers to try the product themselves? A link mention, "link in bio", or "comment for access"?',
        ),
    ],
    prompt_template=DEMO_PROMPT,
)
