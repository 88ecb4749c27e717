"""Rules for talking-head short-form videos."""

from ..types import Rule, RuleCategory, RuleSet, ScoreBucket, Severity, VideoFormat

TALKING_HEAD_PROMPT = """You are a VIDEO LINTER for TALKING HEAD format short-form content.

Analyze the video against these specific rules. For EACH rule, determine if it PASSES or FAILS.

RULES TO CHECK:
{{RULES_LIST}}

For each violation found, provide:
1. Rule ID that was violated
2. Specific timestamp where issue occurs (if applicable)
3. What's wrong - be specific and reference actual content
4. How to fix it - use this format:
   - Start with action verb (Cut, Replace, Add, Move, Show, Start)
   - State exactly what to change
   - Give specific example if applicable
   - Keep under 15 words when possible
   - NO vague words: avoid "consider", "maybe", "try to", "could"
5. Confidence score (0.0-1.0)

If you notice a serious problem that no rule covers, report it without a ruleId and pick
the closest category and a severity of critical, moderate or minor.

SUGGESTION EXAMPLES (Good):
- "Cut the first 5 seconds. Start with: 'Most people waste money on...'"
- "Replace 'Today I want to talk about' with the main point directly"
- "Add eye contact with camera during 0:00-0:03"

SUGGESTION EXAMPLES (Bad):
- "Consider making the hook more engaging" (too vague)
- "You should try to improve the energy" (not specific)

Return VALID JSON ONLY in this format:
{
  "violations": [
    {
      "ruleId": "th_hook_timing",
      "ruleName": "Hook Within 3 Seconds",
      "severity": "critical",
      "category": "hook",
      "message": "Hook appears at 0:05, which is too late",
      "timestamp": "0:05",
      "suggestion": "Cut 0:00-0:05. Start with: 'Want to know why 90% fail?'",
      "confidence": 0.95
    }
  ],
  "summary": "Brief 2-3 sentence summary of overall video quality and main issues"
}

Be direct. Use imperative verbs. Give specific examples."""

TALKING_HEAD_RULES = RuleSet(
    format=VideoFormat.TALKING_HEAD,
    rules=[
        # Hook
        Rule(
            id="th_hook_timing",
            name="Hook Within 3 Seconds",
            description="The hook must grab attention within the first 3 seconds",
            severity=Severity.CRITICAL,
            category=RuleCategory.HOOK,
            check="Does the video have a compelling hook in the first 0-3 seconds? Check for pattern interrupt, curiosity gap, or bold statement.",
        ),
        Rule(
            id="th_hook_generic_opener",
            name="Generic Opener",
            description='Hook starts with filler phrases like "Today I want to talk about..." or "In this video..."',
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check="Does the hook start with generic filler phrases instead of diving straight into the value?",
            good_example="Start with the punchline directly: \"Most people do X wrong. Here's the fix.\"",
            bad_example='Avoid: "Today I want to talk about...", "In this video...", "So..."',
        ),
        Rule(
            id="gen_hook_clear_promise",
            name="No Clear Promise Early",
            description="Viewer is not told what they will get (promise/result/pain) within first 2 seconds",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check="Within the first 2 seconds, is the viewer told what they will get? Is there a clear promise, result, or pain point stated?",
            good_example="Add a one-line promise in first 1-2 seconds: \"Here's how to X in Y minutes\"",
            bad_example="Vague openings without stating the outcome or benefit",
        ),
        Rule(
            id="th_hook_eye_contact",
            name="Direct Eye Contact in Hook",
            description="Speaker should make direct eye contact with camera during hook",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check="Is the speaker looking directly at the camera during the first 3 seconds?",
        ),
        Rule(
            id="th_hook_energy",
            name="High Energy Opening",
            description="Hook should have noticeably higher energy than rest of video",
            severity=Severity.MODERATE,
            category=RuleCategory.HOOK,
            check="Does the speaker show high energy, enthusiasm, or urgency in the opening?",
        ),
        # Visual
        Rule(
            id="th_framing",
            name="Proper Framing",
            description="Subject should be properly framed (rule of thirds, headroom)",
            severity=Severity.MINOR,
            category=RuleCategory.VISUAL,
            check="Is the subject well-framed with appropriate headroom and following rule of thirds?",
        ),
        Rule(
            id="th_background_distraction",
            name="No Background Distractions",
            description="Background should be clean and not compete with speaker",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Is the background clean and non-distracting? Any competing visual elements?",
        ),
        Rule(
            id="th_lighting",
            name="Good Lighting",
            description="Face should be well-lit and visible",
            severity=Severity.MODERATE,
            category=RuleCategory.VISUAL,
            check="Is the subject well-lit? Face clearly visible? No harsh shadows?",
        ),
        # Audio
        Rule(
            id="th_audio_clarity",
            name="Clear Audio",
            description="Voice should be clear and easy to understand",
            severity=Severity.CRITICAL,
            category=RuleCategory.AUDIO,
            check="Is the audio clear? Any background noise, echo, or audio issues?",
        ),
        Rule(
            id="th_speaking_pace",
            name="Optimal Speaking Pace",
            description="Speaker should maintain engaging pace (not too slow or fast)",
            severity=Severity.MODERATE,
            category=RuleCategory.PACING,
            check="Is the speaking pace optimal? Not too rushed or too slow?",
        ),
        # Retention
        Rule(
            id="th_jump_cuts",
            name="Use Jump Cuts",
            description="Should use jump cuts to maintain pace and remove dead air",
            severity=Severity.MINOR,
            category=RuleCategory.RETENTION,
            check="Are jump cuts used effectively to remove pauses and maintain energy?",
        ),
        Rule(
            id="th_b_roll",
            name="Strategic B-Roll Usage",
            description="B-roll should be used to illustrate points and break monotony",
            severity=Severity.MINOR,
            category=RuleCategory.RETENTION,
            check="Is B-roll or visual aids used to illustrate key points? If talking head only, is it engaging enough?",
        ),
        Rule(
            id="th_duration",
            name="Optimal Duration",
            description="Talking head shorts should be 15-90 seconds for best retention",
            severity=Severity.MODERATE,
            category=RuleCategory.STRUCTURE,
            check="Is the video length appropriate? Aim for 15-90s for talking head content (YouTube Shorts support up to 180s).",
        ),
        Rule(
            id="gen_credibility_gap",
            name="Credibility Gap",
            description="Strong claim made without any proof, example, constraint, or demonstration",
            severity=Severity.MODERATE,
            category=RuleCategory.RETENTION,
            check="Are strong claims backed up with evidence, examples, numbers, or demonstrations? Or are they unsupported assertions?",
            good_example="Add proof: numbers, mini-demo, before/after, or specific case",
            bad_example="Making bold claims without any supporting evidence",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        # Structure
        Rule(
            id="th_setup_too_long",
            name="Setup Too Long",
            description="Setup or background context exceeds 35% of total video duration",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check="Does the setup/background take up more than 35% of the video before getting to the main point?",
            good_example="Replace background with one-line conclusion + example. Get to the point fast.",
            bad_example="Spending the first third of the video on context or background",
        ),
        Rule(
            id="th_one_idea",
            name="Single Core Message",
            description="Video should focus on one clear idea or takeaway",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check="Does the video focus on ONE clear idea? Or does it try to cover too much?",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        Rule(
            id="gen_no_payoff",
            name="No Payoff / No Answer",
            description="Video ends without delivering the promised answer or result",
            severity=Severity.CRITICAL,
            category=RuleCategory.STRUCTURE,
            check="Does the video deliver on its promise? Is there a clear final takeaway, step, list, or conclusion?",
            good_example="Add a clear final takeaway: a concrete step, list, or explicit conclusion",
            bad_example="Video ends abruptly without answering the question posed in the hook",
            bucket=ScoreBucket.VALUE_CLARITY,
        ),
        # CTA
        Rule(
            id="th_cta_presence",
            name="Clear Call-to-Action",
            description="Should end with clear next step or CTA",
            severity=Severity.MINOR,
            category=RuleCategory.CTA,
            check="Is there a clear CTA or next step at the end? What should viewers do?",
        ),
    ],
    prompt_template=TALKING_HEAD_PROMPT,
)
