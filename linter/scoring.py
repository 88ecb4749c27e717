"""
Deterministic score aggregation.

Every bucket starts at 100 and loses the points of each distinct issue key
that lands in it. The overall score combines the four buckets with a weighting;
the default weighting is a simple mean.
"""

from typing import Dict, Iterable, List, Optional, Union

from pydantic import BaseModel

from .severity import points_for
from .types import LintScores, RuleCategory, ScoreBucket, VideoFormat, Violation

BASELINE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100

CATEGORY_BUCKETS: Dict[RuleCategory, ScoreBucket] = {
    RuleCategory.HOOK: ScoreBucket.HOOK_STRENGTH,
    RuleCategory.STRUCTURE: ScoreBucket.STRUCTURE_PACING,
    RuleCategory.PACING: ScoreBucket.STRUCTURE_PACING,
    RuleCategory.RETENTION: ScoreBucket.STRUCTURE_PACING,
    RuleCategory.AUDIO: ScoreBucket.DELIVERY_PERFORMANCE,
    RuleCategory.VISUAL: ScoreBucket.DELIVERY_PERFORMANCE,
    RuleCategory.CTA: ScoreBucket.VALUE_CLARITY,
}


class ScoreWeights(BaseModel):
    hook_strength: float = 0.25
    structure_pacing: float = 0.25
    delivery_performance: float = 0.25
    value_clarity: float = 0.25

    def for_bucket(self, bucket: ScoreBucket) -> float:
        return float(getattr(self, bucket.value))


MEAN_WEIGHTS = ScoreWeights()

# Per-format presets: hook and structure dominate where speech matters less
FORMAT_WEIGHTS: Dict[VideoFormat, ScoreWeights] = {
    VideoFormat.TALKING_HEAD: ScoreWeights(
        hook_strength=0.35, structure_pacing=0.25, value_clarity=0.25, delivery_performance=0.15
    ),
    VideoFormat.GAMEPLAY: ScoreWeights(
        hook_strength=0.40, structure_pacing=0.30, value_clarity=0.15, delivery_performance=0.15
    ),
    VideoFormat.OTHER: ScoreWeights(
        hook_strength=0.40, structure_pacing=0.35, value_clarity=0.15, delivery_performance=0.10
    ),
    VideoFormat.DEMO: ScoreWeights(
        hook_strength=0.40, structure_pacing=0.35, value_clarity=0.15, delivery_performance=0.10
    ),
}

WEIGHTING_STRATEGIES = ("mean", "format")


def _clamp(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    return max(low, min(high, value))


def bucket_for_category(category: RuleCategory) -> ScoreBucket:
    return CATEGORY_BUCKETS[category]


def resolve_weights(
    video_format: VideoFormat,
    weighting: Union[str, ScoreWeights, None] = None,
) -> ScoreWeights:
    """Turn a strategy name (or explicit weights) into ScoreWeights."""
    if isinstance(weighting, ScoreWeights):
        return weighting
    strategy = (weighting or "mean").strip().lower()
    if strategy == "mean":
        return MEAN_WEIGHTS
    if strategy == "format":
        return FORMAT_WEIGHTS[video_format]
    raise ValueError(f"Unknown score weighting '{weighting}'. Must be one of: {', '.join(WEIGHTING_STRATEGIES)}")


def _distinct_by_issue_key(violations: Iterable[Violation]) -> List[Violation]:
    seen = set()
    distinct = []
    for violation in violations:
        if violation.issue_key in seen:
            continue
        seen.add(violation.issue_key)
        distinct.append(violation)
    return distinct


def bucket_scores(violations: Iterable[Violation]) -> Dict[ScoreBucket, int]:
    totals = {bucket: BASELINE_SCORE for bucket in ScoreBucket}
    for violation in _distinct_by_issue_key(violations):
        totals[violation.bucket] += points_for(violation.severity)
    return {bucket: int(_clamp(total)) for bucket, total in totals.items()}


def overall_score(scores: Dict[ScoreBucket, int], weights: Optional[ScoreWeights] = None) -> float:
    weights = weights or MEAN_WEIGHTS
    total_weight = sum(weights.for_bucket(bucket) for bucket in ScoreBucket)
    if total_weight <= 0:
        raise ValueError("Score weights must sum to a positive value")
    weighted = sum(scores[bucket] * weights.for_bucket(bucket) for bucket in ScoreBucket)
    return round(_clamp(weighted / total_weight), 1)


def lint_score(violations: Iterable[Violation]) -> int:
    """Single 0-100 score: every distinct issue deducts from one shared baseline."""
    total = BASELINE_SCORE + sum(points_for(v.severity) for v in _distinct_by_issue_key(violations))
    return int(_clamp(total))


def compute_scores(
    violations: List[Violation],
    video_format: VideoFormat,
    weighting: Union[str, ScoreWeights, None] = None,
) -> LintScores:
    per_bucket = bucket_scores(violations)
    return LintScores(
        hook_strength=per_bucket[ScoreBucket.HOOK_STRENGTH],
        structure_pacing=per_bucket[ScoreBucket.STRUCTURE_PACING],
        delivery_performance=per_bucket[ScoreBucket.DELIVERY_PERFORMANCE],
        value_clarity=per_bucket[ScoreBucket.VALUE_CLARITY],
        overall=overall_score(per_bucket, resolve_weights(video_format, weighting)),
    )
