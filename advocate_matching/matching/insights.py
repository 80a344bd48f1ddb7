"""Insight analyzer: summarize any result set by confidence tier and reasons."""

from collections import Counter
from typing import Sequence

from advocate_matching.utils.text import round_half_up

from .models import ConfidenceTier, MatchInsights, MatchResult

TOP_REASON_LIMIT = 5


def analyze_insights(matches: Sequence[MatchResult], limit: int = TOP_REASON_LIMIT) -> MatchInsights:
    """Count results per confidence tier and surface the most common reasons.

    Reasons with equal frequency keep the order in which they were first
    seen. An empty result set yields a zeroed MatchInsights.
    """
    if not matches:
        return MatchInsights()

    tiers = Counter(match.confidence for match in matches)
    reason_counts: Counter = Counter()
    for match in matches:
        reason_counts.update(match.reasons)

    return MatchInsights(
        total_matches=len(matches),
        high_confidence_count=tiers[ConfidenceTier.HIGH],
        medium_confidence_count=tiers[ConfidenceTier.MEDIUM],
        low_confidence_count=tiers[ConfidenceTier.LOW],
        average_score=round_half_up(sum(match.score for match in matches) / len(matches)),
        top_reasons=tuple(reason for reason, _ in reason_counts.most_common(limit)),
    )
