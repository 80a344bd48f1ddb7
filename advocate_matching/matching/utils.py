"""Utility functions for slicing result sets and preparing them for consumers.

The presentation layer receives JSON-ready dicts from the build_* helpers;
the CLI prints format_recommendations().
"""

from typing import Dict, List, Optional, Sequence, Union

from .models import (
    ConfidenceTier,
    MatchInsights,
    MatchingStats,
    MatchResponse,
    MatchResult,
)


def filter_by_confidence(
    matches: Sequence[MatchResult], confidence: Union[ConfidenceTier, str]
) -> List[MatchResult]:
    """Keep matches in one confidence tier."""
    tier = ConfidenceTier(confidence)
    return [match for match in matches if match.confidence == tier]


def filter_by_min_score(matches: Sequence[MatchResult], min_score: int) -> List[MatchResult]:
    return [match for match in matches if match.score >= min_score]


def top_matches(matches: Sequence[MatchResult], count: int) -> List[MatchResult]:
    """First ``count`` matches of an already-ranked list."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    return list(matches[:count])


def matches_for_opportunity(matches: Sequence[MatchResult], opportunity_id: str) -> List[MatchResult]:
    return [match for match in matches if match.opportunity_id == opportunity_id]


def matches_for_advocate(matches: Sequence[MatchResult], advocate_id: str) -> List[MatchResult]:
    return [match for match in matches if match.advocate.id == advocate_id]


def build_recommendation_payload(result: MatchResult) -> Dict:
    """Build a JSON-ready dict describing one recommendation.

    Returns:
        Dict with keys:
        - advocate_id / advocate_name: Identity of the recommended advocate
        - score: Composite score (0-100)
        - confidence: "low", "medium" or "high"
        - reasons: Reasons of contributing dimensions, in evaluation order
        - breakdown: Sub-score per dimension (rounded to 2 decimals)
        - opportunity_id / opportunity_name: Set for batch results only
    """
    return {
        "advocate_id": result.advocate.id,
        "advocate_name": result.advocate.display_name,
        "score": result.score,
        "confidence": result.confidence.value,
        "reasons": list(result.reasons),
        "breakdown": {
            item.dimension.value: round(item.score, 2) for item in result.breakdown
        },
        "opportunity_id": result.opportunity_id,
        "opportunity_name": result.opportunity_name,
    }


def build_stats_payload(stats: MatchingStats) -> Dict:
    """Serialize MatchingStats, including the criteria that produced them."""
    criteria = stats.criteria
    return {
        "opportunity_id": stats.opportunity_id,
        "total_advocates": stats.total_advocates,
        "eligible_advocates": stats.eligible_advocates,
        "matches_found": stats.matches_found,
        "average_score": stats.average_score,
        "top_score": stats.top_score,
        "criteria": {
            "max_results": criteria.max_results,
            "min_score": criteria.min_score,
            "include_inactive": criteria.include_inactive,
            "preferred_regions": list(criteria.preferred_regions),
            "exclude_advocate_ids": sorted(criteria.exclude_advocate_ids),
        },
    }


def build_insights_payload(insights: MatchInsights) -> Dict:
    return {
        "total_matches": insights.total_matches,
        "tier_counts": insights.tier_counts,
        "average_score": insights.average_score,
        "top_reasons": list(insights.top_reasons),
    }


def build_response_payload(
    response: MatchResponse, insights: Optional[MatchInsights] = None
) -> Dict:
    """Serialize a full response (matches, stats and optional insights)."""
    payload = {
        "matches": [build_recommendation_payload(match) for match in response.matches],
        "stats": build_stats_payload(response.stats),
    }
    if insights is not None:
        payload["insights"] = build_insights_payload(insights)
    return payload


def format_recommendations(
    response: MatchResponse, insights: Optional[MatchInsights] = None
) -> str:
    """Format a response as a plain-text report.

    Example output:
        Advocate Recommendations
        ============================================================
        Pool: 3 advocates, 2 eligible, 1 recommended
        ...
        1. Ada Lovelace (adv-1)  score=93  confidence=high
             - Exact industry match
    """
    stats = response.stats
    lines = ["Advocate Recommendations", "=" * 60]
    lines.append(
        f"Pool: {stats.total_advocates} advocates, {stats.eligible_advocates} eligible, "
        f"{stats.matches_found} recommended"
    )
    lines.append(f"Average score: {stats.average_score}  Top score: {stats.top_score}")
    lines.append("")

    if not response.matches:
        lines.append("No advocates met the matching criteria.")

    for rank, match in enumerate(response.matches, 1):
        header = (
            f"{rank}. {match.advocate.display_name} ({match.advocate.id})  "
            f"score={match.score}  confidence={match.confidence.value}"
        )
        if match.opportunity_id:
            header += f"  opportunity={match.opportunity_id}"
        lines.append(header)
        for reason in match.reasons:
            lines.append(f"     - {reason}")

    if insights is not None:
        lines.append("")
        lines.append("Insights")
        lines.append("-" * 60)
        counts = insights.tier_counts
        lines.append(
            f"High: {counts['high']}  Medium: {counts['medium']}  Low: {counts['low']}"
        )
        if insights.top_reasons:
            lines.append("Most common reasons:")
            for reason in insights.top_reasons:
                lines.append(f"  - {reason}")

    return "\n".join(lines)
