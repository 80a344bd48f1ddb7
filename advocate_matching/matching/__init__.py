"""Advocate matching engine.

This module provides:
- MatchingEngine: composite scoring, single-opportunity and batch recommendations
- Dimension scorers for industry, size, use cases, expertise, region, availability
- filter_eligible: candidate pool eligibility filter
- analyze_insights: confidence-tier and reason summary of a result set
- Utility functions for slicing and serializing results
"""

from .dimensions import (
    score_availability,
    score_company_size,
    score_expertise,
    score_industry,
    score_region,
    score_use_cases,
)
from .eligibility import filter_eligible, ineligibility_reason
from .engine import MatchingEngine
from .exceptions import InvalidCriteriaError, InvalidRecordError, MatchingError
from .insights import analyze_insights
from .models import (
    ConfidenceTier,
    Dimension,
    DimensionScore,
    MatchInsights,
    MatchingStats,
    MatchResponse,
    MatchResult,
)
from .utils import (
    build_recommendation_payload,
    build_response_payload,
    filter_by_confidence,
    filter_by_min_score,
    format_recommendations,
    matches_for_advocate,
    matches_for_opportunity,
    top_matches,
)

__all__ = [
    "MatchingEngine",
    "MatchResult",
    "MatchResponse",
    "MatchingStats",
    "MatchInsights",
    "ConfidenceTier",
    "Dimension",
    "DimensionScore",
    "MatchingError",
    "InvalidRecordError",
    "InvalidCriteriaError",
    "filter_eligible",
    "ineligibility_reason",
    "analyze_insights",
    "score_industry",
    "score_company_size",
    "score_use_cases",
    "score_expertise",
    "score_region",
    "score_availability",
    "filter_by_confidence",
    "filter_by_min_score",
    "top_matches",
    "matches_for_opportunity",
    "matches_for_advocate",
    "build_recommendation_payload",
    "build_response_payload",
    "format_recommendations",
]
