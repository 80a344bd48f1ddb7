"""Data models produced by the matching engine.

All results are frozen dataclasses built fresh for every call:
- DimensionScore: one dimension's sub-score and reason
- MatchResult: composite score, reasons and confidence for one advocate
- MatchingStats: aggregate figures for one recommendation run
- MatchResponse: ranked matches plus stats
- MatchInsights: confidence-tier and reason summary of a result set
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from advocate_matching.config.models import MatchingCriteria
from advocate_matching.domain.models import Advocate


class Dimension(str, Enum):
    """Scoring axes, in evaluation order."""

    INDUSTRY = "industry"
    COMPANY_SIZE = "company_size"
    USE_CASES = "use_cases"
    EXPERTISE = "expertise"
    REGION = "region"
    AVAILABILITY = "availability"


class ConfidenceTier(str, Enum):
    """Coarse bucket summarizing a composite score."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class DimensionScore:
    """Sub-score (0-100) and human-readable reason for a single dimension."""

    dimension: Dimension
    score: float
    reason: str

    @property
    def contributed(self) -> bool:
        return self.score > 0


@dataclass(frozen=True)
class MatchResult:
    """Scored recommendation of one advocate for one opportunity.

    Attributes:
        advocate: The advocate that was scored
        score: Composite match score (0-100)
        reasons: Reasons of every dimension with a non-zero sub-score, in
            dimension evaluation order
        confidence: Confidence tier derived from score
        breakdown: Every dimension's sub-score, including zero ones
        opportunity_id: Originating opportunity (set by batch matching)
        opportunity_name: Originating opportunity name (set by batch matching)
    """

    advocate: Advocate
    score: int
    reasons: Tuple[str, ...]
    confidence: ConfidenceTier
    breakdown: Tuple[DimensionScore, ...] = ()
    opportunity_id: Optional[str] = None
    opportunity_name: Optional[str] = None

    @property
    def advocate_id(self) -> str:
        return self.advocate.id

    def dimension_score(self, dimension: Dimension) -> Optional[DimensionScore]:
        """Look up one dimension's sub-score in the breakdown."""
        for item in self.breakdown:
            if item.dimension == dimension:
                return item
        return None


@dataclass(frozen=True)
class MatchingStats:
    """Aggregate statistics for one recommendation run.

    average_score and top_score are computed over the kept (returned)
    matches only and are 0 when nothing was kept.
    """

    total_advocates: int
    eligible_advocates: int
    matches_found: int
    average_score: int
    top_score: int
    criteria: MatchingCriteria
    opportunity_id: Optional[str] = None


@dataclass(frozen=True)
class MatchResponse:
    """Ranked matches and the statistics describing how they were found."""

    matches: List[MatchResult]
    stats: MatchingStats

    @property
    def top_match(self) -> Optional[MatchResult]:
        return self.matches[0] if self.matches else None


@dataclass(frozen=True)
class MatchInsights:
    """Explainability summary of a result set."""

    total_matches: int = 0
    high_confidence_count: int = 0
    medium_confidence_count: int = 0
    low_confidence_count: int = 0
    average_score: int = 0
    top_reasons: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def tier_counts(self) -> Dict[str, int]:
        return {
            ConfidenceTier.HIGH.value: self.high_confidence_count,
            ConfidenceTier.MEDIUM.value: self.medium_confidence_count,
            ConfidenceTier.LOW.value: self.low_confidence_count,
        }
