"""Matching engine for recommending advocates for sales opportunities.

This module implements:
1. Composite scoring of one advocate against one opportunity
2. Recommendation runs for a single opportunity (filter, score, rank, stats)
3. Batch runs over several opportunities with a global re-rank
4. Insight analysis over any result set

The engine is a pure function of its inputs plus the injected, immutable
ScoringConfig: it keeps no state between calls and is safe to share
between threads.
"""

import logging
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from advocate_matching.config.exceptions import format_validation_errors
from advocate_matching.config.models import MatchingCriteria, ScoringConfig
from advocate_matching.domain.models import Advocate, Opportunity
from advocate_matching.logging import get_logger
from advocate_matching.logging.context import log_context
from advocate_matching.utils.text import round_half_up

from .dimensions import (
    score_availability,
    score_company_size,
    score_expertise,
    score_industry,
    score_region,
    score_use_cases,
)
from .eligibility import filter_eligible
from .exceptions import InvalidCriteriaError, InvalidRecordError
from .insights import analyze_insights
from .models import (
    ConfidenceTier,
    DimensionScore,
    MatchInsights,
    MatchingStats,
    MatchResponse,
    MatchResult,
)

logger = get_logger(__name__, component="matching")

RecordT = TypeVar("RecordT", bound=BaseModel)
AdvocateInput = Union[Advocate, Mapping[str, Any]]
OpportunityInput = Union[Opportunity, Mapping[str, Any]]
CriteriaInput = Union[MatchingCriteria, Mapping[str, Any], None]

BATCH_OPPORTUNITY_ID = "multiple"


class MatchingEngine:
    """Scores and ranks advocates for sales opportunities.

    Responsibilities:
    - Validate incoming records and criteria (fail fast on structural errors)
    - Combine the six dimension scores into a weighted 0-100 score
    - Filter, rank and truncate candidates per opportunity
    - Merge per-opportunity runs into one globally ranked batch result
    """

    def __init__(
        self,
        scoring_config: Optional[ScoringConfig] = None,
        logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        """Initialize MatchingEngine.

        Args:
            scoring_config: Scoring tables and weights (defaults to built-in values)
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.scoring_config = scoring_config or ScoringConfig()
        self.logger = logger_instance or logger

    def score(self, advocate: AdvocateInput, opportunity: OpportunityInput) -> MatchResult:
        """Score one advocate against one opportunity.

        Raises:
            InvalidRecordError: If either record is structurally invalid
        """
        return self._score(
            _coerce_record(advocate, Advocate, "advocate"),
            _coerce_record(opportunity, Opportunity, "opportunity"),
        )

    def match(
        self,
        advocates: Iterable[AdvocateInput],
        opportunity: OpportunityInput,
        criteria: CriteriaInput = None,
    ) -> MatchResponse:
        """Recommend advocates for a single opportunity.

        Algorithm:
        1. Apply the eligibility filter to the full pool
        2. Score every eligible advocate
        3. Drop results below criteria.min_score
        4. Sort by score descending (advocate id breaks ties)
        5. Keep the first criteria.max_results
        6. Compute stats over the kept results

        Raises:
            InvalidRecordError: If any record is structurally invalid
            InvalidCriteriaError: If criteria given as a mapping are invalid
        """
        pool = _coerce_pool(advocates)
        record = _coerce_record(opportunity, Opportunity, "opportunity")
        resolved = _coerce_criteria(criteria)
        return self._match(pool, record, resolved)

    def batch_match(
        self,
        advocates: Iterable[AdvocateInput],
        opportunities: Iterable[OpportunityInput],
        criteria: CriteriaInput = None,
    ) -> MatchResponse:
        """Recommend advocates for several opportunities at once.

        Each opportunity is matched independently against the same pool and
        criteria. Results are tagged with their opportunity and re-ranked
        globally, so an opportunity with many strong candidates can fill the
        top of the combined list.

        Combined stats take total/eligible counts from the first
        opportunity's run; matches_found, average_score and top_score cover
        the whole merged list.
        """
        pool = _coerce_pool(advocates)
        if opportunities is None:
            raise InvalidRecordError("opportunity", "opportunity list cannot be None")
        records = [
            _coerce_record(opportunity, Opportunity, "opportunity")
            for opportunity in opportunities
        ]
        resolved = _coerce_criteria(criteria)

        with log_context(batch_size=len(records)):
            merged: List[MatchResult] = []
            first_stats: Optional[MatchingStats] = None

            for record in records:
                response = self._match(pool, record, resolved)
                if first_stats is None:
                    first_stats = response.stats
                merged.extend(
                    replace(match, opportunity_id=record.id, opportunity_name=record.name)
                    for match in response.matches
                )

            # Stable sort: equal (score, advocate) pairs keep opportunity order
            merged.sort(key=_rank_key)

            stats = _build_stats(
                total=first_stats.total_advocates if first_stats else 0,
                eligible=first_stats.eligible_advocates if first_stats else 0,
                matches=merged,
                criteria=resolved,
                opportunity_id=BATCH_OPPORTUNITY_ID,
            )

            self.logger.info(
                "Batch matching completed",
                extra={
                    "event": "batch.completed",
                    "opportunity_count": len(records),
                    "matches_found": stats.matches_found,
                    "average_score": stats.average_score,
                    "top_score": stats.top_score,
                },
            )

        return MatchResponse(matches=merged, stats=stats)

    def insights(self, matches: Sequence[MatchResult]) -> MatchInsights:
        """Summarize a result set by confidence tier and most common reasons."""
        return analyze_insights(matches)

    def confidence_for(self, score: int) -> ConfidenceTier:
        """Classify a composite score into a confidence tier."""
        thresholds = self.scoring_config.confidence
        if score >= thresholds.high:
            return ConfidenceTier.HIGH
        if score >= thresholds.medium:
            return ConfidenceTier.MEDIUM
        return ConfidenceTier.LOW

    def _score(self, advocate: Advocate, opportunity: Opportunity) -> MatchResult:
        config = self.scoring_config
        weights = config.weights

        weighted = (
            (score_industry(advocate.industry, opportunity.target_industry, config), weights.industry),
            (score_company_size(advocate.company_size, opportunity.target_size, config), weights.company_size),
            (score_use_cases(advocate.use_cases, opportunity.target_use_cases, config), weights.use_cases),
            (score_expertise(advocate.expertise_areas, opportunity.target_expertise_areas, config), weights.expertise),
            (score_region(advocate.geographic_region, opportunity.target_region, config), weights.region),
            (score_availability(advocate.availability_score, config), weights.availability),
        )

        total = sum(dimension.score / 100 * weight for dimension, weight in weighted)
        score = min(100, max(0, round_half_up(total)))
        breakdown = tuple(dimension for dimension, _ in weighted)
        reasons = tuple(dimension.reason for dimension in breakdown if dimension.contributed)

        result = MatchResult(
            advocate=advocate,
            score=score,
            reasons=reasons,
            confidence=self.confidence_for(score),
            breakdown=breakdown,
        )

        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(
                f"Advocate scored: {advocate.id}",
                extra={
                    "event": "advocate.scored",
                    "advocate_id": advocate.id,
                    "opportunity_id": opportunity.id,
                    "score": score,
                    "confidence": result.confidence.value,
                    "breakdown": _breakdown_summary(breakdown),
                },
            )
        return result

    def _match(
        self,
        pool: List[Advocate],
        opportunity: Opportunity,
        criteria: MatchingCriteria,
    ) -> MatchResponse:
        with log_context(opportunity_id=opportunity.id):
            eligible = filter_eligible(pool, criteria, self.logger)

            scored = [self._score(advocate, opportunity) for advocate in eligible]
            kept = [result for result in scored if result.score >= criteria.min_score]
            kept.sort(key=_rank_key)
            kept = kept[: criteria.max_results]

            stats = _build_stats(
                total=len(pool),
                eligible=len(eligible),
                matches=kept,
                criteria=criteria,
                opportunity_id=opportunity.id,
            )

            self.logger.info(
                f"Matching completed for opportunity {opportunity.id}",
                extra={
                    "event": "match.completed",
                    "total_advocates": stats.total_advocates,
                    "eligible_advocates": stats.eligible_advocates,
                    "matches_found": stats.matches_found,
                    "average_score": stats.average_score,
                    "top_score": stats.top_score,
                },
            )

        return MatchResponse(matches=kept, stats=stats)


def _rank_key(result: MatchResult):
    return (-result.score, result.advocate.id)


def _build_stats(
    total: int,
    eligible: int,
    matches: Sequence[MatchResult],
    criteria: MatchingCriteria,
    opportunity_id: Optional[str],
) -> MatchingStats:
    if matches:
        average = round_half_up(sum(match.score for match in matches) / len(matches))
        top = max(match.score for match in matches)
    else:
        average = 0
        top = 0
    return MatchingStats(
        total_advocates=total,
        eligible_advocates=eligible,
        matches_found=len(matches),
        average_score=average,
        top_score=top,
        criteria=criteria,
        opportunity_id=opportunity_id,
    )


def _breakdown_summary(breakdown: Sequence[DimensionScore]) -> dict:
    return {item.dimension.value: round(item.score, 2) for item in breakdown}


def _coerce_record(value: Any, model: Type[RecordT], kind: str) -> RecordT:
    """Accept a model instance or a mapping; anything else is a structural error."""
    if isinstance(value, model):
        return value
    if isinstance(value, Mapping):
        try:
            return model.model_validate(dict(value))
        except ValidationError as e:
            record_id = value.get("id")
            label = f"record {record_id!r}" if record_id else "record"
            raise InvalidRecordError(
                kind, f"{label} failed validation", errors=format_validation_errors(e)
            ) from e
    raise InvalidRecordError(
        kind, f"expected {model.__name__} or mapping, got {type(value).__name__}"
    )


def _coerce_pool(advocates: Iterable[AdvocateInput]) -> List[Advocate]:
    if advocates is None:
        raise InvalidRecordError("advocate", "candidate pool cannot be None")
    return [_coerce_record(advocate, Advocate, "advocate") for advocate in advocates]


def _coerce_criteria(criteria: CriteriaInput) -> MatchingCriteria:
    if criteria is None:
        return MatchingCriteria()
    if isinstance(criteria, MatchingCriteria):
        return criteria
    if isinstance(criteria, Mapping):
        try:
            return MatchingCriteria.model_validate(dict(criteria))
        except ValidationError as e:
            raise InvalidCriteriaError(
                "Matching criteria failed validation", errors=format_validation_errors(e)
            ) from e
    raise InvalidCriteriaError(
        f"Expected MatchingCriteria or mapping, got {type(criteria).__name__}"
    )
