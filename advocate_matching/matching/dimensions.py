"""Dimension scorers.

Each scorer compares one advocate attribute with the opportunity's resolved
target for that dimension and returns a DimensionScore (0-100 plus reason).

Missing-data policy shared by every comparative scorer:
- advocate value absent -> 0 (no signal, no credit)
- target absent -> config.neutral_score (the advocate at least provided data)
"""

from typing import Dict, Mapping, Optional, Sequence, Tuple

from advocate_matching.config.models import ScoringConfig
from advocate_matching.domain.models import CompanySize
from advocate_matching.utils.text import fuzzy_match, normalize_for_matching

from .models import Dimension, DimensionScore

_SIZE_PROXIMITY_LABELS = {
    1: "Similar",
    2: "Moderately similar",
    3: "Somewhat similar",
}

_OVERLAP_REASONS: Dict[Dimension, Dict[str, str]] = {
    Dimension.USE_CASES: {
        "missing": "No advocate use cases specified",
        "no_target": "No target use cases specified - partial match",
        "none": "No use case matches",
        "all": "All use cases match: {}",
        "partial": "Partial use case match: {}",
    },
    Dimension.EXPERTISE: {
        "missing": "No advocate expertise specified",
        "no_target": "No desired expertise specified - partial match",
        "none": "No expertise matches",
        "all": "All expertise areas match: {}",
        "partial": "Partial expertise match: {}",
    },
}


def score_industry(
    advocate_industry: Optional[str],
    target_industry: Optional[str],
    config: ScoringConfig,
) -> DimensionScore:
    """Score industry affinity: exact 100, substring 75, related 60, otherwise 0."""
    return _score_categorical(
        Dimension.INDUSTRY,
        "industry",
        advocate_industry,
        target_industry,
        config.related_industries,
        config,
    )


def score_region(
    advocate_region: Optional[str],
    target_region: Optional[str],
    config: ScoringConfig,
) -> DimensionScore:
    """Score geographic affinity with the same tiers as industry."""
    return _score_categorical(
        Dimension.REGION,
        "region",
        advocate_region,
        target_region,
        config.related_regions,
        config,
    )


def score_company_size(
    advocate_size: Optional[CompanySize],
    target_size: Optional[CompanySize],
    config: ScoringConfig,
) -> DimensionScore:
    """Score size proximity by ordinal distance between buckets.

    Any two known sizes score at least config.size_floor_score.
    """
    if advocate_size is None:
        return DimensionScore(Dimension.COMPANY_SIZE, 0, "No advocate company size specified")

    if target_size is None:
        return DimensionScore(
            Dimension.COMPANY_SIZE,
            config.neutral_score,
            "No target company size specified - partial match",
        )

    if advocate_size == target_size:
        return DimensionScore(Dimension.COMPANY_SIZE, config.exact_score, "Exact company size match")

    distance = abs(config.size_rank(advocate_size) - config.size_rank(target_size))
    if distance in config.size_distance_scores:
        label = _SIZE_PROXIMITY_LABELS.get(distance, "Comparable")
        return DimensionScore(
            Dimension.COMPANY_SIZE,
            config.size_distance_scores[distance],
            f"{label} company size ({distance} level difference)",
        )

    return DimensionScore(Dimension.COMPANY_SIZE, config.size_floor_score, "Different company size")


def score_use_cases(
    advocate_use_cases: Optional[Sequence[str]],
    target_use_cases: Optional[Sequence[str]],
    config: ScoringConfig,
) -> DimensionScore:
    """Score the share of target use cases the advocate covers."""
    return _score_overlap(Dimension.USE_CASES, advocate_use_cases, target_use_cases, config)


def score_expertise(
    advocate_expertise: Optional[Sequence[str]],
    desired_expertise: Optional[Sequence[str]],
    config: ScoringConfig,
) -> DimensionScore:
    """Score the share of desired expertise areas the advocate covers."""
    return _score_overlap(Dimension.EXPERTISE, advocate_expertise, desired_expertise, config)


def score_availability(availability_score: Optional[int], config: ScoringConfig) -> DimensionScore:
    """Map the advocate's own availability_score onto the configured bands.

    This dimension never looks at the opportunity.
    """
    value = availability_score or 0
    for band in config.availability_bands:
        if value >= band.threshold:
            return DimensionScore(Dimension.AVAILABILITY, band.score, band.label)
    return DimensionScore(Dimension.AVAILABILITY, 0, "Very low availability")


def is_related(
    advocate_value: str, target_value: str, relations: Mapping[str, Tuple[str, ...]]
) -> bool:
    """Check the relation table in both directions.

    A pair is related when one value is an anchor and the other is listed
    under that anchor.
    """
    advocate_norm = normalize_for_matching(advocate_value)
    target_norm = normalize_for_matching(target_value)
    for anchor, related in relations.items():
        if anchor == advocate_norm and target_norm in related:
            return True
        if anchor == target_norm and advocate_norm in related:
            return True
    return False


def _score_categorical(
    dimension: Dimension,
    noun: str,
    advocate_value: Optional[str],
    target_value: Optional[str],
    relations: Mapping[str, Tuple[str, ...]],
    config: ScoringConfig,
) -> DimensionScore:
    if not advocate_value:
        return DimensionScore(dimension, 0, f"No advocate {noun} specified")

    if not target_value:
        return DimensionScore(
            dimension, config.neutral_score, f"No target {noun} specified - partial match"
        )

    if normalize_for_matching(advocate_value) == normalize_for_matching(target_value):
        return DimensionScore(dimension, config.exact_score, f"Exact {noun} match")

    if fuzzy_match(advocate_value, target_value):
        return DimensionScore(dimension, config.partial_score, f"Partial {noun} match")

    if is_related(advocate_value, target_value, relations):
        return DimensionScore(dimension, config.related_score, f"Related {noun} match")

    return DimensionScore(dimension, 0, f"No {noun} match")


def _score_overlap(
    dimension: Dimension,
    advocate_items: Optional[Sequence[str]],
    target_items: Optional[Sequence[str]],
    config: ScoringConfig,
) -> DimensionScore:
    reasons = _OVERLAP_REASONS[dimension]

    if not advocate_items:
        return DimensionScore(dimension, 0, reasons["missing"])

    if not target_items:
        return DimensionScore(dimension, config.neutral_score, reasons["no_target"])

    matched = [
        target
        for target in target_items
        if any(fuzzy_match(candidate, target) for candidate in advocate_items)
    ]

    if not matched:
        return DimensionScore(dimension, 0, reasons["none"])

    percentage = len(matched) / len(target_items) * 100
    template = reasons["all"] if len(matched) == len(target_items) else reasons["partial"]
    return DimensionScore(dimension, percentage, template.format(", ".join(matched)))
