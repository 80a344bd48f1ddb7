"""Configuration schema models using Pydantic.

ScoringConfig carries every tunable table the scorers rely on (weights,
size ordering, relation tables, availability bands, confidence thresholds).
It is frozen and injected into the engine, so two engines built from
different configs never share state.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from advocate_matching.domain.models import CompanySize
from advocate_matching.utils.text import clean_text, dedupe_terms, normalize_for_matching


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_RELATED_INDUSTRIES: Dict[str, Tuple[str, ...]] = {
    "technology": ("software", "saas", "tech", "it", "digital"),
    "software": ("technology", "saas", "tech", "it", "digital"),
    "saas": ("technology", "software", "tech", "it", "digital"),
    "manufacturing": ("industrial", "production", "factory"),
    "healthcare": ("medical", "pharmaceutical", "biotech"),
    "finance": ("banking", "fintech", "financial services"),
    "retail": ("ecommerce", "commerce", "shopping"),
    "education": ("edtech", "learning", "training"),
}

DEFAULT_RELATED_REGIONS: Dict[str, Tuple[str, ...]] = {
    "north america": ("usa", "united states", "canada", "us", "america"),
    "europe": ("eu", "european union", "uk", "united kingdom", "germany", "france"),
    "asia pacific": ("asia", "apac", "australia", "japan", "singapore"),
    "latin america": ("south america", "brazil", "mexico", "latam"),
}


class ScoringWeights(BaseModel):
    """Relative weight of each dimension in the composite score."""

    industry: int = Field(25, ge=0, le=100)
    company_size: int = Field(15, ge=0, le=100)
    use_cases: int = Field(20, ge=0, le=100)
    expertise: int = Field(20, ge=0, le=100)
    region: int = Field(10, ge=0, le=100)
    availability: int = Field(10, ge=0, le=100)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_total(self):
        """Weights must add up to 100 so the composite stays on a 0-100 scale."""
        total = sum(self.as_dict().values())
        if total != 100:
            raise ValueError(f"Scoring weights must sum to 100, got {total}")
        return self

    def as_dict(self) -> Dict[str, int]:
        return {
            "industry": self.industry,
            "company_size": self.company_size,
            "use_cases": self.use_cases,
            "expertise": self.expertise,
            "region": self.region,
            "availability": self.availability,
        }


class AvailabilityBand(BaseModel):
    """Maps an availability_score threshold to a dimension sub-score."""

    threshold: int = Field(..., ge=0, le=100, description="Minimum availability_score for this band")
    score: int = Field(..., ge=0, le=100, description="Sub-score awarded")
    label: str = Field(..., min_length=1, description="Reason text")

    model_config = {"frozen": True}


class ConfidenceThresholds(BaseModel):
    """Score cut-offs for the confidence tiers."""

    high: int = Field(80, ge=0, le=100)
    medium: int = Field(60, ge=0, le=100)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_order(self):
        if self.medium > self.high:
            raise ValueError(
                f"Medium confidence threshold ({self.medium}) cannot exceed high ({self.high})"
            )
        return self


def _default_availability_bands() -> Tuple[AvailabilityBand, ...]:
    return (
        AvailabilityBand(threshold=80, score=100, label="High availability"),
        AvailabilityBand(threshold=60, score=75, label="Good availability"),
        AvailabilityBand(threshold=40, score=50, label="Moderate availability"),
        AvailabilityBand(threshold=20, score=25, label="Low availability"),
    )


class ScoringConfig(BaseModel):
    """Immutable tables and constants used by the dimension scorers."""

    weights: ScoringWeights = Field(default_factory=ScoringWeights)
    size_order: Tuple[CompanySize, ...] = Field(
        default=tuple(CompanySize),
        description="Company-size buckets, smallest to largest",
    )
    size_distance_scores: Mapping[int, int] = Field(
        default_factory=lambda: {1: 80, 2: 60, 3: 40},
        validate_default=True,
        description="Sub-score by ordinal distance between size buckets",
    )
    size_floor_score: int = Field(
        20, ge=0, le=100, description="Sub-score for distances not listed in size_distance_scores"
    )
    related_industries: Mapping[str, Tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_RELATED_INDUSTRIES), validate_default=True
    )
    related_regions: Mapping[str, Tuple[str, ...]] = Field(
        default_factory=lambda: dict(DEFAULT_RELATED_REGIONS), validate_default=True
    )
    availability_bands: Tuple[AvailabilityBand, ...] = Field(
        default_factory=_default_availability_bands
    )
    confidence: ConfidenceThresholds = Field(default_factory=ConfidenceThresholds)

    exact_score: int = Field(100, ge=0, le=100)
    partial_score: int = Field(75, ge=0, le=100)
    related_score: int = Field(60, ge=0, le=100)
    neutral_score: int = Field(50, ge=0, le=100)

    model_config = {"frozen": True}

    @field_validator("size_order")
    @classmethod
    def validate_size_order(cls, v: Tuple[CompanySize, ...]) -> Tuple[CompanySize, ...]:
        """Every bucket must appear exactly once."""
        if len(v) != len(CompanySize) or set(v) != set(CompanySize):
            raise ValueError(
                "size_order must list each company size bucket exactly once: "
                + ", ".join(size.value for size in CompanySize)
            )
        return v

    @field_validator("size_distance_scores")
    @classmethod
    def validate_distance_scores(cls, v: Mapping[int, int]) -> Mapping[int, int]:
        """Check distances and scores; the table is stored read-only."""
        for distance, score in v.items():
            if distance < 1:
                raise ValueError(f"Size distance must be >= 1, got {distance}")
            if not 0 <= score <= 100:
                raise ValueError(f"Size distance score must be between 0 and 100, got {score}")
        return MappingProxyType(dict(v))

    @field_validator("related_industries", "related_regions", mode="before")
    @classmethod
    def normalize_relations(cls, v: Any) -> Any:
        """Lowercase anchors and related terms so lookups are case-insensitive."""
        if not isinstance(v, Mapping):
            return v
        normalized = {}
        for anchor, related in v.items():
            if not isinstance(anchor, str):
                return v
            if isinstance(related, str):
                related = [related]
            if not isinstance(related, (list, tuple, set)):
                return v
            key = normalize_for_matching(anchor)
            if not key:
                raise ValueError("Relation anchors cannot be empty")
            if isinstance(related, set):
                related = sorted(related)
            normalized[key] = tuple(normalize_for_matching(term) for term in dedupe_terms(related))
        return normalized

    @field_validator("related_industries", "related_regions")
    @classmethod
    def freeze_relations(
        cls, v: Mapping[str, Tuple[str, ...]]
    ) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType(dict(v))

    @field_validator("availability_bands")
    @classmethod
    def sort_bands(cls, v: Tuple[AvailabilityBand, ...]) -> Tuple[AvailabilityBand, ...]:
        """Order bands by descending threshold and reject duplicate thresholds."""
        thresholds = [band.threshold for band in v]
        if len(thresholds) != len(set(thresholds)):
            raise ValueError("availability_bands contain duplicate thresholds")
        return tuple(sorted(v, key=lambda band: band.threshold, reverse=True))

    def size_rank(self, size: CompanySize) -> int:
        """Ordinal position of a size bucket."""
        return self.size_order.index(size)


class MatchingCriteria(BaseModel):
    """Caller-supplied options that narrow and shape a recommendation run.

    Invalid values are rejected when the criteria are built; the scoring code
    never clamps them.
    """

    max_results: int = Field(10, ge=1, description="Maximum number of results to return")
    min_score: int = Field(30, ge=0, le=100, description="Results scoring below this are dropped")
    include_inactive: bool = Field(False, description="Consider advocates that are not active")
    preferred_regions: Tuple[str, ...] = Field(
        default=(), description="Restrict to advocates in these regions (empty = no restriction)"
    )
    exclude_advocate_ids: FrozenSet[str] = Field(
        default=frozenset(), description="Advocate ids that must never be recommended"
    )

    model_config = {"frozen": True}

    @field_validator("preferred_regions", mode="before")
    @classmethod
    def normalize_regions(cls, v: Any) -> Any:
        """Strip regions and drop blanks and duplicates."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)) and all(isinstance(r, str) for r in v):
            ordered = sorted(v) if isinstance(v, (set, frozenset)) else v
            return tuple(dedupe_terms(ordered))
        return v

    @field_validator("exclude_advocate_ids", mode="before")
    @classmethod
    def normalize_excluded(cls, v: Any) -> Any:
        """Strip ids and drop blanks."""
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        if isinstance(v, (list, tuple, set, frozenset)):
            cleaned = set()
            for advocate_id in v:
                if isinstance(advocate_id, int) and not isinstance(advocate_id, bool):
                    advocate_id = str(advocate_id)
                if not isinstance(advocate_id, str):
                    return v
                stripped = clean_text(advocate_id)
                if stripped:
                    cleaned.add(stripped)
            return frozenset(cleaned)
        return v

    def with_overrides(self, **overrides: Any) -> "MatchingCriteria":
        """Return new criteria with the given non-None fields replaced.

        Example:
            >>> MatchingCriteria().with_overrides(min_score=50, max_results=None).min_score
            50
        """
        data = self.model_dump()
        data.update({key: value for key, value in overrides.items() if value is not None})
        return MatchingCriteria.model_validate(data)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True, "validate_default": True}


class AppConfig(BaseModel):
    """Root configuration object for the Advocate Matcher."""

    scoring: ScoringConfig = Field(default_factory=ScoringConfig, description="Scoring tables")
    criteria: MatchingCriteria = Field(
        default_factory=MatchingCriteria, description="Default matching criteria"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

