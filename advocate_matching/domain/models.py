"""Core domain records consumed by the matching engine.

This module defines the read-only inputs supplied by the retrieval services:
- CompanySize: ordered company-size buckets
- AdvocateStatus: program participation status of an advocate
- Advocate: a customer willing to act as a reference
- Opportunity: a sales deal that needs a reference call

Both records are immutable once validated. Blank strings and empty
collections are normalized to None so that "no value" has exactly one
representation throughout the engine.
"""

from enum import Enum
from typing import Any, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from advocate_matching.utils.text import clean_text, dedupe_terms


class CompanySize(str, Enum):
    """Company-size buckets, declared smallest to largest."""

    MICRO = "1-10"
    SMALL = "11-50"
    MEDIUM = "51-200"
    MID_MARKET = "201-500"
    LARGE = "501-1000"
    ENTERPRISE = "1000+"


class AdvocateStatus(str, Enum):
    """Program participation status of an advocate."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    PENDING = "pending"
    BLACKLISTED = "blacklisted"


def _normalize_optional_text(value: Any) -> Any:
    if isinstance(value, str):
        return clean_text(value)
    return value


def _normalize_terms(value: Any) -> Any:
    """Turn a list/set/tuple (or a single string) into a clean tuple or None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = [value]
    if isinstance(value, (list, tuple, set, frozenset)):
        if not all(isinstance(term, str) for term in value):
            # Let pydantic report the offending item
            return value
        ordered = sorted(value) if isinstance(value, (set, frozenset)) else value
        terms = dedupe_terms(ordered)
        return tuple(terms) if terms else None
    return value


def _normalize_required_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValueError("Identifier cannot be empty or whitespace-only")
        return stripped
    return value


class Advocate(BaseModel):
    """A customer advocate profile as supplied by the candidate-retrieval service.

    Only the attributes used for eligibility and scoring are modelled; any
    other fields present in the source record are ignored.
    """

    id: str = Field(..., description="Unique advocate identifier")
    name: Optional[str] = Field(None, description="Display name")
    industry: Optional[str] = Field(None, description="Advocate's company industry")
    company_size: Optional[CompanySize] = Field(None, description="Advocate's company size bucket")
    geographic_region: Optional[str] = Field(None, description="Advocate's region")
    use_cases: Optional[Tuple[str, ...]] = Field(None, description="Use cases the advocate can speak to")
    expertise_areas: Optional[Tuple[str, ...]] = Field(None, description="Areas of expertise")
    availability_score: int = Field(0, ge=0, le=100, description="Self-reported availability (0-100)")
    status: AdvocateStatus = Field(AdvocateStatus.ACTIVE, description="Program status")

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        """Require a non-blank identifier."""
        return _normalize_required_id(v)

    @field_validator("name", "industry", "geographic_region", "company_size", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        """Strip whitespace; blank strings become None."""
        return _normalize_optional_text(v)

    @field_validator("use_cases", "expertise_areas", mode="before")
    @classmethod
    def normalize_terms(cls, v: Any) -> Any:
        """Deduplicate and clean term collections; empty collections become None."""
        return _normalize_terms(v)

    @field_validator("availability_score", mode="before")
    @classmethod
    def default_availability(cls, v: Any) -> Any:
        """Treat a missing availability score as 0."""
        return 0 if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v: Any) -> Any:
        """Accept status values in any case."""
        if v is None:
            return AdvocateStatus.ACTIVE
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @property
    def display_name(self) -> str:
        """Name for reports, falling back to the identifier."""
        return self.name or self.id

    @property
    def is_active(self) -> bool:
        return self.status == AdvocateStatus.ACTIVE


class Opportunity(BaseModel):
    """A sales opportunity for which a reference call is being arranged.

    Carries two parallel sets of attributes: the prospect's own profile and
    optional desired-advocate overrides. The target_* properties resolve the
    value each dimension scorer should compare against: an override always
    wins, the prospect attribute is the fallback, and None means no target.
    """

    id: str = Field(..., description="Unique opportunity identifier")
    name: Optional[str] = Field(None, description="Opportunity name")

    prospect_industry: Optional[str] = None
    prospect_size: Optional[CompanySize] = None
    geographic_region: Optional[str] = None
    use_case: Optional[str] = None

    desired_advocate_industry: Optional[str] = None
    desired_advocate_size: Optional[CompanySize] = None
    desired_advocate_region: Optional[str] = None
    desired_use_cases: Optional[Tuple[str, ...]] = None
    desired_expertise_areas: Optional[Tuple[str, ...]] = None

    model_config = {"frozen": True, "extra": "ignore"}

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        """Require a non-blank identifier."""
        return _normalize_required_id(v)

    @field_validator(
        "name",
        "prospect_industry",
        "prospect_size",
        "geographic_region",
        "use_case",
        "desired_advocate_industry",
        "desired_advocate_size",
        "desired_advocate_region",
        mode="before",
    )
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        """Strip whitespace; blank strings become None."""
        return _normalize_optional_text(v)

    @field_validator("desired_use_cases", "desired_expertise_areas", mode="before")
    @classmethod
    def normalize_terms(cls, v: Any) -> Any:
        """Deduplicate and clean term collections; empty collections become None."""
        return _normalize_terms(v)

    @property
    def display_name(self) -> str:
        return self.name or self.id

    @property
    def target_industry(self) -> Optional[str]:
        return self.desired_advocate_industry or self.prospect_industry

    @property
    def target_size(self) -> Optional[CompanySize]:
        return self.desired_advocate_size or self.prospect_size

    @property
    def target_region(self) -> Optional[str]:
        return self.desired_advocate_region or self.geographic_region

    @property
    def target_use_cases(self) -> Optional[Tuple[str, ...]]:
        """Desired use cases, or the prospect's single use case as a one-item tuple."""
        if self.desired_use_cases:
            return self.desired_use_cases
        if self.use_case:
            return (self.use_case,)
        return None

    @property
    def target_expertise_areas(self) -> Optional[Tuple[str, ...]]:
        """Desired expertise areas; there is no prospect-side fallback."""
        return self.desired_expertise_areas
