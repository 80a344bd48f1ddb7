"""Shared pytest fixtures."""

import logging

import pytest

from advocate_matching.config.models import ScoringConfig
from advocate_matching.domain.models import Advocate, Opportunity
from advocate_matching.logging.context import clear_log_context
from advocate_matching.matching import MatchingEngine


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove environment variables that influence configuration."""
    for name in ("LOG_LEVEL", "LOG_FORMAT", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo root logger changes made by configure_logging() and clear log context."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    clear_log_context()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_log_context()


@pytest.fixture
def engine():
    """MatchingEngine with the built-in scoring configuration."""
    return MatchingEngine(ScoringConfig())


@pytest.fixture
def advocate_a():
    """Active SaaS advocate, highly available."""
    return Advocate(
        id="adv-a",
        name="Advocate A",
        industry="SaaS",
        company_size="51-200",
        availability_score=90,
        status="active",
    )


@pytest.fixture
def advocate_b():
    """Active manufacturing advocate from a large company, rarely available."""
    return Advocate(
        id="adv-b",
        name="Advocate B",
        industry="Manufacturing",
        company_size="1000+",
        availability_score=10,
        status="active",
    )


@pytest.fixture
def advocate_c():
    """Same profile as advocate A but blacklisted."""
    return Advocate(
        id="adv-c",
        name="Advocate C",
        industry="SaaS",
        company_size="51-200",
        availability_score=90,
        status="blacklisted",
    )


@pytest.fixture
def scenario_pool(advocate_a, advocate_b, advocate_c):
    return [advocate_a, advocate_b, advocate_c]


@pytest.fixture
def saas_opportunity():
    """SaaS prospect of 51-200 employees with no desired-advocate overrides."""
    return Opportunity(id="opp-1", name="SaaS deal", prospect_industry="SaaS", prospect_size="51-200")


@pytest.fixture
def complete_advocate():
    """Advocate with every scoring attribute filled in."""
    return Advocate(
        id="adv-full",
        name="Complete Advocate",
        industry="SaaS",
        company_size="51-200",
        geographic_region="North America",
        use_cases=["Sales Automation", "Pipeline Forecasting"],
        expertise_areas=["CRM Integration"],
        availability_score=90,
    )


@pytest.fixture
def complete_opportunity():
    """Opportunity whose targets the complete advocate matches exactly."""
    return Opportunity(
        id="opp-full",
        name="Full match deal",
        prospect_industry="SaaS",
        prospect_size="51-200",
        geographic_region="North America",
        use_case="Sales Automation",
        desired_expertise_areas=["CRM Integration"],
    )
