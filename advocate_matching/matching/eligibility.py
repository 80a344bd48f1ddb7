"""Eligibility filter applied to the candidate pool before scoring."""

import logging
from typing import Iterable, List, Optional

from advocate_matching.config.models import MatchingCriteria
from advocate_matching.domain.models import Advocate
from advocate_matching.logging import get_logger
from advocate_matching.utils.text import fuzzy_match

logger = get_logger(__name__, component="matching")


def ineligibility_reason(advocate: Advocate, criteria: MatchingCriteria) -> Optional[str]:
    """Return why an advocate is filtered out, or None if it is eligible.

    Checks, in order: exclusion list, status, preferred regions. Advocates
    without a region are not restricted by preferred_regions.
    """
    if advocate.id in criteria.exclude_advocate_ids:
        return "excluded"

    if not criteria.include_inactive and not advocate.is_active:
        return f"status_{advocate.status.value}"

    if criteria.preferred_regions and advocate.geographic_region:
        if not any(
            fuzzy_match(advocate.geographic_region, region)
            for region in criteria.preferred_regions
        ):
            return "region_not_preferred"

    return None


def filter_eligible(
    advocates: Iterable[Advocate],
    criteria: MatchingCriteria,
    logger_instance: Optional[logging.LoggerAdapter] = None,
) -> List[Advocate]:
    """Narrow the candidate pool to advocates worth scoring.

    Input order is preserved.
    """
    log = logger_instance or logger
    eligible = []
    for advocate in advocates:
        reason = ineligibility_reason(advocate, criteria)
        if reason is None:
            eligible.append(advocate)
        else:
            log.debug(
                f"Advocate filtered out: {advocate.id}",
                extra={
                    "event": "eligibility.filtered",
                    "advocate_id": advocate.id,
                    "reason": reason,
                },
            )
    return eligible
