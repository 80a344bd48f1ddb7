"""Text helpers shared by the scoring and filtering code.

All comparisons in the matching engine are case-insensitive and ignore
incidental whitespace, so every free-text attribute goes through
normalize_for_matching() before it is compared.
"""

import math
import re
from typing import Iterable, List, Optional


def normalize_for_matching(text: str) -> str:
    """Normalize text for comparison.

    Normalization steps:
    - Convert to lowercase
    - Strip leading/trailing whitespace
    - Collapse runs of whitespace to a single space

    Example:
        >>> normalize_for_matching("  North   America ")
        'north america'
    """
    return re.sub(r"\s+", " ", text.lower().strip())


def clean_text(value: Optional[str]) -> Optional[str]:
    """Strip a free-text value, returning None when nothing is left."""
    if value is None:
        return None
    stripped = re.sub(r"\s+", " ", value.strip())
    return stripped or None


def fuzzy_match(left: str, right: str) -> bool:
    """Return True when either value contains the other (case-insensitive).

    Example:
        >>> fuzzy_match("Sales Automation", "automation")
        True
    """
    left_norm = normalize_for_matching(left)
    right_norm = normalize_for_matching(right)
    if not left_norm or not right_norm:
        return False
    return left_norm in right_norm or right_norm in left_norm


def dedupe_terms(terms: Iterable[str]) -> List[str]:
    """Clean a collection of terms.

    Blank entries are dropped and duplicates (compared case-insensitively)
    are removed, keeping the first spelling seen.
    """
    seen = set()
    result = []
    for term in terms:
        cleaned = clean_text(term)
        if cleaned is None:
            continue
        key = normalize_for_matching(cleaned)
        if key in seen:
            continue
        seen.add(key)
        result.append(cleaned)
    return result


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 rounding away from zero for positives."""
    return int(math.floor(value + 0.5))
