"""Additional validation utilities for configuration."""

import warnings
from typing import Any, Dict, List


def check_for_warnings(config_dict: Dict[str, Any]) -> List[str]:
    """
    Check configuration for settings that are valid but probably unintended.

    Args:
        config_dict: Raw configuration dictionary

    Returns:
        List of warning messages
    """
    warning_messages = []

    criteria = config_dict.get("criteria", {})
    if isinstance(criteria, dict):
        min_score = criteria.get("min_score")
        if isinstance(min_score, int) and 90 < min_score <= 100:
            warning_messages.append(
                f"High min_score ({min_score}) may filter out every recommendation"
            )

        if criteria.get("include_inactive") is True:
            warning_messages.append(
                "include_inactive is enabled: inactive, pending and blacklisted advocates "
                "will be recommended"
            )

        max_results = criteria.get("max_results")
        if isinstance(max_results, int) and max_results > 100:
            warning_messages.append(
                f"Large max_results ({max_results}) makes recommendation lists hard to review"
            )

    scoring = config_dict.get("scoring", {})
    if isinstance(scoring, dict):
        weights = scoring.get("weights", {})
        if isinstance(weights, dict):
            for dimension, weight in sorted(weights.items()):
                if weight == 0:
                    warning_messages.append(
                        f"Dimension '{dimension}' has weight 0 and will not affect scores"
                    )

        for table_name in ("related_industries", "related_regions"):
            table = scoring.get(table_name)
            if isinstance(table, dict):
                for anchor, related in table.items():
                    if isinstance(anchor, str) and isinstance(related, list):
                        lowered = [term.strip().lower() for term in related if isinstance(term, str)]
                        if anchor.strip().lower() in lowered:
                            warning_messages.append(
                                f"{table_name}: '{anchor}' lists itself as a related term"
                            )

    return warning_messages


def emit_warnings(warning_messages: List[str]) -> None:
    """
    Emit warning messages using Python's warnings module.

    Args:
        warning_messages: List of warning messages to emit
    """
    for message in warning_messages:
        warnings.warn(message, UserWarning, stacklevel=2)
