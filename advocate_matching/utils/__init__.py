"""Utility functions for text normalization and rounding."""

from .text import clean_text, dedupe_terms, fuzzy_match, normalize_for_matching, round_half_up

__all__ = [
    "clean_text",
    "dedupe_terms",
    "fuzzy_match",
    "normalize_for_matching",
    "round_half_up",
]
