"""Matching engine exceptions.

All exceptions raised by the engine inherit from MatchingError. Missing or
partial advocate data is never an error; these are raised only for records
or criteria that cannot be interpreted at all.
"""

from typing import List, Optional


class MatchingError(Exception):
    """Base exception for all matching engine errors."""

    pass


class InvalidRecordError(MatchingError):
    """Raised when an advocate or opportunity record is structurally invalid.

    Examples:
    - Record missing its identifier
    - company_size outside the fixed bucket set
    - Value that is neither a record instance nor a mapping
    """

    def __init__(self, kind: str, message: str, errors: Optional[List[str]] = None):
        self.kind = kind
        self.errors = errors or []
        detail = f"Invalid {kind}: {message}"
        if self.errors:
            detail += " (" + "; ".join(self.errors) + ")"
        super().__init__(detail)


class InvalidCriteriaError(MatchingError):
    """Raised when matching criteria supplied as a mapping fail validation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        self.errors = errors or []
        detail = message
        if self.errors:
            detail += " (" + "; ".join(self.errors) + ")"
        super().__init__(detail)
