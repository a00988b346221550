"""
Exceptions raised by the periodization engine.

Input defects in the metrics module never raise (they return a zero
sentinel). Structural violations in the plan hierarchy always raise and
must reach the caller.
"""

from typing import List, Optional

from periodization_engine.core.validation import ValidationIssue


class PeriodizationError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PlanStructureError(PeriodizationError):
    """Raised when a plan hierarchy violates a structural invariant."""

    def __init__(self, reason: str, issues: Optional[List[ValidationIssue]] = None):
        super().__init__(f"Unable to generate this plan: {reason}")
        self.reason = reason
        self.issues = issues or []


class InvalidSplitRequestError(PeriodizationError, ValueError):
    """Raised for an unsupported split name or training frequency."""


class ProfileNotFoundError(PeriodizationError):
    """Raised when storage has no training profile for a user."""

    def __init__(self, user_id: str):
        super().__init__(f"No training profile found for user {user_id}")
        self.user_id = user_id
