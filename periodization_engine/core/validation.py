"""
Validation result types for plan structure checks.

Errors mean a plan must not be used; warnings flag policy deviations that
never block generation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class ValidationSeverity(str, Enum):
    """Severity level for validation issues."""

    ERROR = "error"  # Structural violation, generation stops
    WARNING = "warning"  # Policy deviation, reported only


@dataclass
class ValidationIssue:
    """A single validation issue."""

    message: str
    severity: ValidationSeverity
    location: Optional[str] = None  # e.g., "Mesocycle 2, Week 3"

    def __str__(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


@dataclass
class ValidationResult:
    """Result of a structural validation."""

    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Valid when no error-level issue was found."""
        return not self.errors

    @property
    def errors(self) -> List[ValidationIssue]:
        """Get error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    @property
    def warnings(self) -> List[ValidationIssue]:
        """Get warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def summary(self) -> str:
        """One-line count of errors and warnings for logs."""
        if self.is_valid and not self.warnings:
            return "Plan structure is valid"
        return f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)"

    def error(self, message: str, location: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(message, ValidationSeverity.ERROR, location))

    def warning(self, message: str, location: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue(message, ValidationSeverity.WARNING, location))

    def extend(self, other: "ValidationResult") -> None:
        self.issues.extend(other.issues)
