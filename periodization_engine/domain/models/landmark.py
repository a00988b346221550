"""
Volume landmark value objects.
"""

from pydantic import BaseModel, Field, model_validator


class _OrderedRange(BaseModel):
    """A minimum/optimal/maximum triple that must stay ordered."""

    model_config = {"frozen": True}

    minimum: int = Field(..., ge=0)
    optimal: int = Field(..., ge=0)
    maximum: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_order(self) -> "_OrderedRange":
        if not (self.minimum <= self.optimal <= self.maximum):
            raise ValueError(
                f"Range must satisfy minimum <= optimal <= maximum, got "
                f"{self.minimum}/{self.optimal}/{self.maximum}"
            )
        return self


class SetRange(_OrderedRange):
    """Weekly set counts (MEV / MAV / MRV)."""


class FrequencyRange(_OrderedRange):
    """Weekly training frequency bounds."""


class VolumeLandmark(BaseModel):
    """
    Per-muscle-group weekly volume budget.

    Examples:
        >>> landmark = VolumeLandmark(
        ...     muscle_group="chest",
        ...     weekly_sets=SetRange(minimum=9, optimal=13, maximum=22),
        ...     weekly_frequency=FrequencyRange(minimum=1, optimal=2, maximum=2),
        ...     recovery_hours=48,
        ...     priority=1,
        ... )
    """

    model_config = {"frozen": True}

    muscle_group: str = Field(..., min_length=1)
    weekly_sets: SetRange
    weekly_frequency: FrequencyRange
    recovery_hours: int = Field(..., ge=0)
    priority: int = Field(default=1, ge=1, description="1 = highest")
