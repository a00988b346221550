"""
Logged workout history consumed by performance analysis.
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class LoggedSet(BaseModel):
    """A completed set."""

    weight: float = Field(default=0.0, ge=0)
    reps: int = Field(default=0, ge=0)
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    rir: Optional[int] = Field(default=None, ge=0, le=10)

    @property
    def effective_rpe(self) -> Optional[float]:
        """RPE as logged, or derived from RIR when only that was recorded."""
        if self.rpe is not None:
            return self.rpe
        if self.rir is not None:
            return float(max(1, 10 - self.rir))
        return None


class LoggedExercise(BaseModel):
    """An exercise performed in a logged workout."""

    exercise_id: Optional[str] = None
    exercise_name: str = Field(..., min_length=1)
    muscle_group: Optional[str] = None
    sets: List[LoggedSet] = Field(default_factory=list)

    @field_validator("muscle_group")
    @classmethod
    def normalize_muscle_group(cls, v: Optional[str]) -> Optional[str]:
        """Store groups lowercase so "Chest" and "chest " count together."""
        if v is None:
            return None
        v = v.strip().lower()
        return v or None


class WorkoutLog(BaseModel):
    """A completed workout session."""

    id: str
    user_id: str
    date: datetime.date
    exercises: List[LoggedExercise] = Field(default_factory=list)
