"""
Training profile models.

A TrainingProfile is a per-user snapshot consumed read-only by plan
generation and replaced after each analysis block.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from periodization_engine.domain.models.enums import (
    ExperienceLevel,
    MuscleGroup,
    TrainingGoal,
)


class RecoveryProfile(BaseModel):
    """
    Self-reported recovery inputs, each on a 1-10 scale.

    Examples:
        >>> RecoveryProfile(sleep_quality=8, stress_level=3, nutrition_quality=7).recovery_capacity
        7.7
    """

    sleep_quality: int = Field(default=7, ge=1, le=10, description="Sleep quality (10 = best)")
    stress_level: int = Field(default=5, ge=1, le=10, description="Life stress (10 = worst)")
    nutrition_quality: int = Field(
        default=7, ge=1, le=10, description="Nutrition quality (10 = best)"
    )

    @property
    def recovery_capacity(self) -> float:
        """Combined recovery capacity on a 1-10 scale (stress counts inversely)."""
        raw = (self.sleep_quality + (11 - self.stress_level) + self.nutrition_quality) / 3
        return round(min(max(raw, 1.0), 10.0), 1)


class TrainingProfile(BaseModel):
    """
    Per-user training snapshot.

    Examples:
        >>> profile = TrainingProfile(
        ...     user_id="user-123",
        ...     experience_level=ExperienceLevel.INTERMEDIATE,
        ...     training_age_years=3,
        ...     primary_goal=TrainingGoal.HYPERTROPHY,
        ...     strength_map={"barbell_bench_press": 100.0},
        ... )
    """

    user_id: str = Field(..., min_length=1)
    experience_level: ExperienceLevel = ExperienceLevel.INTERMEDIATE
    training_age_years: float = Field(default=1.0, ge=0, le=50)
    primary_goal: TrainingGoal = TrainingGoal.HYPERTROPHY
    secondary_goals: List[TrainingGoal] = Field(default_factory=list)
    weekly_time_minutes: int = Field(default=360, ge=0)
    equipment: List[str] = Field(
        default_factory=list,
        description="Available equipment names or a preset such as 'home_basic'",
    )
    recovery_profile: RecoveryProfile = Field(default_factory=RecoveryProfile)
    strength_map: Dict[str, float] = Field(
        default_factory=dict,
        description="Exercise id -> estimated 1RM",
    )
    fatigue_level: Optional[float] = Field(default=None, ge=1, le=10)
    priority_muscle_groups: List[MuscleGroup] = Field(default_factory=list)
