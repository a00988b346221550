"""
Periodization hierarchy models.

Macrocycle -> Mesocycle -> Microcycle -> Session is a strict containment
hierarchy. All date ranges use an exclusive end_date, so a one-week
microcycle starting on a Monday ends on the following Monday.

Usage:
    >>> json_str = macrocycle.model_dump_json()
    >>> Macrocycle.model_validate_json(json_str) == macrocycle
    True
"""

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from periodization_engine.domain.models.enums import (
    ExperienceLevel,
    MesocyclePhase,
    TrainingGoal,
)


class SetPrescription(BaseModel):
    """Target for a single working set."""

    set_number: int = Field(..., ge=1)
    reps_min: int = Field(..., ge=1)
    reps_max: int = Field(..., ge=1)
    target_weight: Optional[float] = Field(default=None, ge=0)
    target_rir: int = Field(default=2, ge=0, le=10, description="Reps in reserve")
    target_rpe: Optional[float] = Field(default=None, ge=1, le=10)


class ExerciseConfig(BaseModel):
    """An exercise slot within a session."""

    exercise_id: str
    name: str
    muscle_group: str
    order: int = Field(..., ge=1)
    sets: List[SetPrescription] = Field(default_factory=list)
    tempo: str = Field(default="2010", description="Eccentric/pause/concentric/pause seconds")
    rest_seconds: int = Field(default=120, ge=0)
    special_technique: Optional[str] = None
    substitution_note: Optional[str] = None
    is_placeholder: bool = False

    @property
    def set_count(self) -> int:
        return len(self.sets)


class Session(BaseModel):
    """A single workout."""

    id: str
    name: str
    description: str = ""
    day_of_week: int = Field(..., ge=1, le=7, description="1 = Monday")
    date: Optional[datetime.date] = None
    split_day: str = Field(..., description="push, pull, legs, upper, lower or specialization")
    primary_muscle_groups: List[str] = Field(default_factory=list)
    secondary_muscle_groups: List[str] = Field(default_factory=list)
    estimated_duration_minutes: int = Field(default=0, ge=0)
    exercises: List[ExerciseConfig] = Field(default_factory=list)
    substitutions: List[str] = Field(default_factory=list)

    def sets_for(self, muscle_group: str) -> int:
        """Total prescribed sets for a muscle group in this session."""
        return sum(e.set_count for e in self.exercises if e.muscle_group == muscle_group)


class Microcycle(BaseModel):
    """One calendar week of training."""

    id: str
    week_number: int = Field(..., ge=1, description="Week index within the macrocycle")
    start_date: datetime.date
    end_date: datetime.date
    volume_level: int = Field(..., ge=1, le=10)
    intensity_level: int = Field(..., ge=1, le=10)
    fatigue_target: int = Field(..., ge=1, le=10)
    is_deload: bool = False
    target_rir: int = Field(default=2, ge=0, le=10)
    training_days: int = Field(default=6, ge=1, le=7)
    readiness_threshold: int = Field(default=7, ge=1, le=10)
    recovery_strategies: List[str] = Field(default_factory=list)
    sessions: List[Session] = Field(default_factory=list)


class Mesocycle(BaseModel):
    """A phase block of several microcycles."""

    id: str
    name: str
    phase: MesocyclePhase
    start_date: datetime.date
    end_date: datetime.date
    duration_weeks: int = Field(..., ge=1)
    volume_level: int = Field(..., ge=1, le=10)
    intensity_level: int = Field(..., ge=1, le=10)
    includes_deload: bool = False
    microcycles: List[Microcycle] = Field(default_factory=list)
    primary_focus: str = ""
    special_techniques: List[str] = Field(default_factory=list)
    progression_model: str = ""
    deload_strategy: Optional[str] = None


class Macrocycle(BaseModel):
    """Long-range training plan."""

    id: str
    user_id: str
    name: str
    start_date: datetime.date
    end_date: datetime.date
    duration_weeks: int = Field(..., ge=1)
    primary_goal: TrainingGoal
    experience_level: ExperienceLevel
    training_frequency: int = Field(..., ge=1, le=7)
    deload_cadence_weeks: int = Field(..., ge=1)
    mesocycles: List[Mesocycle] = Field(default_factory=list)

    @property
    def microcycles(self) -> List[Microcycle]:
        return [mc for meso in self.mesocycles for mc in meso.microcycles]
