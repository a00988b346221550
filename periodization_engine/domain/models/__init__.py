"""
Domain models for the periodization engine.

These models are pure data records, independent of storage or rendering:
- TrainingProfile / RecoveryProfile: the user's snapshot
- VolumeLandmark: per-muscle-group weekly volume budget
- Macrocycle / Mesocycle / Microcycle / Session: the plan hierarchy
- WorkoutLog: realized training history
- PerformanceAnalysis: append-only analysis reports

Usage:
    >>> from periodization_engine.domain.models import Macrocycle
    >>> json_str = macrocycle.model_dump_json(indent=2)
    >>> macrocycle = Macrocycle.model_validate_json(json_str)
"""

from periodization_engine.domain.models.analysis import (
    FatigueAnalysis,
    LandmarkSnapshot,
    MetricValue,
    PerformanceAnalysis,
)
from periodization_engine.domain.models.enums import (
    ExperienceLevel,
    LandmarkStatus,
    MesocyclePhase,
    MuscleGroup,
    OneRepMaxFormula,
    RecoveryStatus,
    SplitPhase,
    SplitVariant,
    TrainingGoal,
    Trend,
)
from periodization_engine.domain.models.history import (
    LoggedExercise,
    LoggedSet,
    WorkoutLog,
)
from periodization_engine.domain.models.landmark import (
    FrequencyRange,
    SetRange,
    VolumeLandmark,
)
from periodization_engine.domain.models.plan import (
    ExerciseConfig,
    Macrocycle,
    Mesocycle,
    Microcycle,
    Session,
    SetPrescription,
)
from periodization_engine.domain.models.profile import (
    RecoveryProfile,
    TrainingProfile,
)

__all__ = [
    # Enums
    "ExperienceLevel",
    "LandmarkStatus",
    "MesocyclePhase",
    "MuscleGroup",
    "OneRepMaxFormula",
    "RecoveryStatus",
    "SplitPhase",
    "SplitVariant",
    "TrainingGoal",
    "Trend",
    # Profile
    "RecoveryProfile",
    "TrainingProfile",
    # Landmarks
    "FrequencyRange",
    "SetRange",
    "VolumeLandmark",
    # Plan hierarchy
    "ExerciseConfig",
    "Macrocycle",
    "Mesocycle",
    "Microcycle",
    "Session",
    "SetPrescription",
    # History
    "LoggedExercise",
    "LoggedSet",
    "WorkoutLog",
    # Analysis
    "FatigueAnalysis",
    "LandmarkSnapshot",
    "MetricValue",
    "PerformanceAnalysis",
]
