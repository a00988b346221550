"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the repository
ports for fast, isolated testing. No database or external dependencies
required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeTrainingProfileRepository, create_profile

    repo = FakeTrainingProfileRepository()
    repo.seed([create_profile(user_id="user1")])
"""
from datetime import date, timedelta
from typing import Dict, List, Optional
import uuid

from periodization_engine.domain.models import (
    ExperienceLevel,
    LoggedExercise,
    LoggedSet,
    RecoveryProfile,
    TrainingGoal,
    TrainingProfile,
    WorkoutLog,
)
from tests.fakes.analysis_repository import FakePerformanceAnalysisRepository
from tests.fakes.history_repository import FakeWorkoutHistoryRepository
from tests.fakes.profile_repository import FakeTrainingProfileRepository


# =============================================================================
# Factory Functions
# =============================================================================


def create_profile(
    *,
    user_id: str = "test_user",
    level: ExperienceLevel = ExperienceLevel.INTERMEDIATE,
    goal: TrainingGoal = TrainingGoal.HYPERTROPHY,
    training_age_years: float = 3.0,
    sleep_quality: int = 7,
    stress_level: int = 4,
    nutrition_quality: int = 7,
    strength_map: Optional[Dict[str, float]] = None,
    equipment: Optional[List[str]] = None,
    priority_muscle_groups: Optional[List[str]] = None,
) -> TrainingProfile:
    """
    Create a TrainingProfile with sensible test defaults.

    The default recovery inputs give a recovery capacity of 7.0.
    """
    return TrainingProfile(
        user_id=user_id,
        experience_level=level,
        training_age_years=training_age_years,
        primary_goal=goal,
        recovery_profile=RecoveryProfile(
            sleep_quality=sleep_quality,
            stress_level=stress_level,
            nutrition_quality=nutrition_quality,
        ),
        strength_map=strength_map or {},
        equipment=equipment or [],
        priority_muscle_groups=priority_muscle_groups or [],
    )


def create_workout_logs(
    *,
    user_id: str = "test_user",
    start: date,
    num_sessions: int,
    every_days: int = 2,
    weight: float = 100.0,
    reps: int = 8,
    sets: int = 3,
    rpe: Optional[float] = 8.0,
    exercise_id: str = "barbell_bench_press",
    exercise_name: str = "Barbell Bench Press",
    muscle_group: Optional[str] = "chest",
) -> List[WorkoutLog]:
    """
    Create evenly spaced workout logs with one exercise each.

    Args:
        start: Date of the first session
        num_sessions: Number of sessions to create
        every_days: Days between sessions
    """
    logs = []
    for i in range(num_sessions):
        logs.append(
            WorkoutLog(
                id=str(uuid.uuid4()),
                user_id=user_id,
                date=start + timedelta(days=i * every_days),
                exercises=[
                    LoggedExercise(
                        exercise_id=exercise_id,
                        exercise_name=exercise_name,
                        muscle_group=muscle_group,
                        sets=[LoggedSet(weight=weight, reps=reps, rpe=rpe) for _ in range(sets)],
                    )
                ],
            )
        )
    return logs


__all__ = [
    "FakePerformanceAnalysisRepository",
    "FakeTrainingProfileRepository",
    "FakeWorkoutHistoryRepository",
    "create_profile",
    "create_workout_logs",
]
