"""
Volume Landmark Calculator.

Derives per-muscle-group weekly set and frequency ranges
(MEV / MAV / MRV) from training age and recovery capacity.

Policy:
- Training age widens all three set counts, capped at +50%.
- Recovery capacity scales MAV and MRV only. MEV is physiological and
  does not depend on recovery.
- Frequency keeps its base optimum; the ceiling follows recovery.
"""

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Union

from periodization_engine.domain.models.enums import LandmarkStatus, MuscleGroup
from periodization_engine.domain.models.landmark import (
    FrequencyRange,
    SetRange,
    VolumeLandmark,
)
from periodization_engine.domain.models.profile import TrainingProfile

logger = logging.getLogger(__name__)

MIN_TRAINING_AGE = 0
MAX_TRAINING_AGE = 50
MIN_RECOVERY_CAPACITY = 1
MAX_RECOVERY_CAPACITY = 10

APPROACHING_MRV_RATIO = 0.9


@dataclass(frozen=True)
class BaseLandmark:
    """Seed values for a muscle group before any adjustment."""

    mev: int
    mav: int
    mrv: int
    frequency: int
    recovery_hours: int


BASE_LANDMARKS: Dict[MuscleGroup, BaseLandmark] = {
    MuscleGroup.CHEST: BaseLandmark(mev=8, mav=12, mrv=20, frequency=2, recovery_hours=48),
    MuscleGroup.BACK: BaseLandmark(mev=10, mav=14, mrv=22, frequency=2, recovery_hours=48),
    MuscleGroup.SHOULDERS: BaseLandmark(mev=8, mav=16, mrv=22, frequency=2, recovery_hours=36),
    MuscleGroup.QUADS: BaseLandmark(mev=8, mav=12, mrv=18, frequency=2, recovery_hours=72),
    MuscleGroup.HAMSTRINGS: BaseLandmark(mev=6, mav=10, mrv=16, frequency=2, recovery_hours=72),
    MuscleGroup.GLUTES: BaseLandmark(mev=4, mav=8, mrv=16, frequency=2, recovery_hours=48),
    MuscleGroup.BICEPS: BaseLandmark(mev=8, mav=14, mrv=20, frequency=3, recovery_hours=36),
    MuscleGroup.TRICEPS: BaseLandmark(mev=6, mav=10, mrv=18, frequency=2, recovery_hours=36),
    MuscleGroup.CALVES: BaseLandmark(mev=8, mav=12, mrv=16, frequency=3, recovery_hours=24),
    MuscleGroup.ABS: BaseLandmark(mev=4, mav=16, mrv=25, frequency=3, recovery_hours=24),
}

DEFAULT_LANDMARK = BaseLandmark(mev=6, mav=10, mrv=16, frequency=2, recovery_hours=48)

# Large muscle groups first
PRIORITY_ORDER: List[MuscleGroup] = [
    MuscleGroup.BACK,
    MuscleGroup.CHEST,
    MuscleGroup.QUADS,
    MuscleGroup.HAMSTRINGS,
    MuscleGroup.GLUTES,
    MuscleGroup.SHOULDERS,
    MuscleGroup.TRICEPS,
    MuscleGroup.BICEPS,
    MuscleGroup.CALVES,
    MuscleGroup.ABS,
]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _lookup_base(muscle_group: str) -> BaseLandmark:
    try:
        return BASE_LANDMARKS[MuscleGroup(muscle_group)]
    except ValueError:
        logger.debug(f"No base landmark for '{muscle_group}', using default")
        return DEFAULT_LANDMARK


def age_multiplier(training_age: float) -> float:
    """Set-count multiplier for training age, capped at 1.5."""
    return round(min(1 + training_age * 0.05, 1.5), 4)


def recovery_multiplier(recovery_capacity: float) -> float:
    """MAV/MRV multiplier for recovery capacity (1.0 at capacity 5)."""
    return round(0.7 + recovery_capacity * 0.06, 4)


def default_priority(muscle_group: str) -> int:
    """Rank of a muscle group in the fixed priority order (1 = highest)."""
    for rank, group in enumerate(PRIORITY_ORDER, start=1):
        if group.value == muscle_group:
            return rank
    return len(PRIORITY_ORDER) + 1


@lru_cache(maxsize=1024)
def _compute_cached(
    muscle_group: str,
    training_age: float,
    recovery_capacity: float,
    priority: int,
) -> VolumeLandmark:
    base = _lookup_base(muscle_group)
    age_mult = age_multiplier(training_age)
    rec_mult = recovery_multiplier(recovery_capacity)

    minimum_sets = _round_half_up(base.mev * age_mult)
    optimal_sets = _round_half_up(base.mav * age_mult * rec_mult)
    maximum_sets = _round_half_up(base.mrv * age_mult * rec_mult)

    # round() strips float noise before ceil (2 x 1.0 must stay 2)
    frequency = FrequencyRange(
        minimum=max(1, math.floor(round(base.frequency * 0.8, 6))),
        optimal=base.frequency,
        maximum=math.ceil(round(base.frequency * rec_mult, 6)),
    )

    return VolumeLandmark(
        muscle_group=muscle_group,
        weekly_sets=SetRange(
            minimum=minimum_sets,
            optimal=optimal_sets,
            maximum=maximum_sets,
        ),
        weekly_frequency=frequency,
        recovery_hours=base.recovery_hours,
        priority=priority,
    )


def compute_volume_landmark(
    muscle_group: Union[str, MuscleGroup],
    training_age: float,
    recovery_capacity: float,
    priority: Optional[int] = None,
) -> VolumeLandmark:
    """
    Compute the weekly volume landmark for a muscle group.

    Results are memoized per (muscle_group, training_age, recovery_capacity,
    priority). Entries are pure functions of their key, so concurrent readers
    never need coordination.

    Args:
        muscle_group: Muscle group name; unknown names use the default seed
        training_age: Years of consistent training, 0-50
        recovery_capacity: Recovery capacity, 1-10
        priority: Priority rank override (1 = highest)

    Returns:
        VolumeLandmark with ordered set and frequency ranges

    Raises:
        ValueError: If training_age or recovery_capacity is out of range
    """
    if not MIN_TRAINING_AGE <= training_age <= MAX_TRAINING_AGE:
        raise ValueError(
            f"training_age must be within [{MIN_TRAINING_AGE}, {MAX_TRAINING_AGE}], "
            f"got {training_age}"
        )
    if not MIN_RECOVERY_CAPACITY <= recovery_capacity <= MAX_RECOVERY_CAPACITY:
        raise ValueError(
            f"recovery_capacity must be within [{MIN_RECOVERY_CAPACITY}, "
            f"{MAX_RECOVERY_CAPACITY}], got {recovery_capacity}"
        )

    name = muscle_group.value if isinstance(muscle_group, MuscleGroup) else muscle_group
    name = name.strip().lower()
    rank = priority if priority is not None else default_priority(name)
    return _compute_cached(name, float(training_age), float(recovery_capacity), rank)


def compute_landmarks_for_profile(
    profile: TrainingProfile,
    muscle_groups: Optional[Iterable[MuscleGroup]] = None,
) -> Dict[str, VolumeLandmark]:
    """
    Compute landmarks for every muscle group from a profile snapshot.

    Groups listed in profile.priority_muscle_groups take the top priority
    ranks, in the order the profile lists them.
    """
    groups = list(muscle_groups) if muscle_groups is not None else list(MuscleGroup)
    preferred = [g for g in profile.priority_muscle_groups if g in groups]
    ranked = preferred + [g for g in PRIORITY_ORDER if g in groups and g not in preferred]

    capacity = profile.recovery_profile.recovery_capacity
    landmarks = {
        group.value: compute_volume_landmark(
            group,
            profile.training_age_years,
            capacity,
            priority=rank,
        )
        for rank, group in enumerate(ranked, start=1)
    }
    logger.debug(
        f"Computed {len(landmarks)} landmarks for user {profile.user_id} "
        f"(age={profile.training_age_years}, recovery={capacity})"
    )
    return landmarks


def classify_weekly_volume(weekly_sets: float, landmark: VolumeLandmark) -> LandmarkStatus:
    """Place realized weekly sets against a landmark."""
    sets = landmark.weekly_sets
    if weekly_sets < sets.minimum:
        return LandmarkStatus.BELOW_MEV
    if weekly_sets > sets.maximum:
        return LandmarkStatus.ABOVE_MRV
    if weekly_sets >= sets.maximum * APPROACHING_MRV_RATIO:
        return LandmarkStatus.APPROACHING_MRV
    return LandmarkStatus.OPTIMAL


def clear_landmark_cache() -> None:
    """Drop memoized landmarks (e.g. after a base table change in tests)."""
    _compute_cached.cache_clear()
