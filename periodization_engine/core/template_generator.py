"""
Template Generator for Push/Pull/Legs training weeks.

Produces concrete Session objects (exercises, per-set targets, rest, tempo)
for a requested split, parameterized by phase, variant, experience level
and muscle-group priorities.

Volume policy:
- Each muscle group's weekly sets come from its VolumeLandmark and never
  exceed the landmark maximum.
- Weekly sets are split evenly across the sessions that train the group.
- Variants change how the budget is spent, never the landmark itself.

When equipment leaves no exercise for a movement pattern, the nearest
equivalent pattern is used instead and the substitution is recorded on the
session. Generation never fails for an empty candidate pool.
"""

import logging
import math
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, List, Optional, Sequence, Set, Tuple, Union
from uuid import uuid4

from periodization_engine.application.exceptions import (
    InvalidSplitRequestError,
    PlanStructureError,
)
from periodization_engine.core.exercise_catalog import (
    ExerciseCatalog,
    ExerciseDefinition,
    normalize_equipment,
    pattern_label,
)
from periodization_engine.core.exercise_matcher import ExerciseNameMatcher
from periodization_engine.core.metrics import rpe_from_rir, weight_for_reps
from periodization_engine.core.volume_landmarks import compute_volume_landmark
from periodization_engine.domain.models.enums import (
    ExperienceLevel,
    MesocyclePhase,
    MuscleGroup,
    SplitPhase,
    SplitVariant,
)
from periodization_engine.domain.models.landmark import VolumeLandmark
from periodization_engine.domain.models.plan import (
    ExerciseConfig,
    Microcycle,
    Session,
    SetPrescription,
)
from periodization_engine.domain.models.profile import TrainingProfile
from periodization_engine.settings import Settings, get_settings

logger = logging.getLogger(__name__)

SUPPORTED_SPLITS = ("push_pull_legs",)
SUPPORTED_FREQUENCIES = (5, 6, 7)

PRIORITY_SET_BONUS = 2
SECONDS_PER_SET = 45

# Landmark inputs when neither landmarks nor a profile are supplied
DEFAULT_TRAINING_AGE = 1.0
DEFAULT_RECOVERY_CAPACITY = 5.0

_G = MuscleGroup

DAY_GROUPS: Dict[str, Tuple[Tuple[MuscleGroup, ...], Tuple[MuscleGroup, ...]]] = {
    # split_day: (primary, secondary)
    "push": ((_G.CHEST, _G.SHOULDERS), (_G.TRICEPS,)),
    "pull": ((_G.BACK,), (_G.BICEPS,)),
    "legs": ((_G.QUADS, _G.HAMSTRINGS, _G.GLUTES), (_G.CALVES, _G.ABS)),
    "upper": ((_G.CHEST, _G.BACK), (_G.SHOULDERS, _G.BICEPS, _G.TRICEPS)),
    "lower": ((_G.QUADS, _G.HAMSTRINGS), (_G.GLUTES, _G.CALVES, _G.ABS)),
    "specialization": ((_G.BICEPS, _G.TRICEPS, _G.SHOULDERS), ()),
}

# frequency -> [(split_day, label, day_of_week)]
DAY_LAYOUTS: Dict[int, List[Tuple[str, str, int]]] = {
    5: [
        ("push", "Push", 1),
        ("pull", "Pull", 2),
        ("legs", "Legs", 3),
        ("upper", "Upper", 5),
        ("lower", "Lower", 6),
    ],
    6: [
        ("push", "Push A", 1),
        ("pull", "Pull A", 2),
        ("legs", "Legs A", 3),
        ("push", "Push B", 4),
        ("pull", "Pull B", 5),
        ("legs", "Legs B", 6),
    ],
    7: [
        ("push", "Push A", 1),
        ("pull", "Pull A", 2),
        ("legs", "Legs A", 3),
        ("push", "Push B", 4),
        ("pull", "Pull B", 5),
        ("legs", "Legs B", 6),
        ("specialization", "Specialization", 7),
    ],
}


# =============================================================================
# Policies
# =============================================================================


@dataclass(frozen=True)
class VariantPolicy:
    """How a variant spends the weekly landmark budget."""

    display_name: str
    description: str
    sets_per_exercise: int
    rep_shift: int
    rir_shift: int
    volume_bias: float  # share of the optimal->maximum headroom to use
    special_technique: Optional[str]


@dataclass(frozen=True)
class PhasePolicy:
    """Rep, effort and volume defaults for a template phase."""

    display_name: str
    description: str
    reps_min: int
    reps_max: int
    target_rir: int
    rest_seconds: int
    volume_scale: float
    tempo: str


VARIANT_POLICIES: Dict[SplitVariant, VariantPolicy] = {
    SplitVariant.STANDARD: VariantPolicy(
        display_name="Standard",
        description="Balanced Push/Pull/Legs training.",
        sets_per_exercise=3,
        rep_shift=0,
        rir_shift=0,
        volume_bias=0.0,
        special_technique=None,
    ),
    SplitVariant.NIPPARD: VariantPolicy(
        display_name="Nippard-Style",
        description="Higher total volume with slightly lower reps per set.",
        sets_per_exercise=3,
        rep_shift=-2,
        rir_shift=0,
        volume_bias=0.25,
        special_technique="lengthened partials",
    ),
    SplitVariant.CBUM: VariantPolicy(
        display_name="CBum-Style",
        description="Fewer exercises, more sets per exercise.",
        sets_per_exercise=4,
        rep_shift=0,
        rir_shift=0,
        volume_bias=0.15,
        special_technique="drop sets",
    ),
    SplitVariant.VOLUME_FOCUS: VariantPolicy(
        display_name="Volume Focus",
        description="Volume-biased training with higher rep ranges.",
        sets_per_exercise=3,
        rep_shift=2,
        rir_shift=0,
        volume_bias=0.5,
        special_technique="myo-reps",
    ),
    SplitVariant.STRENGTH_FOCUS: VariantPolicy(
        display_name="Strength Focus",
        description="Lower rep ranges at higher intensity.",
        sets_per_exercise=3,
        rep_shift=-3,
        rir_shift=-1,
        volume_bias=0.0,
        special_technique="cluster sets",
    ),
}

PHASE_POLICIES: Dict[SplitPhase, PhasePolicy] = {
    SplitPhase.VOLUME: PhasePolicy(
        display_name="Volume Phase",
        description="Accumulate volume at moderate loads.",
        reps_min=8,
        reps_max=12,
        target_rir=2,
        rest_seconds=120,
        volume_scale=1.0,
        tempo="3010",
    ),
    SplitPhase.INTENSITY: PhasePolicy(
        display_name="Intensity Phase",
        description="Heavier loads with reduced volume.",
        reps_min=6,
        reps_max=10,
        target_rir=1,
        rest_seconds=180,
        volume_scale=0.85,
        tempo="2010",
    ),
    SplitPhase.STRENGTH: PhasePolicy(
        display_name="Strength Phase",
        description="Low reps and long rests to express strength.",
        reps_min=3,
        reps_max=6,
        target_rir=2,
        rest_seconds=180,
        volume_scale=0.7,
        tempo="20X0",
    ),
    SplitPhase.DELOAD: PhasePolicy(
        display_name="Deload",
        description="Reduced volume and effort to dissipate fatigue.",
        reps_min=10,
        reps_max=15,
        target_rir=3,
        rest_seconds=120,
        volume_scale=0.5,
        tempo="2010",
    ),
}

DELOAD_SETS_PER_EXERCISE = 2

MESOCYCLE_TO_SPLIT_PHASE: Dict[MesocyclePhase, SplitPhase] = {
    MesocyclePhase.ACCUMULATION: SplitPhase.VOLUME,
    MesocyclePhase.INTENSIFICATION: SplitPhase.INTENSITY,
    MesocyclePhase.REALIZATION: SplitPhase.STRENGTH,
    MesocyclePhase.DELOAD: SplitPhase.DELOAD,
    MesocyclePhase.TRANSITION: SplitPhase.DELOAD,
    MesocyclePhase.MAINTENANCE: SplitPhase.INTENSITY,
}


@dataclass(frozen=True)
class DaySlot:
    """One training day in a split layout."""

    split_day: str
    label: str
    day_of_week: int
    primary: Tuple[MuscleGroup, ...]
    secondary: Tuple[MuscleGroup, ...]

    @property
    def muscle_groups(self) -> Tuple[MuscleGroup, ...]:
        return self.primary + self.secondary


def _coerce(enum_cls, value, what: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidSplitRequestError(f"Unknown {what}: {value!r}")


# =============================================================================
# Generator
# =============================================================================


class TemplateGenerator:
    """
    Fills training weeks with Push/Pull/Legs sessions.

    The generator is a read-only consumer of the training profile and the
    volume landmarks. It only ever writes the sessions of a microcycle it is
    handed.

    Usage:
        >>> generator = TemplateGenerator()
        >>> sessions = generator.create_day_split(
        ...     frequency=6,
        ...     variant="standard",
        ...     level="intermediate",
        ...     phase="volume",
        ... )
        >>> len(sessions)
        6
    """

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        self._catalog = catalog or ExerciseCatalog()
        self._settings = settings or get_settings()
        self._matcher = ExerciseNameMatcher(self._catalog)

    def create_day_split(
        self,
        split: str = "push_pull_legs",
        frequency: int = 6,
        variant: Union[str, SplitVariant] = SplitVariant.STANDARD,
        level: Union[str, ExperienceLevel] = ExperienceLevel.INTERMEDIATE,
        phase: Union[str, SplitPhase] = SplitPhase.VOLUME,
        priority_muscle_groups: Optional[Sequence[Union[str, MuscleGroup]]] = None,
        equipment: Optional[Sequence[str]] = None,
        landmarks: Optional[Dict[str, VolumeLandmark]] = None,
        profile: Optional[TrainingProfile] = None,
    ) -> List[Session]:
        """
        Generate one week of sessions for a split.

        Args:
            split: Split name; only "push_pull_legs" is supported
            frequency: Training days per week (5, 6 or 7)
            variant: Variant policy bundle
            level: Experience level (beginners get no special techniques)
            phase: Template phase
            priority_muscle_groups: Groups trained first, with a volume bonus
            equipment: Available equipment or preset; empty means full gym
            landmarks: Volume landmarks keyed by muscle group
            profile: Optional profile for target weights and default landmarks

        Returns:
            Ordered list of sessions, one per training day

        Raises:
            InvalidSplitRequestError: For an unknown split, frequency, variant,
                phase or muscle group
        """
        if split not in SUPPORTED_SPLITS:
            raise InvalidSplitRequestError(
                f"Unsupported split '{split}'. Must be one of: {SUPPORTED_SPLITS}"
            )
        if frequency not in SUPPORTED_FREQUENCIES:
            raise InvalidSplitRequestError(
                f"Frequency must be one of {SUPPORTED_FREQUENCIES}, got {frequency}"
            )

        variant = _coerce(SplitVariant, variant, "variant")
        level = _coerce(ExperienceLevel, level, "experience level")
        phase = _coerce(SplitPhase, phase, "phase")
        priority: List[MuscleGroup] = []
        for group in priority_muscle_groups or []:
            group = _coerce(MuscleGroup, group, "muscle group")
            if group not in priority:
                priority.append(group)

        variant_policy = VARIANT_POLICIES[variant]
        phase_policy = PHASE_POLICIES[phase]
        available = normalize_equipment(equipment if equipment else (profile.equipment if profile else None))
        landmarks = self._resolve_landmarks(landmarks, profile)
        strength_map = self._matcher.resolve_strength_map(profile.strength_map) if profile else {}

        slots = self._day_layout(frequency, priority)
        allocation = self._allocate_sets(slots, landmarks, priority, variant_policy, phase_policy)

        week_pattern_uses: Dict[str, int] = {}
        sessions = []
        for index, slot in enumerate(slots):
            sessions.append(
                self._build_session(
                    slot=slot,
                    group_sets=allocation[index],
                    frequency=frequency,
                    variant_policy=variant_policy,
                    phase=phase,
                    phase_policy=phase_policy,
                    level=level,
                    priority=priority,
                    equipment=available,
                    strength_map=strength_map,
                    week_pattern_uses=week_pattern_uses,
                )
            )

        logger.debug(
            f"Generated {len(sessions)} {variant.value} {phase.value} sessions "
            f"({sum(len(s.substitutions) for s in sessions)} substitutions)"
        )
        return sessions

    def populate_microcycle(
        self,
        microcycle: Microcycle,
        mesocycle_phase: MesocyclePhase,
        variant: Union[str, SplitVariant] = SplitVariant.STANDARD,
        level: Union[str, ExperienceLevel] = ExperienceLevel.INTERMEDIATE,
        priority_muscle_groups: Optional[Sequence[Union[str, MuscleGroup]]] = None,
        equipment: Optional[Sequence[str]] = None,
        landmarks: Optional[Dict[str, VolumeLandmark]] = None,
        profile: Optional[TrainingProfile] = None,
    ) -> Microcycle:
        """
        Fill the empty session slots of a microcycle.

        Only the microcycle's sessions are written; its phase, levels and
        dates are left as the periodization manager set them.

        Raises:
            PlanStructureError: If the microcycle already holds sessions
        """
        if microcycle.sessions:
            raise PlanStructureError(
                f"week {microcycle.week_number} already has "
                f"{len(microcycle.sessions)} sessions"
            )

        phase = (
            SplitPhase.DELOAD
            if microcycle.is_deload
            else MESOCYCLE_TO_SPLIT_PHASE[MesocyclePhase(mesocycle_phase)]
        )
        sessions = self.create_day_split(
            frequency=microcycle.training_days,
            variant=variant,
            level=level,
            phase=phase,
            priority_muscle_groups=priority_muscle_groups,
            equipment=equipment,
            landmarks=landmarks,
            profile=profile,
        )
        for session in sessions:
            session.date = microcycle.start_date + timedelta(days=session.day_of_week - 1)
        microcycle.sessions = sessions
        return microcycle

    # -------------------------------------------------------------------------
    # Layout and volume
    # -------------------------------------------------------------------------

    def _day_layout(self, frequency: int, priority: List[MuscleGroup]) -> List[DaySlot]:
        slots = []
        for split_day, label, day_of_week in DAY_LAYOUTS[frequency]:
            primary, secondary = DAY_GROUPS[split_day]
            if split_day == "specialization" and priority:
                primary, secondary = tuple(priority), ()
            slots.append(DaySlot(split_day, label, day_of_week, primary, secondary))
        return slots

    def _resolve_landmarks(
        self,
        landmarks: Optional[Dict[str, VolumeLandmark]],
        profile: Optional[TrainingProfile],
    ) -> Dict[str, VolumeLandmark]:
        resolved = dict(landmarks or {})
        if profile is not None:
            age = profile.training_age_years
            capacity = profile.recovery_profile.recovery_capacity
        else:
            age, capacity = DEFAULT_TRAINING_AGE, DEFAULT_RECOVERY_CAPACITY
        for group in MuscleGroup:
            if group.value not in resolved:
                resolved[group.value] = compute_volume_landmark(group, age, capacity)
        return resolved

    def weekly_set_target(
        self,
        landmark: VolumeLandmark,
        exposures: int,
        is_priority: bool,
        variant_policy: VariantPolicy,
        phase_policy: PhasePolicy,
    ) -> int:
        """
        Weekly sets for one muscle group.

        Starts at the landmark optimum, spends the variant's share of the
        headroom to maximum, adds the priority bonus, then scales by phase.
        The result is at least one set per exposure and never above maximum.
        """
        sets = landmark.weekly_sets
        target = sets.optimal + variant_policy.volume_bias * (sets.maximum - sets.optimal)
        if is_priority:
            target += PRIORITY_SET_BONUS
        target = min(target, sets.maximum) * phase_policy.volume_scale
        target = int(math.floor(target + 0.5))
        return min(max(target, exposures), sets.maximum)

    def _allocate_sets(
        self,
        slots: List[DaySlot],
        landmarks: Dict[str, VolumeLandmark],
        priority: List[MuscleGroup],
        variant_policy: VariantPolicy,
        phase_policy: PhasePolicy,
    ) -> List[Dict[MuscleGroup, int]]:
        allocation: List[Dict[MuscleGroup, int]] = [{} for _ in slots]
        for group in MuscleGroup:
            session_indexes = [i for i, slot in enumerate(slots) if group in slot.muscle_groups]
            if not session_indexes:
                continue
            weekly = self.weekly_set_target(
                landmarks[group.value],
                len(session_indexes),
                group in priority,
                variant_policy,
                phase_policy,
            )
            base, remainder = divmod(weekly, len(session_indexes))
            for position, index in enumerate(session_indexes):
                allocation[index][group] = base + (1 if position < remainder else 0)
        return allocation

    # -------------------------------------------------------------------------
    # Session building
    # -------------------------------------------------------------------------

    def _build_session(
        self,
        slot: DaySlot,
        group_sets: Dict[MuscleGroup, int],
        frequency: int,
        variant_policy: VariantPolicy,
        phase: SplitPhase,
        phase_policy: PhasePolicy,
        level: ExperienceLevel,
        priority: List[MuscleGroup],
        equipment: Set[str],
        strength_map: Dict[str, float],
        week_pattern_uses: Dict[str, int],
    ) -> Session:
        # Priority groups are trained first, when fatigue is lowest
        ordered_groups = [g for g in priority if g in slot.muscle_groups] + [
            g for g in slot.muscle_groups if g not in priority
        ]

        exercises: List[ExerciseConfig] = []
        substitutions: List[str] = []
        sets_per_exercise = (
            DELOAD_SETS_PER_EXERCISE if phase == SplitPhase.DELOAD else variant_policy.sets_per_exercise
        )
        use_technique = (
            level != ExperienceLevel.BEGINNER
            and phase != SplitPhase.DELOAD
            and variant_policy.special_technique is not None
        )

        for group in ordered_groups:
            total_sets = group_sets.get(group, 0)
            if total_sets <= 0:
                continue
            patterns = self._catalog.patterns_for(group)
            exercise_count = max(
                1,
                min(
                    self._settings.max_exercises_per_group,
                    len(patterns) or 1,
                    math.ceil(total_sets / sets_per_exercise),
                ),
            )
            base, remainder = divmod(total_sets, exercise_count)
            group_configs: List[ExerciseConfig] = []

            for j in range(exercise_count):
                set_count = base + (1 if j < remainder else 0)
                pattern = patterns[j] if patterns else f"{group.value}_exercise"
                used_ids = {e.exercise_id for e in exercises}
                definition, used_pattern = self._select_exercise(
                    pattern, equipment, used_ids, week_pattern_uses
                )

                if definition is None and group_configs:
                    target = group_configs[0]
                    note = (
                        f"Alternative exercise used for {pattern_label(pattern)}: "
                        f"{set_count} sets added to {target.name}"
                    )
                    self._extend_sets(target, set_count)
                    substitutions.append(note)
                    logger.warning(f"No {pattern} exercise for available equipment. {note}")
                    continue

                note = None
                if definition is None:
                    note = f"Alternative exercise used for {pattern_label(pattern)}: placeholder"
                elif used_pattern != pattern:
                    note = f"Alternative exercise used for {pattern_label(pattern)}: {definition.name}"
                if note:
                    substitutions.append(note)
                    logger.warning(f"No {pattern} exercise for available equipment. {note}")

                config = self._exercise_config(
                    definition=definition,
                    group=group,
                    pattern=pattern,
                    order=len(exercises) + 1,
                    set_count=set_count,
                    phase_policy=phase_policy,
                    variant_policy=variant_policy,
                    phase=phase,
                    strength_map=strength_map,
                    substitution_note=note,
                )
                exercises.append(config)
                group_configs.append(config)

            if use_technique and group_configs:
                group_configs[-1].special_technique = variant_policy.special_technique

        rest_seconds = sum(
            (SECONDS_PER_SET + e.rest_seconds) * e.set_count for e in exercises
        )
        duration = self._settings.warmup_minutes + math.ceil(rest_seconds / 60)

        primary = [g.value for g in slot.primary]
        return Session(
            id=str(uuid4()),
            name=(
                f"{frequency}-Day PPL: {variant_policy.display_name} "
                f"({phase_policy.display_name}) - {slot.label}"
            ),
            description=(
                f"{variant_policy.description} {phase_policy.description} "
                f"Focus: {', '.join(primary)}."
            ),
            day_of_week=slot.day_of_week,
            split_day=slot.split_day,
            primary_muscle_groups=primary,
            secondary_muscle_groups=[g.value for g in slot.secondary],
            estimated_duration_minutes=duration,
            exercises=exercises,
            substitutions=substitutions,
        )

    def _select_exercise(
        self,
        pattern: str,
        equipment: Set[str],
        used_ids: Set[str],
        week_pattern_uses: Dict[str, int],
    ) -> Tuple[Optional[ExerciseDefinition], str]:
        """
        Pick an exercise for a pattern, walking substitutes in order.

        Candidates keep catalog order and rotate by how often the pattern was
        already used this week, so repeated days get different exercises.
        """
        for candidate_pattern in [pattern] + self._catalog.substitutes_for(pattern):
            candidates = [
                e for e in self._catalog.candidates(candidate_pattern, equipment)
                if e.id not in used_ids
            ]
            if not candidates:
                continue
            uses = week_pattern_uses.get(candidate_pattern, 0)
            week_pattern_uses[candidate_pattern] = uses + 1
            return candidates[uses % len(candidates)], candidate_pattern
        return None, pattern

    def _exercise_config(
        self,
        definition: Optional[ExerciseDefinition],
        group: MuscleGroup,
        pattern: str,
        order: int,
        set_count: int,
        phase_policy: PhasePolicy,
        variant_policy: VariantPolicy,
        phase: SplitPhase,
        strength_map: Dict[str, float],
        substitution_note: Optional[str],
    ) -> ExerciseConfig:
        reps_min, reps_max, rir = self._rep_targets(phase_policy, variant_policy, phase)

        if definition is None:
            exercise_id = f"placeholder_{pattern}"
            name = f"{pattern_label(pattern).title()} ({group.value.title()}) Exercise"
            target_weight = None
        else:
            exercise_id = definition.id
            name = definition.name
            one_rm = strength_map.get(definition.id)
            target_weight = (
                weight_for_reps(one_rm, reps_max, rir, self._settings.weight_rounding_increment)
                if one_rm
                else None
            )

        sets = [
            SetPrescription(
                set_number=n,
                reps_min=reps_min,
                reps_max=reps_max,
                target_weight=target_weight,
                target_rir=rir,
                target_rpe=rpe_from_rir(rir),
            )
            for n in range(1, set_count + 1)
        ]
        return ExerciseConfig(
            exercise_id=exercise_id,
            name=name,
            muscle_group=group.value,
            order=order,
            sets=sets,
            tempo=phase_policy.tempo,
            rest_seconds=phase_policy.rest_seconds,
            substitution_note=substitution_note,
            is_placeholder=definition is None,
        )

    @staticmethod
    def _rep_targets(
        phase_policy: PhasePolicy,
        variant_policy: VariantPolicy,
        phase: SplitPhase,
    ) -> Tuple[int, int, int]:
        if phase == SplitPhase.DELOAD:
            return phase_policy.reps_min, phase_policy.reps_max, phase_policy.target_rir
        reps_min = max(1, phase_policy.reps_min + variant_policy.rep_shift)
        reps_max = max(reps_min, phase_policy.reps_max + variant_policy.rep_shift)
        rir = max(0, phase_policy.target_rir + variant_policy.rir_shift)
        return reps_min, reps_max, rir

    @staticmethod
    def _extend_sets(config: ExerciseConfig, extra: int) -> None:
        template = config.sets[-1]
        start = len(config.sets)
        for n in range(1, extra + 1):
            config.sets.append(template.model_copy(update={"set_number": start + n}))
