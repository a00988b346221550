"""
Periodization Hierarchy Manager.

Owns creation and phase sequencing of the Macrocycle -> Mesocycle ->
Microcycle hierarchy, and validates its structural invariants.

Phase state machine:
    accumulation -> intensification -> realization -> deload
    -> (repeat, or transition/maintenance for a short remainder)

Cadence deloads are inserted inside loading mesocycles every
DELOAD_CADENCE[level] weeks, on top of the one-week deload block that
closes each full cycle.
"""

import logging
import math
from datetime import date, timedelta
from typing import Dict, Iterator, List, Optional, Tuple
from uuid import uuid4

from periodization_engine.application.exceptions import PlanStructureError
from periodization_engine.core.validation import ValidationResult
from periodization_engine.domain.models.enums import (
    ExperienceLevel,
    MesocyclePhase,
    TrainingGoal,
)
from periodization_engine.domain.models.plan import Macrocycle, Mesocycle, Microcycle
from periodization_engine.domain.models.profile import TrainingProfile

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
MIN_DURATION_WEEKS = 1
MAX_DURATION_WEEKS = 52
VALID_FREQUENCIES = (5, 6, 7)

# Fewer weeks than this at the start of a cycle become one
# transition/maintenance block instead of a truncated loading block.
MIN_CYCLE_WEEKS = 3

DELOAD_CADENCE: Dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 8,
    ExperienceLevel.INTERMEDIATE: 6,
    ExperienceLevel.ADVANCED: 4,
    ExperienceLevel.ELITE: 4,
}

# (accumulation, intensification, realization) weeks
PHASE_LENGTHS: Dict[ExperienceLevel, Tuple[int, int, int]] = {
    ExperienceLevel.BEGINNER: (6, 5, 3),
    ExperienceLevel.INTERMEDIATE: (5, 4, 3),
    ExperienceLevel.ADVANCED: (4, 4, 3),
    ExperienceLevel.ELITE: (4, 3, 3),
}

DELOAD_BLOCK_WEEKS = 1

# (volume_level, intensity_level)
PHASE_LEVELS: Dict[MesocyclePhase, Tuple[int, int]] = {
    MesocyclePhase.ACCUMULATION: (8, 6),
    MesocyclePhase.INTENSIFICATION: (6, 8),
    MesocyclePhase.REALIZATION: (4, 9),
    MesocyclePhase.DELOAD: (3, 4),
    MesocyclePhase.TRANSITION: (3, 3),
    MesocyclePhase.MAINTENANCE: (5, 6),
}

LOADING_PHASES = frozenset(
    {
        MesocyclePhase.ACCUMULATION,
        MesocyclePhase.INTENSIFICATION,
        MesocyclePhase.REALIZATION,
    }
)

ALLOWED_TRANSITIONS: Dict[MesocyclePhase, frozenset] = {
    MesocyclePhase.ACCUMULATION: frozenset(
        {
            MesocyclePhase.INTENSIFICATION,
            MesocyclePhase.DELOAD,
            MesocyclePhase.TRANSITION,
            MesocyclePhase.MAINTENANCE,
        }
    ),
    MesocyclePhase.INTENSIFICATION: frozenset(
        {
            MesocyclePhase.REALIZATION,
            MesocyclePhase.DELOAD,
            MesocyclePhase.TRANSITION,
            MesocyclePhase.MAINTENANCE,
        }
    ),
    MesocyclePhase.REALIZATION: frozenset(
        {MesocyclePhase.DELOAD, MesocyclePhase.TRANSITION, MesocyclePhase.MAINTENANCE}
    ),
    MesocyclePhase.DELOAD: frozenset(
        {MesocyclePhase.ACCUMULATION, MesocyclePhase.TRANSITION, MesocyclePhase.MAINTENANCE}
    ),
    MesocyclePhase.TRANSITION: frozenset({MesocyclePhase.ACCUMULATION}),
    MesocyclePhase.MAINTENANCE: frozenset({MesocyclePhase.ACCUMULATION}),
}

PRIMARY_FOCUS: Dict[MesocyclePhase, str] = {
    MesocyclePhase.ACCUMULATION: "muscle growth, volume accumulation, work capacity",
    MesocyclePhase.INTENSIFICATION: "mechanical tension, progressive overload",
    MesocyclePhase.REALIZATION: "maximal strength, neural drive, technique",
    MesocyclePhase.DELOAD: "recovery, supercompensation, fatigue reduction",
    MesocyclePhase.TRANSITION: "active recovery, movement quality",
    MesocyclePhase.MAINTENANCE: "general fitness, balanced development",
}

BASE_TECHNIQUES = ["progressive overload", "proper warm-up", "controlled eccentrics"]

LEVEL_TECHNIQUES: Dict[ExperienceLevel, List[str]] = {
    ExperienceLevel.BEGINNER: [],
    ExperienceLevel.INTERMEDIATE: ["supersets", "drop sets", "tempo training"],
    ExperienceLevel.ADVANCED: ["rest-pause", "mechanical drop sets", "partial reps", "cluster sets"],
    ExperienceLevel.ELITE: [
        "intra-set stretching",
        "accommodating resistance",
        "pre-exhaustion",
        "post-activation potentiation",
    ],
}

PHASE_TECHNIQUES: Dict[MesocyclePhase, List[str]] = {
    MesocyclePhase.ACCUMULATION: ["supersets", "giant sets", "time under tension"],
    MesocyclePhase.INTENSIFICATION: ["drop sets", "rest-pause", "partial reps"],
    MesocyclePhase.REALIZATION: ["cluster sets", "wave loading", "heavy singles"],
    MesocyclePhase.DELOAD: ["light technique work", "mobility training"],
    MesocyclePhase.TRANSITION: ["mobility training", "skill practice"],
    MesocyclePhase.MAINTENANCE: ["tempo training", "paused reps"],
}

MAX_TECHNIQUES: Dict[ExperienceLevel, int] = {
    ExperienceLevel.BEGINNER: 3,
    ExperienceLevel.INTERMEDIATE: 5,
    ExperienceLevel.ADVANCED: 7,
    ExperienceLevel.ELITE: 9,
}

BASE_RECOVERY_STRATEGIES = [
    "adequate sleep (7-9 hours)",
    "proper nutrition",
    "hydration",
    "active recovery",
]
INTERMEDIATE_RECOVERY_STRATEGIES = ["foam rolling", "stretching", "stress management"]
ADVANCED_RECOVERY_STRATEGIES = ["contrast showers", "massage", "targeted mobility work"]
DELOAD_RECOVERY_STRATEGIES = [
    "reduced training volume",
    "extra sleep",
    "light cardio",
]


# =============================================================================
# Policy helpers
# =============================================================================


def _clamp_level(value: float) -> int:
    return int(min(max(math.floor(value + 0.5), 1), 10))


def get_special_techniques(phase: MesocyclePhase, level: ExperienceLevel) -> List[str]:
    """Techniques available in a phase, limited by experience level."""
    techniques: List[str] = []
    for technique in BASE_TECHNIQUES + LEVEL_TECHNIQUES[level] + PHASE_TECHNIQUES[phase]:
        if technique not in techniques:
            techniques.append(technique)
    return techniques[: MAX_TECHNIQUES[level]]


def get_progression_model(phase: MesocyclePhase, level: ExperienceLevel) -> str:
    """Describe how load progresses week to week within a phase."""
    if phase == MesocyclePhase.ACCUMULATION:
        if level == ExperienceLevel.BEGINNER:
            return "Linear progression with focus on adding reps"
        if level == ExperienceLevel.INTERMEDIATE:
            return "Double progression (reps then weight)"
        return "Undulating periodization with volume focus"
    if phase == MesocyclePhase.INTENSIFICATION:
        if level == ExperienceLevel.BEGINNER:
            return "Linear progression with focus on adding weight"
        if level == ExperienceLevel.INTERMEDIATE:
            return "Double progression (weight then reps)"
        return "Undulating periodization with intensity focus"
    if phase == MesocyclePhase.REALIZATION:
        return "Intensity-based progression with reduced volume"
    if phase == MesocyclePhase.DELOAD:
        return "Reduced volume and intensity with focus on recovery"
    return "Balanced progression across all variables"


def get_deload_strategy(level: ExperienceLevel, goal: TrainingGoal) -> str:
    """Which variable a deload week reduces."""
    if level == ExperienceLevel.BEGINNER:
        return "volume"
    if goal == TrainingGoal.STRENGTH:
        return "intensity" if level in (ExperienceLevel.ADVANCED, ExperienceLevel.ELITE) else "combined"
    if goal == TrainingGoal.POWER:
        return "frequency"
    if goal == TrainingGoal.WEIGHT_LOSS:
        return "active_recovery"
    return "volume"


def get_recovery_strategies(is_deload: bool, level: ExperienceLevel) -> List[str]:
    strategies = list(BASE_RECOVERY_STRATEGIES)
    if level != ExperienceLevel.BEGINNER:
        strategies += INTERMEDIATE_RECOVERY_STRATEGIES
    if level in (ExperienceLevel.ADVANCED, ExperienceLevel.ELITE):
        strategies += ADVANCED_RECOVERY_STRATEGIES
    if is_deload:
        strategies += DELOAD_RECOVERY_STRATEGIES
    return strategies


def week_parameters(phase: MesocyclePhase, week_index: int, is_deload: bool) -> Tuple[int, int, int]:
    """
    Volume level, intensity level and target RIR for one week of a phase.

    Args:
        phase: Phase of the containing mesocycle
        week_index: 0-based week within the mesocycle
        is_deload: Whether this week is a deload

    Returns:
        (volume_level, intensity_level, target_rir)
    """
    if is_deload:
        return 3, 3, 4

    i = week_index
    if phase == MesocyclePhase.ACCUMULATION:
        return _clamp_level(7 + i * 0.5), 6, 2
    if phase == MesocyclePhase.INTENSIFICATION:
        return 6, _clamp_level(7 + i * 0.5), 1
    if phase == MesocyclePhase.REALIZATION:
        return 4, _clamp_level(9 + i * 0.5), 1
    if phase == MesocyclePhase.TRANSITION:
        return 3, 3, 3
    return 5, 6, 2


# =============================================================================
# Manager
# =============================================================================


class PeriodizationManager:
    """
    Builds and validates periodized training plans.

    The manager creates Macrocycles, Mesocycles and Microcycles and sequences
    their phases. It never inspects or alters Session contents.

    Usage:
        >>> manager = PeriodizationManager()
        >>> plan = manager.build_macrocycle(
        ...     user_id="user-123",
        ...     start_date=date(2026, 1, 5),
        ...     duration_weeks=16,
        ...     goal=TrainingGoal.HYPERTROPHY,
        ...     level=ExperienceLevel.INTERMEDIATE,
        ... )
        >>> sum(m.duration_weeks for m in plan.mesocycles)
        16
    """

    def build_for_profile(
        self,
        profile: TrainingProfile,
        start_date: date,
        duration_weeks: int,
        training_frequency: int = 6,
        name: Optional[str] = None,
    ) -> Macrocycle:
        """Build a macrocycle from a profile's goal and experience level."""
        return self.build_macrocycle(
            user_id=profile.user_id,
            start_date=start_date,
            duration_weeks=duration_weeks,
            goal=profile.primary_goal,
            level=profile.experience_level,
            training_frequency=training_frequency,
            name=name,
        )

    def build_macrocycle(
        self,
        user_id: str,
        start_date: date,
        duration_weeks: int,
        goal: TrainingGoal,
        level: ExperienceLevel,
        training_frequency: int = 6,
        name: Optional[str] = None,
    ) -> Macrocycle:
        """
        Build a macrocycle whose mesocycles exactly fill its duration.

        Args:
            user_id: Owner of the plan
            start_date: First day of the plan
            duration_weeks: Total length, 1-52 weeks
            goal: Primary training goal
            level: Experience level (selects phase lengths and cadence)
            training_frequency: Training days per week (5, 6 or 7)
            name: Optional plan name

        Returns:
            Validated Macrocycle with empty session slots

        Raises:
            ValueError: If duration or frequency is out of range
            PlanStructureError: If the built plan violates a structural invariant
        """
        if not MIN_DURATION_WEEKS <= duration_weeks <= MAX_DURATION_WEEKS:
            raise ValueError(
                f"Duration must be between {MIN_DURATION_WEEKS} and "
                f"{MAX_DURATION_WEEKS} weeks, got {duration_weeks}"
            )
        if training_frequency not in VALID_FREQUENCIES:
            raise ValueError(
                f"Training frequency must be one of {VALID_FREQUENCIES}, got {training_frequency}"
            )

        cadence = DELOAD_CADENCE[level]
        phase_plan = self.plan_phases(duration_weeks, goal, level)

        mesocycles: List[Mesocycle] = []
        current = start_date
        week_number = 1
        weeks_since_deload = 0
        counters: Dict[MesocyclePhase, int] = {}

        for index, (phase, weeks) in enumerate(phase_plan):
            next_phase = phase_plan[index + 1][0] if index + 1 < len(phase_plan) else None
            deload_flags, weeks_since_deload = self._deload_flags(
                phase, weeks, cadence, weeks_since_deload, next_phase
            )
            counters[phase] = counters.get(phase, 0) + 1
            meso = self._build_mesocycle(
                phase=phase,
                ordinal=counters[phase],
                start=current,
                weeks=weeks,
                first_week_number=week_number,
                deload_flags=deload_flags,
                goal=goal,
                level=level,
                training_frequency=training_frequency,
            )
            mesocycles.append(meso)
            current = meso.end_date
            week_number += weeks

        macrocycle = Macrocycle(
            id=str(uuid4()),
            user_id=user_id,
            name=name or f"{duration_weeks}-Week {goal.value.replace('_', ' ').title()} Plan",
            start_date=start_date,
            end_date=start_date + timedelta(weeks=duration_weeks),
            duration_weeks=duration_weeks,
            primary_goal=goal,
            experience_level=level,
            training_frequency=training_frequency,
            deload_cadence_weeks=cadence,
            mesocycles=mesocycles,
        )

        result = self.validate_macrocycle(macrocycle)
        self.raise_for_errors(result)
        for issue in result.warnings:
            logger.warning(f"Periodization policy warning: {issue}")

        logger.info(
            f"Built {duration_weeks}-week macrocycle for user {user_id}: "
            f"{len(mesocycles)} mesocycles, "
            f"{sum(1 for mc in macrocycle.microcycles if mc.is_deload)} deload weeks"
        )
        return macrocycle

    def plan_phases(
        self,
        duration_weeks: int,
        goal: TrainingGoal,
        level: ExperienceLevel,
    ) -> List[Tuple[MesocyclePhase, int]]:
        """
        Sequence (phase, weeks) pairs that sum exactly to duration_weeks.
        """
        accumulation, intensification, realization = PHASE_LENGTHS[level]
        if goal in (TrainingGoal.STRENGTH, TrainingGoal.POWER):
            accumulation, intensification = intensification, accumulation

        cycle = [
            (MesocyclePhase.ACCUMULATION, accumulation),
            (MesocyclePhase.INTENSIFICATION, intensification),
            (MesocyclePhase.REALIZATION, realization),
            (MesocyclePhase.DELOAD, DELOAD_BLOCK_WEEKS),
        ]
        remainder_phase = (
            MesocyclePhase.TRANSITION
            if goal in (TrainingGoal.STRENGTH, TrainingGoal.POWER)
            else MesocyclePhase.MAINTENANCE
        )

        phases: List[Tuple[MesocyclePhase, int]] = []
        remaining = duration_weeks
        while remaining > 0:
            if remaining < MIN_CYCLE_WEEKS:
                phases.append((remainder_phase, remaining))
                break
            for phase, length in cycle:
                if remaining == 0:
                    break
                weeks = min(length, remaining)
                phases.append((phase, weeks))
                remaining -= weeks
        return phases

    def _deload_flags(
        self,
        phase: MesocyclePhase,
        weeks: int,
        cadence: int,
        weeks_since_deload: int,
        next_phase: Optional[MesocyclePhase],
    ) -> Tuple[List[bool], int]:
        if phase == MesocyclePhase.DELOAD:
            return [True] * weeks, 0
        if phase == MesocyclePhase.TRANSITION:
            return [False] * weeks, 0

        flags: List[bool] = []
        for week_index in range(weeks):
            weeks_since_deload += 1
            is_last_week = week_index == weeks - 1
            due = weeks_since_deload >= cadence and not any(flags)
            if due and is_last_week and next_phase == MesocyclePhase.DELOAD:
                # The deload block that follows covers this one
                due = False
            flags.append(due)
            if due:
                weeks_since_deload = 0
        return flags, weeks_since_deload

    def _build_mesocycle(
        self,
        phase: MesocyclePhase,
        ordinal: int,
        start: date,
        weeks: int,
        first_week_number: int,
        deload_flags: List[bool],
        goal: TrainingGoal,
        level: ExperienceLevel,
        training_frequency: int,
    ) -> Mesocycle:
        meso_id = str(uuid4())
        microcycles = []
        for i in range(weeks):
            is_deload = deload_flags[i]
            volume, intensity, rir = week_parameters(phase, i, is_deload)
            week_start = start + timedelta(weeks=i)
            microcycles.append(
                Microcycle(
                    id=str(uuid4()),
                    week_number=first_week_number + i,
                    start_date=week_start,
                    end_date=week_start + timedelta(days=DAYS_PER_WEEK),
                    volume_level=volume,
                    intensity_level=intensity,
                    fatigue_target=3 if is_deload else min(10, 5 + i),
                    is_deload=is_deload,
                    target_rir=rir,
                    training_days=training_frequency,
                    readiness_threshold=5 if is_deload else 7,
                    recovery_strategies=get_recovery_strategies(is_deload, level),
                )
            )

        includes_deload = any(deload_flags)
        volume_level, intensity_level = PHASE_LEVELS[phase]
        return Mesocycle(
            id=meso_id,
            name=f"{phase.value.title()} {ordinal}",
            phase=phase,
            start_date=start,
            end_date=start + timedelta(weeks=weeks),
            duration_weeks=weeks,
            volume_level=volume_level,
            intensity_level=intensity_level,
            includes_deload=includes_deload,
            microcycles=microcycles,
            primary_focus=PRIMARY_FOCUS[phase],
            special_techniques=get_special_techniques(phase, level),
            progression_model=get_progression_model(phase, level),
            deload_strategy=get_deload_strategy(level, goal) if includes_deload else None,
        )

    # -------------------------------------------------------------------------
    # Handoff
    # -------------------------------------------------------------------------

    def iter_microcycles(self, macrocycle: Macrocycle) -> Iterator[Tuple[Mesocycle, Microcycle]]:
        """Yield every microcycle once, in calendar order, with its mesocycle."""
        for meso in macrocycle.mesocycles:
            for microcycle in meso.microcycles:
                yield meso, microcycle

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate_macrocycle(self, macrocycle: Macrocycle) -> ValidationResult:
        """
        Check a macrocycle and everything it contains.

        Errors: empty mesocycle list, gaps, overlaps, out-of-order ranges,
        duration mismatch, disallowed phase transitions, and any nested
        mesocycle or microcycle error.
        Warnings: volume and intensity moving in the same direction between
        consecutive loading mesocycles.
        """
        result = ValidationResult()
        mesocycles = macrocycle.mesocycles

        if not mesocycles:
            result.error("Macrocycle has no mesocycles", macrocycle.name)
            return result

        expected_end = macrocycle.start_date + timedelta(weeks=macrocycle.duration_weeks)
        if macrocycle.end_date != expected_end:
            result.error(
                f"End date {macrocycle.end_date} does not match "
                f"{macrocycle.duration_weeks} weeks from {macrocycle.start_date}",
                macrocycle.name,
            )

        total_weeks = sum(m.duration_weeks for m in mesocycles)
        if total_weeks != macrocycle.duration_weeks:
            result.error(
                f"Mesocycle durations sum to {total_weeks} weeks, "
                f"expected {macrocycle.duration_weeks}",
                macrocycle.name,
            )

        if mesocycles[0].start_date != macrocycle.start_date:
            result.error("First mesocycle does not start with the macrocycle", mesocycles[0].name)
        if mesocycles[-1].end_date != macrocycle.end_date:
            result.error("Last mesocycle does not end with the macrocycle", mesocycles[-1].name)

        for previous, current in zip(mesocycles, mesocycles[1:]):
            location = f"{previous.name} -> {current.name}"
            if current.start_date < previous.start_date:
                result.error("Mesocycles are out of order", location)
            elif current.start_date < previous.end_date:
                result.error(
                    f"Overlap of {(previous.end_date - current.start_date).days} days", location
                )
            elif current.start_date > previous.end_date:
                result.error(
                    f"Gap of {(current.start_date - previous.end_date).days} days", location
                )

            if current.phase not in ALLOWED_TRANSITIONS[previous.phase]:
                result.error(
                    f"Phase {previous.phase.value} cannot be followed by {current.phase.value}",
                    location,
                )

            if previous.phase in LOADING_PHASES and current.phase in LOADING_PHASES:
                volume_delta = current.volume_level - previous.volume_level
                intensity_delta = current.intensity_level - previous.intensity_level
                if volume_delta * intensity_delta > 0:
                    result.warning(
                        "Volume and intensity should move in opposite directions "
                        f"(volume {volume_delta:+d}, intensity {intensity_delta:+d})",
                        location,
                    )

        for meso in mesocycles:
            result.extend(self.validate_mesocycle(meso))
        return result

    def validate_mesocycle(self, mesocycle: Mesocycle) -> ValidationResult:
        """Check a single mesocycle, including hand-built ones."""
        result = ValidationResult()
        name = mesocycle.name

        if mesocycle.end_date <= mesocycle.start_date:
            result.error("End date must be after start date", name)
        elif mesocycle.end_date != mesocycle.start_date + timedelta(weeks=mesocycle.duration_weeks):
            result.error(
                f"Date range does not span {mesocycle.duration_weeks} weeks", name
            )

        if len(mesocycle.microcycles) != mesocycle.duration_weeks:
            result.error(
                f"Has {len(mesocycle.microcycles)} microcycles, "
                f"expected {mesocycle.duration_weeks}",
                name,
            )

        for label, level in (
            ("Volume", mesocycle.volume_level),
            ("Intensity", mesocycle.intensity_level),
        ):
            if not 1 <= level <= 10:
                result.error(f"{label} level {level} is outside 1-10", name)
        for mc in mesocycle.microcycles:
            if not (1 <= mc.volume_level <= 10 and 1 <= mc.intensity_level <= 10):
                result.error(f"Week {mc.week_number} levels are outside 1-10", name)

        deload_weeks = sum(1 for mc in mesocycle.microcycles if mc.is_deload)
        if mesocycle.includes_deload and deload_weeks != 1:
            result.error(
                f"Declares a deload but has {deload_weeks} deload microcycles (expected exactly 1)",
                name,
            )
        elif not mesocycle.includes_deload and deload_weeks:
            result.error(
                f"Has {deload_weeks} deload microcycles but does not declare a deload", name
            )

        if mesocycle.microcycles:
            if mesocycle.microcycles[0].start_date != mesocycle.start_date:
                result.error("First microcycle does not start with the mesocycle", name)
            if mesocycle.microcycles[-1].end_date != mesocycle.end_date:
                result.error("Last microcycle does not end with the mesocycle", name)
            for previous, current in zip(mesocycle.microcycles, mesocycle.microcycles[1:]):
                if current.start_date != previous.end_date:
                    result.error(
                        f"Week {current.week_number} does not follow week {previous.week_number}",
                        name,
                    )

        for microcycle in mesocycle.microcycles:
            result.extend(self.validate_microcycle(microcycle, location=name))
        return result

    def validate_microcycle(
        self, microcycle: Microcycle, location: Optional[str] = None
    ) -> ValidationResult:
        """Check a single week: a 7-day span with at most one session per day."""
        result = ValidationResult()
        where = f"{location + ', ' if location else ''}Week {microcycle.week_number}"

        if microcycle.end_date - microcycle.start_date != timedelta(days=DAYS_PER_WEEK):
            result.error("Microcycle must span exactly 7 days", where)

        seen_days = set()
        for session in microcycle.sessions:
            if session.day_of_week in seen_days:
                result.error(f"More than one session on day {session.day_of_week}", where)
            seen_days.add(session.day_of_week)
            if session.date is not None and not (
                microcycle.start_date <= session.date < microcycle.end_date
            ):
                result.error(f"Session '{session.name}' is dated outside its week", where)
        return result

    @staticmethod
    def raise_for_errors(result: ValidationResult) -> None:
        """Raise PlanStructureError when a validation found errors."""
        if result.is_valid:
            return
        reason = "; ".join(str(issue) for issue in result.errors)
        logger.error(f"Plan structure invalid ({result.summary}): {reason}")
        raise PlanStructureError(reason, result.errors)
