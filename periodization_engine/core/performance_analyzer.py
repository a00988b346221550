"""
Performance Analysis Reporter.

Aggregates a window of logged workouts into a PerformanceAnalysis:
- per-metric value, change against the prior window of equal length, trend
- realized weekly sets per muscle group against the volume landmarks
- intensity zone shares, readiness and plan adherence
- fatigue level, recovery status, and rule-based corrective actions

Recommendations come from a fixed rule table keyed on fatigue and
recovery bands; no free text is generated.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import uuid4

from periodization_engine.core.exercise_matcher import ExerciseNameMatcher, normalize_name
from periodization_engine.core.metrics import calculate_fatigue, estimate_1rm, volume_load
from periodization_engine.core.volume_landmarks import (
    classify_weekly_volume,
    compute_landmarks_for_profile,
)
from periodization_engine.domain.models.analysis import (
    FatigueAnalysis,
    LandmarkSnapshot,
    MetricValue,
    PerformanceAnalysis,
)
from periodization_engine.domain.models.enums import (
    LandmarkStatus,
    MuscleGroup,
    RecoveryStatus,
    Trend,
)
from periodization_engine.domain.models.history import LoggedExercise, WorkoutLog
from periodization_engine.domain.models.landmark import VolumeLandmark
from periodization_engine.domain.models.profile import TrainingProfile
from periodization_engine.settings import Settings, get_settings

logger = logging.getLogger(__name__)

TOTAL_VOLUME_LOAD = "total_volume_load"
SESSION_COUNT = "session_count"
AVERAGE_RPE = "average_rpe"
WEEKLY_SETS_PREFIX = "weekly_sets:"
ESTIMATED_1RM_PREFIX = "estimated_1rm:"
INTENSITY_DISTRIBUTION_PREFIX = "intensity_distribution:"
READINESS_SCORE = "readiness_score"
ADHERENCE_RATE = "adherence_rate"

DEFAULT_RECOVERY_CAPACITY = 5.0
MAX_RECOMMENDATIONS = 3

# Readiness = 10 - fatigue + ADHERENCE_WEIGHT * adherence, within 0-10
ADHERENCE_WEIGHT = 2.0

KNOWN_MUSCLE_GROUPS = frozenset(group.value for group in MuscleGroup)

INSERT_DELOAD = "Insert deload"

# Upper bounds of the fatigue bands: low, moderate, high, very high
FATIGUE_BANDS: List[Tuple[float, str]] = [
    (4.0, "low"),
    (7.0, "moderate"),
    (8.5, "high"),
    (float("inf"), "very_high"),
]

# Inclusive upper RPE bounds of the intensity zones
INTENSITY_ZONES: List[Tuple[float, str]] = [
    (6.0, "low"),
    (8.0, "moderate"),
    (float("inf"), "high"),
]

# Upper bounds of the recovery-capacity bands: poor, fair, good
RECOVERY_BANDS: List[Tuple[float, str]] = [
    (4.0, "poor"),
    (7.0, "fair"),
    (float("inf"), "good"),
]

RECOVERY_STATUS_TABLE: Dict[Tuple[str, str], RecoveryStatus] = {
    ("low", "poor"): RecoveryStatus.RECOVERED,
    ("low", "fair"): RecoveryStatus.FRESH,
    ("low", "good"): RecoveryStatus.FRESH,
    ("moderate", "poor"): RecoveryStatus.FATIGUED,
    ("moderate", "fair"): RecoveryStatus.RECOVERED,
    ("moderate", "good"): RecoveryStatus.RECOVERED,
    ("high", "poor"): RecoveryStatus.OVERREACHED,
    ("high", "fair"): RecoveryStatus.FATIGUED,
    ("high", "good"): RecoveryStatus.FATIGUED,
    ("very_high", "poor"): RecoveryStatus.OVERREACHED,
    ("very_high", "fair"): RecoveryStatus.OVERREACHED,
    ("very_high", "good"): RecoveryStatus.OVERREACHED,
}

RECOMMENDATIONS: Dict[RecoveryStatus, List[str]] = {
    RecoveryStatus.FRESH: [
        "Proceed with planned training",
        "Consider progressing load or volume",
    ],
    RecoveryStatus.RECOVERED: [
        "Proceed with planned training",
    ],
    RecoveryStatus.FATIGUED: [
        "Reduce volume by 20% this week",
        "Prioritize sleep and nutrition",
    ],
    RecoveryStatus.OVERREACHED: [
        INSERT_DELOAD,
        "Reduce intensity until fatigue drops below 7",
    ],
}


def _band(value: float, bands: List[Tuple[float, str]], inclusive: bool = False) -> str:
    for upper, name in bands:
        if value < upper or (inclusive and value == upper):
            return name
    return bands[-1][1]


def classify_recovery_status(fatigue: float, recovery_capacity: float) -> RecoveryStatus:
    """Look up recovery status for a fatigue level and recovery capacity."""
    return RECOVERY_STATUS_TABLE[(_band(fatigue, FATIGUE_BANDS), _band(recovery_capacity, RECOVERY_BANDS))]


def classify_trend(current: float, prior: float, threshold: float) -> Trend:
    """
    Trend of a metric between two windows.

    The threshold is relative to the prior value. With no prior value any
    non-zero change counts.
    """
    change = current - prior
    margin = threshold * abs(prior)
    if change > margin:
        return Trend.INCREASING
    if change < -margin:
        return Trend.DECREASING
    return Trend.STABLE


def adherence_rate(sessions: int, window_days: int, planned_sessions_per_week: Optional[float]) -> float:
    """Logged sessions over planned sessions; 1.0 when nothing was planned."""
    if not planned_sessions_per_week:
        return 1.0
    return sessions / (planned_sessions_per_week * window_days / 7.0)


def readiness_score(fatigue: float, adherence: float) -> float:
    """
    Readiness to train on a 0-10 scale.

    Fatigue lowers readiness point for point; adherence up to the plan adds
    up to two points back.
    """
    raw = 10.0 - fatigue + ADHERENCE_WEIGHT * min(max(adherence, 0.0), 1.0)
    return round(min(max(raw, 0.0), 10.0), 1)


class PerformanceAnalyzer:
    """
    Builds PerformanceAnalysis reports and feeds results back into profiles.

    Usage:
        >>> analyzer = PerformanceAnalyzer()
        >>> analysis = analyzer.analyze("user-123", history, profile, as_of=date.today())
        >>> analysis.fatigue.deload_recommended
        False
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        matcher: Optional[ExerciseNameMatcher] = None,
    ):
        self._settings = settings or get_settings()
        self._matcher = matcher or ExerciseNameMatcher()

    def analyze(
        self,
        user_id: str,
        history: Sequence[WorkoutLog],
        profile: Optional[TrainingProfile] = None,
        as_of: Optional[date] = None,
        window_days: Optional[int] = None,
        landmarks: Optional[Dict[str, VolumeLandmark]] = None,
        planned_sessions_per_week: Optional[float] = None,
    ) -> PerformanceAnalysis:
        """
        Analyze the window of days ending on as_of (inclusive).

        Args:
            user_id: Owner of the history
            history: Logged workouts (any order, any range)
            profile: Profile snapshot supplying recovery capacity and landmarks
            as_of: Last day of the current window (defaults to today)
            window_days: Window length (defaults to settings)
            landmarks: Landmarks for the snapshot; computed from the profile
                when omitted
            planned_sessions_per_week: Sessions the plan called for; enables
                the adherence metric. Without it adherence counts as full.

        Returns:
            A new, frozen PerformanceAnalysis
        """
        as_of = as_of or date.today()
        window_days = window_days or self._settings.analysis_window_days
        period_start = as_of - timedelta(days=window_days - 1)
        prior_start = period_start - timedelta(days=window_days)

        current_logs = [log for log in history if period_start <= log.date <= as_of]
        prior_logs = [log for log in history if prior_start <= log.date < period_start]

        current = self._window_metrics(current_logs, window_days)
        prior = self._window_metrics(prior_logs, window_days)

        recovery_capacity = (
            profile.recovery_profile.recovery_capacity if profile else DEFAULT_RECOVERY_CAPACITY
        )
        levels = {}
        for name, logs, window in (("current", current_logs, current), ("prior", prior_logs, prior)):
            levels[name] = self._fatigue_level(len(logs), window, window_days, recovery_capacity)
            adherence = adherence_rate(len(logs), window_days, planned_sessions_per_week)
            window[READINESS_SCORE] = readiness_score(levels[name], adherence)
            if planned_sessions_per_week:
                window[ADHERENCE_RATE] = adherence

        metrics: Dict[str, MetricValue] = {}
        for name in sorted(set(current) | set(prior)):
            value = current.get(name, 0.0)
            previous = prior.get(name, 0.0)
            metrics[name] = MetricValue(
                value=round(value, 2),
                change=round(value - previous, 2),
                trend=classify_trend(value, previous, self._settings.trend_threshold),
            )

        if landmarks is None and profile is not None:
            landmarks = compute_landmarks_for_profile(profile)
        snapshot = self._landmark_snapshot(current, landmarks) if landmarks else None

        fatigue = self._fatigue_analysis(
            levels["current"], current[READINESS_SCORE], recovery_capacity, snapshot
        )

        analysis = PerformanceAnalysis(
            id=str(uuid4()),
            user_id=user_id,
            date=as_of,
            period_start=period_start,
            period_end=as_of,
            metrics=metrics,
            landmark_snapshot=snapshot,
            fatigue=fatigue,
        )
        logger.info(
            f"Analyzed {len(current_logs)} sessions for user {user_id}: "
            f"fatigue={fatigue.current_level}, readiness={fatigue.readiness_score}, "
            f"status={fatigue.recovery_status.value}, deload={fatigue.deload_recommended}"
        )
        return analysis

    def update_profile(self, profile: TrainingProfile, analysis: PerformanceAnalysis) -> TrainingProfile:
        """
        Return a new profile reflecting an analysis.

        Strength estimates only move up; a lighter block does not erase a
        previous best. Fatigue level is replaced by the analysis level.
        """
        strength_map = dict(profile.strength_map)
        for name, metric in analysis.metrics.items():
            if not name.startswith(ESTIMATED_1RM_PREFIX) or metric.value <= 0:
                continue
            exercise_id = name[len(ESTIMATED_1RM_PREFIX):]
            if metric.value > strength_map.get(exercise_id, 0.0):
                strength_map[exercise_id] = metric.value

        return profile.model_copy(
            update={
                "strength_map": strength_map,
                "fatigue_level": analysis.fatigue.current_level,
            }
        )

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------

    def _exercise_key(self, exercise: LoggedExercise) -> str:
        if exercise.exercise_id:
            return exercise.exercise_id
        return self._matcher.resolve(exercise.exercise_name) or normalize_name(
            exercise.exercise_name
        ).replace(" ", "_")

    def _muscle_group(self, exercise: LoggedExercise, exercise_key: str) -> Optional[str]:
        if exercise.muscle_group in KNOWN_MUSCLE_GROUPS:
            return exercise.muscle_group
        definition = self._matcher.catalog.get(exercise_key)
        if definition:
            return definition.muscle_group.value
        # Groups without landmarks are still counted under their own name
        return exercise.muscle_group

    def _window_metrics(self, logs: Sequence[WorkoutLog], window_days: int) -> Dict[str, float]:
        if not logs:
            return {}

        weeks = window_days / 7.0
        total_load = 0.0
        rpe_values: List[float] = []
        zone_sets: Dict[str, int] = {zone: 0 for _, zone in INTENSITY_ZONES}
        group_sets: Dict[str, int] = defaultdict(int)
        best_1rm: Dict[str, float] = {}

        for log in logs:
            for exercise in log.exercises:
                key = self._exercise_key(exercise)
                group = self._muscle_group(exercise, key)
                for logged in exercise.sets:
                    total_load += volume_load(1, logged.reps, logged.weight)
                    if logged.effective_rpe is not None:
                        rpe_values.append(logged.effective_rpe)
                        zone_sets[_band(logged.effective_rpe, INTENSITY_ZONES, inclusive=True)] += 1
                    if group:
                        group_sets[group] += 1
                    estimate = estimate_1rm(
                        logged.weight, logged.reps, self._settings.default_one_rm_formula
                    )
                    if estimate > best_1rm.get(key, 0.0):
                        best_1rm[key] = estimate

        metrics: Dict[str, float] = {
            TOTAL_VOLUME_LOAD: total_load,
            SESSION_COUNT: float(len(logs)),
            AVERAGE_RPE: sum(rpe_values) / len(rpe_values) if rpe_values else 0.0,
        }
        # Share of rated sets per zone, in percent; unrated sets are left out
        for zone, sets in zone_sets.items():
            share = 100.0 * sets / len(rpe_values) if rpe_values else 0.0
            metrics[f"{INTENSITY_DISTRIBUTION_PREFIX}{zone}"] = share
        for group, sets in group_sets.items():
            metrics[f"{WEEKLY_SETS_PREFIX}{group}"] = sets / weeks
        for key, value in best_1rm.items():
            metrics[f"{ESTIMATED_1RM_PREFIX}{key}"] = value
        return metrics

    def _landmark_snapshot(
        self,
        current: Dict[str, float],
        landmarks: Dict[str, VolumeLandmark],
    ) -> Dict[str, LandmarkSnapshot]:
        snapshot = {}
        for group, landmark in landmarks.items():
            weekly_sets = round(current.get(f"{WEEKLY_SETS_PREFIX}{group}", 0.0), 2)
            snapshot[group] = LandmarkSnapshot(
                weekly_sets=weekly_sets,
                minimum=landmark.weekly_sets.minimum,
                optimal=landmark.weekly_sets.optimal,
                maximum=landmark.weekly_sets.maximum,
                status=classify_weekly_volume(weekly_sets, landmark),
            )
        return snapshot

    # -------------------------------------------------------------------------
    # Fatigue
    # -------------------------------------------------------------------------

    @staticmethod
    def _fatigue_level(
        sessions: int,
        window: Dict[str, float],
        window_days: int,
        recovery_capacity: float,
    ) -> float:
        average_session_load = window.get(TOTAL_VOLUME_LOAD, 0.0) / sessions if sessions else 0.0
        return calculate_fatigue(
            average_session_load,
            window.get(AVERAGE_RPE, 0.0),
            sessions / (window_days / 7.0),
            recovery_capacity,
        )

    def _fatigue_analysis(
        self,
        level: float,
        readiness: float,
        recovery_capacity: float,
        snapshot: Optional[Dict[str, LandmarkSnapshot]],
    ) -> FatigueAnalysis:
        status = classify_recovery_status(level, recovery_capacity)
        overloaded = self._most_overloaded_group(snapshot)
        deload = (
            status == RecoveryStatus.OVERREACHED
            or level >= self._settings.deload_fatigue_threshold
            or readiness < self._settings.readiness_deload_threshold
            or overloaded is not None
        )

        recommendations = list(RECOMMENDATIONS[status])
        if deload:
            if status in (RecoveryStatus.FRESH, RecoveryStatus.RECOVERED):
                # "Proceed" contradicts a deload
                recommendations = []
            if INSERT_DELOAD not in recommendations:
                recommendations.insert(0, INSERT_DELOAD)

        if overloaded:
            recommendations.insert(1, f"Reduce frequency for {overloaded}")

        return FatigueAnalysis(
            current_level=level,
            recovery_status=status,
            recommendations=recommendations[:MAX_RECOMMENDATIONS],
            readiness_score=readiness,
            deload_recommended=deload,
        )

    @staticmethod
    def _most_overloaded_group(snapshot: Optional[Dict[str, LandmarkSnapshot]]) -> Optional[str]:
        if not snapshot:
            return None
        above = [
            (entry.weekly_sets - entry.maximum, group)
            for group, entry in snapshot.items()
            if entry.status == LandmarkStatus.ABOVE_MRV
        ]
        if not above:
            return None
        # Largest excess first, ties by name
        above.sort(key=lambda item: (-item[0], item[1]))
        return above[0][1]
