"""
AnalyzePerformance Use Case.

Closes the feedback loop: analyze a user's recent training against the
metrics module, append the analysis to history, and store the updated
profile.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from periodization_engine.application.exceptions import (
    PeriodizationError,
    ProfileNotFoundError,
)
from periodization_engine.application.ports import (
    PerformanceAnalysisRepository,
    TrainingProfileRepository,
    WorkoutHistoryRepository,
)
from periodization_engine.core.performance_analyzer import PerformanceAnalyzer
from periodization_engine.domain.models import PerformanceAnalysis, TrainingProfile
from periodization_engine.settings import get_settings

logger = logging.getLogger(__name__)


@dataclass
class AnalyzePerformanceResult:
    """Result of the AnalyzePerformance use case execution."""

    success: bool
    analysis: Optional[PerformanceAnalysis] = None
    profile: Optional[TrainingProfile] = None
    error: Optional[str] = None


class AnalyzePerformanceUseCase:
    """
    Use case for analyzing recent performance and updating the profile.

    Orchestrates the following workflow:
    1. Load the training profile
    2. Load history covering the current and prior windows
    3. Analyze trends and fatigue
    4. Append the analysis (never edits earlier ones)
    5. Upsert the profile with new strength estimates and fatigue level

    Usage:
        >>> use_case = AnalyzePerformanceUseCase(
        ...     profile_repo=profile_repo,
        ...     history_repo=history_repo,
        ...     analysis_repo=analysis_repo,
        ... )
        >>> result = use_case.execute(user_id="user-123", as_of=date(2026, 3, 1))
        >>> result.analysis.fatigue.recommendations
        ['Proceed with planned training']
    """

    def __init__(
        self,
        profile_repo: TrainingProfileRepository,
        history_repo: WorkoutHistoryRepository,
        analysis_repo: PerformanceAnalysisRepository,
        analyzer: Optional[PerformanceAnalyzer] = None,
    ) -> None:
        self._profile_repo = profile_repo
        self._history_repo = history_repo
        self._analysis_repo = analysis_repo
        self._analyzer = analyzer or PerformanceAnalyzer()

    def execute(
        self,
        user_id: str,
        *,
        as_of: Optional[date] = None,
        window_days: Optional[int] = None,
        planned_sessions_per_week: Optional[float] = None,
    ) -> AnalyzePerformanceResult:
        """
        Execute the analysis workflow.

        Args:
            user_id: User identifier, already authenticated by the caller
            as_of: Last day of the analysis window (defaults to today)
            window_days: Window length (defaults to settings)
            planned_sessions_per_week: Sessions the current plan calls for,
                used for adherence and readiness

        Returns:
            AnalyzePerformanceResult with the stored analysis and profile
        """
        as_of = as_of or date.today()
        window_days = window_days or get_settings().analysis_window_days

        try:
            profile = self._profile_repo.get_by_user_id(user_id)
            if profile is None:
                raise ProfileNotFoundError(user_id)

            # Current window plus the prior window of equal length
            history = self._history_repo.list_by_user_id(
                user_id,
                start=as_of - timedelta(days=2 * window_days - 1),
                end=as_of,
            )

            analysis = self._analyzer.analyze(
                user_id,
                history,
                profile,
                as_of=as_of,
                window_days=window_days,
                planned_sessions_per_week=planned_sessions_per_week,
            )
            stored = self._analysis_repo.append(analysis)

            updated_profile = self._analyzer.update_profile(profile, analysis)
            saved_profile = self._profile_repo.upsert(updated_profile)

            if analysis.fatigue.deload_recommended:
                logger.info(
                    f"Deload recommended for user {user_id} "
                    f"(fatigue {analysis.fatigue.current_level}, readiness {analysis.fatigue.readiness_score})"
                )

            return AnalyzePerformanceResult(
                success=True,
                analysis=stored,
                profile=saved_profile,
            )

        except PeriodizationError as e:
            logger.warning(f"AnalyzePerformance failed for user {user_id}: {e.message}")
            return AnalyzePerformanceResult(success=False, error=e.message)
