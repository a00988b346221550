"""
GenerateTrainingPlan Use Case.

Orchestrates plan generation end to end: load the user's profile, compute
volume landmarks, build the periodized macrocycle, and populate every
microcycle with Push/Pull/Legs sessions.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Sequence, Union

from periodization_engine.application.exceptions import (
    PeriodizationError,
    ProfileNotFoundError,
)
from periodization_engine.application.ports import TrainingProfileRepository
from periodization_engine.core.periodization_manager import PeriodizationManager
from periodization_engine.core.template_generator import TemplateGenerator
from periodization_engine.core.volume_landmarks import compute_landmarks_for_profile
from periodization_engine.domain.models import Macrocycle, SplitVariant

logger = logging.getLogger(__name__)


@dataclass
class GenerateTrainingPlanResult:
    """Result of the GenerateTrainingPlan use case execution."""

    success: bool
    macrocycle: Optional[Macrocycle] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)
    substitutions: List[str] = field(default_factory=list)


class GenerateTrainingPlanUseCase:
    """
    Use case for generating a complete periodized training plan.

    Orchestrates the following workflow:
    1. Load the training profile
    2. Compute volume landmarks from the profile
    3. Build and validate the macrocycle
    4. Hand each microcycle to the template generator once
    5. Collect substitution notices for the user

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = GenerateTrainingPlanUseCase(profile_repo=profile_repo)
        >>> result = use_case.execute(
        ...     user_id="user-123",
        ...     start_date=date(2026, 1, 5),
        ...     duration_weeks=12,
        ... )
        >>> if result.success:
        ...     print(result.macrocycle.name)
    """

    def __init__(
        self,
        profile_repo: TrainingProfileRepository,
        manager: Optional[PeriodizationManager] = None,
        generator: Optional[TemplateGenerator] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            profile_repo: Repository for training profiles
            manager: Periodization manager (default instance if omitted)
            generator: Template generator (default instance if omitted)
        """
        self._profile_repo = profile_repo
        self._manager = manager or PeriodizationManager()
        self._generator = generator or TemplateGenerator()

    def execute(
        self,
        user_id: str,
        start_date: date,
        duration_weeks: int,
        *,
        training_frequency: int = 6,
        variant: Union[str, SplitVariant] = SplitVariant.STANDARD,
        equipment: Optional[Sequence[str]] = None,
        name: Optional[str] = None,
    ) -> GenerateTrainingPlanResult:
        """
        Execute the plan generation workflow.

        Args:
            user_id: User identifier, already authenticated by the caller
            start_date: First day of the plan
            duration_weeks: Plan length in weeks
            training_frequency: Training days per week (5, 6 or 7)
            variant: Push/Pull/Legs variant
            equipment: Equipment override; the profile's equipment otherwise
            name: Optional plan name

        Returns:
            GenerateTrainingPlanResult with the populated macrocycle
        """
        try:
            profile = self._profile_repo.get_by_user_id(user_id)
            if profile is None:
                raise ProfileNotFoundError(user_id)

            landmarks = compute_landmarks_for_profile(profile)

            macrocycle = self._manager.build_for_profile(
                profile,
                start_date=start_date,
                duration_weeks=duration_weeks,
                training_frequency=training_frequency,
                name=name,
            )

            substitutions: List[str] = []
            for mesocycle, microcycle in self._manager.iter_microcycles(macrocycle):
                self._generator.populate_microcycle(
                    microcycle,
                    mesocycle.phase,
                    variant=variant,
                    level=profile.experience_level,
                    priority_muscle_groups=profile.priority_muscle_groups,
                    equipment=equipment,
                    landmarks=landmarks,
                    profile=profile,
                )
                for session in microcycle.sessions:
                    substitutions.extend(
                        f"Week {microcycle.week_number}, {session.name}: {note}"
                        for note in session.substitutions
                    )

            validation = self._manager.validate_macrocycle(macrocycle)
            self._manager.raise_for_errors(validation)

            logger.info(
                f"Generated plan {macrocycle.id} for user {user_id}: "
                f"{len(macrocycle.microcycles)} weeks, {len(substitutions)} substitutions, "
                f"{validation.summary}"
            )
            return GenerateTrainingPlanResult(
                success=True,
                macrocycle=macrocycle,
                warnings=[str(issue) for issue in validation.warnings],
                substitutions=substitutions,
            )

        except PeriodizationError as e:
            logger.warning(f"GenerateTrainingPlan failed for user {user_id}: {e.message}")
            return GenerateTrainingPlanResult(success=False, error=e.message)

        except ValueError as e:
            logger.warning(f"GenerateTrainingPlan rejected input for user {user_id}: {e}")
            return GenerateTrainingPlanResult(
                success=False,
                error=f"Unable to generate this plan: {e}",
            )
