"""
Workout History Repository Interface (Port).

This module defines the abstract interface for reading logged workouts.
Used by performance analysis.
"""
from datetime import date
from typing import List, Optional, Protocol

from periodization_engine.domain.models import WorkoutLog


class WorkoutHistoryRepository(Protocol):
    """Abstract interface for logged workout retrieval."""

    def list_by_user_id(
        self,
        user_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[WorkoutLog]:
        """
        Fetch a user's logged workouts ordered by date ascending.

        Args:
            user_id: User identifier
            start: Earliest workout date to include (inclusive)
            end: Latest workout date to include (inclusive)

        Returns:
            Workouts ordered by date, oldest first
        """
        ...
