"""
Performance Analysis Repository Interface (Port).

Analyses are append-only: they are written once and never edited.
"""
from typing import List, Optional, Protocol

from periodization_engine.domain.models import PerformanceAnalysis


class PerformanceAnalysisRepository(Protocol):
    """Abstract interface for performance analysis history."""

    def append(self, analysis: PerformanceAnalysis) -> PerformanceAnalysis:
        """
        Store a new analysis.

        Args:
            analysis: Analysis to append

        Returns:
            The stored analysis
        """
        ...

    def list_by_user_id(
        self,
        user_id: str,
        *,
        limit: Optional[int] = None,
    ) -> List[PerformanceAnalysis]:
        """
        Fetch a user's analyses ordered by date ascending.

        Args:
            user_id: User identifier
            limit: Return only the most recent N analyses

        Returns:
            Analyses ordered by date, oldest first
        """
        ...
