"""
Fake Performance Analysis Repository for Testing.

In-memory, append-only implementation of PerformanceAnalysisRepository.
"""
from collections import defaultdict
from typing import Dict, List, Optional

from periodization_engine.domain.models import PerformanceAnalysis


class FakePerformanceAnalysisRepository:
    """In-memory fake implementation of PerformanceAnalysisRepository."""

    def __init__(self):
        """Initialize with empty storage."""
        self._analyses: Dict[str, List[PerformanceAnalysis]] = defaultdict(list)

    def reset(self) -> None:
        """Clear all stored data."""
        self._analyses.clear()

    def append(self, analysis: PerformanceAnalysis) -> PerformanceAnalysis:
        self._analyses[analysis.user_id].append(analysis)
        return analysis

    def list_by_user_id(
        self,
        user_id: str,
        *,
        limit: Optional[int] = None,
    ) -> List[PerformanceAnalysis]:
        analyses = sorted(self._analyses.get(user_id, []), key=lambda a: a.date)
        if limit is not None:
            analyses = analyses[-limit:]
        return analyses
