"""
Fake Workout History Repository for Testing.

In-memory implementation of WorkoutHistoryRepository for fast, isolated testing.
"""
from collections import defaultdict
from datetime import date
from typing import Dict, List, Optional

from periodization_engine.domain.models import WorkoutLog


class FakeWorkoutHistoryRepository:
    """In-memory fake implementation of WorkoutHistoryRepository."""

    def __init__(self):
        """Initialize with empty storage."""
        # Map: user_id -> List[WorkoutLog]
        self._logs: Dict[str, List[WorkoutLog]] = defaultdict(list)
        self.queries: List[Dict] = []

    def reset(self) -> None:
        """Clear all stored data."""
        self._logs.clear()
        self.queries.clear()

    def seed(self, logs: List[WorkoutLog]) -> None:
        """Seed the repository with logged workouts."""
        for log in logs:
            self._logs[log.user_id].append(log)

    def list_by_user_id(
        self,
        user_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> List[WorkoutLog]:
        self.queries.append({"user_id": user_id, "start": start, "end": end})
        logs = [
            log
            for log in self._logs.get(user_id, [])
            if (start is None or log.date >= start) and (end is None or log.date <= end)
        ]
        return sorted(logs, key=lambda log: log.date)
