"""
Repository Interfaces (Ports) for the periodization engine.

This package defines abstract interfaces that decouple the engine from
storage. The engine only needs "fetch by user id, ordered by date" and
"upsert by id" semantics.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations supplied by the embedding application

Usage:
    from periodization_engine.application.ports import TrainingProfileRepository

    class PlanService:
        def __init__(self, profile_repo: TrainingProfileRepository):
            self.profile_repo = profile_repo
"""

from periodization_engine.application.ports.analysis_repository import (
    PerformanceAnalysisRepository,
)
from periodization_engine.application.ports.history_repository import (
    WorkoutHistoryRepository,
)
from periodization_engine.application.ports.profile_repository import (
    TrainingProfileRepository,
)

__all__ = [
    "PerformanceAnalysisRepository",
    "TrainingProfileRepository",
    "WorkoutHistoryRepository",
]
