"""
Application Use Cases for the periodization engine.

Use cases orchestrate the core components and coordinate repository ports:
- Dependencies are injected via constructors for testability
- Use cases return domain models, not formatted output

Usage:
    from periodization_engine.application.use_cases import (
        GenerateTrainingPlanUseCase,
        GenerateTrainingPlanResult,
        AnalyzePerformanceUseCase,
        AnalyzePerformanceResult,
    )
"""

from periodization_engine.application.use_cases.analyze_performance import (
    AnalyzePerformanceResult,
    AnalyzePerformanceUseCase,
)
from periodization_engine.application.use_cases.generate_training_plan import (
    GenerateTrainingPlanResult,
    GenerateTrainingPlanUseCase,
)

__all__ = [
    "AnalyzePerformanceResult",
    "AnalyzePerformanceUseCase",
    "GenerateTrainingPlanResult",
    "GenerateTrainingPlanUseCase",
]
