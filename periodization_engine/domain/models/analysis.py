"""
Performance analysis report models.

A PerformanceAnalysis is created once and never edited; history is
append-only.
"""

import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from periodization_engine.domain.models.enums import (
    LandmarkStatus,
    RecoveryStatus,
    Trend,
)


class MetricValue(BaseModel):
    """A tracked metric with its change against the prior window."""

    model_config = {"frozen": True}

    value: float
    change: float = 0.0
    trend: Trend = Trend.STABLE


class LandmarkSnapshot(BaseModel):
    """Realized weekly sets for one muscle group against its landmark."""

    model_config = {"frozen": True}

    weekly_sets: float = Field(..., ge=0)
    minimum: int
    optimal: int
    maximum: int
    status: LandmarkStatus


class FatigueAnalysis(BaseModel):
    """Fatigue level, recovery status and corrective actions."""

    model_config = {"frozen": True}

    current_level: float = Field(..., ge=1, le=10)
    recovery_status: RecoveryStatus
    recommendations: List[str] = Field(..., min_length=1, max_length=3)
    readiness_score: float = Field(default=10.0, ge=0, le=10)
    deload_recommended: bool = False


class PerformanceAnalysis(BaseModel):
    """Point-in-time performance report."""

    model_config = {"frozen": True}

    id: str
    user_id: str
    date: datetime.date
    period_start: datetime.date
    period_end: datetime.date
    metrics: Dict[str, MetricValue] = Field(default_factory=dict)
    landmark_snapshot: Optional[Dict[str, LandmarkSnapshot]] = None
    fatigue: FatigueAnalysis
