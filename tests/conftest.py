"""
Shared pytest fixtures for the periodization engine tests.
"""

from datetime import date

import pytest

from periodization_engine.core.volume_landmarks import clear_landmark_cache
from periodization_engine.settings import Settings, get_settings
from tests.fakes import create_profile


# Environment variables that would change engine defaults
ENGINE_ENV_VARS = [
    "DEFAULT_ONE_RM_FORMULA",
    "WEIGHT_ROUNDING_INCREMENT",
    "MAX_EXERCISES_PER_GROUP",
    "WARMUP_MINUTES",
    "ANALYSIS_WINDOW_DAYS",
    "TREND_THRESHOLD",
    "DELOAD_FATIGUE_THRESHOLD",
    "READINESS_DELOAD_THRESHOLD",
]


@pytest.fixture
def clean_env(monkeypatch):
    """Clear engine environment variables to test true defaults."""
    for var in ENGINE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _fresh_caches(clean_env):
    """Every test starts from default settings and an empty landmark cache."""
    get_settings.cache_clear()
    clear_landmark_cache()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(clean_env) -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def profile():
    """Intermediate hypertrophy profile with recovery capacity 7.0."""
    return create_profile(
        user_id="user-123",
        strength_map={"barbell_bench_press": 120.0, "Back Squat": 150.0},
    )


@pytest.fixture
def monday() -> date:
    return date(2026, 1, 5)
