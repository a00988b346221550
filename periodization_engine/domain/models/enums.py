"""
Closed enumerations shared across the periodization engine.
"""

from enum import Enum


class ExperienceLevel(str, Enum):
    """Lifter experience levels."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    ELITE = "elite"


class TrainingGoal(str, Enum):
    """Training goals a profile can declare."""

    STRENGTH = "strength"
    HYPERTROPHY = "hypertrophy"
    POWER = "power"
    ENDURANCE = "endurance"
    GENERAL_FITNESS = "general_fitness"
    WEIGHT_LOSS = "weight_loss"


class MesocyclePhase(str, Enum):
    """Phase declared by a mesocycle block."""

    ACCUMULATION = "accumulation"  # High volume, moderate intensity
    INTENSIFICATION = "intensification"  # Moderate volume, high intensity
    REALIZATION = "realization"  # Low volume, peak intensity
    DELOAD = "deload"
    TRANSITION = "transition"
    MAINTENANCE = "maintenance"


class SplitPhase(str, Enum):
    """Phase a day split is generated for."""

    VOLUME = "volume"
    INTENSITY = "intensity"
    STRENGTH = "strength"
    DELOAD = "deload"


class SplitVariant(str, Enum):
    """Named policy bundles for Push/Pull/Legs generation."""

    STANDARD = "standard"
    NIPPARD = "nippard"
    CBUM = "cbum"
    VOLUME_FOCUS = "volume_focus"
    STRENGTH_FOCUS = "strength_focus"


class OneRepMaxFormula(str, Enum):
    """Closed-form 1RM estimation formulas."""

    BRZYCKI = "brzycki"
    EPLEY = "epley"
    LANDER = "lander"
    LOMBARDI = "lombardi"
    MAYHEW = "mayhew"
    OCONNER = "oconner"
    WATHAN = "wathan"


class MuscleGroup(str, Enum):
    """Muscle groups with their own volume landmarks."""

    CHEST = "chest"
    BACK = "back"
    SHOULDERS = "shoulders"
    QUADS = "quads"
    HAMSTRINGS = "hamstrings"
    GLUTES = "glutes"
    BICEPS = "biceps"
    TRICEPS = "triceps"
    CALVES = "calves"
    ABS = "abs"


class Trend(str, Enum):
    """Direction of a tracked metric between two windows."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class RecoveryStatus(str, Enum):
    """Recovery state derived from fatigue and recovery capacity."""

    FRESH = "fresh"
    RECOVERED = "recovered"
    FATIGUED = "fatigued"
    OVERREACHED = "overreached"


class LandmarkStatus(str, Enum):
    """Where realized weekly volume sits against a volume landmark."""

    BELOW_MEV = "below_mev"
    OPTIMAL = "optimal"
    APPROACHING_MRV = "approaching_mrv"
    ABOVE_MRV = "above_mrv"
