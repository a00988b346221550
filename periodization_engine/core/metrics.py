"""
Performance Metrics for training prescription.

Pure, stateless functions estimating strength (1RM), training load and
fatigue from raw set/rep/weight inputs. Bad rep entries degrade to a zero
sentinel instead of raising, so one malformed set never halts a larger
computation.

Supported 1RM formulas:
- Brzycki (default), Epley, Lander, Lombardi, Mayhew, O'Conner, Wathan
"""

import logging
import math
from typing import Callable, Dict, Union

from periodization_engine.domain.models.enums import OneRepMaxFormula

logger = logging.getLogger(__name__)

# Brzycki's denominator reaches zero at this rep count
MAX_FORMULA_REPS = 37
# Ceiling for formulas with a pole, as a multiple of the weight lifted.
# Both curves cross it near 23 reps, so estimates never drop as reps rise.
HIGH_REP_MULTIPLIER = 2.5


# =============================================================================
# 1RM Formulas
# =============================================================================


def calculate_1rm_brzycki(weight: float, reps: int) -> float:
    """
    Calculate estimated 1RM using Brzycki formula.

    Formula: 1RM = weight * (36 / (37 - reps))

    Most accurate for rep ranges 1-10. Less reliable above 10 reps.
    Capped at HIGH_REP_MULTIPLIER x weight before the pole at 37 reps.
    """
    ceiling = weight * HIGH_REP_MULTIPLIER
    if reps >= MAX_FORMULA_REPS:
        return ceiling
    return min(weight * 36.0 / (37.0 - reps), ceiling)


def calculate_1rm_epley(weight: float, reps: int) -> float:
    """
    Calculate estimated 1RM using Epley formula.

    Formula: 1RM = weight * (1 + 0.0333 * reps)
    """
    return weight * (1.0 + 0.0333 * reps)


def calculate_1rm_lander(weight: float, reps: int) -> float:
    """
    Formula: 1RM = 100 * weight / (101.3 - 2.67123 * reps)

    The denominator reaches zero near 37.9 reps; the estimate is capped at
    HIGH_REP_MULTIPLIER x weight like Brzycki.
    """
    ceiling = weight * HIGH_REP_MULTIPLIER
    denominator = 101.3 - 2.67123 * reps
    if denominator <= 0:
        return ceiling
    return min(100.0 * weight / denominator, ceiling)


def calculate_1rm_lombardi(weight: float, reps: int) -> float:
    """Formula: 1RM = weight * reps ^ 0.10"""
    return weight * reps ** 0.10


def calculate_1rm_mayhew(weight: float, reps: int) -> float:
    """Formula: 1RM = 100 * weight / (52.2 + 41.9 * e^(-0.055 * reps))"""
    return 100.0 * weight / (52.2 + 41.9 * math.exp(-0.055 * reps))


def calculate_1rm_oconner(weight: float, reps: int) -> float:
    """Formula: 1RM = weight * (1 + 0.025 * reps)"""
    return weight * (1.0 + 0.025 * reps)


def calculate_1rm_wathan(weight: float, reps: int) -> float:
    """Formula: 1RM = 100 * weight / (48.8 + 53.8 * e^(-0.075 * reps))"""
    return 100.0 * weight / (48.8 + 53.8 * math.exp(-0.075 * reps))


FORMULAS: Dict[OneRepMaxFormula, Callable[[float, int], float]] = {
    OneRepMaxFormula.BRZYCKI: calculate_1rm_brzycki,
    OneRepMaxFormula.EPLEY: calculate_1rm_epley,
    OneRepMaxFormula.LANDER: calculate_1rm_lander,
    OneRepMaxFormula.LOMBARDI: calculate_1rm_lombardi,
    OneRepMaxFormula.MAYHEW: calculate_1rm_mayhew,
    OneRepMaxFormula.OCONNER: calculate_1rm_oconner,
    OneRepMaxFormula.WATHAN: calculate_1rm_wathan,
}


def resolve_formula(formula: Union[str, OneRepMaxFormula, None]) -> OneRepMaxFormula:
    """Map a formula name to a known formula, falling back to Brzycki."""
    if isinstance(formula, OneRepMaxFormula):
        return formula
    try:
        return OneRepMaxFormula((formula or "").strip().lower())
    except ValueError:
        logger.debug(f"Unknown 1RM formula {formula!r}, using brzycki")
        return OneRepMaxFormula.BRZYCKI


def estimate_1rm(
    weight: float,
    reps: int,
    formula: Union[str, OneRepMaxFormula, None] = OneRepMaxFormula.BRZYCKI,
) -> float:
    """
    Estimate the one-repetition maximum for a set.

    Args:
        weight: Weight lifted
        reps: Number of reps completed
        formula: Formula name; unknown names fall back to brzycki

    Returns:
        Estimated 1RM rounded to 2 decimals, the weight itself for a single
        rep, or 0.0 when weight or reps are not positive
    """
    if weight <= 0 or reps <= 0:
        return 0.0
    if reps == 1:
        return float(weight)

    result = FORMULAS[resolve_formula(formula)](float(weight), int(reps))
    return round(result, 2)


# =============================================================================
# Load and Fatigue
# =============================================================================


def volume_load(sets: float, reps: float, weight: float) -> float:
    """Total volume load: sets x reps x weight."""
    return sets * reps * weight


def calculate_fatigue(
    volume_load: float,
    intensity: float,
    frequency: float,
    recovery_capacity: float = 5,
) -> float:
    """
    Calculate a fatigue score on a 1-10 scale.

    Volume load is normalized per 1000 units, frequency per 7 sessions, and
    each component is capped at 10. The weighted sum
    (0.4 volume, 0.4 intensity, 0.2 frequency) is scaled by
    10 / recovery_capacity, so better recovery suppresses fatigue.

    Args:
        volume_load: Volume load of the period being scored
        intensity: Average intensity (RPE scale)
        frequency: Sessions per week
        recovery_capacity: Recovery capacity on a 1-10 scale

    Returns:
        Fatigue clamped to [1, 10], rounded to one decimal

    Raises:
        ValueError: If recovery_capacity is below 1
    """
    if recovery_capacity < 1:
        raise ValueError(f"recovery_capacity must be >= 1, got {recovery_capacity}")

    normalized_volume = min(volume_load / 1000.0, 10.0)
    normalized_intensity = min(intensity, 10.0)
    normalized_frequency = min(frequency / 7.0 * 10.0, 10.0)

    raw = 0.4 * normalized_volume + 0.4 * normalized_intensity + 0.2 * normalized_frequency
    adjusted = raw * (10.0 / recovery_capacity)
    return round(min(max(adjusted, 1.0), 10.0), 1)


# =============================================================================
# Prescription helpers
# =============================================================================


def weight_for_reps(
    one_rm: float,
    reps: int,
    rir: int = 0,
    increment: float = 2.5,
) -> float:
    """
    Working weight for a rep target, the inverse of the Brzycki formula.

    Reps in reserve count as extra reps, so 8 reps at 2 RIR is loaded like a
    10 rep max. The result is rounded down to the loading increment. Past the
    high-rep cap the load stays at 1RM / HIGH_REP_MULTIPLIER.
    """
    if one_rm <= 0 or reps <= 0:
        return 0.0
    effective_reps = reps + max(rir, 0)
    raw = one_rm * max((37.0 - effective_reps) / 36.0, 1.0 / HIGH_REP_MULTIPLIER)
    if increment <= 0:
        return round(raw, 2)
    return round(math.floor(raw / increment) * increment, 2)


def rpe_from_rir(rir: int) -> float:
    """RPE equivalent of a reps-in-reserve target."""
    return float(min(max(10 - rir, 1), 10))
