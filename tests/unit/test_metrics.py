"""
Unit tests for performance metrics.

Tests cover:
- 1RM estimation across all supported formulas
- Zero sentinel for malformed sets
- Fatigue scoring and recovery-capacity bounds
- Prescription helpers (target weight, RPE)
"""
import pytest

from periodization_engine.core.metrics import (
    FORMULAS,
    calculate_1rm_brzycki,
    calculate_1rm_lander,
    calculate_fatigue,
    estimate_1rm,
    resolve_formula,
    rpe_from_rir,
    volume_load,
    weight_for_reps,
)
from periodization_engine.domain.models import OneRepMaxFormula


# =============================================================================
# 1RM Estimation
# =============================================================================


@pytest.mark.unit
class TestEstimate1RM:
    """Tests for estimate_1rm."""

    def test_epley_five_reps(self):
        """100 x 5 with Epley is 100 * (1 + 0.0333 * 5)."""
        assert estimate_1rm(100, 5, "epley") == 116.65

    def test_brzycki_is_default(self):
        """Brzycki is used when no formula is given."""
        assert estimate_1rm(100, 5) == round(100 * 36 / 32, 2)

    @pytest.mark.parametrize("formula", list(OneRepMaxFormula))
    def test_single_rep_returns_weight(self, formula):
        """One rep means the weight is the 1RM, whatever the formula."""
        assert estimate_1rm(142.5, 1, formula) == 142.5

    @pytest.mark.parametrize("formula", list(OneRepMaxFormula))
    def test_more_reps_never_lowers_estimate(self, formula):
        """At fixed weight the estimate does not drop as reps rise."""
        estimates = [estimate_1rm(100, reps, formula) for reps in range(1, 13)]
        assert estimates == sorted(estimates)

    @pytest.mark.parametrize("formula", list(OneRepMaxFormula))
    def test_heavier_weight_never_lowers_estimate(self, formula):
        """At fixed reps the estimate does not drop as weight rises."""
        estimates = [estimate_1rm(weight, 6, formula) for weight in range(20, 300, 10)]
        assert estimates == sorted(estimates)

    @pytest.mark.parametrize("formula", list(OneRepMaxFormula))
    def test_estimate_at_least_weight(self, formula):
        """The estimate is never below the weight lifted."""
        assert estimate_1rm(80, 6, formula) >= 80

    def test_unknown_formula_falls_back_to_brzycki(self):
        """Unknown formula names use Brzycki instead of raising."""
        assert estimate_1rm(100, 5, "not-a-formula") == estimate_1rm(100, 5, "brzycki")

    def test_formula_name_is_case_insensitive(self):
        """Formula names are matched case-insensitively."""
        assert estimate_1rm(100, 5, "EPLEY") == 116.65

    @pytest.mark.parametrize(
        "weight,reps",
        [(100, 0), (100, -3), (0, 5), (-20, 5)],
    )
    def test_non_positive_inputs_return_zero(self, weight, reps):
        """Malformed sets degrade to 0.0 rather than raising."""
        assert estimate_1rm(weight, reps) == 0.0

    def test_result_is_rounded(self):
        """Estimates are rounded to two decimals."""
        result = estimate_1rm(97.5, 7, "wathan")
        assert result == round(result, 2)


@pytest.mark.unit
class TestFormulaTable:
    """Tests for the formula registry and high-rep guards."""

    def test_every_formula_is_registered(self):
        """Each enum member has an implementation."""
        assert set(FORMULAS) == set(OneRepMaxFormula)

    def test_resolve_formula_accepts_enum(self):
        """Enum members pass through unchanged."""
        assert resolve_formula(OneRepMaxFormula.LANDER) == OneRepMaxFormula.LANDER

    def test_resolve_formula_none(self):
        """None resolves to Brzycki."""
        assert resolve_formula(None) == OneRepMaxFormula.BRZYCKI

    def test_brzycki_high_reps_guard(self):
        """Brzycki does not divide by zero at 37 reps."""
        assert calculate_1rm_brzycki(50, 37) == 125.0

    def test_lander_high_reps_guard(self):
        """Lander caps at 2.5x weight once its denominator collapses."""
        assert calculate_1rm_lander(50, 40) == 125.0

    @pytest.mark.parametrize("formula", [calculate_1rm_brzycki, calculate_1rm_lander])
    def test_high_rep_cap_never_drops(self, formula):
        """Estimates keep rising up to the cap and stay there past the pole."""
        estimates = [formula(100, reps) for reps in range(1, 61)]
        assert estimates == sorted(estimates)
        assert max(estimates) == 250.0

    @pytest.mark.parametrize("formula", [calculate_1rm_brzycki, calculate_1rm_lander])
    def test_cap_reached_before_pole(self, formula):
        """36 reps is already at the cap rather than far beyond it."""
        assert formula(100, 36) == 250.0
        assert formula(100, 20) < 250.0


# =============================================================================
# Load and Fatigue
# =============================================================================


@pytest.mark.unit
class TestVolumeLoad:
    """Tests for volume_load."""

    def test_sets_reps_weight_product(self):
        """Volume load is sets x reps x weight."""
        assert volume_load(3, 10, 100) == 3000

    def test_zero_weight(self):
        """Bodyweight sets logged at zero weight carry no load."""
        assert volume_load(4, 12, 0) == 0


@pytest.mark.unit
class TestCalculateFatigue:
    """Tests for calculate_fatigue."""

    def test_heavy_block_clamps_to_ten(self):
        """5000 load at RPE 8, 4 sessions, capacity 5 is clamped to 10."""
        assert calculate_fatigue(5000, 8, 4, 5) == 10.0

    def test_light_block_clamps_to_one(self):
        """No training at great recovery floors at 1."""
        assert calculate_fatigue(0, 0, 0, 10) == 1.0

    def test_weighted_sum_without_clamping(self):
        """0.4 * 2 + 0.4 * 6 + 0.2 * 5 = 4.2 at capacity 10."""
        assert calculate_fatigue(2000, 6, 3.5, 10) == 4.2

    def test_better_recovery_lowers_fatigue(self):
        """Higher recovery capacity never raises the score."""
        scores = [calculate_fatigue(1500, 6, 3, rc) for rc in range(1, 11)]
        assert scores == sorted(scores, reverse=True)

    def test_components_are_capped(self):
        """Volume beyond 10000 adds nothing."""
        assert calculate_fatigue(20000, 5, 2, 10) == calculate_fatigue(10000, 5, 2, 10)

    def test_recovery_capacity_below_one_raises(self):
        """Capacity 0 would divide by zero and is rejected."""
        with pytest.raises(ValueError) as exc_info:
            calculate_fatigue(1000, 7, 3, 0)
        assert "recovery_capacity" in str(exc_info.value)

    def test_default_recovery_capacity(self):
        """Default capacity is 5 (a 2x multiplier)."""
        assert calculate_fatigue(1000, 5, 0) == calculate_fatigue(1000, 5, 0, 5)


# =============================================================================
# Prescription helpers
# =============================================================================


@pytest.mark.unit
class TestWeightForReps:
    """Tests for weight_for_reps."""

    def test_rounds_down_to_increment(self):
        """100kg 1RM for 8 reps at 2 RIR loads like a 10RM: 75kg."""
        assert weight_for_reps(100, 8, rir=2, increment=2.5) == 75.0

    def test_never_exceeds_one_rm(self):
        """A single at zero RIR is at most the 1RM."""
        assert weight_for_reps(140, 1, rir=0) <= 140

    def test_high_reps_follow_the_cap(self):
        """Past the cap the load stays at 1RM / 2.5 instead of shrinking toward zero."""
        assert weight_for_reps(100, 30, increment=0) == 40.0
        assert weight_for_reps(100, 50, increment=0) == 40.0

    def test_zero_one_rm(self):
        """Unknown strength gives no weight."""
        assert weight_for_reps(0, 8) == 0.0

    def test_no_increment_keeps_raw_value(self):
        """A non-positive increment skips plate rounding."""
        assert weight_for_reps(100, 10, increment=0) == round(100 * 27 / 36, 2)


@pytest.mark.unit
class TestRpeFromRir:
    """Tests for rpe_from_rir."""

    def test_two_rir_is_rpe_eight(self):
        assert rpe_from_rir(2) == 8.0

    def test_bounds(self):
        """RPE stays within 1-10."""
        assert rpe_from_rir(-1) == 10.0
        assert rpe_from_rir(15) == 1.0
