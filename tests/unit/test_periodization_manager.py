"""
Unit tests for the periodization hierarchy manager.

Tests cover:
- Phase sequencing per goal and experience level
- Contiguous, exactly-filling date ranges
- Deload placement and cadence
- Structural validation of generated and hand-built plans
"""
from datetime import date, timedelta

import pytest

from periodization_engine.application.exceptions import PlanStructureError
from periodization_engine.core.periodization_manager import (
    DELOAD_CADENCE,
    PeriodizationManager,
    get_deload_strategy,
    get_special_techniques,
    week_parameters,
)
from periodization_engine.domain.models import (
    ExperienceLevel,
    MesocyclePhase,
    Session,
    TrainingGoal,
)
from tests.fakes import create_profile


START = date(2026, 1, 5)

A = MesocyclePhase.ACCUMULATION
I = MesocyclePhase.INTENSIFICATION
R = MesocyclePhase.REALIZATION
D = MesocyclePhase.DELOAD


@pytest.fixture
def manager():
    return PeriodizationManager()


def build(manager, weeks, goal=TrainingGoal.HYPERTROPHY, level=ExperienceLevel.INTERMEDIATE, **kwargs):
    return manager.build_macrocycle(
        user_id="user-123",
        start_date=START,
        duration_weeks=weeks,
        goal=goal,
        level=level,
        **kwargs,
    )


# =============================================================================
# Phase sequencing
# =============================================================================


@pytest.mark.unit
class TestPlanPhases:
    """Tests for plan_phases."""

    def test_intermediate_hypertrophy_sixteen_weeks(self, manager):
        """A full cycle then a truncated accumulation block."""
        phases = manager.plan_phases(16, TrainingGoal.HYPERTROPHY, ExperienceLevel.INTERMEDIATE)
        assert phases == [(A, 5), (I, 4), (R, 3), (D, 1), (A, 3)]

    def test_strength_goal_leads_with_shorter_accumulation(self, manager):
        """Strength swaps accumulation and intensification lengths."""
        phases = manager.plan_phases(13, TrainingGoal.STRENGTH, ExperienceLevel.INTERMEDIATE)
        assert phases == [(A, 4), (I, 5), (R, 3), (D, 1)]

    def test_short_plan_is_maintenance(self, manager):
        """Fewer than three weeks become one maintenance block."""
        phases = manager.plan_phases(2, TrainingGoal.HYPERTROPHY, ExperienceLevel.BEGINNER)
        assert phases == [(MesocyclePhase.MAINTENANCE, 2)]

    def test_short_strength_remainder_is_transition(self, manager):
        """Strength and power plans close a short remainder with transition."""
        phases = manager.plan_phases(14, TrainingGoal.POWER, ExperienceLevel.INTERMEDIATE)
        assert phases[-1] == (MesocyclePhase.TRANSITION, 1)

    @pytest.mark.parametrize("level", list(ExperienceLevel))
    @pytest.mark.parametrize("weeks", [1, 2, 3, 7, 12, 16, 26, 52])
    def test_phase_weeks_sum_to_duration(self, manager, level, weeks):
        """Phase lengths always fill the requested duration exactly."""
        for goal in TrainingGoal:
            phases = manager.plan_phases(weeks, goal, level)
            assert sum(length for _, length in phases) == weeks


# =============================================================================
# Building
# =============================================================================


@pytest.mark.unit
class TestBuildMacrocycle:
    """Tests for build_macrocycle."""

    def test_dates_fill_duration(self, manager):
        """The macrocycle spans exactly duration_weeks from its start."""
        plan = build(manager, 16)

        assert plan.start_date == START
        assert plan.end_date == START + timedelta(weeks=16)
        assert sum(m.duration_weeks for m in plan.mesocycles) == 16
        assert plan.mesocycles[0].start_date == plan.start_date
        assert plan.mesocycles[-1].end_date == plan.end_date

    def test_mesocycles_are_contiguous(self, manager):
        """Each mesocycle starts where the previous one ends."""
        plan = build(manager, 30, level=ExperienceLevel.ADVANCED)
        for previous, current in zip(plan.mesocycles, plan.mesocycles[1:]):
            assert current.start_date == previous.end_date

    def test_microcycles_are_numbered_weeks(self, manager):
        """Weeks are numbered 1..N in calendar order, seven days each."""
        plan = build(manager, 12)
        weeks = plan.microcycles

        assert [mc.week_number for mc in weeks] == list(range(1, 13))
        for i, mc in enumerate(weeks):
            assert mc.start_date == START + timedelta(weeks=i)
            assert (mc.end_date - mc.start_date).days == 7

    def test_sessions_start_empty(self, manager):
        """The manager never fills session slots."""
        plan = build(manager, 8)
        assert all(mc.sessions == [] for mc in plan.microcycles)

    def test_training_frequency_is_carried(self, manager):
        """Every week carries the requested number of training days."""
        plan = build(manager, 6, training_frequency=5)
        assert plan.training_frequency == 5
        assert {mc.training_days for mc in plan.microcycles} == {5}

    def test_mesocycle_names_count_repeats(self, manager):
        """Repeated phases are numbered in order."""
        plan = build(manager, 16)
        names = [m.name for m in plan.mesocycles]
        assert names == [
            "Accumulation 1",
            "Intensification 1",
            "Realization 1",
            "Deload 1",
            "Accumulation 2",
        ]

    def test_default_name(self, manager):
        plan = build(manager, 12, goal=TrainingGoal.GENERAL_FITNESS)
        assert plan.name == "12-Week General Fitness Plan"

    def test_build_for_profile_uses_goal_and_level(self, manager):
        """Profile goal and level drive the plan."""
        profile = create_profile(level=ExperienceLevel.ADVANCED, goal=TrainingGoal.STRENGTH)
        plan = manager.build_for_profile(profile, START, 12)

        assert plan.user_id == profile.user_id
        assert plan.primary_goal == TrainingGoal.STRENGTH
        assert plan.experience_level == ExperienceLevel.ADVANCED
        assert plan.deload_cadence_weeks == DELOAD_CADENCE[ExperienceLevel.ADVANCED]

    @pytest.mark.parametrize("weeks", [0, -4, 53])
    def test_duration_out_of_range_raises(self, manager, weeks):
        with pytest.raises(ValueError) as exc_info:
            build(manager, weeks)
        assert "Duration" in str(exc_info.value)

    @pytest.mark.parametrize("frequency", [3, 4, 8])
    def test_unsupported_frequency_raises(self, manager, frequency):
        with pytest.raises(ValueError) as exc_info:
            build(manager, 12, training_frequency=frequency)
        assert "frequency" in str(exc_info.value)

    @pytest.mark.parametrize("level", list(ExperienceLevel))
    @pytest.mark.parametrize("goal", list(TrainingGoal))
    def test_full_year_is_structurally_valid(self, manager, level, goal):
        """A 52-week plan validates without errors for every goal and level."""
        plan = build(manager, 52, goal=goal, level=level)
        assert manager.validate_macrocycle(plan).is_valid


# =============================================================================
# Deloads
# =============================================================================


@pytest.mark.unit
class TestDeloadPlacement:
    """Tests for deload weeks."""

    @pytest.mark.parametrize("level", list(ExperienceLevel))
    @pytest.mark.parametrize("weeks", [6, 12, 16, 24, 52])
    def test_declared_deload_has_exactly_one_week(self, manager, level, weeks):
        """includes_deload is true exactly when one week is a deload."""
        plan = build(manager, weeks, level=level)
        for meso in plan.mesocycles:
            deload_weeks = sum(1 for mc in meso.microcycles if mc.is_deload)
            assert deload_weeks == (1 if meso.includes_deload else 0), meso.name

    @pytest.mark.parametrize("level", list(ExperienceLevel))
    def test_cadence_is_never_exceeded(self, manager, level):
        """No run of hard weeks is longer than the level's deload cadence."""
        plan = build(manager, 52, level=level)
        cadence = DELOAD_CADENCE[level]

        run = 0
        for meso in plan.mesocycles:
            for mc in meso.microcycles:
                if mc.is_deload or meso.phase == MesocyclePhase.TRANSITION:
                    run = 0
                    continue
                run += 1
                assert run <= cadence, f"week {mc.week_number}"

    def test_deload_block_week_parameters(self, manager):
        """The closing deload block is a light, low-effort week."""
        plan = build(manager, 13)
        deload = plan.mesocycles[-1]

        assert deload.phase == D
        assert deload.includes_deload is True
        week = deload.microcycles[0]
        assert (week.volume_level, week.intensity_level, week.target_rir) == (3, 3, 4)
        assert week.readiness_threshold == 5
        assert "extra sleep" in week.recovery_strategies

    def test_no_cadence_deload_right_before_deload_block(self, manager):
        """Intermediate realization runs into the deload block unflagged."""
        plan = build(manager, 13)
        realization = plan.mesocycles[2]

        assert realization.phase == R
        assert realization.includes_deload is False

    def test_deload_strategy_only_when_deload_included(self, manager):
        plan = build(manager, 16)
        for meso in plan.mesocycles:
            if meso.includes_deload:
                assert meso.deload_strategy == "volume"
            else:
                assert meso.deload_strategy is None


# =============================================================================
# Policy helpers
# =============================================================================


@pytest.mark.unit
class TestPolicyHelpers:
    """Tests for week parameters and technique policies."""

    def test_accumulation_volume_ramps(self):
        """Accumulation raises volume week over week at fixed intensity."""
        levels = [week_parameters(A, i, False) for i in range(5)]
        assert [v for v, _, _ in levels] == sorted(v for v, _, _ in levels)
        assert {i for _, i, _ in levels} == {6}

    def test_intensification_intensity_ramps(self):
        levels = [week_parameters(I, i, False)[1] for i in range(4)]
        assert levels == sorted(levels)

    def test_levels_stay_in_range(self):
        """Levels never leave 1-10 even for long blocks."""
        for phase in MesocyclePhase:
            for i in range(12):
                volume, intensity, _ = week_parameters(phase, i, False)
                assert 1 <= volume <= 10
                assert 1 <= intensity <= 10

    def test_beginner_technique_limit(self):
        """Beginners get at most three techniques."""
        techniques = get_special_techniques(A, ExperienceLevel.BEGINNER)
        assert techniques == ["progressive overload", "proper warm-up", "controlled eccentrics"]

    def test_techniques_have_no_duplicates(self):
        techniques = get_special_techniques(I, ExperienceLevel.ELITE)
        assert len(techniques) == len(set(techniques))

    def test_strength_deload_strategy(self):
        assert get_deload_strategy(ExperienceLevel.ADVANCED, TrainingGoal.STRENGTH) == "intensity"
        assert get_deload_strategy(ExperienceLevel.BEGINNER, TrainingGoal.STRENGTH) == "volume"


# =============================================================================
# Validation
# =============================================================================


@pytest.mark.unit
class TestValidation:
    """Tests for structural validation."""

    def test_generated_plan_has_no_warnings(self, manager):
        """Generated loading sequences move volume and intensity oppositely."""
        result = manager.validate_macrocycle(build(manager, 16))
        assert result.is_valid
        assert result.warnings == []

    def test_same_direction_loading_is_a_warning(self, manager):
        """Volume and intensity rising together warns without failing."""
        plan = build(manager, 16)
        plan.mesocycles[1].volume_level = 9

        result = manager.validate_macrocycle(plan)

        assert result.is_valid
        assert len(result.warnings) == 1
        assert "opposite directions" in result.warnings[0].message

    def test_gap_between_mesocycles_is_an_error(self, manager):
        plan = build(manager, 16)
        second = plan.mesocycles[1]
        second.start_date += timedelta(days=7)

        result = manager.validate_macrocycle(plan)

        assert not result.is_valid
        assert any("Gap of 7 days" in issue.message for issue in result.errors)

    def test_overlap_between_mesocycles_is_an_error(self, manager):
        plan = build(manager, 16)
        plan.mesocycles[1].start_date -= timedelta(days=2)

        result = manager.validate_macrocycle(plan)

        assert any("Overlap of 2 days" in issue.message for issue in result.errors)

    def test_duration_mismatch_is_an_error(self, manager):
        plan = build(manager, 12)
        plan.duration_weeks = 13

        result = manager.validate_macrocycle(plan)

        assert any("sum to 12 weeks" in issue.message for issue in result.errors)

    def test_disallowed_transition_is_an_error(self, manager):
        """Realization cannot go back to accumulation without a deload."""
        plan = build(manager, 16)
        plan.mesocycles[3].phase = A

        result = manager.validate_macrocycle(plan)

        assert any("cannot be followed by" in issue.message for issue in result.errors)

    def test_empty_macrocycle_is_an_error(self, manager):
        plan = build(manager, 4)
        plan.mesocycles = []

        result = manager.validate_macrocycle(plan)

        assert [issue.message for issue in result.errors] == ["Macrocycle has no mesocycles"]

    def test_declared_deload_without_deload_week(self, manager):
        """A hand-built mesocycle claiming a deload must contain one."""
        meso = build(manager, 16).mesocycles[0].model_copy(deep=True)
        meso.includes_deload = True

        result = manager.validate_mesocycle(meso)

        assert any("expected exactly 1" in issue.message for issue in result.errors)

    def test_two_deload_weeks_is_an_error(self, manager):
        meso = build(manager, 16).mesocycles[0].model_copy(deep=True)
        meso.includes_deload = True
        meso.microcycles[0].is_deload = True
        meso.microcycles[1].is_deload = True

        result = manager.validate_mesocycle(meso)

        assert any("has 2 deload microcycles" in issue.message for issue in result.errors)

    def test_undeclared_deload_week_is_an_error(self, manager):
        meso = build(manager, 16).mesocycles[0].model_copy(deep=True)
        meso.microcycles[2].is_deload = True

        result = manager.validate_mesocycle(meso)

        assert any("does not declare a deload" in issue.message for issue in result.errors)

    def test_missing_microcycle_is_an_error(self, manager):
        meso = build(manager, 16).mesocycles[0].model_copy(deep=True)
        meso.microcycles.pop()

        result = manager.validate_mesocycle(meso)

        assert any("expected 5" in issue.message for issue in result.errors)

    def test_level_out_of_range_is_an_error(self, manager):
        """Levels assigned after construction are still checked."""
        meso = build(manager, 16).mesocycles[0].model_copy(deep=True)
        meso.volume_level = 12

        result = manager.validate_mesocycle(meso)

        assert any("Volume level 12 is outside 1-10" in issue.message for issue in result.errors)

    def test_two_sessions_on_one_day_is_an_error(self, manager):
        week = build(manager, 4).microcycles[0]
        week.sessions = [
            Session(id="a", name="Push A", day_of_week=1, split_day="push"),
            Session(id="b", name="Pull A", day_of_week=1, split_day="pull"),
        ]

        result = manager.validate_microcycle(week)

        assert any("More than one session on day 1" in issue.message for issue in result.errors)

    def test_session_dated_outside_week_is_an_error(self, manager):
        week = build(manager, 4).microcycles[0]
        week.sessions = [
            Session(
                id="a",
                name="Push A",
                day_of_week=1,
                split_day="push",
                date=week.end_date,
            )
        ]

        result = manager.validate_microcycle(week)

        assert not result.is_valid

    def test_raise_for_errors(self, manager):
        """Errors surface as PlanStructureError with the plan-level message."""
        plan = build(manager, 12)
        plan.duration_weeks = 10
        result = manager.validate_macrocycle(plan)

        with pytest.raises(PlanStructureError) as exc_info:
            manager.raise_for_errors(result)

        assert exc_info.value.message.startswith("Unable to generate this plan:")
        assert exc_info.value.issues == result.errors

    def test_raise_for_errors_passes_valid_result(self, manager):
        result = manager.validate_macrocycle(build(manager, 12))
        manager.raise_for_errors(result)

    def test_result_summary(self, manager):
        """Summary counts errors and warnings for the log line."""
        assert manager.validate_macrocycle(build(manager, 12)).summary == "Plan structure is valid"

        plan = build(manager, 12)
        plan.duration_weeks = 10
        result = manager.validate_macrocycle(plan)

        assert result.summary == f"{len(result.errors)} error(s), {len(result.warnings)} warning(s)"

    def test_raise_for_errors_logs_summary(self, manager, caplog):
        """The error log line carries the summary."""
        plan = build(manager, 12)
        plan.duration_weeks = 10
        result = manager.validate_macrocycle(plan)

        with caplog.at_level("ERROR", logger="periodization_engine.core.periodization_manager"):
            with pytest.raises(PlanStructureError):
                manager.raise_for_errors(result)

        assert result.summary in caplog.text

    def test_iter_microcycles_visits_each_week_once(self, manager):
        plan = build(manager, 16)
        pairs = list(manager.iter_microcycles(plan))

        assert [mc.week_number for _, mc in pairs] == list(range(1, 17))
        assert all(mc in meso.microcycles for meso, mc in pairs)
