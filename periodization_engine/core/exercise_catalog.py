"""
Exercise catalog and equipment filtering for template generation.

The catalog is a fixed, ordered list of exercises tagged with muscle group,
movement pattern and required equipment. Catalog order is the selection
order, so generation is deterministic.

Exercises that need no equipment are always available.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from periodization_engine.domain.models.enums import MuscleGroup


# Equipment mapping for different gym setups
EQUIPMENT_MAPPING: Dict[str, List[str]] = {
    "full_gym": [
        "barbell",
        "dumbbells",
        "cables",
        "machines",
        "bench",
        "rack",
        "pull_up_bar",
        "leg_press_machine",
        "leg_curl_machine",
        "resistance_bands",
    ],
    "home_basic": [
        "dumbbells",
        "bench",
        "resistance_bands",
        "pull_up_bar",
    ],
    "home_advanced": [
        "barbell",
        "dumbbells",
        "bench",
        "rack",
        "cables",
        "pull_up_bar",
    ],
    "bodyweight": [
        "bodyweight",
        "pull_up_bar",
    ],
}

# Equipment aliases for normalization
EQUIPMENT_ALIASES: Dict[str, str] = {
    "dumbbell": "dumbbells",
    "cable": "cables",
    "machine": "machines",
    "power_rack": "rack",
    "squat_rack": "rack",
    "pullup_bar": "pull_up_bar",
    "pull-up_bar": "pull_up_bar",
    "barbell_bench": "bench",
    "flat_bench": "bench",
    "incline_bench": "bench",
    "band": "resistance_bands",
    "bands": "resistance_bands",
}

DEFAULT_EQUIPMENT_PRESET = "full_gym"


@dataclass(frozen=True)
class ExerciseDefinition:
    """A catalog exercise."""

    id: str
    name: str
    muscle_group: MuscleGroup
    pattern: str
    equipment: FrozenSet[str] = field(default_factory=frozenset)
    category: str = "compound"  # compound, isolation

    @property
    def is_bodyweight(self) -> bool:
        return not self.equipment

    def is_available(self, equipment: Set[str]) -> bool:
        """Bodyweight exercises always match; others need every item."""
        return self.equipment <= equipment


def _ex(
    id: str,
    name: str,
    group: MuscleGroup,
    pattern: str,
    equipment: Iterable[str] = (),
    category: str = "compound",
) -> ExerciseDefinition:
    return ExerciseDefinition(id, name, group, pattern, frozenset(equipment), category)


_G = MuscleGroup

CATALOG: List[ExerciseDefinition] = [
    # Chest
    _ex("barbell_bench_press", "Barbell Bench Press", _G.CHEST, "horizontal_press", ["barbell", "bench", "rack"]),
    _ex("dumbbell_bench_press", "Dumbbell Bench Press", _G.CHEST, "horizontal_press", ["dumbbells", "bench"]),
    _ex("machine_chest_press", "Machine Chest Press", _G.CHEST, "horizontal_press", ["machines"]),
    _ex("push_up", "Push-Up", _G.CHEST, "horizontal_press"),
    _ex("incline_barbell_press", "Incline Barbell Press", _G.CHEST, "incline_press", ["barbell", "bench"]),
    _ex("incline_dumbbell_press", "Incline Dumbbell Press", _G.CHEST, "incline_press", ["dumbbells", "bench"]),
    _ex("cable_fly", "Cable Fly", _G.CHEST, "chest_fly", ["cables"], "isolation"),
    _ex("dumbbell_fly", "Dumbbell Fly", _G.CHEST, "chest_fly", ["dumbbells", "bench"], "isolation"),
    _ex("pec_deck", "Pec Deck", _G.CHEST, "chest_fly", ["machines"], "isolation"),
    # Back
    _ex("pull_up", "Pull-Up", _G.BACK, "vertical_pull", ["pull_up_bar"]),
    _ex("lat_pulldown", "Lat Pulldown", _G.BACK, "vertical_pull", ["cables"]),
    _ex("band_pulldown", "Band Pulldown", _G.BACK, "vertical_pull", ["resistance_bands"]),
    _ex("barbell_row", "Barbell Row", _G.BACK, "horizontal_row", ["barbell"]),
    _ex("dumbbell_row", "One-Arm Dumbbell Row", _G.BACK, "horizontal_row", ["dumbbells", "bench"]),
    _ex("seated_cable_row", "Seated Cable Row", _G.BACK, "horizontal_row", ["cables"]),
    _ex("inverted_row", "Inverted Row", _G.BACK, "horizontal_row"),
    _ex("straight_arm_pulldown", "Straight-Arm Pulldown", _G.BACK, "straight_arm_pull", ["cables"], "isolation"),
    _ex("dumbbell_pullover", "Dumbbell Pullover", _G.BACK, "straight_arm_pull", ["dumbbells", "bench"], "isolation"),
    # Shoulders
    _ex("barbell_overhead_press", "Barbell Overhead Press", _G.SHOULDERS, "overhead_press", ["barbell", "rack"]),
    _ex("dumbbell_shoulder_press", "Dumbbell Shoulder Press", _G.SHOULDERS, "overhead_press", ["dumbbells"]),
    _ex("pike_push_up", "Pike Push-Up", _G.SHOULDERS, "overhead_press"),
    _ex("dumbbell_lateral_raise", "Dumbbell Lateral Raise", _G.SHOULDERS, "lateral_raise", ["dumbbells"], "isolation"),
    _ex("cable_lateral_raise", "Cable Lateral Raise", _G.SHOULDERS, "lateral_raise", ["cables"], "isolation"),
    _ex("band_lateral_raise", "Band Lateral Raise", _G.SHOULDERS, "lateral_raise", ["resistance_bands"], "isolation"),
    _ex("reverse_pec_deck", "Reverse Pec Deck", _G.SHOULDERS, "rear_delt_fly", ["machines"], "isolation"),
    _ex("face_pull", "Face Pull", _G.SHOULDERS, "rear_delt_fly", ["cables"], "isolation"),
    _ex("rear_delt_dumbbell_fly", "Rear Delt Dumbbell Fly", _G.SHOULDERS, "rear_delt_fly", ["dumbbells"], "isolation"),
    # Quads
    _ex("barbell_back_squat", "Barbell Back Squat", _G.QUADS, "squat", ["barbell", "rack"]),
    _ex("goblet_squat", "Goblet Squat", _G.QUADS, "squat", ["dumbbells"]),
    _ex("bodyweight_squat", "Bodyweight Squat", _G.QUADS, "squat"),
    _ex("leg_press", "Leg Press", _G.QUADS, "leg_press", ["leg_press_machine"]),
    _ex("hack_squat", "Hack Squat", _G.QUADS, "leg_press", ["machines"]),
    _ex("leg_extension", "Leg Extension", _G.QUADS, "knee_extension", ["machines"], "isolation"),
    # Hamstrings
    _ex("romanian_deadlift", "Romanian Deadlift", _G.HAMSTRINGS, "hip_hinge", ["barbell"]),
    _ex("dumbbell_romanian_deadlift", "Dumbbell Romanian Deadlift", _G.HAMSTRINGS, "hip_hinge", ["dumbbells"]),
    _ex("single_leg_hip_hinge", "Single-Leg Hip Hinge", _G.HAMSTRINGS, "hip_hinge"),
    _ex("lying_leg_curl", "Lying Leg Curl", _G.HAMSTRINGS, "leg_curl", ["leg_curl_machine"], "isolation"),
    _ex("seated_leg_curl", "Seated Leg Curl", _G.HAMSTRINGS, "leg_curl", ["machines"], "isolation"),
    _ex("nordic_curl", "Nordic Curl", _G.HAMSTRINGS, "leg_curl", ["bench"], "isolation"),
    # Glutes
    _ex("barbell_hip_thrust", "Barbell Hip Thrust", _G.GLUTES, "hip_thrust", ["barbell", "bench"]),
    _ex("glute_bridge", "Glute Bridge", _G.GLUTES, "hip_thrust"),
    _ex("bulgarian_split_squat", "Bulgarian Split Squat", _G.GLUTES, "lunge", ["dumbbells", "bench"]),
    _ex("walking_lunge", "Walking Lunge", _G.GLUTES, "lunge", ["dumbbells"]),
    _ex("bodyweight_lunge", "Bodyweight Lunge", _G.GLUTES, "lunge"),
    # Biceps
    _ex("barbell_curl", "Barbell Curl", _G.BICEPS, "elbow_flexion", ["barbell"], "isolation"),
    _ex("dumbbell_curl", "Dumbbell Curl", _G.BICEPS, "elbow_flexion", ["dumbbells"], "isolation"),
    _ex("cable_curl", "Cable Curl", _G.BICEPS, "elbow_flexion", ["cables"], "isolation"),
    _ex("band_curl", "Band Curl", _G.BICEPS, "elbow_flexion", ["resistance_bands"], "isolation"),
    _ex("dumbbell_hammer_curl", "Dumbbell Hammer Curl", _G.BICEPS, "hammer_curl", ["dumbbells"], "isolation"),
    _ex("rope_hammer_curl", "Rope Hammer Curl", _G.BICEPS, "hammer_curl", ["cables"], "isolation"),
    # Triceps
    _ex("close_grip_bench_press", "Close-Grip Bench Press", _G.TRICEPS, "triceps_press", ["barbell", "bench"]),
    _ex("diamond_push_up", "Diamond Push-Up", _G.TRICEPS, "triceps_press"),
    _ex("cable_pushdown", "Cable Pushdown", _G.TRICEPS, "triceps_pushdown", ["cables"], "isolation"),
    _ex("band_pushdown", "Band Pushdown", _G.TRICEPS, "triceps_pushdown", ["resistance_bands"], "isolation"),
    _ex("overhead_dumbbell_extension", "Overhead Dumbbell Extension", _G.TRICEPS, "overhead_extension", ["dumbbells"], "isolation"),
    _ex("overhead_cable_extension", "Overhead Cable Extension", _G.TRICEPS, "overhead_extension", ["cables"], "isolation"),
    # Calves
    _ex("standing_calf_raise", "Standing Calf Raise", _G.CALVES, "calf_raise", ["machines"], "isolation"),
    _ex("seated_calf_raise", "Seated Calf Raise", _G.CALVES, "calf_raise", ["machines"], "isolation"),
    _ex("single_leg_calf_raise", "Single-Leg Calf Raise", _G.CALVES, "calf_raise", [], "isolation"),
    # Abs
    _ex("cable_crunch", "Cable Crunch", _G.ABS, "trunk_flexion", ["cables"], "isolation"),
    _ex("hanging_leg_raise", "Hanging Leg Raise", _G.ABS, "trunk_flexion", ["pull_up_bar"], "isolation"),
    _ex("crunch", "Crunch", _G.ABS, "trunk_flexion", [], "isolation"),
    _ex("plank", "Plank", _G.ABS, "anti_extension", [], "isolation"),
]

# Slot order per muscle group
MUSCLE_PATTERNS: Dict[MuscleGroup, List[str]] = {
    _G.CHEST: ["horizontal_press", "incline_press", "chest_fly"],
    _G.BACK: ["vertical_pull", "horizontal_row", "straight_arm_pull"],
    _G.SHOULDERS: ["overhead_press", "lateral_raise", "rear_delt_fly"],
    _G.QUADS: ["squat", "leg_press", "knee_extension"],
    _G.HAMSTRINGS: ["hip_hinge", "leg_curl"],
    _G.GLUTES: ["hip_thrust", "lunge"],
    _G.BICEPS: ["elbow_flexion", "hammer_curl"],
    _G.TRICEPS: ["triceps_press", "triceps_pushdown", "overhead_extension"],
    _G.CALVES: ["calf_raise"],
    _G.ABS: ["trunk_flexion", "anti_extension"],
}

# Nearest equivalent patterns, closest first
PATTERN_SUBSTITUTES: Dict[str, List[str]] = {
    "horizontal_press": ["incline_press", "triceps_press"],
    "incline_press": ["horizontal_press"],
    "chest_fly": ["horizontal_press", "incline_press"],
    "vertical_pull": ["horizontal_row"],
    "horizontal_row": ["vertical_pull"],
    "straight_arm_pull": ["vertical_pull", "horizontal_row"],
    "overhead_press": ["incline_press"],
    "lateral_raise": ["overhead_press"],
    "rear_delt_fly": ["horizontal_row"],
    "squat": ["leg_press", "lunge"],
    "leg_press": ["squat", "lunge"],
    "knee_extension": ["leg_press", "squat"],
    "hip_hinge": ["hip_thrust", "leg_curl"],
    "leg_curl": ["hip_hinge"],
    "hip_thrust": ["hip_hinge", "lunge"],
    "lunge": ["squat", "hip_thrust"],
    "elbow_flexion": ["hammer_curl", "vertical_pull"],
    "hammer_curl": ["elbow_flexion", "vertical_pull"],
    "triceps_press": ["triceps_pushdown", "horizontal_press"],
    "triceps_pushdown": ["overhead_extension", "triceps_press"],
    "overhead_extension": ["triceps_pushdown", "triceps_press"],
    "calf_raise": [],
    "trunk_flexion": ["anti_extension"],
    "anti_extension": ["trunk_flexion"],
}


def normalize_equipment(equipment: Optional[Sequence[str]]) -> Set[str]:
    """
    Normalize an equipment list, handling aliases and preset names.

    An empty or missing list means a full gym.

    Args:
        equipment: Raw equipment list (may include presets or aliases)

    Returns:
        Normalized set of equipment identifiers
    """
    items = list(equipment or []) or [DEFAULT_EQUIPMENT_PRESET]
    normalized: Set[str] = set()

    for item in items:
        item_lower = item.lower().strip().replace(" ", "_")

        # Check if it's a preset
        if item_lower in EQUIPMENT_MAPPING:
            normalized.update(EQUIPMENT_MAPPING[item_lower])
            continue

        # Check if it's an alias
        if item_lower in EQUIPMENT_ALIASES:
            normalized.add(EQUIPMENT_ALIASES[item_lower])
            continue

        # Add as-is
        normalized.add(item_lower)

    return normalized


def pattern_label(pattern: str) -> str:
    return pattern.replace("_", " ")


class ExerciseCatalog:
    """
    Read-only lookup over an ordered list of exercise definitions.

    Usage:
        >>> catalog = ExerciseCatalog()
        >>> [e.id for e in catalog.candidates("chest_fly", {"cables"})]
        ['cable_fly']
    """

    def __init__(
        self,
        exercises: Optional[List[ExerciseDefinition]] = None,
        muscle_patterns: Optional[Dict[MuscleGroup, List[str]]] = None,
        substitutes: Optional[Dict[str, List[str]]] = None,
    ):
        self._exercises = list(exercises if exercises is not None else CATALOG)
        self._by_id = {e.id: e for e in self._exercises}
        self._muscle_patterns = muscle_patterns or MUSCLE_PATTERNS
        self._substitutes = substitutes if substitutes is not None else PATTERN_SUBSTITUTES

    @property
    def exercises(self) -> List[ExerciseDefinition]:
        return list(self._exercises)

    def get(self, exercise_id: str) -> Optional[ExerciseDefinition]:
        return self._by_id.get(exercise_id)

    def patterns_for(self, muscle_group: MuscleGroup) -> List[str]:
        return list(self._muscle_patterns.get(muscle_group, []))

    def substitutes_for(self, pattern: str) -> List[str]:
        return list(self._substitutes.get(pattern, []))

    def candidates(self, pattern: str, equipment: Set[str]) -> List[ExerciseDefinition]:
        """Exercises for a pattern that the given equipment allows, in catalog order."""
        return [e for e in self._exercises if e.pattern == pattern and e.is_available(equipment)]
