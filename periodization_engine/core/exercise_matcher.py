"""
Fuzzy exercise name matching.

Resolves free-text exercise names (from workout logs or a user's strength
map) to catalog exercise ids using rapidfuzz token-set similarity.
"""

import logging
import re
from typing import Dict, Iterable, Optional, Tuple

from rapidfuzz import fuzz

from periodization_engine.core.exercise_catalog import ExerciseCatalog

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.85

# Word patterns for shorthand, expanded before fuzzy scoring
SHORT_ALIASES: Dict[str, str] = {
    "db": "dumbbell",
    "bb": "barbell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "pushups?": "push up",
    "pullups?": "pull up",
}


def normalize_name(name: str) -> str:
    """
    Normalize exercise names for better fuzzy matching.

    - lowercase
    - strip whitespace
    - expand common short aliases (db, bb, ohp)
    - replace hyphens/underscores with spaces
    - remove non-alphanumeric characters (keep spaces)
    - collapse multiple spaces
    """
    if not name:
        return ""
    s = name.lower().strip()

    s = s.replace("-", " ").replace("_", " ")

    # common short aliases → expanded forms, whole words only
    for short, long in SHORT_ALIASES.items():
        s = re.sub(rf"\b{short}\b", long, s)

    # keep alnum and spaces
    s = re.sub(r"[^a-z0-9\s]", " ", s)
    # collapse whitespace
    s = re.sub(r"\s+", " ", s).strip()
    return s


# Hard-coded aliases for common names the fuzzy score ranks poorly
ALIAS_MAP: Dict[str, str] = {
    "bench press": "barbell bench press",
    "flat bench press": "barbell bench press",
    "bench": "barbell bench press",
    "squat": "barbell back squat",
    "back squat": "barbell back squat",
    "overhead press": "barbell overhead press",
    "military press": "barbell overhead press",
    "chin up": "pull up",
    "hip thrusts": "barbell hip thrust",
    "rows": "barbell row",
}


def best_match(query: str, choices: Iterable[str]) -> Tuple[Optional[str], float]:
    """
    Return (best_choice, confidence) for an exercise name against a list of
    names.

    confidence is 0-1.
    """
    if not query:
        return None, 0.0

    normalized_query = normalize_name(query)
    if not normalized_query:
        return None, 0.0

    norm_choices = [(c, normalize_name(c)) for c in choices]

    alias_target = ALIAS_MAP.get(normalized_query)
    if alias_target:
        for original, norm in norm_choices:
            if norm == alias_target:
                return original, 1.0

    best_choice = None
    best_score = -1.0

    for original, norm in norm_choices:
        if not norm:
            continue
        if norm == normalized_query:
            return original, 1.0
        score = fuzz.token_set_ratio(normalized_query, norm)
        if score > best_score:
            best_score = score
            best_choice = original

    if best_choice is None:
        return None, 0.0

    # map 0-100 → 0-1
    return best_choice, best_score / 100.0


class ExerciseNameMatcher:
    """
    Resolve exercise names or ids to catalog exercise ids.

    Usage:
        >>> matcher = ExerciseNameMatcher(ExerciseCatalog())
        >>> matcher.resolve("DB Bench Press")
        'dumbbell_bench_press'
    """

    def __init__(
        self,
        catalog: Optional[ExerciseCatalog] = None,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
    ):
        self._catalog = catalog or ExerciseCatalog()
        self._threshold = threshold
        self._id_by_name = {e.name: e.id for e in self._catalog.exercises}

    @property
    def catalog(self) -> ExerciseCatalog:
        return self._catalog

    def resolve(self, name_or_id: str) -> Optional[str]:
        """
        Resolve a name or id to a catalog id.

        Returns:
            Catalog exercise id, or None when no name scores above the threshold
        """
        if not name_or_id:
            return None
        if self._catalog.get(name_or_id) is not None:
            return name_or_id

        match, confidence = best_match(name_or_id, self._id_by_name.keys())
        if match is None or confidence < self._threshold:
            logger.debug(f"No catalog match for '{name_or_id}' (best={match}, {confidence:.2f})")
            return None
        return self._id_by_name[match]

    def resolve_strength_map(self, strength_map: Dict[str, float]) -> Dict[str, float]:
        """
        Re-key a strength map by catalog id.

        Unresolvable names are kept under their original key. When two keys
        resolve to the same exercise, the higher estimate wins.
        """
        resolved: Dict[str, float] = {}
        for key, one_rm in strength_map.items():
            exercise_id = self.resolve(key) or key
            resolved[exercise_id] = max(one_rm, resolved.get(exercise_id, 0.0))
        return resolved
