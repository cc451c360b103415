"""
Movement Pattern Classification

Partitions the catalog into movement-pattern pools used as slot candidates.
Each exercise is classified once when the catalog is loaded; pools are then
plain set-membership queries.
"""

from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Sequence, Set

from .models import BodyZone, Exercise, ExerciseCategory, HealthCondition


class MovementPattern(Enum):
    """Movement-pattern roles a session slot can draw from."""
    QUAD_COMPOUND = "quad_compound"
    HORIZONTAL_PUSH = "horizontal_push"
    HORIZONTAL_PULL = "horizontal_pull"
    VERTICAL_PUSH = "vertical_push"
    VERTICAL_PULL = "vertical_pull"
    HIP_HINGE = "hip_hinge"
    HIP_THRUST = "hip_thrust"
    UNILATERAL_LEG = "unilateral_leg"
    UNILATERAL_PULL = "unilateral_pull"
    LATERAL_RAISE = "lateral_raise"
    FACE_PULL = "face_pull"
    CHEST_ACCESSORY = "chest_accessory"
    BICEPS = "biceps"
    LEG_CURL = "leg_curl"
    CALF = "calf"
    CORE = "core"


# Muscle groups, matched as case-insensitive substrings of primary muscles
QUADS = ("quadriceps",)
CHEST = ("chest", "pectoral")
BACK = ("lats", "latissimus", "rhomboid")
DELTOIDS = ("deltoid",)
HAMSTRINGS = ("hamstring",)
ARM_FLEXORS = ("biceps", "brachialis")
CALVES = ("calves", "calf", "gastrocnemius", "soleus")

# Name fragments
VERTICAL_PULL_NAMES = ("pulldown", "pull-up", "pullup", "chin-up")
LATERAL_RAISE_NAMES = ("lateral raise",)
FACE_PULL_NAMES = ("face pull",)
HIP_THRUST_NAMES = ("hip thrust",)
LEG_CURL_NAMES = ("leg curl",)


def targets_muscles(exercise: Exercise, muscles: Sequence[str]) -> bool:
    """
    Check whether any primary muscle contains any of the given muscle names.

    Args:
        exercise: Exercise to inspect
        muscles: Muscle name fragments (case-insensitive)

    Returns:
        True if at least one primary muscle matches
    """
    return any(
        target.lower() in muscle.lower()
        for muscle in exercise.primary_muscles
        for target in muscles
    )


def name_contains(exercise: Exercise, fragments: Sequence[str]) -> bool:
    name = exercise.name.lower()
    return any(fragment in name for fragment in fragments)


def classify_exercise(exercise: Exercise) -> FrozenSet[MovementPattern]:
    """
    Classify an exercise into the movement patterns it can fill.

    Rehab exercises never fill strength patterns; they only enter a session
    through rehab substitution.

    Args:
        exercise: Exercise to classify

    Returns:
        Frozen set of MovementPattern enums (possibly empty)
    """
    if exercise.is_rehab:
        return frozenset()

    compound = exercise.category == ExerciseCategory.COMPOUND
    isolation = exercise.category == ExerciseCategory.ISOLATION
    unilateral = exercise.has_tag("unilateral")
    lower_body = exercise.has_tag("lower_body")
    back = targets_muscles(exercise, BACK)
    vertical_pull_name = name_contains(exercise, VERTICAL_PULL_NAMES)

    patterns: Set[MovementPattern] = set()

    if compound:
        if targets_muscles(exercise, QUADS):
            patterns.add(MovementPattern.QUAD_COMPOUND)
        if targets_muscles(exercise, CHEST):
            patterns.add(MovementPattern.HORIZONTAL_PUSH)
        if back and not vertical_pull_name:
            patterns.add(MovementPattern.HORIZONTAL_PULL)
        if targets_muscles(exercise, DELTOIDS):
            patterns.add(MovementPattern.VERTICAL_PUSH)
        if vertical_pull_name:
            patterns.add(MovementPattern.VERTICAL_PULL)
        if targets_muscles(exercise, HAMSTRINGS) and lower_body:
            patterns.add(MovementPattern.HIP_HINGE)
        if unilateral and lower_body:
            patterns.add(MovementPattern.UNILATERAL_LEG)
        if unilateral and back:
            patterns.add(MovementPattern.UNILATERAL_PULL)

    if isolation:
        if targets_muscles(exercise, CHEST):
            patterns.add(MovementPattern.CHEST_ACCESSORY)
        if targets_muscles(exercise, ARM_FLEXORS):
            patterns.add(MovementPattern.BICEPS)

    if exercise.category == ExerciseCategory.CORE:
        patterns.add(MovementPattern.CORE)

    if name_contains(exercise, LATERAL_RAISE_NAMES):
        patterns.add(MovementPattern.LATERAL_RAISE)
    if name_contains(exercise, FACE_PULL_NAMES):
        patterns.add(MovementPattern.FACE_PULL)
    if name_contains(exercise, HIP_THRUST_NAMES):
        patterns.add(MovementPattern.HIP_THRUST)
    if name_contains(exercise, LEG_CURL_NAMES):
        patterns.add(MovementPattern.LEG_CURL)
    if targets_muscles(exercise, CALVES) and exercise.has_tag("calves"):
        patterns.add(MovementPattern.CALF)

    return frozenset(patterns)


def lower_back_pain(conditions: Iterable[HealthCondition]) -> int:
    """Highest active pain level on the lower back, 0 if none."""
    levels = [
        c.pain_level for c in conditions
        if c.is_active and c.body_zone == BodyZone.LOWER_BACK
    ]
    return max(levels, default=0)


class PatternPools:
    """
    Movement-pattern pools over the eligible exercises of one generation.

    Pools preserve catalog order and hold non-rehab exercises only.
    A lower-back condition at or above ``hinge_threshold`` routes the
    hip-hinge pool to hip thrusts, if the catalog has any.
    """

    def __init__(
        self,
        exercises: Sequence[Exercise],
        conditions: Iterable[HealthCondition] = (),
        hinge_threshold: int = 6
    ):
        self._pools: Dict[MovementPattern, List[Exercise]] = {p: [] for p in MovementPattern}
        self.rehab: List[Exercise] = []

        for exercise in exercises:
            if exercise.is_rehab:
                if exercise.rehab_target is not None:
                    self.rehab.append(exercise)
                continue
            # Records built outside ExerciseCatalog arrive unclassified
            patterns = exercise.patterns or classify_exercise(exercise)
            for pattern in patterns:
                self._pools[pattern].append(exercise)

        self.hinge_substituted = (
            lower_back_pain(conditions) >= hinge_threshold
            and bool(self._pools[MovementPattern.HIP_THRUST])
        )
        if self.hinge_substituted:
            self._pools[MovementPattern.HIP_HINGE] = list(self._pools[MovementPattern.HIP_THRUST])

    def pool(self, pattern: MovementPattern) -> List[Exercise]:
        """Exercises that can fill ``pattern``."""
        return list(self._pools[pattern])

    def candidates(self, patterns: Sequence[MovementPattern]) -> List[Exercise]:
        """Concatenated pools for several patterns, first occurrence kept."""
        seen: Set[int] = set()
        result = []
        for pattern in patterns:
            for exercise in self._pools[pattern]:
                if exercise.id not in seen:
                    seen.add(exercise.id)
                    result.append(exercise)
        return result

    def rehab_for(self, zone: BodyZone) -> List[Exercise]:
        """Rehab exercises whose target is ``zone``."""
        return [e for e in self.rehab if e.rehab_target == zone]
