"""
Split Selection and Session Templates

Maps weekly frequency to a split, and each split to its ordered session
templates. Intensity alternates per session (daily undulating
periodization) rather than across weeks.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..classification import MovementPattern as MP
from ..models import SessionIntensity, SplitType


@dataclass(frozen=True)
class ExerciseSlot:
    """A role in a session template with its baseline prescription."""
    label: str
    sources: Tuple[MP, ...]  # candidate pool is the concatenation, in order
    sets: int
    reps: int
    rest: int
    preferred_name: Optional[str] = None


@dataclass(frozen=True)
class SessionTemplate:
    """Named, ordered list of slots with a fixed intensity label."""
    name: str
    order: int
    intensity: SessionIntensity
    slots: Tuple[ExerciseSlot, ...]


SPLIT_NAMES = {
    SplitType.FULL_BODY: "Full Body Program",
    SplitType.UPPER_LOWER: "Upper / Lower Program",
    SplitType.PUSH_PULL_LEGS: "Push / Pull / Legs Program",
}


def determine_split(days_per_week: int) -> SplitType:
    """
    Pick the split archetype for a weekly frequency.

    - up to 3 days: full body
    - 4 days: upper / lower
    - 5 days or more: push / pull / legs
    """
    if days_per_week <= 3:
        return SplitType.FULL_BODY
    if days_per_week == 4:
        return SplitType.UPPER_LOWER
    return SplitType.PUSH_PULL_LEGS


def _slot(label, sources, sets, reps, rest, preferred=None) -> ExerciseSlot:
    if isinstance(sources, MP):
        sources = (sources,)
    return ExerciseSlot(label, tuple(sources), sets, reps, rest, preferred)


HEAVY = SessionIntensity.HEAVY
VOLUME = SessionIntensity.VOLUME
MODERATE = SessionIntensity.MODERATE

# Shared accessory slots
LATERAL_RAISES = _slot("Lateral raise", MP.LATERAL_RAISE, 3, 15, 60, "lateral raise")
FACE_PULL = _slot("Face pull", MP.FACE_PULL, 3, 15, 60, "face pull")
LEG_CURL = _slot("Leg curl", MP.LEG_CURL, 3, 12, 60, "leg curl")
CALF = _slot("Calf", MP.CALF, 3, 15, 60)


# =============================================================================
# Full body (2-3 days)
# =============================================================================

FULL_BODY_A = (
    _slot("Quad compound", MP.QUAD_COMPOUND, 4, 8, 150, "leg press"),
    _slot("Horizontal push", MP.HORIZONTAL_PUSH, 4, 8, 150, "bench press"),
    _slot("Horizontal pull", MP.HORIZONTAL_PULL, 4, 8, 150, "barbell row"),
    LATERAL_RAISES,
    FACE_PULL,
    _slot("Core", MP.CORE, 3, 15, 60, "plank"),
)

FULL_BODY_B = (
    _slot("Hip hinge", MP.HIP_HINGE, 4, 10, 150, "romanian deadlift"),
    _slot("Vertical push", MP.VERTICAL_PUSH, 4, 10, 150, "overhead press"),
    _slot("Vertical pull", MP.VERTICAL_PULL, 4, 10, 150, "lat pulldown"),
    LATERAL_RAISES,
    FACE_PULL,
    _slot("Core", MP.CORE, 3, 15, 60, "dead bug"),
)

# Biceps replaces the face pull on day C to keep face pulls at twice a week
FULL_BODY_C = (
    _slot("Unilateral legs", MP.UNILATERAL_LEG, 4, 10, 150, "lunge"),
    _slot("Incline push", (MP.CHEST_ACCESSORY, MP.HORIZONTAL_PUSH), 4, 10, 150, "incline press"),
    _slot("Unilateral pull", (MP.UNILATERAL_PULL, MP.HORIZONTAL_PULL), 4, 10, 150, "one-arm dumbbell row"),
    LATERAL_RAISES,
    _slot("Biceps", MP.BICEPS, 3, 12, 60, "biceps curl"),
    _slot("Core", MP.CORE, 3, 15, 60, "side plank"),
)


# =============================================================================
# Upper / lower (4 days)
# =============================================================================

LOWER_1 = (
    _slot("Quad compound", MP.QUAD_COMPOUND, 4, 8, 150, "leg press"),
    _slot("Unilateral leg", MP.UNILATERAL_LEG, 4, 10, 150, "lunge"),
    _slot("Hip hinge", MP.HIP_HINGE, 4, 10, 150, "romanian deadlift"),
    LEG_CURL,
    CALF,
    _slot("Core", MP.CORE, 3, 15, 60),
)

UPPER_1 = (
    _slot("Horizontal push", MP.HORIZONTAL_PUSH, 4, 8, 150, "bench press"),
    _slot("Vertical push", MP.VERTICAL_PUSH, 4, 8, 150, "overhead press"),
    _slot("Incline or chest compound", MP.CHEST_ACCESSORY, 4, 10, 150, "incline press"),
    LATERAL_RAISES,
    FACE_PULL,
)

LOWER_2 = (
    _slot("Hip hinge", MP.HIP_HINGE, 4, 10, 150, "romanian deadlift"),
    _slot("Hip thrust", MP.HIP_THRUST, 4, 10, 150, "hip thrust"),
    _slot("Quad compound", MP.QUAD_COMPOUND, 4, 10, 150, "leg press"),
    LEG_CURL,
    CALF,
    _slot("Core", MP.CORE, 3, 15, 60),
)

UPPER_2 = (
    _slot("Horizontal pull", MP.HORIZONTAL_PULL, 4, 8, 150, "barbell row"),
    _slot("Vertical pull", MP.VERTICAL_PULL, 4, 10, 150, "lat pulldown"),
    _slot("Unilateral pull", MP.UNILATERAL_PULL, 4, 10, 150, "one-arm dumbbell row"),
    FACE_PULL,
    _slot("Biceps", MP.BICEPS, 3, 12, 60, "biceps curl"),
)


# =============================================================================
# Push / pull / legs (5+ days)
# =============================================================================

PUSH_A = (
    _slot("Horizontal push", MP.HORIZONTAL_PUSH, 4, 8, 150, "bench press"),
    _slot("Vertical push", MP.VERTICAL_PUSH, 4, 8, 150, "overhead press"),
    _slot("Incline push", (MP.CHEST_ACCESSORY, MP.HORIZONTAL_PUSH), 4, 10, 150, "incline press"),
    LATERAL_RAISES,
    FACE_PULL,
)

PUSH_B = (
    _slot("Vertical push", MP.VERTICAL_PUSH, 4, 10, 150, "overhead press"),
    _slot("Horizontal push", MP.HORIZONTAL_PUSH, 4, 10, 150, "bench press"),
    _slot("Incline or chest accessory", (MP.CHEST_ACCESSORY, MP.HORIZONTAL_PUSH), 4, 12, 150, "incline press"),
    LATERAL_RAISES,
    FACE_PULL,
)

PULL_A = (
    _slot("Horizontal pull", MP.HORIZONTAL_PULL, 4, 8, 150, "barbell row"),
    _slot("Vertical pull", MP.VERTICAL_PULL, 4, 10, 150, "lat pulldown"),
    _slot("Unilateral pull", (MP.UNILATERAL_PULL, MP.HORIZONTAL_PULL), 4, 10, 150, "one-arm dumbbell row"),
    FACE_PULL,
    _slot("Biceps", MP.BICEPS, 3, 12, 60, "biceps curl"),
)

PULL_B = (
    _slot("Vertical pull", MP.VERTICAL_PULL, 4, 10, 150, "lat pulldown"),
    _slot("Horizontal pull", MP.HORIZONTAL_PULL, 4, 10, 150, "chest-supported row"),
    _slot("Unilateral pull", (MP.UNILATERAL_PULL, MP.HORIZONTAL_PULL), 4, 10, 150, "dumbbell row"),
    FACE_PULL,
    _slot("Biceps", MP.BICEPS, 3, 12, 60, "hammer curl"),
)

LEGS_A = (
    _slot("Quad compound", MP.QUAD_COMPOUND, 4, 8, 150, "leg press"),
    _slot("Unilateral legs", MP.UNILATERAL_LEG, 4, 10, 150, "lunge"),
    _slot("Hip hinge", MP.HIP_HINGE, 4, 10, 150, "romanian deadlift"),
    LEG_CURL,
    CALF,
    _slot("Core", MP.CORE, 3, 15, 60, "plank"),
)

LEGS_B = (
    _slot("Hip hinge", MP.HIP_HINGE, 4, 10, 150, "romanian deadlift"),
    _slot("Hip thrust", MP.HIP_THRUST, 4, 10, 150, "hip thrust"),
    _slot("Quad compound", MP.QUAD_COMPOUND, 4, 10, 150, "leg press"),
    LEG_CURL,
    CALF,
    _slot("Core", MP.CORE, 3, 15, 60, "dead bug"),
)


def session_templates(split: SplitType, days_per_week: int) -> List[SessionTemplate]:
    """
    Ordered session templates for a split.

    Args:
        split: Split archetype (bodyweight has no templates)
        days_per_week: Used by full body to decide on a third day

    Returns:
        List of SessionTemplate, in training order
    """
    if split == SplitType.FULL_BODY:
        templates = [
            SessionTemplate("Full Body A - Strength", 1, HEAVY, FULL_BODY_A),
            SessionTemplate("Full Body B - Volume", 2, VOLUME, FULL_BODY_B),
        ]
        if days_per_week >= 3:
            templates.append(SessionTemplate("Full Body C - Moderate", 3, MODERATE, FULL_BODY_C))
        return templates

    if split == SplitType.UPPER_LOWER:
        return [
            SessionTemplate("Lower 1 - Strength", 1, HEAVY, LOWER_1),
            SessionTemplate("Upper 1 - Strength", 2, HEAVY, UPPER_1),
            SessionTemplate("Lower 2 - Volume", 3, VOLUME, LOWER_2),
            SessionTemplate("Upper 2 - Volume", 4, VOLUME, UPPER_2),
        ]

    if split == SplitType.PUSH_PULL_LEGS:
        return [
            SessionTemplate("Push A - Strength", 1, HEAVY, PUSH_A),
            SessionTemplate("Pull A - Strength", 2, HEAVY, PULL_A),
            SessionTemplate("Legs A - Strength", 3, HEAVY, LEGS_A),
            SessionTemplate("Push B - Volume", 4, VOLUME, PUSH_B),
            SessionTemplate("Pull B - Volume", 5, VOLUME, PULL_B),
            SessionTemplate("Legs B - Volume", 6, VOLUME, LEGS_B),
        ]

    return []
