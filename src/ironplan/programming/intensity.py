"""
Intensity Adjustment

Rewrites a slot's baseline sets/reps/rest for the picked exercise, from the
session's periodization label and the exercise category. Adjustments are
clamps against the baseline, never unconditional overwrites, except for
rehab substitutions and isometric holds which have fixed prescriptions.
"""

from dataclasses import dataclass
from typing import Optional

from ..models import Exercise, ExerciseCategory, SessionIntensity
from .splits import ExerciseSlot

# Fixed prescriptions
REHAB_PRESCRIPTION = (2, 12, 60)  # sets, reps, rest
ISOMETRIC_PRESCRIPTION = (3, 30, 60)  # sets, seconds held, rest

# Heavy compounds
HEAVY_MAX_REPS = 6
HEAVY_MIN_REST = 150
HEAVY_MIN_SETS = 4

# Volume work
VOLUME_MIN_REPS_COMPOUND = 12
VOLUME_MIN_REPS_ACCESSORY = 15
VOLUME_MAX_REST = 90


@dataclass(frozen=True)
class Prescription:
    sets: int
    reps: int
    rest: int
    is_time_based: bool = False


def prescribe(
    exercise: Exercise,
    slot: ExerciseSlot,
    intensity: Optional[SessionIntensity],
    rehab_substitution: bool = False
) -> Prescription:
    """
    Compute the final prescription for an exercise placed in a slot.

    Args:
        exercise: Picked exercise
        slot: Slot it fills (baseline sets/reps/rest)
        intensity: Session periodization label
        rehab_substitution: True if the slot was swapped for rehab

    Returns:
        Prescription with final sets, reps (or seconds) and rest
    """
    sets, reps, rest = slot.sets, slot.reps, slot.rest

    if rehab_substitution:
        sets, reps, rest = REHAB_PRESCRIPTION
    elif not exercise.is_rehab:
        if intensity == SessionIntensity.HEAVY and not exercise.is_isolation_or_core:
            reps = min(reps, HEAVY_MAX_REPS)
            rest = max(rest, HEAVY_MIN_REST)
            sets = max(sets, HEAVY_MIN_SETS)
        elif intensity == SessionIntensity.VOLUME or exercise.is_isolation_or_core:
            floor = (
                VOLUME_MIN_REPS_COMPOUND
                if exercise.category == ExerciseCategory.COMPOUND
                else VOLUME_MIN_REPS_ACCESSORY
            )
            reps = max(reps, floor)
            rest = min(rest, VOLUME_MAX_REST)

    # Holds are prescribed in seconds whatever the session
    if exercise.has_tag('isometric'):
        sets, reps, rest = ISOMETRIC_PRESCRIPTION
        return Prescription(sets, reps, rest, is_time_based=True)

    return Prescription(sets, reps, rest)
