"""
Exercise Filter Pipeline

Reduces the catalog to exercises usable for this user: equipment available,
not excluded for variety, not cardio, not severely contraindicated.
"""

import logging
from typing import Iterable, List, Sequence, Set

from ..config import DEFAULT_SETTINGS, Settings
from ..models import BodyZone, Exercise, GymEquipment, HealthCondition, ProgramInput

logger = logging.getLogger(__name__)


def filter_by_equipment(
    exercises: Iterable[Exercise],
    equipment: Iterable[GymEquipment]
) -> List[Exercise]:
    """
    Keep exercises whose required equipment is all available.

    Bodyweight exercises (no equipment needed) always pass. Adding equipment
    never removes an exercise.

    Args:
        exercises: Candidate exercises
        equipment: User equipment; only available items count

    Returns:
        Exercises that can be performed with the available equipment
    """
    available = {e.name for e in equipment if e.is_available}

    return [
        exercise for exercise in exercises
        if all(tag in available for tag in exercise.equipment_needed)
    ]


def severe_zones(
    conditions: Iterable[HealthCondition],
    threshold: int = DEFAULT_SETTINGS.severe_pain_threshold
) -> Set[BodyZone]:
    """Zones of active conditions at or above the severe pain threshold."""
    return {c.body_zone for c in conditions if c.is_active and c.pain_level >= threshold}


def filter_by_contraindications(
    exercises: Iterable[Exercise],
    conditions: Iterable[HealthCondition],
    threshold: int = DEFAULT_SETTINGS.severe_pain_threshold
) -> List[Exercise]:
    """
    Drop exercises contraindicated for a severely painful zone.

    Pain below the threshold never excludes anything.
    """
    zones = severe_zones(conditions, threshold)
    if not zones:
        return list(exercises)

    return [e for e in exercises if not e.is_contraindicated_for(zones)]


def drop_cardio(exercises: Iterable[Exercise]) -> List[Exercise]:
    """Remove cardio machines and drills from the strength pool."""
    return [e for e in exercises if not e.has_tag('cardio')]


def apply_exclusions(
    exercises: Sequence[Exercise],
    exclude_ids: Iterable[int],
    min_remaining: int = DEFAULT_SETTINGS.min_pool_after_exclusion
) -> List[Exercise]:
    """
    Drop previously used exercise ids to get fresh variation.

    If that would leave fewer than ``min_remaining`` non-rehab strength
    exercises, the exclusion is ignored entirely.

    Args:
        exercises: Equipment-filtered exercises
        exclude_ids: Ids to avoid
        min_remaining: Non-rehab floor below which exclusion is skipped

    Returns:
        Filtered exercises, or all of ``exercises`` if the floor is hit
    """
    excluded = set(exclude_ids)
    if not excluded:
        return list(exercises)

    remaining = [e for e in exercises if e.id not in excluded]
    strength_left = sum(1 for e in remaining if not e.is_rehab and not e.has_tag('cardio'))

    if strength_left < min_remaining:
        logger.info(
            f"Ignoring exclusion of {len(excluded)} exercises: "
            f"only {strength_left} strength exercises would remain"
        )
        return list(exercises)

    return remaining


def eligible_exercises(
    exercises: Iterable[Exercise],
    program_input: ProgramInput,
    settings: Settings = DEFAULT_SETTINGS
) -> List[Exercise]:
    """
    Run the filter pipeline in its fixed order: equipment, exclusion, cardio.

    Contraindications are handled later, per slot, so that a contraindicated
    slot can be swapped for rehab rather than silently refilled.
    """
    after_equipment = filter_by_equipment(exercises, program_input.equipment)
    after_exclusion = apply_exclusions(
        after_equipment,
        program_input.exclude_exercise_ids,
        settings.min_pool_after_exclusion
    )
    eligible = drop_cardio(after_exclusion)

    logger.debug(
        f"Filter pipeline: {len(after_equipment)} after equipment, "
        f"{len(after_exclusion)} after exclusion, {len(eligible)} eligible"
    )
    return eligible
