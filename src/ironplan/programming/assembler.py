"""
Structured Session Assembly

Greedy slot-by-slot exercise selection for one session template, with
preferred-name matching, shuffled fallback for variety, and rehab
substitution for slots that would stress a severely painful zone.
"""

import logging
import random
from typing import Iterable, List, Optional, Sequence, Set, TypeVar

from ..classification import PatternPools
from ..config import DEFAULT_SETTINGS, Settings
from ..models import Exercise, HealthCondition, ProgramExercise, ProgramSession
from .budget import adjust_session_to_time_budget
from .filters import severe_zones
from .intensity import prescribe
from .splits import SessionTemplate

logger = logging.getLogger(__name__)

T = TypeVar('T')


def shuffled(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Fisher-Yates shuffle over a copy; ``items`` is left untouched.

    Args:
        items: Sequence to shuffle
        rng: Random source (module-level random if None)

    Returns:
        New list with the same items in random order
    """
    rng = rng or random
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randint(0, i)
        result[i], result[j] = result[j], result[i]
    return result


def find_by_name(exercises: Sequence[Exercise], fragment: str) -> Optional[Exercise]:
    """Exact case-insensitive name match first, then substring match."""
    lower = fragment.lower()
    for exercise in exercises:
        if exercise.name.lower() == lower:
            return exercise
    for exercise in exercises:
        if lower in exercise.name.lower():
            return exercise
    return None


def pick_one(
    source: Sequence[Exercise],
    used_ids: Set[int],
    rng: Optional[random.Random] = None
) -> Optional[Exercise]:
    """Pick a random unused exercise from ``source``."""
    for exercise in shuffled(source, rng):
        if exercise.id not in used_ids:
            return exercise
    return None


def pick_preferred(
    preferred_name: Optional[str],
    source: Sequence[Exercise],
    used_ids: Set[int],
    rng: Optional[random.Random] = None
) -> Optional[Exercise]:
    """Pick the preferred exercise if present and unused, else a random one."""
    if preferred_name:
        preferred = find_by_name(source, preferred_name)
        if preferred is not None and preferred.id not in used_ids:
            return preferred
    return pick_one(source, used_ids, rng)


def build_structured_session(
    template: SessionTemplate,
    pools: PatternPools,
    conditions: Iterable[HealthCondition] = (),
    minutes_per_session: Optional[int] = None,
    settings: Settings = DEFAULT_SETTINGS,
    rng: Optional[random.Random] = None
) -> ProgramSession:
    """
    Fill a session template slot by slot.

    For each slot, if any candidate is contraindicated for a zone at severe
    pain, the whole slot becomes a rehab exercise targeting that zone, or is
    dropped if the catalog has none. Otherwise a safe candidate is picked.

    Args:
        template: Session template to fill
        pools: Movement-pattern pools of the eligible exercises
        conditions: User health conditions
        minutes_per_session: Time budget; no trimming if None
        settings: Engine constants
        rng: Random source for the shuffled fallback

    Returns:
        Assembled ProgramSession (possibly with fewer exercises than slots)
    """
    zones = severe_zones(conditions, settings.severe_pain_threshold)
    used_ids: Set[int] = set()
    exercises: List[ProgramExercise] = []

    for slot in template.slots:
        candidates = [e for e in pools.candidates(slot.sources) if e.id not in used_ids]
        picked: Optional[Exercise] = None
        rehab_substitution = False

        contraindicated = next((e for e in candidates if e.is_contraindicated_for(zones)), None)
        if contraindicated is not None:
            zone = contraindicated.first_contraindicated_zone(zones)
            picked = next((e for e in pools.rehab_for(zone) if e.id not in used_ids), None)
            if picked is None:
                logger.debug(f"{template.name}: dropping slot '{slot.label}', no rehab for {zone.value}")
                continue
            rehab_substitution = True
            logger.debug(f"{template.name}: slot '{slot.label}' replaced by rehab '{picked.name}'")
        else:
            picked = pick_preferred(slot.preferred_name, candidates, used_ids, rng)

        if picked is None:
            logger.debug(f"{template.name}: no candidate for slot '{slot.label}'")
            continue

        used_ids.add(picked.id)
        prescription = prescribe(picked, slot, template.intensity, rehab_substitution)
        exercises.append(ProgramExercise(
            exercise_id=picked.id,
            order=len(exercises) + 1,
            sets=prescription.sets,
            target_reps=prescription.reps,
            rest_seconds=prescription.rest,
            is_rehab=picked.is_rehab,
            is_time_based=prescription.is_time_based,
        ))

    if minutes_per_session:
        exercises = adjust_session_to_time_budget(exercises, minutes_per_session, settings)

    return ProgramSession(
        name=template.name,
        order=template.order,
        exercises=tuple(exercises),
        intensity=template.intensity,
    )
