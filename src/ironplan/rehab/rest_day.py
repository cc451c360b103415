"""
Rest-Day Routine

Builds a short rehab routine for non-training days from the user's active
conditions, rotating exercises so the same few are not repeated daily.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Set, Tuple

from ..models import LOWER_ZONES, UPPER_ZONES, BodyZone, HealthCondition
from .protocols import RehabExercise, RehabProtocol, find_protocol
from .rotation import RehabRotationSelector, RotationCandidate

logger = logging.getLogger(__name__)

VARIANTS = ('upper', 'lower', 'all')


@dataclass(frozen=True)
class RestDayExercise:
    name: str
    sets: int
    reps: str
    duration: str  # e.g. "1 min", "30 sec"
    intensity: str
    notes: str = ""
    is_external: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'sets': self.sets,
            'reps': self.reps,
            'duration': self.duration,
            'intensity': self.intensity,
            'notes': self.notes,
            'is_external': self.is_external,
        }


@dataclass(frozen=True)
class RestDayRoutine:
    exercises: Tuple[RestDayExercise, ...] = field(default=())
    total_minutes: int = 0
    variant: str = 'all'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'variant': self.variant,
            'total_minutes': self.total_minutes,
            'exercises': [ex.to_dict() for ex in self.exercises],
        }


def estimate_duration(exercise: RehabExercise) -> str:
    """Timed reps ("30 sec") are their own duration; counted reps take a minute."""
    if isinstance(exercise.reps, str) and 's' in exercise.reps:
        return exercise.reps
    return "1 min"


def parse_duration_minutes(duration: str) -> float:
    """
    Minutes in a duration string.

    "45 sec" -> 0.75, "2 min" -> 2, a bare number is taken as minutes.
    """
    match = re.search(r'(\d+)', duration)

    if 's' in duration and 'min' not in duration:
        return int(match.group(1)) / 60 if match else 0.5
    if 'min' in duration:
        return int(match.group(1)) if match else 2
    return int(match.group(1)) if match else 1


def _zone_in_variant(zone: BodyZone, variant: str) -> bool:
    if variant == 'upper':
        return zone in UPPER_ZONES
    if variant == 'lower':
        return zone in LOWER_ZONES
    return True


def gather_candidates(
    conditions: Iterable[HealthCondition],
    protocols: Sequence[RehabProtocol]
) -> List[RotationCandidate]:
    """
    One protocol per condition, exercises de-duplicated by name.

    Conditions without a matching protocol contribute nothing.
    """
    candidates: List[RotationCandidate] = []
    seen: Set[str] = set()

    for condition in conditions:
        protocol = find_protocol(protocols, condition.body_zone, condition.diagnosis)
        if protocol is None:
            logger.debug(f"No rehab protocol for {condition.body_zone.value}")
            continue

        for exercise in protocol.exercises:
            if exercise.name in seen:
                continue
            seen.add(exercise.name)
            candidates.append(RotationCandidate(exercise, protocol.condition_name, protocol.target_zone))

    return candidates


def generate_rest_day_routine(
    conditions: Iterable[HealthCondition],
    protocols: Sequence[RehabProtocol],
    selector: RehabRotationSelector,
    variant: str = 'all',
    accent_zones: Iterable[BodyZone] = ()
) -> RestDayRoutine:
    """
    Generate a rest-day rehab routine.

    Args:
        conditions: User health conditions (inactive ones are ignored)
        protocols: Rehab protocol library
        selector: Rotation selector holding the exercise history
        variant: 'upper', 'lower' or 'all' body zones
        accent_zones: Zones with an active pain report, given reserved slots

    Returns:
        RestDayRoutine with selected exercises and estimated total minutes

    Raises:
        ValueError: If variant is unknown
    """
    if variant not in VARIANTS:
        raise ValueError(f"Unknown rest-day variant '{variant}', expected one of {VARIANTS}")

    active = [
        c for c in conditions
        if c.is_active and _zone_in_variant(c.body_zone, variant)
    ]

    exercises: List[RestDayExercise] = []
    if active:
        candidates = gather_candidates(active, protocols)
        accent = list(accent_zones)
        if accent:
            selected = selector.select_rotated_exercises_with_accent(candidates, accent)
        else:
            selected = selector.select_rotated_exercises(candidates)

        for candidate in selected:
            ex = candidate.exercise
            exercises.append(RestDayExercise(
                name=ex.name,
                sets=ex.sets,
                reps=str(ex.reps),
                duration=estimate_duration(ex),
                intensity=ex.intensity.value,
                notes=ex.notes,
            ))

    total = sum(parse_duration_minutes(ex.duration) * ex.sets for ex in exercises)

    logger.info(f"Rest-day routine ({variant}): {len(exercises)} exercises, ~{int(total + 0.5)} min")
    return RestDayRoutine(tuple(exercises), int(total + 0.5), variant)
