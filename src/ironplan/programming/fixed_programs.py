"""
Fixed Programs

Two special cases that bypass slot logic: a low-spinal-load program for
ankylosing spondylitis, and a bodyweight program for users without
equipment. Both are built by name lookup against the eligible catalog.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ..models import Exercise, HealthCondition, ProgramExercise, ProgramSession, SessionIntensity
from .assembler import find_by_name

logger = logging.getLogger(__name__)

SPONDYLITIS_PROGRAM_NAME = "Ankylosing Spondylitis Program"
BODYWEIGHT_PROGRAM_NAME = "Bodyweight Program"

# Matched against condition diagnosis and label, case-insensitive
SPONDYLITIS_KEYWORDS = (
    "spondylitis",
    "spondyloarthritis",
    "spondylarthritis",
    "spondylarthrite",
    "spondyloarthrite",
)


@dataclass(frozen=True)
class FixedExercise:
    name: str
    sets: int
    reps: int
    rest: int
    is_time_based: bool = False


# Machine-supported movements only, volume work, no heavy loading
SPONDYLITIS_SESSIONS: Tuple[Tuple[str, Tuple[FixedExercise, ...]], ...] = (
    ("AS - Push + Legs", (
        FixedExercise("Leg press", 3, 15, 90),
        FixedExercise("Barbell hip thrust", 3, 15, 90),
        FixedExercise("Machine chest press", 3, 15, 90),
        FixedExercise("Machine shoulder press", 3, 15, 90),
        FixedExercise("Lateral raise", 3, 15, 60),
        FixedExercise("Leg extension", 3, 15, 60),
        FixedExercise("Cable triceps pushdown", 3, 15, 60),
        FixedExercise("Pallof press", 3, 12, 60),
    )),
    ("AS - Pull + Legs", (
        FixedExercise("Chest-supported row", 3, 15, 90),
        FixedExercise("Lat pulldown", 3, 15, 90),
        FixedExercise("Leg curl", 3, 15, 60),
        FixedExercise("Barbell hip thrust", 3, 15, 90),
        FixedExercise("Face pull", 3, 15, 60),
        FixedExercise("Cable biceps curl", 3, 15, 60),
        FixedExercise("Dead bug", 3, 10, 60),
    )),
)

BODYWEIGHT_SESSIONS: Tuple[Tuple[str, Tuple[FixedExercise, ...]], ...] = (
    ("Bodyweight - Fundamentals", (
        FixedExercise("Bodyweight Bulgarian split squat", 3, 15, 90),
        FixedExercise("Glute bridge", 3, 15, 60),
        FixedExercise("Push-up", 3, 15, 90),
        FixedExercise("Pike push-up", 3, 15, 90),
        FixedExercise("Inverted row", 3, 15, 90),
        FixedExercise("Plank", 3, 30, 60, is_time_based=True),
        FixedExercise("Bird dog", 3, 12, 60),
    )),
    ("Bodyweight - Unilateral", (
        FixedExercise("Bodyweight lunge", 3, 15, 90),
        FixedExercise("Bodyweight sumo squat", 3, 15, 60),
        FixedExercise("Diamond push-up", 3, 15, 90),
        FixedExercise("Pike push-up", 3, 15, 90),
        FixedExercise("Inverted row", 3, 15, 90),
        FixedExercise("Side plank", 3, 30, 60, is_time_based=True),
        FixedExercise("Dead bug", 3, 12, 60),
    )),
    ("Bodyweight - Intensity", (
        FixedExercise("Bodyweight squat", 3, 20, 60),
        FixedExercise("Glute bridge", 3, 15, 60),
        FixedExercise("Feet-elevated push-up", 3, 15, 90),
        FixedExercise("Pike push-up", 3, 15, 90),
        FixedExercise("Inverted row", 3, 15, 90),
        FixedExercise("Dead bug", 3, 12, 60),
        FixedExercise("Bodyweight standing calf raise", 3, 20, 60),
    )),
)


def has_spondylitis(conditions: Iterable[HealthCondition]) -> bool:
    """True if an active condition's diagnosis or label names ankylosing spondylitis."""
    for condition in conditions:
        if not condition.is_active:
            continue
        text = f"{condition.diagnosis} {condition.label}".lower()
        if any(keyword in text for keyword in SPONDYLITIS_KEYWORDS):
            return True
    return False


def build_fixed_session(
    name: str,
    order: int,
    entries: Sequence[FixedExercise],
    available: Sequence[Exercise]
) -> ProgramSession:
    """
    Build a session by looking each entry up by name.

    Names missing from the catalog, or resolving to an exercise already in
    the session, are skipped.

    Args:
        name: Session name
        order: Session order within the program
        entries: Fixed exercise prescriptions
        available: Eligible, contraindication-filtered exercises

    Returns:
        Volume ProgramSession
    """
    exercises: List[ProgramExercise] = []
    used_ids = set()

    for entry in entries:
        exercise = find_by_name(available, entry.name)
        if exercise is None or exercise.id in used_ids:
            logger.debug(f"{name}: '{entry.name}' not in eligible catalog, skipped")
            continue
        used_ids.add(exercise.id)

        exercises.append(ProgramExercise(
            exercise_id=exercise.id,
            order=len(exercises) + 1,
            sets=entry.sets,
            target_reps=entry.reps,
            rest_seconds=entry.rest,
            is_rehab=False,
            is_time_based=entry.is_time_based,
        ))

    return ProgramSession(
        name=name,
        order=order,
        exercises=tuple(exercises),
        intensity=SessionIntensity.VOLUME,
    )


def _build(sessions, available) -> List[ProgramSession]:
    return [
        build_fixed_session(name, order, entries, available)
        for order, (name, entries) in enumerate(sessions, 1)
    ]


def build_spondylitis_program(available: Sequence[Exercise]) -> List[ProgramSession]:
    """Fixed 2-session, volume-only program with low spinal load."""
    return _build(SPONDYLITIS_SESSIONS, available)


def build_bodyweight_program(available: Sequence[Exercise]) -> List[ProgramSession]:
    """Fixed 3-session bodyweight program, volume intensity."""
    return _build(BODYWEIGHT_SESSIONS, available)
