"""Shared fixtures and builders for the ironplan test suite."""
import random
from pathlib import Path

import pytest

from ironplan.catalog import ExerciseCatalog
from ironplan.classification import classify_exercise
from ironplan.models import (
    BodyZone,
    Exercise,
    ExerciseCategory,
    GymEquipment,
    HealthCondition,
    ProgramInput,
)

DATA_DIR = Path(__file__).parent.parent / "data"

FULL_EQUIPMENT = (
    "barbell", "dumbbell", "bench", "squat_rack", "cable",
    "leg_press_machine", "leg_curl_machine", "leg_extension_machine",
    "chest_press_machine", "shoulder_press_machine", "pull_up_bar",
    "resistance_band", "treadmill", "rowing_machine",
)


def make_exercise(id, name, category="compound", **kwargs):
    """Classified Exercise with tuple fields given as lists or tuples."""
    for key in ("primary_muscles", "equipment_needed", "contraindications", "tags"):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])
    exercise = Exercise(id=id, name=name, category=ExerciseCategory(category), **kwargs)
    return exercise.with_patterns(classify_exercise(exercise))


def condition(zone, pain, **kwargs):
    return HealthCondition(body_zone=BodyZone(zone), pain_level=pain, **kwargs)


def equipment(*names):
    return tuple(GymEquipment(name=n) for n in names)


def program_input(days=3, minutes=60, conditions=(), equipment_names=FULL_EQUIPMENT, exclude=()):
    return ProgramInput(
        days_per_week=days,
        minutes_per_session=minutes,
        conditions=tuple(conditions),
        equipment=equipment(*equipment_names),
        exclude_exercise_ids=tuple(exclude),
    )


@pytest.fixture
def catalog():
    return ExerciseCatalog.from_yaml(DATA_DIR / "catalog.yaml")


@pytest.fixture
def protocols_path():
    return DATA_DIR / "rehab_protocols.yaml"


@pytest.fixture
def rng():
    return random.Random(42)
