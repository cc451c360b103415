"""Tests for session intensity adjustment."""
from ironplan.classification import MovementPattern as MP
from ironplan.models import SessionIntensity
from ironplan.programming.intensity import prescribe
from ironplan.programming.splits import ExerciseSlot

from conftest import make_exercise

HEAVY = SessionIntensity.HEAVY
VOLUME = SessionIntensity.VOLUME
MODERATE = SessionIntensity.MODERATE

SQUAT = make_exercise(1, "Back squat", primary_muscles=["quadriceps"])
CURL = make_exercise(2, "Biceps curl", "isolation", primary_muscles=["biceps"])
PLANK = make_exercise(3, "Plank", "core", tags=["isometric"])
MCKENZIE = make_exercise(4, "McKenzie press-up", "core", is_rehab=True)


def slot(sets, reps, rest):
    return ExerciseSlot("Test", (MP.QUAD_COMPOUND,), sets, reps, rest)


class TestHeavy:

    def test_compound_clamped(self):
        p = prescribe(SQUAT, slot(3, 10, 120), HEAVY)
        assert (p.sets, p.reps, p.rest) == (4, 6, 150)

    def test_clamps_do_not_overwrite(self):
        p = prescribe(SQUAT, slot(5, 5, 180), HEAVY)
        assert (p.sets, p.reps, p.rest) == (5, 5, 180)

    def test_isolation_treated_as_volume(self):
        p = prescribe(CURL, slot(3, 12, 120), HEAVY)
        assert (p.sets, p.reps, p.rest) == (3, 15, 90)


class TestVolume:

    def test_compound_floor_twelve(self):
        p = prescribe(SQUAT, slot(4, 10, 150), VOLUME)
        assert (p.sets, p.reps, p.rest) == (4, 12, 90)

    def test_high_reps_kept(self):
        p = prescribe(SQUAT, slot(4, 20, 60), VOLUME)
        assert (p.reps, p.rest) == (20, 60)

    def test_isolation_floor_fifteen(self):
        p = prescribe(CURL, slot(3, 12, 60), VOLUME)
        assert (p.reps, p.rest) == (15, 60)


class TestModerateAndSpecial:

    def test_moderate_compound_unchanged(self):
        p = prescribe(SQUAT, slot(4, 10, 150), MODERATE)
        assert (p.sets, p.reps, p.rest) == (4, 10, 150)
        assert not p.is_time_based

    def test_moderate_isolation_still_gets_volume_floor(self):
        p = prescribe(CURL, slot(3, 10, 60), MODERATE)
        assert p.reps == 15

    def test_rehab_substitution_fixed(self):
        p = prescribe(MCKENZIE, slot(4, 8, 150), HEAVY, rehab_substitution=True)
        assert (p.sets, p.reps, p.rest) == (2, 12, 60)

    def test_rehab_exercise_not_adjusted(self):
        p = prescribe(MCKENZIE, slot(3, 10, 60), VOLUME)
        assert (p.sets, p.reps, p.rest) == (3, 10, 60)

    def test_isometric_time_based_in_any_session(self):
        for intensity in (HEAVY, VOLUME, MODERATE, None):
            p = prescribe(PLANK, slot(3, 15, 60), intensity)
            assert (p.sets, p.reps, p.rest) == (3, 30, 60)
            assert p.is_time_based
