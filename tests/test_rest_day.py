"""Tests for the rehab protocol library and rest-day routines."""
import pytest

from ironplan.catalog import CatalogError
from ironplan.models import BodyZone
from ironplan.rehab.history import InMemoryStore
from ironplan.rehab.protocols import (
    RehabExercise,
    RehabPriority,
    RehabProtocol,
    find_protocol,
    load_protocols,
    protocol_from_record,
)
from ironplan.rehab.rest_day import (
    estimate_duration,
    gather_candidates,
    generate_rest_day_routine,
    parse_duration_minutes,
)
from ironplan.rehab.rotation import RehabRotationSelector

from conftest import condition


@pytest.fixture
def protocols(protocols_path):
    return load_protocols(protocols_path)


def back_and_knee():
    return [
        condition("lower_back", 5, diagnosis="Disc herniation"),
        condition("knee_right", 3),
        condition("neck", 2, is_active=False),
    ]


class TestProtocolLibrary:

    def test_load(self, protocols):
        assert len(protocols) == 7
        assert protocols[0].target_zone == BodyZone.ELBOW_RIGHT

    def test_priority_computed_at_load(self, protocols):
        knee = find_protocol(protocols, BodyZone.KNEE_RIGHT)
        priorities = {ex.name: ex.priority for ex in knee.exercises}
        assert priorities["Spanish squat isometric"] == RehabPriority.HIGH
        assert priorities["Slow-tempo leg extension"] == RehabPriority.MEDIUM
        assert priorities["Quad foam roll"] == RehabPriority.LOW

    def test_reps_keep_type(self, protocols):
        elbow = protocols[0]
        assert elbow.exercises[0].reps == 15
        assert elbow.exercises[2].reps == "30 sec"

    def test_diagnosis_match_before_zone(self, protocols):
        match = find_protocol(protocols, BodyZone.LOWER_BACK, "Non-specific low back pain")
        assert match.condition_name == "Non-specific low back pain"
        fallback = find_protocol(protocols, BodyZone.LOWER_BACK, "Unknown")
        assert fallback.condition_name == "Disc herniation"

    def test_diagnosis_must_match_zone(self, protocols):
        match = find_protocol(protocols, BodyZone.NECK, "Disc herniation")
        assert match.target_zone == BodyZone.NECK

    def test_missing_zone(self, protocols):
        assert find_protocol(protocols, BodyZone.FOOT_LEFT) is None

    def test_invalid_record(self):
        with pytest.raises(CatalogError):
            protocol_from_record({"target_zone": "tail", "condition_name": "x"})


class TestDurations:

    @pytest.mark.parametrize("reps,expected", [
        ("30 sec", "30 sec"),
        ("45s", "45s"),
        (10, "1 min"),
        ("8-15", "1 min"),
    ])
    def test_estimate_duration(self, reps, expected):
        assert estimate_duration(RehabExercise.create("x", 1, reps)) == expected

    @pytest.mark.parametrize("duration,minutes", [
        ("30 sec", 0.5),
        ("45 sec", 0.75),
        ("1 min", 1),
        ("2 min", 2),
        ("3", 3),
    ])
    def test_parse_duration(self, duration, minutes):
        assert parse_duration_minutes(duration) == pytest.approx(minutes)


class TestRestDayRoutine:

    def test_rotation_picks_five(self, protocols):
        routine = generate_rest_day_routine(back_and_knee(), protocols, RehabRotationSelector())

        assert [ex.name for ex in routine.exercises] == [
            "McKenzie press-up",
            "Bird dog",
            "Spanish squat isometric",
            "Cat-cow",
            "Slow-tempo leg extension",
        ]
        # 3 + 3 + 5 * 0.75 + 2 + 4 = 15.75
        assert routine.total_minutes == 16
        assert routine.variant == "all"

    def test_upper_variant_filters_zones(self, protocols):
        routine = generate_rest_day_routine(back_and_knee(), protocols, RehabRotationSelector(), variant="upper")
        assert routine.exercises == ()
        assert routine.total_minutes == 0

    def test_lower_variant(self, protocols):
        routine = generate_rest_day_routine(back_and_knee(), protocols, RehabRotationSelector(), variant="lower")
        assert len(routine.exercises) == 5

    def test_unknown_variant(self, protocols):
        with pytest.raises(ValueError):
            generate_rest_day_routine([], protocols, RehabRotationSelector(), variant="legs")

    def test_no_conditions(self, protocols):
        routine = generate_rest_day_routine([], protocols, RehabRotationSelector())
        assert routine.exercises == ()

    def test_next_day_rotates(self, protocols):
        selector = RehabRotationSelector(InMemoryStore())
        first = generate_rest_day_routine(back_and_knee(), protocols, selector)
        selector.record_done([ex.name for ex in first.exercises], now=1000)

        second = generate_rest_day_routine(back_and_knee(), protocols, selector)
        assert {ex.name for ex in second.exercises[:2]} == {"Glute lacrosse ball release", "Quad foam roll"}
        assert any(ex.name == "McKenzie press-up" for ex in second.exercises)

    def test_accent_zone_first(self, protocols):
        routine = generate_rest_day_routine(
            back_and_knee(), protocols, RehabRotationSelector(), accent_zones=[BodyZone.KNEE_RIGHT]
        )
        names = [ex.name for ex in routine.exercises]
        assert names[:2] == ["Spanish squat isometric", "Slow-tempo leg extension"]
        assert len(names) == 7

    def test_duplicate_names_across_protocols(self):
        shared = RehabExercise.create("Dead bug", 3, 10)
        protocols = [
            RehabProtocol(BodyZone.LOWER_BACK, "Back", (shared,)),
            RehabProtocol(BodyZone.HIP_LEFT, "Hip", (shared, RehabExercise.create("Clamshell", 3, 15))),
        ]
        candidates = gather_candidates([condition("lower_back", 4), condition("hip_left", 4)], protocols)
        assert [c.exercise.name for c in candidates] == ["Dead bug", "Clamshell"]
        assert candidates[0].protocol_name == "Back"

    def test_to_dict(self, protocols):
        routine = generate_rest_day_routine(back_and_knee(), protocols, RehabRotationSelector())
        data = routine.to_dict()
        assert data["total_minutes"] == 16
        assert data["exercises"][0]["name"] == "McKenzie press-up"
