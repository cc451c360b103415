"""Tests for the exercise filter pipeline."""
import pytest

from ironplan.models import GymEquipment
from ironplan.programming.filters import (
    apply_exclusions,
    drop_cardio,
    eligible_exercises,
    filter_by_contraindications,
    filter_by_equipment,
    severe_zones,
)

from conftest import FULL_EQUIPMENT, condition, equipment, make_exercise, program_input


BODYWEIGHT = make_exercise(1, "Push-up", primary_muscles=["chest"])
BARBELL = make_exercise(2, "Bench press", primary_muscles=["chest"], equipment_needed=["barbell", "bench"])
DUMBBELL = make_exercise(3, "Dumbbell row", primary_muscles=["lats"], equipment_needed=["dumbbell"])
SQUAT = make_exercise(
    4, "Back squat", primary_muscles=["quadriceps"],
    equipment_needed=["barbell"], contraindications=["lower_back", "knee_left"],
)


class TestEquipmentFilter:

    def test_bodyweight_always_passes(self):
        assert filter_by_equipment([BODYWEIGHT, BARBELL], []) == [BODYWEIGHT]

    def test_all_required_equipment_needed(self):
        result = filter_by_equipment([BARBELL, DUMBBELL], equipment("barbell", "dumbbell"))
        assert result == [DUMBBELL]  # bench missing

    def test_unavailable_equipment_ignored(self):
        items = (GymEquipment("dumbbell", is_available=False),)
        assert filter_by_equipment([DUMBBELL], items) == []

    def test_adding_equipment_never_removes(self):
        exercises = [BODYWEIGHT, BARBELL, DUMBBELL, SQUAT]
        few = set(e.id for e in filter_by_equipment(exercises, equipment("barbell")))
        more = set(e.id for e in filter_by_equipment(exercises, equipment("barbell", "bench", "dumbbell")))
        assert few <= more
        assert more == {1, 2, 3, 4}


class TestContraindicationFilter:

    def test_below_threshold_keeps_everything(self):
        result = filter_by_contraindications([SQUAT, BARBELL], [condition("lower_back", 6)])
        assert result == [SQUAT, BARBELL]

    def test_severe_pain_excludes(self):
        result = filter_by_contraindications([SQUAT, BARBELL], [condition("lower_back", 7)])
        assert result == [BARBELL]

    def test_inactive_condition_ignored(self):
        result = filter_by_contraindications([SQUAT], [condition("knee_left", 9, is_active=False)])
        assert result == [SQUAT]

    def test_severe_zones(self):
        zones = severe_zones([condition("neck", 8), condition("knee_left", 3)])
        assert {z.value for z in zones} == {"neck"}


class TestExclusion:

    def test_drop_cardio(self):
        run = make_exercise(9, "Treadmill run", primary_muscles=["quadriceps"], tags=["cardio"])
        assert drop_cardio([run, BODYWEIGHT]) == [BODYWEIGHT]

    def test_exclusion_applied_when_pool_large(self, catalog):
        result = apply_exclusions(catalog.exercises, [1, 10, 13])
        ids = {e.id for e in result}
        assert not ids & {1, 10, 13}
        assert len(result) == len(catalog) - 3

    def test_exclusion_ignored_when_pool_too_small(self, catalog):
        strength = [e.id for e in catalog if not e.is_rehab and not e.has_tag("cardio")]
        result = apply_exclusions(catalog.exercises, strength[:-10])
        assert len(result) == len(catalog)

    def test_empty_exclusion_is_noop(self, catalog):
        assert apply_exclusions(catalog.exercises, []) == catalog.exercises


class TestPipeline:

    def test_cardio_never_eligible(self, catalog):
        ids = {e.id for e in eligible_exercises(catalog, program_input())}
        assert 80 not in ids
        assert 81 not in ids

    def test_exclusion_floor_counts_after_equipment(self, catalog):
        # Bodyweight pool has fewer than 15 strength exercises, so exclusion is skipped
        result = eligible_exercises(catalog, program_input(equipment_names=(), exclude=[60]))
        assert 60 in {e.id for e in result}

    def test_exclusion_applied_with_full_equipment(self, catalog):
        result = eligible_exercises(catalog, program_input(exclude=[60]))
        assert 60 not in {e.id for e in result}

    def test_contraindications_deferred(self, catalog):
        # Contraindicated exercises stay eligible; slots handle them
        result = eligible_exercises(catalog, program_input(conditions=[condition("lower_back", 9)]))
        assert 2 in {e.id for e in result}


@pytest.mark.parametrize("names", [(), ("dumbbell",), FULL_EQUIPMENT])
def test_eligible_ids_subset_of_catalog(catalog, names):
    ids = {e.id for e in eligible_exercises(catalog, program_input(equipment_names=names))}
    assert ids <= set(catalog.ids())
