"""Tests for catalog and profile loading."""
import pytest

from ironplan.catalog import CatalogError, ExerciseCatalog, exercise_from_record
from ironplan.classification import MovementPattern as MP
from ironplan.models import BodyZone, ExerciseCategory
from ironplan.profile import load_profile, program_input_from_dict

from conftest import DATA_DIR


class FakeGraph:
    def __init__(self, records):
        self.records = records
        self.queries = []

    def execute_query(self, query, parameters=None):
        self.queries.append(query)
        return self.records


class TestExerciseRecords:

    def test_full_record(self):
        exercise = exercise_from_record({
            "id": "7",
            "name": "Goblet squat",
            "category": "Compound",
            "primary_muscles": ["quadriceps"],
            "equipment": "dumbbell",
            "contraindications": ["knee_left"],
            "tags": ["lower_body"],
        })
        assert exercise.id == 7
        assert exercise.category == ExerciseCategory.COMPOUND
        assert exercise.equipment_needed == ("dumbbell",)
        assert exercise.contraindications == (BodyZone.KNEE_LEFT,)

    def test_rehab_target_only_for_rehab(self):
        exercise = exercise_from_record({
            "id": 1, "name": "Squat", "category": "compound", "rehab_target": "knee_left",
        })
        assert exercise.rehab_target is None

    @pytest.mark.parametrize("record", [
        {"name": "No id", "category": "core"},
        {"id": 1, "name": "Bad category", "category": "cardio"},
        {"id": 1, "name": "Bad zone", "category": "core", "contraindications": ["tail"]},
    ])
    def test_invalid_records(self, record):
        with pytest.raises(CatalogError):
            exercise_from_record(record)


class TestExerciseCatalog:

    def test_sample_catalog(self, catalog):
        assert len(catalog) == 46
        assert 1 in catalog
        assert catalog.get(999) is None

    def test_patterns_computed_at_load(self, catalog):
        assert MP.QUAD_COMPOUND in catalog.get(1).patterns

    def test_duplicate_ids_rejected(self):
        records = [
            {"id": 1, "name": "Plank", "category": "core"},
            {"id": 1, "name": "Side plank", "category": "core"},
        ]
        with pytest.raises(CatalogError):
            ExerciseCatalog.from_records(records)

    def test_yaml_list_form(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("- {id: 1, name: Plank, category: core, tags: [isometric]}\n")
        catalog = ExerciseCatalog.from_yaml(path)
        assert catalog.ids() == [1]
        assert catalog.get(1).has_tag("isometric")

    def test_yaml_wrong_shape(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("exercises: 3\n")
        with pytest.raises(CatalogError):
            ExerciseCatalog.from_yaml(path)

    def test_from_graph(self):
        graph = FakeGraph([
            {"id": 5, "name": "Lat pulldown", "category": "compound",
             "primary_muscles": ["lats"], "equipment_needed": ["cable"],
             "contraindications": None, "is_rehab": False, "rehab_target": None, "tags": None},
        ])
        catalog = ExerciseCatalog.from_graph(graph)
        assert catalog.ids() == [5]
        assert catalog.get(5).patterns == frozenset({MP.VERTICAL_PULL})
        assert "MATCH (e:Exercise)" in graph.queries[0]


class TestProfile:

    def test_example_profile(self):
        program_input = load_profile(DATA_DIR / "profile.example.yaml", [3])
        assert program_input.days_per_week == 3
        assert program_input.exclude_exercise_ids == (3,)
        assert len(program_input.active_conditions) == 2
        assert "treadmill" not in {e.name for e in program_input.equipment if e.is_available}

    def test_missing_field(self):
        with pytest.raises(CatalogError):
            program_input_from_dict({"days_per_week": 3})

    def test_no_equipment(self):
        program_input = program_input_from_dict({"days_per_week": 2, "minutes_per_session": 45})
        assert not program_input.has_equipment
