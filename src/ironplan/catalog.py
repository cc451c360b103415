"""
Exercise Catalog

Read-only collection of exercise records. Movement patterns are computed
once here so that generation never re-parses names or muscles.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

from .classification import classify_exercise
from .models import BodyZone, Exercise, ExerciseCategory

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog record cannot be turned into an Exercise."""


def _as_tuple(value: Any) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def exercise_from_record(record: Dict[str, Any]) -> Exercise:
    """
    Build an Exercise from a plain mapping.

    Accepts snake_case keys; ``equipment`` is an alias of ``equipment_needed``.

    Args:
        record: Mapping with at least id, name and category

    Returns:
        Unclassified Exercise

    Raises:
        CatalogError: If a required field is missing or an enum value is unknown
    """
    try:
        is_rehab = bool(record.get('is_rehab', False))
        rehab_target = record.get('rehab_target')
        return Exercise(
            id=int(record['id']),
            name=str(record['name']),
            category=ExerciseCategory(str(record['category']).lower()),
            primary_muscles=_as_tuple(record.get('primary_muscles')),
            equipment_needed=_as_tuple(record.get('equipment_needed', record.get('equipment'))),
            contraindications=tuple(BodyZone(z) for z in _as_tuple(record.get('contraindications'))),
            is_rehab=is_rehab,
            rehab_target=BodyZone(rehab_target) if (is_rehab and rehab_target) else None,
            tags=_as_tuple(record.get('tags')),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid exercise record {record.get('name', record)!r}: {e}") from e


class ExerciseCatalog:
    """
    Immutable, classified exercise catalog.

    Iterates in load order; that order is the tie-break order for
    preferred-name matching.
    """

    def __init__(self, exercises: Iterable[Exercise]):
        self._exercises: List[Exercise] = [e.with_patterns(classify_exercise(e)) for e in exercises]
        self._by_id: Dict[int, Exercise] = {}
        for exercise in self._exercises:
            if exercise.id in self._by_id:
                raise CatalogError(f"Duplicate exercise id {exercise.id}")
            self._by_id[exercise.id] = exercise
        logger.debug(f"Catalog loaded with {len(self._exercises)} exercises")

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> 'ExerciseCatalog':
        return cls(exercise_from_record(r) for r in records)

    @classmethod
    def from_yaml(cls, path) -> 'ExerciseCatalog':
        """
        Load a catalog from a YAML file.

        The file holds either a list of records or a mapping with an
        ``exercises`` list.
        """
        with open(Path(path)) as f:
            data = yaml.safe_load(f) or []

        if isinstance(data, dict):
            data = data.get('exercises', [])
        if not isinstance(data, list):
            raise CatalogError(f"{path}: expected a list of exercises")

        return cls.from_records(data)

    @classmethod
    def from_graph(cls, graph) -> 'ExerciseCatalog':
        """
        Load the catalog from the exercise graph.

        Args:
            graph: IronplanGraph instance (anything with execute_query)
        """
        query = """
        MATCH (e:Exercise)
        WHERE e.program_id IS NOT NULL
        RETURN
            e.program_id as id,
            e.name as name,
            e.category as category,
            e.primary_muscles as primary_muscles,
            e.equipment_needed as equipment_needed,
            e.contraindications as contraindications,
            coalesce(e.is_rehab, false) as is_rehab,
            e.rehab_target as rehab_target,
            e.tags as tags
        ORDER BY e.program_id
        """

        results = graph.execute_query(query)
        return cls.from_records(results)

    def __iter__(self) -> Iterator[Exercise]:
        return iter(self._exercises)

    def __len__(self) -> int:
        return len(self._exercises)

    def __contains__(self, exercise_id: int) -> bool:
        return exercise_id in self._by_id

    def get(self, exercise_id: int) -> Optional[Exercise]:
        return self._by_id.get(exercise_id)

    def ids(self) -> List[int]:
        return [e.id for e in self._exercises]

    @property
    def exercises(self) -> List[Exercise]:
        return list(self._exercises)
