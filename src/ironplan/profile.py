"""User profile loading for program and rest-day generation."""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable

import yaml

from .catalog import CatalogError
from .models import BodyZone, GymEquipment, HealthCondition, ProgramInput

logger = logging.getLogger(__name__)


def condition_from_record(record: Dict[str, Any]) -> HealthCondition:
    return HealthCondition(
        body_zone=BodyZone(record['body_zone']),
        pain_level=int(record.get('pain_level', 0)),
        is_active=bool(record.get('is_active', True)),
        label=str(record.get('label') or ""),
        diagnosis=str(record.get('diagnosis') or ""),
        notes=str(record.get('notes') or ""),
    )


def equipment_from_record(record: Any) -> GymEquipment:
    """Equipment is either a bare name or a mapping with a ``name`` key."""
    if isinstance(record, str):
        return GymEquipment(name=record)
    return GymEquipment(
        name=str(record['name']),
        is_available=bool(record.get('is_available', True)),
        equipment_type=str(record.get('equipment_type', 'other')),
    )


def program_input_from_dict(
    profile: Dict[str, Any],
    exclude_exercise_ids: Iterable[int] = ()
) -> ProgramInput:
    """
    Build a ProgramInput from a profile mapping.

    Args:
        profile: Mapping with days_per_week, minutes_per_session and
            optional conditions and equipment lists
        exclude_exercise_ids: Ids to avoid for variation

    Returns:
        ProgramInput

    Raises:
        CatalogError: If the profile is missing a field or has an unknown zone
    """
    try:
        return ProgramInput(
            days_per_week=int(profile['days_per_week']),
            minutes_per_session=int(profile['minutes_per_session']),
            conditions=tuple(condition_from_record(c) for c in profile.get('conditions') or ()),
            equipment=tuple(equipment_from_record(e) for e in profile.get('equipment') or ()),
            exclude_exercise_ids=tuple(int(i) for i in exclude_exercise_ids),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid profile: {e}") from e


def load_profile(path, exclude_exercise_ids: Iterable[int] = ()) -> ProgramInput:
    """Load a ProgramInput from a YAML profile file."""
    with open(Path(path)) as f:
        profile = yaml.safe_load(f) or {}

    if not isinstance(profile, dict):
        raise CatalogError(f"{path}: expected a mapping")

    program_input = program_input_from_dict(profile, exclude_exercise_ids)
    logger.debug(
        f"Profile {path}: {program_input.days_per_week} days, "
        f"{len(program_input.conditions)} conditions, {len(program_input.equipment)} equipment"
    )
    return program_input
