"""
Rehab Protocol Library

Evidence-based rehab protocols per condition and body zone, loaded from
YAML. Each exercise gets its rotation priority once, at load time.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from ..catalog import CatalogError
from ..models import BodyZone

logger = logging.getLogger(__name__)


class RehabPriority(IntEnum):
    """Rotation priority; lower sorts first."""
    HIGH = 1  # warmups, nerve flossing, key isometrics
    MEDIUM = 2  # stretches, strengthening
    LOW = 3  # foam rolling, massage


HIGH_PRIORITY_KEYWORDS = (
    'warmup',
    'warm-up',
    'nerve floss',
    'nerve glid',
    'isometric',
    'mckenzie',
    'dead bug',
    'bird dog',
    'chin tuck',
    'spanish squat',
)

LOW_PRIORITY_KEYWORDS = (
    'foam roll',
    'massage',
    'lacrosse ball',
    'self-massage',
)


def assign_priority(name: str, notes: str = "") -> RehabPriority:
    """
    Classify a rehab exercise by keyword match on its name and notes.

    High keywords are checked before low ones, so "isometric hold after
    foam rolling" is HIGH.
    """
    combined = f"{name} {notes}".lower()

    if any(keyword in combined for keyword in HIGH_PRIORITY_KEYWORDS):
        return RehabPriority.HIGH
    if any(keyword in combined for keyword in LOW_PRIORITY_KEYWORDS):
        return RehabPriority.LOW
    return RehabPriority.MEDIUM


class Placement(str, Enum):
    """Where in the week a rehab exercise is meant to be done."""
    WARMUP = "warmup"
    ACTIVE_WAIT = "active_wait"
    COOLDOWN = "cooldown"
    REST_DAY = "rest_day"


class RehabIntensity(str, Enum):
    VERY_LIGHT = "very_light"
    LIGHT = "light"
    MODERATE = "moderate"


@dataclass(frozen=True)
class RehabExercise:
    """
    One prescribed rehab exercise.

    ``reps`` is either a count or a free-form string such as "30 sec" or
    "8-15".
    """
    name: str
    sets: int
    reps: Union[int, str]
    intensity: RehabIntensity = RehabIntensity.LIGHT
    notes: str = ""
    placement: Placement = Placement.WARMUP
    priority: RehabPriority = field(default=RehabPriority.MEDIUM)

    @classmethod
    def create(cls, name: str, sets: int, reps: Union[int, str], **kwargs) -> 'RehabExercise':
        """Build an exercise with its priority computed from name and notes."""
        notes = kwargs.get('notes', "")
        return cls(name=name, sets=sets, reps=reps, priority=assign_priority(name, notes), **kwargs)


@dataclass(frozen=True)
class RehabProtocol:
    """Rehab protocol for one condition on one body zone."""
    target_zone: BodyZone
    condition_name: str
    exercises: Tuple[RehabExercise, ...]
    frequency: str = "daily"  # every_session, daily, 3x_week
    priority: int = 2
    progression_criteria: str = ""


def _exercise_from_record(record: Dict[str, Any]) -> RehabExercise:
    return RehabExercise.create(
        name=str(record['name']),
        sets=int(record['sets']),
        reps=record['reps'],
        intensity=RehabIntensity(record.get('intensity', 'light')),
        notes=str(record.get('notes') or ""),
        placement=Placement(record.get('placement', 'warmup')),
    )


def protocol_from_record(record: Dict[str, Any]) -> RehabProtocol:
    """
    Build a RehabProtocol from a plain mapping.

    Raises:
        CatalogError: If a required field is missing or an enum value is unknown
    """
    try:
        return RehabProtocol(
            target_zone=BodyZone(record['target_zone']),
            condition_name=str(record['condition_name']),
            exercises=tuple(_exercise_from_record(e) for e in record.get('exercises') or ()),
            frequency=str(record.get('frequency', 'daily')),
            priority=int(record.get('priority', 2)),
            progression_criteria=str(record.get('progression_criteria') or ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f"Invalid rehab protocol {record.get('condition_name', record)!r}: {e}") from e


def load_protocols(path) -> List[RehabProtocol]:
    """
    Load the protocol library from YAML.

    Args:
        path: File holding a list of protocols, or a mapping with a
            ``protocols`` list

    Returns:
        Protocols in file order
    """
    with open(Path(path)) as f:
        data = yaml.safe_load(f) or []

    if isinstance(data, dict):
        data = data.get('protocols', [])
    if not isinstance(data, list):
        raise CatalogError(f"{path}: expected a list of protocols")

    protocols = [protocol_from_record(r) for r in data]
    logger.debug(f"Loaded {len(protocols)} rehab protocols from {path}")
    return protocols


def find_protocol(
    protocols: List[RehabProtocol],
    zone: BodyZone,
    diagnosis: str = ""
) -> Optional[RehabProtocol]:
    """
    Protocol for a condition: same zone and condition name first, then zone only.
    """
    if diagnosis:
        for protocol in protocols:
            if protocol.target_zone == zone and protocol.condition_name == diagnosis:
                return protocol
    for protocol in protocols:
        if protocol.target_zone == zone:
            return protocol
    return None
