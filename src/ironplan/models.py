"""
Program Data Model

Internal Codename: CYBERDYNE-SCHEMA
Value objects flowing through program generation: catalog exercises, user
health conditions and equipment in; sessions and programs out.
"""

from dataclasses import dataclass, field, asdict, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


class BodyZone(str, Enum):
    """Body zones a health condition or contraindication can refer to."""
    NECK = "neck"
    SHOULDER_LEFT = "shoulder_left"
    SHOULDER_RIGHT = "shoulder_right"
    ELBOW_LEFT = "elbow_left"
    ELBOW_RIGHT = "elbow_right"
    WRIST_LEFT = "wrist_left"
    WRIST_RIGHT = "wrist_right"
    UPPER_BACK = "upper_back"
    LOWER_BACK = "lower_back"
    HIP_LEFT = "hip_left"
    HIP_RIGHT = "hip_right"
    KNEE_LEFT = "knee_left"
    KNEE_RIGHT = "knee_right"
    ANKLE_LEFT = "ankle_left"
    ANKLE_RIGHT = "ankle_right"
    FOOT_LEFT = "foot_left"
    FOOT_RIGHT = "foot_right"
    OTHER = "other"


UPPER_ZONES = frozenset({
    BodyZone.NECK, BodyZone.SHOULDER_LEFT, BodyZone.SHOULDER_RIGHT,
    BodyZone.ELBOW_LEFT, BodyZone.ELBOW_RIGHT,
    BodyZone.WRIST_LEFT, BodyZone.WRIST_RIGHT,
    BodyZone.UPPER_BACK,
})

LOWER_ZONES = frozenset({
    BodyZone.LOWER_BACK,
    BodyZone.HIP_LEFT, BodyZone.HIP_RIGHT,
    BodyZone.KNEE_LEFT, BodyZone.KNEE_RIGHT,
    BodyZone.ANKLE_LEFT, BodyZone.ANKLE_RIGHT,
    BodyZone.FOOT_LEFT, BodyZone.FOOT_RIGHT,
})


class ExerciseCategory(str, Enum):
    """Catalog category of a strength exercise."""
    COMPOUND = "compound"
    ISOLATION = "isolation"
    CORE = "core"


class SessionIntensity(str, Enum):
    """Daily undulating periodization label for a session."""
    HEAVY = "heavy"
    VOLUME = "volume"
    MODERATE = "moderate"


class SplitType(str, Enum):
    """Training split archetypes."""
    FULL_BODY = "full_body"
    UPPER_LOWER = "upper_lower"
    PUSH_PULL_LEGS = "push_pull_legs"
    BODYWEIGHT = "bodyweight"


@dataclass(frozen=True)
class Exercise:
    """A catalog exercise. Immutable during generation."""
    id: int
    name: str
    category: ExerciseCategory
    primary_muscles: Tuple[str, ...] = ()
    equipment_needed: Tuple[str, ...] = ()
    contraindications: Tuple[BodyZone, ...] = ()
    is_rehab: bool = False
    rehab_target: Optional[BodyZone] = None
    tags: Tuple[str, ...] = ()
    # Filled in once by the catalog; see classification.classify_exercise
    patterns: FrozenSet[Any] = field(default=frozenset(), compare=False)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    @property
    def is_isolation_or_core(self) -> bool:
        return self.category in (ExerciseCategory.ISOLATION, ExerciseCategory.CORE)

    def is_contraindicated_for(self, zones) -> bool:
        """True if any of this exercise's contraindications is in ``zones``."""
        return any(zone in zones for zone in self.contraindications)

    def first_contraindicated_zone(self, zones) -> Optional[BodyZone]:
        for zone in self.contraindications:
            if zone in zones:
                return zone
        return None

    def with_patterns(self, patterns) -> 'Exercise':
        return replace(self, patterns=frozenset(patterns))


@dataclass(frozen=True)
class HealthCondition:
    """A user health condition. Only active conditions affect generation."""
    body_zone: BodyZone
    pain_level: int = 0
    is_active: bool = True
    label: str = ""
    diagnosis: str = ""
    notes: str = ""


@dataclass(frozen=True)
class GymEquipment:
    """An equipment item; ``name`` is matched against exercise equipment tags."""
    name: str
    is_available: bool = True
    equipment_type: str = "other"


@dataclass(frozen=True)
class ProgramExercise:
    """One prescribed exercise inside a session."""
    exercise_id: int
    order: int
    sets: int
    target_reps: int
    rest_seconds: int
    is_rehab: bool = False
    is_time_based: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProgramSession:
    """A named session of ordered exercises."""
    name: str
    order: int
    exercises: Tuple[ProgramExercise, ...] = ()
    intensity: Optional[SessionIntensity] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "order": self.order,
            "intensity": self.intensity.value if self.intensity else None,
            "exercises": [ex.to_dict() for ex in self.exercises],
        }


@dataclass(frozen=True)
class GeneratedProgram:
    """
    Complete program returned by the generator.

    The caller persists it and deactivates any previous program.
    """
    name: str
    split_type: SplitType
    sessions: Tuple[ProgramSession, ...] = ()

    def exercise_ids(self) -> List[int]:
        """Every exercise id referenced, in session order (duplicates kept)."""
        return [ex.exercise_id for s in self.sessions for ex in s.exercises]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "split_type": self.split_type.value,
            "sessions": [s.to_dict() for s in self.sessions],
        }


@dataclass(frozen=True)
class ProgramInput:
    """Everything the generator needs from the user profile."""
    days_per_week: int
    minutes_per_session: int
    conditions: Tuple[HealthCondition, ...] = ()
    equipment: Tuple[GymEquipment, ...] = ()
    # Ids to avoid when the caller wants fresh variation on a refresh
    exclude_exercise_ids: Tuple[int, ...] = ()

    @property
    def active_conditions(self) -> List[HealthCondition]:
        return [c for c in self.conditions if c.is_active]

    @property
    def has_equipment(self) -> bool:
        return any(e.is_available for e in self.equipment)
