"""
T-800-REHAB: Rehab Protocols and Rotation

Internal Codename: T-800-REHAB

Rest-day rehab routines built from condition-specific protocols, with a
rotation that favors exercises not done recently and always keeps a
warmup-type exercise in the mix.
"""

from .history import InMemoryStore, JsonFileStore, KeyValueStore, PostgresStore
from .protocols import RehabExercise, RehabPriority, RehabProtocol, assign_priority, load_protocols
from .rest_day import RestDayExercise, RestDayRoutine, generate_rest_day_routine
from .rotation import RehabRotationSelector, RotationCandidate

__all__ = [
    'KeyValueStore',
    'InMemoryStore',
    'JsonFileStore',
    'PostgresStore',
    'RehabExercise',
    'RehabPriority',
    'RehabProtocol',
    'assign_priority',
    'load_protocols',
    'RehabRotationSelector',
    'RotationCandidate',
    'RestDayExercise',
    'RestDayRoutine',
    'generate_rest_day_routine',
]
