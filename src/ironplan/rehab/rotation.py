"""
Rehab Rotation Selector

Internal Codename: T-800-REHAB
Limits each rehab routine to a handful of exercises and rotates through
the rest of the pool over time.

Selection favors:
    1. Exercises not done recently (never done sorts first)
    2. Priority (warmup / nerve flossing before stretches before foam rolling)

At least one priority-1 exercise is always included when the pool has one.
"""

import json
import logging
import time
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from ..config import DEFAULT_SETTINGS
from ..models import BodyZone
from .history import InMemoryStore, KeyValueStore
from .protocols import RehabExercise, RehabPriority

logger = logging.getLogger(__name__)

STORAGE_KEY = 'rehab_exercise_history'


@dataclass(frozen=True)
class RotationCandidate:
    """A rehab exercise with the protocol and zone it came from."""
    exercise: RehabExercise
    protocol_name: str
    target_zone: BodyZone


@dataclass(frozen=True)
class _Ranked:
    candidate: RotationCandidate
    priority: int
    last_done_at: Optional[float]

    @property
    def sort_key(self):
        return (self.last_done_at or 0, self.priority)


class RehabRotationSelector:
    """
    Picks a bounded, rotating subset of rehab exercises.

    History is a name -> last-done epoch seconds mapping, stored as JSON
    under ``STORAGE_KEY``. A store that fails on read or write is logged
    and treated as empty history; selection never fails because of it.
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        max_count: int = DEFAULT_SETTINGS.rotation_max_count,
        accent_slots: int = DEFAULT_SETTINGS.accent_slots
    ):
        self.store = store if store is not None else InMemoryStore()
        self.max_count = max_count
        self.accent_slots = accent_slots

    # =========================================================================
    # HISTORY
    # =========================================================================

    def get_history(self) -> Dict[str, float]:
        """Last-done timestamps by exercise name; empty on any store fault."""
        try:
            stored = self.store.get(STORAGE_KEY)
            if not stored:
                return {}
            history = json.loads(stored)
            if not isinstance(history, dict):
                logger.warning(f"Ignoring malformed rehab history: {type(history).__name__}")
                return {}
            valid = {
                name: stamp for name, stamp in history.items()
                if isinstance(stamp, (int, float)) and not isinstance(stamp, bool)
            }
            if len(valid) != len(history):
                logger.warning(f"Dropped {len(history) - len(valid)} rehab history entries with bad timestamps")
            return valid
        except Exception as e:
            logger.warning(f"Could not read rehab history: {e}")
            return {}

    def record_done(self, names: Iterable[str], now: Optional[float] = None) -> None:
        """
        Mark exercises as done at ``now`` (current time if None).

        Recording the same names twice with the same timestamp leaves the
        history unchanged.
        """
        history = self.get_history()
        stamp = time.time() if now is None else now

        for name in names:
            history[name] = stamp

        try:
            self.store.set(STORAGE_KEY, json.dumps(history))
        except Exception as e:
            logger.warning(f"Could not write rehab history: {e}")

    # =========================================================================
    # SELECTION
    # =========================================================================

    def _rank(self, candidates: Sequence[RotationCandidate], history: Dict[str, float]) -> List[_Ranked]:
        ranked = [
            _Ranked(c, int(c.exercise.priority), history.get(c.exercise.name))
            for c in candidates
        ]
        # Stable sort keeps input order on full ties
        return sorted(ranked, key=lambda r: r.sort_key)

    def _select(
        self,
        candidates: Sequence[RotationCandidate],
        history: Dict[str, float],
        max_count: int
    ) -> List[RotationCandidate]:
        if max_count < 1 or not candidates:
            return []
        # Small pools are returned whole, in input order
        if len(candidates) <= max_count:
            return list(candidates)

        ranked = self._rank(candidates, history)
        selected = ranked[:max_count]

        if not any(r.priority == RehabPriority.HIGH for r in selected):
            best_high = next((r for r in ranked[max_count:] if r.priority == RehabPriority.HIGH), None)
            if best_high is not None:
                selected[-1] = best_high

        return [r.candidate for r in selected]

    def select_rotated_exercises(
        self,
        candidates: Sequence[RotationCandidate],
        max_count: Optional[int] = None
    ) -> List[RotationCandidate]:
        """
        Select up to ``max_count`` candidates by staleness, then priority.

        Args:
            candidates: Rehab exercises with their protocol and zone
            max_count: Selection size (selector default if None)

        Returns:
            Selected candidates in ranked order
        """
        max_count = self.max_count if max_count is None else max_count
        history = self.get_history()
        return self._select(candidates, history, max_count)

    def select_rotated_exercises_with_accent(
        self,
        candidates: Sequence[RotationCandidate],
        accent_zones: Iterable[BodyZone],
        max_count: Optional[int] = None
    ) -> List[RotationCandidate]:
        """
        Selection with reserved slots for painful zones.

        First ``accent_slots`` candidates are taken from accent-zone
        exercises only (with their own priority-1 guarantee), then
        ``max_count`` more from the remaining pool.

        Args:
            candidates: Rehab exercises with their protocol and zone
            accent_zones: Zones with an active pain report
            max_count: Size of the non-accent selection (selector default if None)

        Returns:
            Accent selections first, then the regular selection
        """
        max_count = self.max_count if max_count is None else max_count
        zones = set(accent_zones)
        if not zones:
            return self.select_rotated_exercises(candidates, max_count)

        history = self.get_history()
        accent_pool = [c for c in candidates if c.target_zone in zones]
        accent = self._select(accent_pool, history, self.accent_slots)

        chosen = {c.exercise.name for c in accent}
        rest_pool = [c for c in candidates if c.exercise.name not in chosen]
        rest = self._select(rest_pool, history, max_count)

        logger.debug(f"Accent selection: {len(accent)} for {sorted(z.value for z in zones)}, {len(rest)} regular")
        return accent + rest
