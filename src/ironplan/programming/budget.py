"""
Session Time Budget

Estimates session duration and shrinks a session until it fits the
requested minutes. Only ever scales down: a short session is accepted as-is.
"""

import logging
from dataclasses import replace
from typing import List, Sequence

from ..config import DEFAULT_SETTINGS, Settings
from ..models import ProgramExercise

logger = logging.getLogger(__name__)


def estimate_session_minutes(
    exercises: Sequence[ProgramExercise],
    settings: Settings = DEFAULT_SETTINGS
) -> int:
    """
    Estimate session duration in minutes.

    Per exercise: sets x (work seconds per set + rest) + transition.
    Total: seconds / 60, rounded, plus fixed warmup/cooldown overhead.
    """
    total_seconds = sum(
        ex.sets * (settings.work_seconds_per_set + ex.rest_seconds) + settings.transition_seconds
        for ex in exercises
    )
    # JS-style rounding: .5 goes up
    return int(total_seconds / 60 + 0.5) + settings.overhead_minutes


def adjust_session_to_time_budget(
    exercises: Sequence[ProgramExercise],
    minutes_per_session: int,
    settings: Settings = DEFAULT_SETTINGS
) -> List[ProgramExercise]:
    """
    Trim a session until its estimate fits ``minutes_per_session``.

    Phases, each applied only if still over budget:
        1. Drop exercises from the end, down to ``min_exercises``
        2. One set less per exercise, down to ``min_sets``
        3. 30s less rest on accessories (position >= 3), down to 45s
        4. 30s less rest on the first three compounds, down to 90s
        5. Drop exercises from the end, down to ``absolute_min_exercises``

    Args:
        exercises: Session exercises, already intensity-adjusted
        minutes_per_session: Requested session length
        settings: Trim floors and estimate constants

    Returns:
        New list of exercises with order renumbered from 1
    """
    def over(items):
        return estimate_session_minutes(items, settings) > minutes_per_session

    before = estimate_session_minutes(exercises, settings)
    adjusted = list(exercises)
    step = settings.rest_step_seconds
    compounds = settings.compound_positions

    while over(adjusted) and len(adjusted) > settings.min_exercises:
        adjusted.pop()

    if over(adjusted):
        adjusted = [
            replace(ex, sets=min(ex.sets, max(settings.min_sets, ex.sets - 1)))
            for ex in adjusted
        ]

    if over(adjusted):
        adjusted = [
            replace(ex, rest_seconds=min(ex.rest_seconds, max(settings.min_accessory_rest, ex.rest_seconds - step)))
            if i >= compounds else ex
            for i, ex in enumerate(adjusted)
        ]

    if over(adjusted):
        adjusted = [
            replace(ex, rest_seconds=min(ex.rest_seconds, max(settings.min_compound_rest, ex.rest_seconds - step)))
            if i < compounds else ex
            for i, ex in enumerate(adjusted)
        ]

    while over(adjusted) and len(adjusted) > settings.absolute_min_exercises:
        adjusted.pop()

    after = estimate_session_minutes(adjusted, settings)
    if after != before:
        logger.debug(
            f"Trimmed session from {before} to {after} min "
            f"({len(exercises)} -> {len(adjusted)} exercises, budget {minutes_per_session})"
        )

    return [replace(ex, order=i) for i, ex in enumerate(adjusted, 1)]
