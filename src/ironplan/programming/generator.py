"""
Program Generator

Internal Codename: SKYNET-PLANNER
Turns a user profile and the exercise catalog into a complete weekly program.

Pipeline:
    1. Filter the catalog (equipment, exclusion, cardio)
    2. Fixed programs for ankylosing spondylitis and for no equipment
    3. Split from weekly frequency
    4. Movement-pattern pools (with lower-back hinge substitution)
    5. Slot-by-slot session assembly, intensity, time budget
"""

import logging
import random
from typing import Iterable, List, Optional

from ..classification import PatternPools
from ..config import DEFAULT_SETTINGS, Settings
from ..models import Exercise, GeneratedProgram, ProgramInput, ProgramSession, SplitType
from .assembler import build_structured_session
from .filters import eligible_exercises, filter_by_contraindications
from .fixed_programs import (
    BODYWEIGHT_PROGRAM_NAME,
    SPONDYLITIS_PROGRAM_NAME,
    build_bodyweight_program,
    build_spondylitis_program,
    has_spondylitis,
)
from .splits import SPLIT_NAMES, determine_split, session_templates

logger = logging.getLogger(__name__)


def generate_program(
    program_input: ProgramInput,
    catalog: Iterable[Exercise],
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None
) -> GeneratedProgram:
    """
    Generate a weekly program.

    Never raises for well-formed input: an empty or sparse catalog gives a
    program with short or empty sessions.

    Args:
        program_input: Frequency, time budget, conditions, equipment, exclusions
        catalog: Exercise catalog (ExerciseCatalog or plain Exercise records)
        settings: Engine constants (defaults if None)
        rng: Random source for candidate shuffling

    Returns:
        GeneratedProgram ready to persist
    """
    settings = settings or DEFAULT_SETTINGS
    conditions = program_input.active_conditions

    eligible = eligible_exercises(catalog, program_input, settings)

    if has_spondylitis(conditions):
        safe = filter_by_contraindications(eligible, conditions, settings.severe_pain_threshold)
        sessions = build_spondylitis_program(safe)
        logger.info(f"Spondylitis condition found, using fixed program ({len(sessions)} sessions)")
        return GeneratedProgram(SPONDYLITIS_PROGRAM_NAME, SplitType.FULL_BODY, tuple(sessions))

    if not program_input.has_equipment:
        safe = filter_by_contraindications(eligible, conditions, settings.severe_pain_threshold)
        sessions = build_bodyweight_program(safe)
        logger.info(f"No equipment available, using bodyweight program ({len(sessions)} sessions)")
        return GeneratedProgram(BODYWEIGHT_PROGRAM_NAME, SplitType.BODYWEIGHT, tuple(sessions))

    split = determine_split(program_input.days_per_week)
    pools = PatternPools(eligible, conditions, settings.lower_back_substitution_threshold)
    if pools.hinge_substituted:
        logger.info("Lower back pain: hip hinge slots use hip thrusts")

    sessions: List[ProgramSession] = []
    for template in session_templates(split, program_input.days_per_week):
        session = build_structured_session(
            template,
            pools,
            conditions=conditions,
            minutes_per_session=program_input.minutes_per_session,
            settings=settings,
            rng=rng,
        )
        logger.debug(f"{session.name}: {len(session.exercises)} exercises")
        sessions.append(session)

    logger.info(
        f"Generated {SPLIT_NAMES[split]} for {program_input.days_per_week} days/week: "
        f"{len(sessions)} sessions from {len(eligible)} eligible exercises"
    )
    return GeneratedProgram(SPLIT_NAMES[split], split, tuple(sessions))


class ProgramGenerator:
    """
    Program generator bound to a catalog.

    Holds the catalog, settings and random source so repeated refreshes for
    the same user share them.
    """

    def __init__(
        self,
        catalog: Iterable[Exercise],
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Args:
            catalog: Classified exercises
            settings: Engine constants (defaults if None)
            rng: Random source; a fresh Random() if None
        """
        self.catalog = list(catalog)
        self.settings = settings or DEFAULT_SETTINGS
        self.rng = rng or random.Random()

    def generate(self, program_input: ProgramInput) -> GeneratedProgram:
        return generate_program(program_input, self.catalog, self.settings, self.rng)

    def refresh(self, program_input: ProgramInput, previous: GeneratedProgram) -> GeneratedProgram:
        """
        Generate a new program avoiding the exercises of ``previous``.

        The exclusion is dropped automatically if it would leave too few
        exercises.
        """
        exclude = tuple(dict.fromkeys(
            list(program_input.exclude_exercise_ids) + previous.exercise_ids()
        ))
        return self.generate(ProgramInput(
            days_per_week=program_input.days_per_week,
            minutes_per_session=program_input.minutes_per_session,
            conditions=program_input.conditions,
            equipment=program_input.equipment,
            exclude_exercise_ids=exclude,
        ))
