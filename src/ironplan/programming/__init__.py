"""
SKYNET-PLANNER: Program Generation Engine

Internal Codename: SKYNET-PLANNER

Builds weekly strength programs from:
- Weekly frequency and session length
- Health conditions and pain levels
- Available equipment
- Previously used exercises (for variation on refresh)
"""

from .assembler import build_structured_session, shuffled
from .budget import adjust_session_to_time_budget, estimate_session_minutes
from .filters import eligible_exercises, filter_by_contraindications, filter_by_equipment
from .generator import ProgramGenerator, generate_program
from .intensity import prescribe
from .splits import determine_split, session_templates

__all__ = [
    'ProgramGenerator',
    'generate_program',
    'determine_split',
    'session_templates',
    'build_structured_session',
    'shuffled',
    'prescribe',
    'estimate_session_minutes',
    'adjust_session_to_time_budget',
    'eligible_exercises',
    'filter_by_equipment',
    'filter_by_contraindications',
]
