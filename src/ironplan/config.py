"""
Ironplan Configuration

Named constants for program generation and rehab rotation.
Loads overrides from config/ironplan.yaml if available, else uses defaults.
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "ironplan.yaml"


def load_config_yaml(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from YAML file, return empty dict if not found."""
    load_dotenv()

    if config_path is None:
        config_path = Path(os.getenv("IRONPLAN_CONFIG", str(DEFAULT_CONFIG_PATH)))

    if not config_path.exists():
        return {}

    with open(config_path) as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class Settings:
    """Tunable constants for the generation engine.

    Values are empirically chosen. Changing them changes which exercises
    users see, so they live here rather than inline.
    """

    # Pain thresholds
    severe_pain_threshold: int = 7  # exclude contraindicated, substitute rehab
    lower_back_substitution_threshold: int = 6  # hip hinge -> hip thrust

    # Exclusion list is ignored if fewer non-rehab exercises than this remain
    min_pool_after_exclusion: int = 15

    # Duration estimate
    work_seconds_per_set: int = 35
    transition_seconds: int = 90
    overhead_minutes: int = 10  # warmup + cooldown

    # Time-budget trim floors
    min_exercises: int = 4
    min_sets: int = 2
    min_accessory_rest: int = 45
    min_compound_rest: int = 90
    absolute_min_exercises: int = 3
    rest_step_seconds: int = 30
    compound_positions: int = 3  # first N exercises are treated as compounds

    # Rehab rotation
    rotation_max_count: int = 5
    accent_slots: int = 2

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from YAML, ignoring unknown keys."""
        yaml_config = load_config_yaml(config_path)

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for section in ('generation', 'trimming', 'rotation'):
            for key, value in (yaml_config.get(section) or {}).items():
                if key in known:
                    kwargs[key] = int(value)
                else:
                    logger.warning(f"Ignoring unknown setting {section}.{key}")

        return cls(**kwargs)


DEFAULT_SETTINGS = Settings()
