#!/usr/bin/env python3
"""
Ironplan CLI - SKYCOACH

Internal Codename: SKYCOACH
Command-line interface for program and rest-day generation.

Usage:
    ironplan generate --profile FILE (--catalog FILE | --from-graph) [--exclude ID ...] [--seed N] [--json]
    ironplan rest-day --protocols FILE --profile FILE [--variant {upper,lower,all}] [--accent ZONE ...]
                      [--history FILE] [--record]
    ironplan split DAYS
"""

import json
import logging
import random
from pathlib import Path
from typing import Optional, Tuple

import click

from ironplan.catalog import CatalogError, ExerciseCatalog
from ironplan.config import Settings
from ironplan.graph import IronplanGraph
from ironplan.models import BodyZone, GeneratedProgram
from ironplan.profile import load_profile
from ironplan.programming import determine_split, generate_program
from ironplan.programming.splits import SPLIT_NAMES
from ironplan.rehab import (
    InMemoryStore,
    JsonFileStore,
    RehabRotationSelector,
    RestDayRoutine,
    generate_rest_day_routine,
    load_protocols,
)

logger = logging.getLogger(__name__)

ZONE_CHOICES = [zone.value for zone in BodyZone]


def format_program_text(program: GeneratedProgram, catalog: ExerciseCatalog) -> str:
    """
    Format a generated program as readable text.

    Args:
        program: Generated program
        catalog: Catalog used to resolve exercise names

    Returns:
        Formatted text string
    """
    lines = []

    lines.append("=" * 60)
    lines.append(f"SKYNET-PLANNER: {program.name}")
    lines.append("=" * 60)
    lines.append(f"Split: {program.split_type.value}")

    for session in program.sessions:
        lines.append(f"\n{'─' * 60}")
        intensity = f" [{session.intensity.value}]" if session.intensity else ""
        lines.append(f"{session.order}. {session.name}{intensity}")
        lines.append('─' * 60)

        if not session.exercises:
            lines.append("  (no exercises available)")

        for ex in session.exercises:
            exercise = catalog.get(ex.exercise_id)
            name = exercise.name if exercise else f"#{ex.exercise_id}"
            unit = "s" if ex.is_time_based else " reps"
            rehab = "  (rehab)" if ex.is_rehab else ""
            lines.append(f"  {ex.order}. {name}{rehab}")
            lines.append(f"     {ex.sets} x {ex.target_reps}{unit}, rest {ex.rest_seconds}s")

    lines.append("\n" + "=" * 60)
    return "\n".join(lines)


def format_rest_day_text(routine: RestDayRoutine) -> str:
    lines = []

    lines.append("=" * 60)
    lines.append(f"REST DAY ROUTINE ({routine.variant})")
    lines.append("=" * 60)

    if not routine.exercises:
        lines.append("\nNo rehab exercises for the active conditions.")

    for i, ex in enumerate(routine.exercises, 1):
        lines.append(f"\n{i}. {ex.name}")
        lines.append(f"   {ex.sets} x {ex.reps} ({ex.duration}), {ex.intensity}")
        if ex.notes:
            lines.append(f"   {ex.notes}")

    lines.append(f"\nEstimated time: {routine.total_minutes} min")
    lines.append("=" * 60)
    return "\n".join(lines)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Path to ironplan.yaml')
@click.pass_context
def cli(ctx, verbose: bool, config_path: Optional[Path]):
    """
    Ironplan - Strength Program Generator

    SKYNET-PLANNER: Your week, decided.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    ctx.ensure_object(dict)
    ctx.obj['settings'] = Settings.from_yaml(config_path)
    ctx.obj['config_path'] = config_path


@cli.command()
@click.option('--profile', 'profile_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='User profile YAML')
@click.option('--catalog', 'catalog_path', type=click.Path(exists=True, dir_okay=False),
              help='Exercise catalog YAML')
@click.option('--from-graph', is_flag=True, help='Load the catalog from Neo4j instead of a file')
@click.option('--exclude', type=int, multiple=True, help='Exercise id to avoid (repeatable)')
@click.option('--seed', type=int, help='Random seed for reproducible programs')
@click.option('--json', 'as_json', is_flag=True, help='Print the program as JSON')
@click.pass_context
def generate(ctx, profile_path: str, catalog_path: Optional[str], from_graph: bool,
             exclude: Tuple[int, ...], seed: Optional[int], as_json: bool):
    """Generate a weekly training program."""
    if not catalog_path and not from_graph:
        raise click.UsageError("Provide --catalog FILE or --from-graph")

    try:
        if from_graph:
            with IronplanGraph(ctx.obj['config_path']) as graph:
                if not graph.verify_connectivity():
                    click.echo("❌ Could not connect to the exercise graph")
                    ctx.exit(1)
                catalog = ExerciseCatalog.from_graph(graph)
        else:
            catalog = ExerciseCatalog.from_yaml(catalog_path)

        program_input = load_profile(profile_path, exclude)
    except (CatalogError, ValueError, OSError) as e:
        click.echo(f"❌ Error loading inputs: {e}")
        ctx.exit(1)

    rng = random.Random(seed) if seed is not None else None
    program = generate_program(program_input, catalog, ctx.obj['settings'], rng)

    if as_json:
        click.echo(json.dumps(program.to_dict(), indent=2))
    else:
        click.echo(format_program_text(program, catalog))


@cli.command('rest-day')
@click.option('--protocols', 'protocols_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Rehab protocol library YAML')
@click.option('--profile', 'profile_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='User profile YAML')
@click.option('--variant', type=click.Choice(['upper', 'lower', 'all']), default='all',
              help='Body zones to cover')
@click.option('--accent', type=click.Choice(ZONE_CHOICES), multiple=True,
              help='Zone with current pain, given reserved slots (repeatable)')
@click.option('--history', 'history_path', type=click.Path(dir_okay=False),
              help='JSON file holding rehab exercise history')
@click.option('--record', is_flag=True, help='Record the selected exercises as done')
@click.option('--json', 'as_json', is_flag=True, help='Print the routine as JSON')
@click.pass_context
def rest_day(ctx, protocols_path: str, profile_path: str, variant: str, accent: Tuple[str, ...],
             history_path: Optional[str], record: bool, as_json: bool):
    """Generate a rest-day rehab routine."""
    try:
        protocols = load_protocols(protocols_path)
        program_input = load_profile(profile_path)
    except (CatalogError, ValueError, OSError) as e:
        click.echo(f"❌ Error loading inputs: {e}")
        ctx.exit(1)

    settings = ctx.obj['settings']
    store = JsonFileStore(history_path) if history_path else InMemoryStore()
    selector = RehabRotationSelector(store, settings.rotation_max_count, settings.accent_slots)

    routine = generate_rest_day_routine(
        program_input.conditions,
        protocols,
        selector,
        variant=variant,
        accent_zones=[BodyZone(z) for z in accent],
    )

    if record:
        if not history_path:
            logger.warning("--record without --history: history is not persisted")
        selector.record_done(ex.name for ex in routine.exercises)

    if as_json:
        click.echo(json.dumps(routine.to_dict(), indent=2))
    else:
        click.echo(format_rest_day_text(routine))


@cli.command()
@click.argument('days', type=click.IntRange(min=1))
def split(days: int):
    """Show the split used for DAYS training days per week."""
    split_type = determine_split(days)
    click.echo(f"{days} days/week: {SPLIT_NAMES[split_type]} ({split_type.value})")


if __name__ == '__main__':
    cli()
