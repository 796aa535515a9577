"""Sample workout command."""

import click

from ..db import WorkoutStore, get_db_path
from ..models.workout import Workout
from .base import async_command, echo_error, echo_success, ensure_initialized


@click.command()
@click.option("--name", "-n", help="Name for the sample workout")
@click.pass_context
@async_command
async def example(ctx, name: str | None):
    """Add the sample "Full Body Circuit" workout."""
    ensure_initialized(ctx)
    store = WorkoutStore(get_db_path())

    workout = Workout.make_example()
    if name:
        workout.set_name(name)

    store.insert(workout)
    if not await store.save():
        echo_error(f"Could not save workout: {store.last_error}")
        ctx.exit(1)

    echo_success(f"Added workout '{workout.name}' ({str(workout.id)[:8]})")
