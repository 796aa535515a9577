"""Workout management commands."""

import json

import click

from ..db import WorkoutStore, get_db_path
from .base import (
    async_command,
    echo_error,
    echo_info,
    echo_success,
    ensure_initialized,
    find_workout,
    format_table,
)


@click.group()
@click.pass_context
def workouts(ctx):
    """Manage saved workouts.

    Commands for listing, viewing, and deleting workouts. WORKOUT_ID accepts
    a full ID or any unique prefix of it.
    """
    ensure_initialized(ctx)


@workouts.command(name="list")
@click.pass_context
@async_command
async def list_workouts(ctx):
    """List all workouts, most recent first."""
    store = WorkoutStore(get_db_path())

    all_workouts = await store.fetch_all()
    if store.last_error:
        echo_error(str(store.last_error))
        ctx.exit(1)

    if not all_workouts:
        echo_info("No workouts found. Add one with 'workout-creator example'")
        return

    headers = ["ID", "Name", "Date", "Intervals", "Exercises"]
    rows = []

    for workout in all_workouts:
        rows.append([
            str(workout.id)[:8],
            workout.name[:30] + "..." if len(workout.name) > 30 else workout.name,
            workout.date_and_time.strftime("%Y-%m-%d %H:%M"),
            str(len(workout.intervals)),
            str(len(workout.exercises)),
        ])

    click.echo()
    click.echo(format_table(headers, rows))
    click.echo()
    click.echo(f"Total: {len(all_workouts)} workout(s)")


@workouts.command()
@click.argument("workout_id")
@click.option("--json", "as_json", is_flag=True, help="Print the stored layout as JSON")
@click.pass_context
@async_command
async def show(ctx, workout_id: str, as_json: bool):
    """Show details of a specific workout."""
    store = WorkoutStore(get_db_path())

    workout = await find_workout(store, workout_id)
    if not workout:
        echo_error(f"Workout {workout_id} not found")
        ctx.exit(1)

    if as_json:
        click.echo(json.dumps(workout.to_dict(), indent=2))
        return

    click.echo()
    click.echo(workout.get_summary())


@workouts.command()
@click.argument("workout_id")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation")
@click.pass_context
@async_command
async def delete(ctx, workout_id: str, force: bool):
    """Delete a workout with all its intervals and exercises."""
    store = WorkoutStore(get_db_path())

    workout = await find_workout(store, workout_id)
    if not workout:
        echo_error(f"Workout {workout_id} not found")
        ctx.exit(1)

    if not force:
        click.echo(f"Workout: {workout.name}")
        if not click.confirm("Are you sure you want to delete this workout?"):
            echo_info("Cancelled")
            return

    store.delete(workout)
    if not await store.save():
        echo_error(f"Could not delete workout: {store.last_error}")
        ctx.exit(1)

    echo_success(f"Workout {workout.name} deleted")
