"""Workout store: the persistence surface used by the app.

The store keeps the loaded workouts in memory. ``insert`` and ``delete``
change that working set right away; nothing reaches the database until
``save`` writes every pending change in a single transaction.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable
from uuid import UUID

import aiosqlite
from loguru import logger

from ..errors import PersistenceIOError
from ..models.training_method import MethodType
from ..models.workout import Exercise, ExerciseItem, Interval, Tempo, Workout
from .engine import get_db_path

STORAGE_ERRORS = (aiosqlite.Error, OSError)
ROW_ERRORS = (ValueError, TypeError)


class WorkoutStore:
    """Store for workouts and the intervals and exercises they own."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()
        self.last_error: PersistenceIOError | None = None
        self._workouts: dict[UUID, Workout] = {}
        self._pending_deletes: set[UUID] = set()
        self._items: dict[UUID, ExerciseItem] = {}
        self._loaded = False

    async def fetch_all(
        self,
        key: Callable[[Workout], Any] | None = None,
        reverse: bool = False,
    ) -> list[Workout]:
        """Get all workouts, most recent first unless ``key`` says otherwise.

        Storage failures are logged and recorded in ``last_error``; the
        result is then an empty list. Workouts with unreadable rows are
        skipped and logged.
        """
        if not await self._ensure_loaded():
            return []

        workouts = list(self._workouts.values())
        if key is None:
            return sorted(workouts, reverse=reverse)
        return sorted(workouts, key=key, reverse=reverse)

    async def get(self, workout_id: UUID) -> Workout | None:
        """Get a workout by ID."""
        if not await self._ensure_loaded():
            return None
        return self._workouts.get(workout_id)

    async def fetch_intervals(self) -> list[Interval]:
        """Get every interval reachable from the stored workouts."""
        if not await self._ensure_loaded():
            return []
        return [interval for w in self._workouts.values() for interval in w.intervals]

    async def fetch_exercises(self) -> list[Exercise]:
        """Get every exercise reachable from the stored workouts."""
        if not await self._ensure_loaded():
            return []
        return [ex for w in self._workouts.values() for ex in w.exercises]

    def insert(self, workout: Workout) -> None:
        """Add a workout (or replace the one with the same ID) until the next save."""
        self._pending_deletes.discard(workout.id)
        self._workouts[workout.id] = workout
        logger.debug(f"Inserted workout {workout.id} ({workout.name})")

    def delete(self, workout: Workout) -> None:
        """Delete a workout together with its intervals and exercises.

        The workout disappears from the store immediately; its rows are
        removed on the next save.
        """
        self._workouts.pop(workout.id, None)
        self._pending_deletes.add(workout.id)
        logger.debug(f"Deleted workout {workout.id} ({workout.name})")

    async def save(self) -> bool:
        """Write all pending changes.

        Returns:
            True on success. On failure the error is logged and kept in
            ``last_error``; in-memory changes stay as they are.
        """
        deleted = len(self._pending_deletes)
        try:
            async with aiosqlite.connect(self.db_path) as db:
                await db.execute("PRAGMA foreign_keys = ON")

                for workout_id in self._pending_deletes.union(self._workouts):
                    await self._delete_subtree(db, workout_id)

                for workout in self._workouts.values():
                    await self._write_workout(db, workout)

                await db.commit()
        except STORAGE_ERRORS as e:
            self._record_error("save", e)
            return False

        self._pending_deletes.clear()
        self.last_error = None
        logger.info(f"Saved {len(self._workouts)} workout(s), deleted {deleted}")
        return True

    async def _ensure_loaded(self) -> bool:
        if self._loaded:
            return True

        try:
            workouts = await self._load_workouts()
        except STORAGE_ERRORS as e:
            self._record_error("fetch", e)
            return False

        for workout in workouts:
            # Unsaved inserts and deletes win over what is on disk
            if workout.id in self._pending_deletes:
                continue
            self._workouts.setdefault(workout.id, workout)

        self._loaded = True
        logger.debug(f"Loaded {len(workouts)} workout(s) from {self.db_path}")
        return True

    def _record_error(self, operation: str, cause: BaseException) -> None:
        self.last_error = PersistenceIOError(operation, cause)
        logger.error(str(self.last_error))

    async def _load_workouts(self) -> list[Workout]:
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row

            cursor = await db.execute(
                """
                SELECT e.*, i.name AS item_name, i.gif_url AS item_gif_url
                FROM exercises e
                LEFT JOIN exercise_items i ON i.id = e.exercise_item_id
                ORDER BY e.interval_id, e.position
                """
            )
            exercises: dict[str, list[Exercise]] = {}
            broken_intervals: dict[str, str] = {}
            for row in await cursor.fetchall():
                try:
                    exercise = self._row_to_exercise(row)
                except ROW_ERRORS as e:
                    broken_intervals.setdefault(row["interval_id"], f"exercise {row['id']}: {e}")
                    continue
                exercises.setdefault(row["interval_id"], []).append(exercise)

            cursor = await db.execute(
                "SELECT * FROM intervals ORDER BY workout_id, position"
            )
            intervals: dict[str, list[Interval]] = {}
            broken_workouts: dict[str, str] = {}
            for row in await cursor.fetchall():
                try:
                    if row["id"] in broken_intervals:
                        raise ValueError(broken_intervals[row["id"]])
                    interval = self._row_to_interval(row, exercises.get(row["id"], []))
                except ROW_ERRORS as e:
                    broken_workouts.setdefault(row["workout_id"], f"interval {row['id']}: {e}")
                    continue
                intervals.setdefault(row["workout_id"], []).append(interval)

            cursor = await db.execute("SELECT * FROM workouts")
            workouts = []
            for row in await cursor.fetchall():
                # A skipped workout is never registered, so save() leaves its rows alone
                try:
                    if row["id"] in broken_workouts:
                        raise ValueError(broken_workouts[row["id"]])
                    workouts.append(self._row_to_workout(row, intervals.get(row["id"], [])))
                except ROW_ERRORS as e:
                    logger.error(f"Skipping unreadable workout {row['id']}: {e}")
            return workouts

    async def _delete_subtree(self, db: aiosqlite.Connection, workout_id: UUID) -> None:
        key = str(workout_id)
        await db.execute(
            """
            DELETE FROM exercises WHERE interval_id IN
                (SELECT id FROM intervals WHERE workout_id = ?)
            """,
            (key,),
        )
        await db.execute("DELETE FROM intervals WHERE workout_id = ?", (key,))
        if workout_id in self._pending_deletes:
            await db.execute("DELETE FROM workouts WHERE id = ?", (key,))

    async def _write_workout(self, db: aiosqlite.Connection, workout: Workout) -> None:
        await db.execute(
            """
            INSERT INTO workouts (id, name, date_and_time, total_duration)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                date_and_time = excluded.date_and_time,
                total_duration = excluded.total_duration
            """,
            (
                str(workout.id),
                workout.name,
                workout.date_and_time.isoformat(),
                workout.total_duration,
            ),
        )

        for position, interval in enumerate(workout.intervals):
            await db.execute(
                """
                INSERT INTO intervals
                (id, workout_id, position, name, rounds, rest_between_rounds, rest_after_interval)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    str(interval.id),
                    str(workout.id),
                    position,
                    interval.name,
                    interval.rounds,
                    interval.rest_between_rounds,
                    interval.rest_after_interval,
                ),
            )

            for ex_position, exercise in enumerate(interval.exercises):
                if exercise.exercise_item is not None:
                    await self._write_item(db, exercise.exercise_item)
                await self._write_exercise(db, exercise, interval.id, ex_position)

    async def _write_item(self, db: aiosqlite.Connection, item: ExerciseItem) -> None:
        await db.execute(
            """
            INSERT INTO exercise_items (id, name, gif_url)
            VALUES (?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                gif_url = excluded.gif_url
            """,
            (str(item.id), item.name, item.gif_url),
        )

    async def _write_exercise(
        self,
        db: aiosqlite.Connection,
        exercise: Exercise,
        interval_id: UUID,
        position: int,
    ) -> None:
        tempo = exercise.tempo
        await db.execute(
            """
            INSERT INTO exercises
            (id, interval_id, position, exercise_item_id, method_type, min_reps,
             max_reps, target_total, seconds, effort, weight, rest_after,
             tempo_eccentric, tempo_pause, tempo_concentric, notes)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                str(exercise.id),
                str(interval_id),
                position,
                str(exercise.exercise_item.id) if exercise.exercise_item else None,
                exercise.method_type,
                exercise.min_reps,
                exercise.max_reps,
                exercise.target_total,
                exercise.seconds,
                exercise.effort,
                exercise.weight,
                exercise.rest_after,
                tempo.eccentric if tempo else None,
                tempo.pause if tempo else None,
                tempo.concentric if tempo else None,
                exercise.notes,
            ),
        )

    def _item_for_row(self, row: aiosqlite.Row) -> ExerciseItem | None:
        """Get the shared catalog item for an exercise row."""
        if row["exercise_item_id"] is None or row["item_name"] is None:
            return None
        item_id = UUID(row["exercise_item_id"])
        item = self._items.get(item_id)
        if item is None:
            item = ExerciseItem(id=item_id, name=row["item_name"], gif_url=row["item_gif_url"])
            self._items[item_id] = item
        return item

    def _row_to_exercise(self, row: aiosqlite.Row) -> Exercise:
        """Convert a database row to an Exercise."""
        if row["method_type"] not in {t.value for t in MethodType}:
            logger.warning(
                f"Exercise {row['id']} has unknown training method {row['method_type']!r}"
            )

        tempo = None
        if row["tempo_eccentric"] is not None:
            tempo = Tempo(
                eccentric=row["tempo_eccentric"],
                pause=row["tempo_pause"],
                concentric=row["tempo_concentric"],
            )

        return Exercise(
            id=UUID(row["id"]),
            exercise_item=self._item_for_row(row),
            method_type=row["method_type"],
            min_reps=row["min_reps"],
            max_reps=row["max_reps"],
            target_total=row["target_total"],
            seconds=row["seconds"],
            effort=row["effort"],
            weight=row["weight"],
            rest_after=row["rest_after"],
            tempo=tempo,
            notes=row["notes"],
        )

    def _row_to_interval(self, row: aiosqlite.Row, exercises: list[Exercise]) -> Interval:
        """Convert a database row to an Interval."""
        return Interval(
            id=UUID(row["id"]),
            name=row["name"],
            exercises=exercises,
            rounds=row["rounds"],
            rest_between_rounds=row["rest_between_rounds"],
            rest_after_interval=row["rest_after_interval"],
        )

    def _row_to_workout(self, row: aiosqlite.Row, intervals: list[Interval]) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=UUID(row["id"]),
            name=row["name"],
            date_and_time=datetime.fromisoformat(row["date_and_time"]),
            total_duration=row["total_duration"],
            intervals=intervals,
        )
