"""Tests for data models."""

from datetime import datetime
from uuid import UUID

import pytest

from workout_creator.config import get_settings
from workout_creator.errors import CorruptEncodingError
from workout_creator.models.training_method import MethodType, RestPause, Standard, Timed
from workout_creator.models.workout import (
    Exercise,
    ExerciseItem,
    Interval,
    Tempo,
    Workout,
    effort_description,
    same_contents,
    same_identity,
)


class TestExercise:
    """Tests for Exercise model."""

    def test_defaults(self):
        """Test a new exercise's default values."""
        exercise = Exercise()

        assert exercise.effort == 7
        assert exercise.training_method == Standard(10, 10)
        assert exercise.name == "Unknown Exercise"
        assert exercise.tempo is None

    def test_from_item(self):
        """Test creating an exercise for a catalog item."""
        item = ExerciseItem("Squat")
        exercise = Exercise.from_item(item, Standard(5, 8), effort=9)

        assert exercise.name == "Squat"
        assert exercise.exercise_item is item
        assert exercise.training_method == Standard(5, 8)
        assert exercise.effort == 9

    def test_effort_validation(self):
        """Test effort outside 1-10 is rejected."""
        with pytest.raises(ValueError):
            Exercise(effort=11)

        exercise = Exercise()
        with pytest.raises(ValueError):
            exercise.set_effort(0)
        assert exercise.effort == 7

    def test_training_method_setter_keeps_inactive_values(self):
        """Test switching methods brings back earlier values."""
        exercise = Exercise()
        exercise.training_method = Standard(8, 12)
        exercise.training_method = Timed(45)

        assert exercise.training_method == Timed(45)
        assert exercise.switch_method(MethodType.STANDARD) == Standard(8, 12)
        assert exercise.training_method == Standard(8, 12)

    def test_clear_inactive_fields_setting(self, monkeypatch):
        """Test the configured default for clearing unused columns."""
        monkeypatch.setenv("WORKOUT_CREATOR_CLEAR_INACTIVE_FIELDS", "true")
        get_settings.cache_clear()

        exercise = Exercise()
        exercise.training_method = Standard(8, 12)
        exercise.training_method = Timed(45)

        assert exercise.switch_method("standard") == Standard(10, 10)

    def test_switch_to_unknown_method(self):
        """Test switching to an unknown type leaves the exercise unchanged."""
        exercise = Exercise.from_item(None, Timed(20))

        with pytest.raises(CorruptEncodingError):
            exercise.switch_method("bogus")
        assert exercise.training_method == Timed(20)

    def test_corrupt_method_type(self):
        """Test an unknown stored discriminator fails on access only."""
        exercise = Exercise(method_type="bogus")

        assert exercise.effort == 7
        with pytest.raises(CorruptEncodingError):
            exercise.training_method

    def test_to_dict_is_flat(self):
        """Test serialization uses the flat method columns."""
        exercise = Exercise.from_item(ExerciseItem("Dips"), RestPause(target_total=40))
        data = exercise.to_dict()

        assert data["method_type"] == "restPause"
        assert data["target_total"] == 40
        assert data["seconds"] == 30
        assert data["exercise_item"]["name"] == "Dips"

    def test_from_dict(self):
        """Test exercise deserialization."""
        data = {
            "id": "00000000-0000-0000-0000-000000000001",
            "exercise_item": {"name": "Row", "gif_url": "row.gif"},
            "method_type": "timed",
            "seconds": 40,
            "effort": 6,
            "tempo": {"eccentric": 3, "pause": 1, "concentric": 2},
        }
        exercise = Exercise.from_dict(data)

        assert exercise.id == UUID(int=1)
        assert exercise.name == "Row"
        assert exercise.exercise_item.gif_url == "row.gif"
        assert exercise.training_method == Timed(40)
        assert exercise.tempo == Tempo.SLOW
        assert exercise.weight is None


class TestTempo:
    """Tests for Tempo."""

    def test_notation(self):
        """Test tempo notation strings."""
        assert Tempo(2, 1, 2).notation == "2-1-2"
        assert Tempo.SLOW.notation == "3-1-2"
        assert Tempo.EXPLOSIVE.notation == "2-0-X"

    def test_presets(self):
        """Test preset tempos."""
        assert Tempo.CONTROLLED == Tempo(2, 0, 1)
        assert Tempo.PAUSED == Tempo(eccentric=2, pause=3, concentric=1)


class TestEffort:
    """Tests for effort descriptions."""

    def test_descriptions(self):
        """Test the labels at both ends of the scale."""
        assert effort_description(1) == "Very Light"
        assert effort_description(7) == "Very Hard"
        assert effort_description(10) == "Maximum+"

    def test_out_of_range(self):
        """Test invalid levels are rejected."""
        with pytest.raises(ValueError):
            effort_description(0)


class TestIdentityAndEquality:
    """Tests for hashing, equality and the identity helpers."""

    def test_hash_follows_identity(self):
        """Test edited copies hash alike but compare unequal."""
        original = Exercise(effort=5)
        edited = Exercise(id=original.id, effort=9)

        assert hash(original) == hash(edited)
        assert original != edited
        assert same_identity(original, edited)
        assert not same_contents(original, edited)

    def test_same_contents_different_identity(self):
        """Test equal field values with different ids are not equal."""
        first = Interval(name="Core")
        second = Interval(name="Core")

        assert first != second
        assert not same_identity(first, second)

    def test_equal_when_unchanged(self):
        """Test an entity equals an unchanged copy of itself."""
        workout = Workout(name="Legs", date_and_time=datetime(2025, 1, 1))
        assert workout == workout.copy()
        assert same_contents(workout, workout.copy())

    def test_container_compares_child_counts_only(self):
        """Test containers ignore the contents of their children."""
        shared_id = UUID(int=7)
        first = Interval(id=shared_id, exercises=[Exercise(effort=3)])
        second = Interval(id=shared_id, exercises=[Exercise(effort=9)])
        third = Interval(id=shared_id, exercises=[Exercise(), Exercise()])

        assert first == second
        assert first != third

    def test_workout_interval_count(self):
        """Test adding an interval changes workout equality."""
        workout = Workout(date_and_time=datetime(2025, 1, 1))
        edited = workout.copy()
        edited.append_interval(Interval())

        assert workout != edited
        assert same_identity(workout, edited)

    def test_identity_requires_same_type(self):
        """Test entities of different kinds never share identity."""
        shared_id = UUID(int=3)
        assert not same_identity(Interval(id=shared_id), Exercise(id=shared_id))

    def test_identity_requires_an_id(self):
        """Test objects without ids never share identity."""
        assert not same_identity(1, 2)
        assert not same_identity(None, None)
        assert not same_identity(object(), object())


class TestOrdering:
    """Tests for default sort orders."""

    def test_workouts_most_recent_first(self):
        """Test workouts sort by date descending."""
        jan2 = Workout(name="Jan 2", date_and_time=datetime(2025, 1, 2))
        jan5 = Workout(name="Jan 5", date_and_time=datetime(2025, 1, 5))
        jan1 = Workout(name="Jan 1", date_and_time=datetime(2025, 1, 1))

        assert [w.name for w in sorted([jan2, jan5, jan1])] == ["Jan 5", "Jan 2", "Jan 1"]

    def test_intervals_by_name_unnamed_last(self):
        """Test intervals sort by name with unnamed ones last by id."""
        unnamed_b = Interval(id=UUID(int=2))
        core = Interval(name="Core")
        unnamed_a = Interval(id=UUID(int=1))
        arms = Interval(name="Arms")

        result = sorted([unnamed_b, core, unnamed_a, arms])

        assert result == [arms, core, unnamed_a, unnamed_b]

    def test_exercises_by_effort_then_name(self):
        """Test exercises sort by effort descending, then name."""
        easy = Exercise.from_item(ExerciseItem("Alpha"), effort=5)
        hard_z = Exercise.from_item(ExerciseItem("Zulu"), effort=9)
        hard_b = Exercise.from_item(ExerciseItem("Bravo"), effort=9)

        assert [ex.name for ex in sorted([easy, hard_z, hard_b])] == ["Bravo", "Zulu", "Alpha"]


class TestInterval:
    """Tests for Interval model."""

    def test_defaults(self):
        """Test a new interval's default values."""
        interval = Interval()

        assert interval.name is None
        assert interval.rounds == 1
        assert interval.exercises == []

    def test_rounds_validation(self):
        """Test rounds below 1 are rejected."""
        with pytest.raises(ValueError):
            Interval(rounds=0)

        interval = Interval()
        with pytest.raises(ValueError):
            interval.set_rounds(0)
        interval.set_rounds(4)
        assert interval.rounds == 4

    def test_exercise_lookup_and_removal(self):
        """Test owned exercises are found and removed by id."""
        bench = Exercise.from_item(ExerciseItem("Bench"))
        row = Exercise.from_item(ExerciseItem("Row"))
        interval = Interval(exercises=[bench])
        interval.append_exercise(row)

        assert interval.exercise(row.id) is row
        assert interval.remove_exercise(bench.id) is bench
        assert interval.exercises == [row]

        with pytest.raises(KeyError):
            interval.remove_exercise(bench.id)


class TestWorkout:
    """Tests for Workout model."""

    def test_defaults(self):
        """Test a new workout's default values."""
        workout = Workout()

        assert workout.name == "Untitled Workout"
        assert workout.total_duration == 0
        assert workout.intervals == []

    def test_exercises_in_interval_order(self, sample_workout):
        """Test the flattened exercise list."""
        assert [ex.name for ex in sample_workout.exercises] == ["Bench Press", "Plank", "Pull-ups"]

    def test_remove_interval(self, sample_workout):
        """Test removing an interval takes its exercises with it."""
        main = sample_workout.intervals[0]
        sample_workout.remove_interval(main.id)

        assert [ex.name for ex in sample_workout.exercises] == ["Pull-ups"]
        with pytest.raises(KeyError):
            sample_workout.interval(main.id)

    def test_copy(self, sample_workout):
        """Test copies are independent but share catalog items."""
        edited = sample_workout.copy()
        edited.intervals[0].set_name("Renamed")
        edited.exercises[0].training_method = Timed(30)

        assert sample_workout.intervals[0].name == "Main Set"
        assert sample_workout.exercises[0].training_method == Standard(8, 12)
        assert edited.exercises[0].exercise_item is sample_workout.exercises[0].exercise_item
        assert same_identity(edited.intervals[0], sample_workout.intervals[0])

    def test_dict_round_trip(self, sample_workout):
        """Test workout serialization."""
        restored = Workout.from_dict(sample_workout.to_dict())

        assert restored == sample_workout
        assert [i.name for i in restored.intervals] == ["Main Set", None]
        assert restored.exercises[0].tempo == Tempo.SLOW
        assert restored.exercises[0].weight == 60.0
        assert restored.exercises[2].training_method == RestPause(target_total=40)

    def test_summary(self, sample_workout):
        """Test the text summary."""
        summary = sample_workout.get_summary()

        assert "Workout: Push Day" in summary
        assert "Main Set - 3 round(s)" in summary
        assert "Interval 2" in summary
        assert "Bench Press: 8-12 reps, effort 8" in summary
        assert "Plank: 45s" in summary

    def test_summary_with_corrupt_method(self):
        """Test the summary survives an unknown method type."""
        workout = Workout(intervals=[Interval(exercises=[Exercise(method_type="bogus")])])

        assert "unknown method 'bogus'" in workout.get_summary()

    def test_make_example(self):
        """Test the sample workout."""
        workout = Workout.make_example()

        assert workout.name == "Full Body Circuit"
        assert len(workout.intervals) == 5
        assert workout.intervals[0].name == "Upper Body Circuit"
        assert workout.intervals[1].exercises[0].training_method == Timed(60)
        assert workout.intervals[2].exercises[0].training_method == RestPause(
            target_total=50, min_reps=8, max_reps=12
        )
        assert workout.intervals[3].name is None
