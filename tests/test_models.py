"""Tests for workout records."""

from datetime import datetime

import pytest

from workout_tracker.models import (
    FormValues,
    Position,
    WorkoutRecord,
    WorkoutType,
    describe,
)


def make_running(**overrides):
    fields = dict(
        id="r1",
        created_at=datetime(2024, 7, 4, 8, 0),
        position=Position(10.0, 20.0),
        type=WorkoutType.RUNNING,
        distance_km=5.0,
        duration_min=25.0,
        cadence_spm=150.0,
    )
    fields.update(overrides)
    return WorkoutRecord(**fields)


class TestDescribe:
    """Tests for the workout title."""

    def test_running_title(self):
        assert describe(WorkoutType.RUNNING, datetime(2024, 1, 5)) == "Running on January 5"

    def test_cycling_title(self):
        assert describe(WorkoutType.CYCLING, datetime(2023, 12, 31)) == "Cycling on December 31"


class TestWorkoutRecord:
    """Tests for WorkoutRecord invariants and derived fields."""

    def test_running_pace(self):
        """Pace is duration divided by distance."""
        record = make_running(distance_km=4.0, duration_min=22.0)
        assert record.pace_min_per_km == 22.0 / 4.0
        assert record.speed_km_per_h is None

    def test_cycling_speed(self):
        """Speed is distance over duration in hours."""
        record = make_running(
            type=WorkoutType.CYCLING, cadence_spm=None, elevation_gain_m=0.0,
            distance_km=30.0, duration_min=45.0,
        )
        assert record.speed_km_per_h == 30.0 / (45.0 / 60)
        assert record.pace_min_per_km is None

    def test_type_coerced_from_string(self):
        record = make_running(type="running")
        assert record.type is WorkoutType.RUNNING

    def test_position_coerced_from_list(self):
        record = make_running(position=[1.5, 2.5])
        assert record.position == Position(1.5, 2.5)

    def test_running_requires_cadence(self):
        with pytest.raises(ValueError):
            make_running(cadence_spm=None)

    def test_running_rejects_elevation(self):
        """A record may not carry both variant fields."""
        with pytest.raises(ValueError):
            make_running(elevation_gain_m=10.0)

    def test_cycling_requires_elevation(self):
        with pytest.raises(ValueError):
            make_running(type=WorkoutType.CYCLING)

    def test_description_follows_type(self):
        """Description is recomputed when the type changes."""
        record = make_running()
        assert record.description == "Running on July 4"
        record.type = WorkoutType.CYCLING
        assert record.description.startswith("Cycling on")

    def test_derived_fields_follow_metrics(self):
        record = make_running()
        record.distance_km = 10.0
        assert record.pace_min_per_km == 2.5

    def test_register_interaction(self):
        record = make_running()
        assert record.interaction_count == 0
        assert record.register_interaction() == 1
        assert record.register_interaction() == 2

    def test_to_form_values(self):
        values = make_running().to_form_values()
        assert values == FormValues(WorkoutType.RUNNING, 5.0, 25.0, 150.0)


class TestFormValues:
    """Tests for keyed form values."""

    def test_running_keys(self):
        values = FormValues("running", 5, 25, 150)
        assert values.to_dict() == {
            "type": "running", "distance": 5, "duration": 25, "cadence": 150,
        }

    def test_cycling_keys(self):
        values = FormValues(WorkoutType.CYCLING, 20, 60, 100)
        assert "elevation" in values.to_dict()
        assert "cadence" not in values.to_dict()
