"""Workout tracking with map, list and storage kept in sync."""

from workout_tracker.app import ApplicationState, WorkoutTracker, build_storage
from workout_tracker.config import Settings, get_settings
from workout_tracker.db import FileStorage, MemoryStorage, SQLiteStorage
from workout_tracker.exceptions import (
    DuplicateWorkoutError,
    EditSessionError,
    PositionUnavailableError,
    SnapshotError,
    ValidationError,
    ValidationReason,
    WorkoutNotFoundError,
    WorkoutTrackerError,
)
from workout_tracker.factory import WorkoutFactory
from workout_tracker.models import FormValues, Position, WorkoutRecord, WorkoutType
from workout_tracker.session import EditSession, SessionState
from workout_tracker.store import WorkoutStore
from workout_tracker.sync import SyncCoordinator

__version__ = "0.1.0"

__all__ = [
    "ApplicationState",
    "WorkoutTracker",
    "build_storage",
    "Settings",
    "get_settings",
    "FileStorage",
    "MemoryStorage",
    "SQLiteStorage",
    "DuplicateWorkoutError",
    "EditSessionError",
    "PositionUnavailableError",
    "SnapshotError",
    "ValidationError",
    "ValidationReason",
    "WorkoutNotFoundError",
    "WorkoutTrackerError",
    "WorkoutFactory",
    "FormValues",
    "Position",
    "WorkoutRecord",
    "WorkoutType",
    "EditSession",
    "SessionState",
    "WorkoutStore",
    "SyncCoordinator",
]
