"""Shared fixtures for workout tracker tests."""

import itertools
from datetime import datetime

import pytest

from workout_tracker.app import WorkoutTracker
from workout_tracker.config import Settings
from workout_tracker.db.storage import MemoryStorage
from workout_tracker.factory import WorkoutFactory
from workout_tracker.models import FormValues, Position, WorkoutType
from workout_tracker.store import WorkoutStore
from workout_tracker.sync import SyncCoordinator
from workout_tracker.views import (
    FixedPositionProvider,
    InMemoryFormView,
    InMemoryListView,
    InMemoryMapView,
    RecordingNotifier,
)


FIXED_NOW = datetime(2024, 3, 15, 9, 30)
HOME = Position(10.0, 20.0)


@pytest.fixture
def factory():
    """Factory with a fixed clock and sequential ids."""
    counter = itertools.count(1)
    return WorkoutFactory(clock=lambda: FIXED_NOW, id_factory=lambda: f"w{next(counter)}")


@pytest.fixture
def settings():
    return Settings(_env_file=None, storage_backend="memory")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store():
    return WorkoutStore()


@pytest.fixture
def list_view():
    return InMemoryListView()


@pytest.fixture
def map_view():
    return InMemoryMapView()


@pytest.fixture
def form_view():
    return InMemoryFormView()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def sync(store, list_view, storage, map_view):
    return SyncCoordinator(store, list_view, storage, map_view=map_view)


@pytest.fixture
def tracker(list_view, form_view, notifier, storage, factory, settings):
    """A started tracker with no map yet."""
    app = WorkoutTracker(
        list_view=list_view,
        form_view=form_view,
        notifier=notifier,
        storage=storage,
        position_provider=FixedPositionProvider(HOME),
        factory=factory,
        settings=settings,
    )
    app.start()
    return app


@pytest.fixture
def running_values():
    return FormValues(type=WorkoutType.RUNNING, distance=5, duration=25, extra=150)


@pytest.fixture
def cycling_values():
    return FormValues(type=WorkoutType.CYCLING, distance=20, duration=60, extra=100)
