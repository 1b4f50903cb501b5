"""Tests for SyncCoordinator view and storage synchronization."""

import json

import pytest

from workout_tracker.db.snapshot import encode_snapshot
from workout_tracker.models import FormValues, Position, WorkoutType
from workout_tracker.sync import SyncCoordinator
from workout_tracker.views import InMemoryMapView


def add(store, sync, record):
    store.add(record)
    sync.after_create(record)
    return record


@pytest.fixture
def two(factory, store, sync):
    return [
        add(store, sync, factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(10, 20))),
        add(store, sync, factory.create(WorkoutType.CYCLING, 20, 60, 100, Position(11, 21))),
    ]


def assert_in_sync(store, sync, list_view, map_view):
    assert len(list_view.entries) == len(store)
    assert sync.marker_count == len(store)
    assert len(map_view.markers) == len(store)


class TestAfterCreate:
    """Tests for incremental rendering on create."""

    def test_adds_one_marker_and_entry(self, two, store, sync, list_view, map_view):
        assert_in_sync(store, sync, list_view, map_view)
        assert map_view.removed_count == 0
        assert list_view.render_count == 2

    def test_marker_content(self, two, map_view):
        markers = list(map_view.markers.values())
        assert markers[0].position == Position(10, 20)
        assert markers[0].style_class == "running-popup"
        assert markers[0].popup_content.endswith("Running on March 15")
        assert markers[1].style_class == "cycling-popup"

    def test_newest_entry_first(self, two, list_view):
        assert [e.workout_id for e in list_view.entries] == [two[1].id, two[0].id]

    def test_persists_full_store(self, two, storage):
        entries = json.loads(storage.read_bytes("workouts"))
        assert [e["id"] for e in entries] == [r.id for r in two]


class TestAfterEdit:
    """Tests for full redraw after an edit."""

    def test_redraws_everything(self, two, store, sync, factory, list_view, map_view):
        revised = factory.revise(two[0], FormValues(WorkoutType.CYCLING, 10, 30, 50))
        store.replace(two[0].id, revised)
        sync.after_edit(revised)

        assert map_view.removed_count == 2
        assert list_view.render_count == 4
        assert_in_sync(store, sync, list_view, map_view)

    def test_marker_style_follows_type(self, two, store, sync, factory, map_view):
        revised = factory.revise(two[0], FormValues(WorkoutType.CYCLING, 10, 30, 50))
        store.replace(two[0].id, revised)
        sync.after_edit(revised)

        styles = sorted(m.style_class for m in map_view.markers.values())
        assert styles == ["cycling-popup", "cycling-popup"]

    def test_list_layout_follows_type(self, two, store, sync, factory, list_view):
        revised = factory.revise(two[0], FormValues(WorkoutType.CYCLING, 10, 30, 50))
        store.replace(two[0].id, revised)
        sync.after_edit(revised)

        entry = list_view.entry_for(two[0].id)
        assert entry.values() == {
            "distance": "10", "duration": "30", "speed": "20.0", "elevation": "50",
        }

    def test_snapshot_updated(self, two, store, sync, factory, storage):
        revised = factory.revise(two[0], FormValues(WorkoutType.CYCLING, 10, 30, 50))
        store.replace(two[0].id, revised)
        sync.after_edit(revised)

        first = json.loads(storage.read_bytes("workouts"))[0]
        assert first["id"] == two[0].id
        assert first["type"] == "cycling"
        assert "cadenceSpm" not in first


class TestAfterDelete:
    def test_redraws_survivors(self, two, store, sync, list_view, map_view, storage):
        removed = store.remove(two[0].id)
        sync.after_delete(removed)

        assert_in_sync(store, sync, list_view, map_view)
        assert map_view.removed_count == 2
        assert [e["id"] for e in json.loads(storage.read_bytes("workouts"))] == [two[1].id]

    def test_deleting_last_persists_empty_list(self, two, store, sync, storage):
        for record in two:
            sync.after_delete(store.remove(record.id))
        assert json.loads(storage.read_bytes("workouts")) == []


class TestAfterDeleteAll:
    """Tests for clearing every view."""

    def test_clears_views_and_storage(self, two, store, sync, list_view, map_view, storage):
        store.clear()
        sync.after_delete_all()

        assert_in_sync(store, sync, list_view, map_view)
        assert storage.read_bytes("workouts") is None

    def test_idempotent(self, two, store, sync, list_view, map_view, storage):
        """Deleting everything twice leaves the same empty state."""
        for _ in range(2):
            store.clear()
            sync.after_delete_all()
            assert len(store) == 0
            assert storage.read_bytes("workouts") is None
            assert_in_sync(store, sync, list_view, map_view)


class TestWithoutMap:
    """Views before a position has been acquired."""

    def test_list_and_storage_work_without_map(self, store, list_view, storage, factory):
        sync = SyncCoordinator(store, list_view, storage)
        record = factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(0, 0))
        store.add(record)
        sync.after_create(record)

        assert not sync.map_ready
        assert sync.marker_count == 0
        assert len(list_view.entries) == 1
        assert storage.read_bytes("workouts") is not None

    def test_attach_map_draws_existing(self, store, list_view, storage, factory):
        sync = SyncCoordinator(store, list_view, storage)
        for i in range(3):
            record = factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(i, i))
            store.add(record)
            sync.after_create(record)

        map_view = InMemoryMapView()
        sync.attach_map(map_view)

        assert sync.marker_count == 3
        assert [m.position for m in map_view.markers.values()] == [
            Position(0, 0), Position(1, 1), Position(2, 2),
        ]


class TestLoadAndHydrate:
    """Tests for startup loading."""

    def test_first_run(self, sync, factory):
        assert sync.load_and_hydrate(factory) == []

    def test_restores_in_order(self, sync, storage, factory):
        records = [
            factory.create(WorkoutType.CYCLING, 20, 60, 100, Position(0, 0)),
            factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(1, 1)),
        ]
        storage.write_bytes("workouts", encode_snapshot(records))

        loaded = sync.load_and_hydrate(factory)

        assert [r.id for r in loaded] == [r.id for r in records]
        assert loaded == records

    def test_does_not_touch_store_or_views(self, sync, storage, factory, store, list_view):
        record = factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(0, 0))
        storage.write_bytes("workouts", encode_snapshot([record]))

        sync.load_and_hydrate(factory)

        assert len(store) == 0
        assert list_view.entries == []

    @pytest.mark.parametrize("data", [
        b"garbage",
        b"null",
        b'[{"id": "a", "createdAt": "2024-01-01T00:00:00", "type": "running",'
        b' "position": [0, 0], "distanceKm": 0, "durationMin": 10, "cadenceSpm": 150}]',
    ])
    def test_corrupt_snapshot_is_empty(self, sync, storage, factory, data):
        storage.write_bytes("workouts", data)
        assert sync.load_and_hydrate(factory) == []

    def test_duplicate_ids_are_corrupt(self, sync, storage, factory):
        record = factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(0, 0))
        storage.write_bytes("workouts", encode_snapshot([record, record]))
        assert sync.load_and_hydrate(factory) == []

    def test_custom_storage_key(self, store, list_view, storage, factory):
        sync = SyncCoordinator(store, list_view, storage, storage_key="mine")
        record = factory.create(WorkoutType.RUNNING, 5, 25, 150, Position(0, 0))
        store.add(record)
        sync.after_create(record)

        assert storage.read_bytes("workouts") is None
        assert [r.id for r in sync.load_and_hydrate(factory)] == [record.id]
