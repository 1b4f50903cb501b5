"""
Keeps the map, the list and persisted storage in step with the store.

Every mutating operation follows the same order: the store is changed
first, then the views are re-derived from it, then the snapshot is
written. Edits and deletes redraw every marker and every list entry;
no per-row patching is attempted since an edit can change the workout
type and with it the marker style and list layout.
"""

import logging
from typing import List, Optional

from .db.snapshot import decode_snapshot, encode_snapshot
from .db.storage import KeyValueStorage
from .exceptions import DuplicateWorkoutError, SnapshotError, ValidationError
from .factory import WorkoutFactory
from .models import WorkoutRecord
from .rendering import marker_style, popup_content
from .store import WorkoutStore
from .views import ListView, MapView, MarkerHandle

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "workouts"


class SyncCoordinator:
    """
    Re-derives the dependent views of a single WorkoutStore.

    Args:
        store: The store whose contents the views mirror.
        list_view: List surface.
        storage: Byte store that receives the snapshot.
        storage_key: Key under which the snapshot lives.
        map_view: Map surface; may be attached later once a position is known.
    """

    def __init__(
        self,
        store: WorkoutStore,
        list_view: ListView,
        storage: KeyValueStorage,
        storage_key: str = DEFAULT_STORAGE_KEY,
        map_view: Optional[MapView] = None,
    ) -> None:
        self.store = store
        self.list_view = list_view
        self.storage = storage
        self.storage_key = storage_key
        self.map_view = map_view
        self._markers: List[MarkerHandle] = []

    @property
    def map_ready(self) -> bool:
        return self.map_view is not None

    @property
    def marker_count(self) -> int:
        return len(self._markers)

    def attach_map(self, map_view: MapView) -> None:
        """Start drawing markers, beginning with every workout already stored."""
        self.map_view = map_view
        self._redraw_markers()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def _render_marker(self, record: WorkoutRecord) -> None:
        if self.map_view is None:
            return
        handle = self.map_view.add_marker(
            record.position, popup_content(record), marker_style(record)
        )
        self._markers.append(handle)

    def _clear_markers(self) -> None:
        if self.map_view is not None:
            for handle in self._markers:
                self.map_view.remove_marker(handle)
        self._markers = []

    def _redraw_markers(self) -> None:
        self._clear_markers()
        for record in self.store.all():
            self._render_marker(record)
        logger.debug(f"Redrew {len(self._markers)} markers")

    def _redraw_list(self) -> None:
        self.list_view.clear_all()
        for record in self.store.all():
            self.list_view.render(record)
        logger.debug(f"Redrew {len(self.store)} list entries")

    def hydrate(self, records: List[WorkoutRecord]) -> None:
        """
        One-time startup rendering of loaded workouts, in stored order.

        The records must already be in the store. If the map came up
        before loading finished, its markers are redrawn from the store.
        """
        for record in records:
            self.list_view.render(record)
        if self.map_ready:
            self._redraw_markers()

    # ------------------------------------------------------------------
    # Mutation hooks
    # ------------------------------------------------------------------

    def after_create(self, record: WorkoutRecord) -> None:
        self._render_marker(record)
        self.list_view.render(record)
        self.persist()

    def after_edit(self, record: WorkoutRecord) -> None:
        logger.debug(f"Resyncing views after edit of {record.id}")
        self._redraw_markers()
        self._redraw_list()
        self.persist()

    def after_delete(self, record: WorkoutRecord) -> None:
        logger.debug(f"Resyncing views after delete of {record.id}")
        self._redraw_markers()
        self._redraw_list()
        self.persist()

    def after_delete_all(self) -> None:
        self.list_view.clear_all()
        self._clear_markers()
        self.storage.delete(self.storage_key)
        logger.info("Deleted persisted workouts")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def persist(self, store: Optional[WorkoutStore] = None) -> None:
        """Overwrite the snapshot with the full ordered store contents."""
        records = (store if store is not None else self.store).all()
        self.storage.write_bytes(self.storage_key, encode_snapshot(records))
        logger.info(f"Persisted {len(records)} workouts")

    def load_and_hydrate(self, factory: WorkoutFactory) -> List[WorkoutRecord]:
        """
        Read the snapshot and rebuild its workouts in stored order.

        A missing snapshot is a normal first run. A snapshot that cannot be
        decoded, holds invalid metrics or repeats an id is discarded the
        same way. Either case returns an empty list.
        """
        data = self.storage.read_bytes(self.storage_key)
        if data is None:
            logger.debug("No persisted workouts found")
            return []

        try:
            records = factory.restore_all(decode_snapshot(data))
            seen = set()
            for record in records:
                if record.id in seen:
                    raise DuplicateWorkoutError(record.id)
                seen.add(record.id)
        except (SnapshotError, ValidationError, DuplicateWorkoutError) as e:
            logger.warning(f"Ignoring unreadable workout snapshot: {e.message}")
            return []

        logger.info(f"Loaded {len(records)} workouts from storage")
        return records
