"""
Application controller.

WorkoutTracker owns one ApplicationState and routes events from the
form, list and map surfaces into the factory, store, edit session and
sync coordinator. Each handler runs to completion before the next.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .config import Settings, get_settings
from .db.storage import FileStorage, KeyValueStorage, MemoryStorage, SQLiteStorage
from .exceptions import PositionUnavailableError, ValidationError
from .factory import WorkoutFactory
from .models import FormValues, Position, WorkoutRecord
from .session import EditSession
from .store import WorkoutStore
from .sync import SyncCoordinator
from .views import FormView, ListView, MapView, Notifier, PositionProvider

logger = logging.getLogger(__name__)

NO_POSITION_NOTICE = "Click on the map to choose where the workout took place"


@dataclass
class ApplicationState:
    """All mutable state of a running tracker."""
    store: WorkoutStore = field(default_factory=WorkoutStore)
    session: EditSession = field(default_factory=EditSession)
    pending_position: Optional[Position] = None
    locating: bool = False


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the byte store selected by ``settings.storage_backend``."""
    if settings.storage_backend == "memory":
        return MemoryStorage()
    if settings.storage_backend == "sqlite":
        return SQLiteStorage(str(settings.storage_path))
    return FileStorage(settings.storage_path)


class WorkoutTracker:
    """
    Coordinates workout creation, editing and deletion across views.

    Args:
        list_view: Surface listing the workouts.
        form_view: Input form for creating and editing.
        notifier: Shows blocking notices.
        storage: Byte store for the snapshot.
        position_provider: Source of the user's current position.
        factory: Builds workout records; a default one is created if omitted.
        settings: Defaults to the cached application settings.
    """

    def __init__(
        self,
        list_view: ListView,
        form_view: FormView,
        notifier: Notifier,
        storage: KeyValueStorage,
        position_provider: Optional[PositionProvider] = None,
        factory: Optional[WorkoutFactory] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.state = ApplicationState()
        self.factory = factory or WorkoutFactory()
        self.form_view = form_view
        self.notifier = notifier
        self.position_provider = position_provider
        self.sync = SyncCoordinator(
            self.state.store,
            list_view,
            storage,
            storage_key=self.settings.storage_key,
        )

    @property
    def store(self) -> WorkoutStore:
        return self.state.store

    @property
    def session(self) -> EditSession:
        return self.state.session

    @property
    def workouts(self) -> Sequence[WorkoutRecord]:
        return self.state.store.all()

    # ------------------------------------------------------------------
    # Startup
    # ------------------------------------------------------------------

    def start(self) -> List[WorkoutRecord]:
        """Populate the store from storage and render the loaded workouts once."""
        records = self.sync.load_and_hydrate(self.factory)
        for record in records:
            self.store.add(record)
        self.sync.hydrate(records)
        return records

    async def locate(self, map_view: MapView) -> Optional[Position]:
        """
        Resolve the current position and bring up the map.

        Only one request may be outstanding; further calls while locating,
        or once the map is up, return None. On failure the user is notified
        and map features stay disabled.
        """
        if self.position_provider is None or self.state.locating or self.sync.map_ready:
            return None

        self.state.locating = True
        try:
            position = await self.position_provider.get_current_position()
        except PositionUnavailableError as e:
            logger.warning(f"Position unavailable: {e.message}")
            self.notifier.notify(e.message)
            return None
        finally:
            self.state.locating = False

        map_view.center_on(position, self.settings.map_zoom_level)
        map_view.on_map_clicked(self.handle_map_click)
        self.sync.attach_map(map_view)
        return position

    # ------------------------------------------------------------------
    # Form and map events
    # ------------------------------------------------------------------

    def handle_map_click(self, position: Position) -> None:
        self.state.pending_position = Position(*position)
        self.form_view.show()

    def handle_submit(self, values: FormValues) -> Optional[WorkoutRecord]:
        """Route a form submission to create or edit, depending on mode."""
        if self.session.is_editing:
            return self.commit_edit(values)
        return self.create_workout(values)

    def create_workout(self, values: FormValues) -> Optional[WorkoutRecord]:
        """Create a workout at the last clicked map position."""
        if self.session.is_editing:
            logger.debug("Ignoring create request while editing")
            return None

        position = self.state.pending_position
        if position is None:
            self.notifier.notify(NO_POSITION_NOTICE)
            return None

        try:
            record = self.factory.create_from_form(values, position)
        except ValidationError as e:
            self.notifier.notify(e.message)
            return None

        self.store.add(record)
        self.sync.after_create(record)
        self.state.pending_position = None
        self.form_view.hide()
        return record

    # ------------------------------------------------------------------
    # List events
    # ------------------------------------------------------------------

    def request_edit(self, workout_id: str) -> Optional[FormValues]:
        """Enter edit mode for a workout and prefill the form."""
        if self.session.is_editing:
            logger.debug(f"Ignoring edit request for {workout_id}: edit in progress")
            return None
        record = self.store.find_by_id(workout_id)
        prior = self.session.begin_edit(record)
        self.form_view.show(prior)
        return prior

    def commit_edit(self, values: FormValues) -> Optional[WorkoutRecord]:
        if not self.session.is_editing:
            logger.debug("Ignoring edit submission outside edit mode")
            return None
        try:
            revised = self.session.commit(values, self.store, self.factory, self.sync)
        except ValidationError as e:
            self.notifier.notify(e.message)
            return None
        self.form_view.hide()
        return revised

    def cancel_edit(self) -> None:
        if self.session.is_editing:
            self.session.cancel()
            self.form_view.hide()

    def _end_edit_of(self, workout_id: Optional[str] = None) -> None:
        if self.session.is_editing and workout_id in (None, self.session.target_id):
            self.cancel_edit()

    def delete_workout(self, workout_id: str) -> WorkoutRecord:
        """Remove a workout. Raises WorkoutNotFoundError before touching any view."""
        record = self.store.remove(workout_id)
        self._end_edit_of(workout_id)
        self.sync.after_delete(record)
        return record

    def delete_all(self) -> None:
        self.store.clear()
        self._end_edit_of()
        self.sync.after_delete_all()

    def select_workout(self, workout_id: str) -> Optional[WorkoutRecord]:
        """Pan the map to a workout and count the interaction."""
        if not self.sync.map_ready:
            return None
        record = self.store.find_by_id(workout_id)
        self.sync.map_view.center_on(record.position, self.settings.map_zoom_level)
        record.register_interaction()
        return record

    def reset(self) -> None:
        """Drop persisted data and return to a blank state."""
        self.delete_all()
        self.state.pending_position = None
        self.form_view.hide()
        logger.info("Tracker reset")
