"""
Collaborator interfaces consumed by the core, plus in-memory versions.

The core never renders or stores anything itself; it drives these
surfaces. The in-memory implementations back the CLI and the tests.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable

from .exceptions import PositionUnavailableError
from .models import FormValues, Position, WorkoutRecord
from .rendering import ListEntry, build_list_entry

logger = logging.getLogger(__name__)

MapClickHandler = Callable[[Position], None]


@dataclass
class MarkerHandle:
    """Reference to a marker placed on the map."""
    position: Position
    popup_content: str
    style_class: str
    handle_id: str = field(default_factory=lambda: uuid.uuid4().hex)


@runtime_checkable
class MapView(Protocol):
    def center_on(self, position: Position, zoom_level: int) -> None:
        ...

    def on_map_clicked(self, handler: MapClickHandler) -> None:
        ...

    def add_marker(self, position: Position, popup_content: str, style_class: str) -> MarkerHandle:
        ...

    def remove_marker(self, handle: MarkerHandle) -> None:
        ...


@runtime_checkable
class ListView(Protocol):
    def render(self, record: WorkoutRecord) -> None:
        ...

    def clear_all(self) -> None:
        ...


@runtime_checkable
class FormView(Protocol):
    def show(self, values: Optional[FormValues] = None) -> None:
        ...

    def hide(self) -> None:
        ...


@runtime_checkable
class PositionProvider(Protocol):
    async def get_current_position(self) -> Position:
        """Raises PositionUnavailableError when no fix can be obtained."""
        ...


@runtime_checkable
class Notifier(Protocol):
    def notify(self, message: str) -> None:
        """Show a blocking notice to the user."""
        ...


class InMemoryMapView:
    """Map that keeps its markers in a dict keyed by handle id."""

    def __init__(self) -> None:
        self.markers: Dict[str, MarkerHandle] = {}
        self.center: Optional[Position] = None
        self.zoom_level: Optional[int] = None
        self.removed_count = 0
        self._click_handlers: List[MapClickHandler] = []

    def center_on(self, position: Position, zoom_level: int) -> None:
        self.center = Position(*position)
        self.zoom_level = zoom_level

    def on_map_clicked(self, handler: MapClickHandler) -> None:
        self._click_handlers.append(handler)

    def click(self, position: Position) -> None:
        """Simulate a click on the map."""
        for handler in self._click_handlers:
            handler(Position(*position))

    def add_marker(self, position: Position, popup_content: str, style_class: str) -> MarkerHandle:
        handle = MarkerHandle(Position(*position), popup_content, style_class)
        self.markers[handle.handle_id] = handle
        return handle

    def remove_marker(self, handle: MarkerHandle) -> None:
        if self.markers.pop(handle.handle_id, None) is not None:
            self.removed_count += 1


class InMemoryListView:
    """
    List surface holding rendered entries.

    Each rendered entry is inserted directly below the form, so the most
    recently rendered workout is first.
    """

    def __init__(self) -> None:
        self.entries: List[ListEntry] = []
        self.render_count = 0

    def render(self, record: WorkoutRecord) -> None:
        self.entries.insert(0, build_list_entry(record))
        self.render_count += 1

    def clear_all(self) -> None:
        self.entries.clear()

    def entry_for(self, workout_id: str) -> ListEntry:
        for entry in self.entries:
            if entry.workout_id == workout_id:
                return entry
        raise KeyError(workout_id)


class InMemoryFormView:
    def __init__(self) -> None:
        self.visible = False
        self.values: Optional[FormValues] = None

    def show(self, values: Optional[FormValues] = None) -> None:
        self.visible = True
        if values is not None:
            self.values = values

    def hide(self) -> None:
        self.visible = False
        self.values = None


class RecordingNotifier:
    """Collects notices instead of displaying them."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def notify(self, message: str) -> None:
        logger.debug(f"Notice: {message}")
        self.messages.append(message)


class FixedPositionProvider:
    """Resolves to a preset position, or is unavailable when none is set."""

    def __init__(self, position: Optional[Position] = None, delay: float = 0.0):
        self.position = Position(*position) if position is not None else None
        self.delay = delay

    async def get_current_position(self) -> Position:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.position is None:
            raise PositionUnavailableError()
        return self.position
