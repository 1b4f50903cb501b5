"""Edit-mode state: which workout is being edited and its prior values."""

import logging
from enum import Enum
from typing import Optional

from .exceptions import EditSessionError
from .factory import WorkoutFactory
from .models import FormValues, WorkoutRecord
from .store import WorkoutStore
from .sync import SyncCoordinator

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class EditSession:
    """
    Two-state machine: IDLE <-> EDITING.

    While editing, creating a workout is a no-op, and committing an edit
    is only possible while editing. The session holds the target id and a
    snapshot of its values, never the record itself.
    """

    def __init__(self) -> None:
        self.state = SessionState.IDLE
        self.target_id: Optional[str] = None
        self.prior: Optional[FormValues] = None

    @property
    def is_editing(self) -> bool:
        return self.state is SessionState.EDITING

    def begin_edit(self, record: WorkoutRecord) -> FormValues:
        """Capture the workout's current values for prefilling the form."""
        if self.is_editing:
            raise EditSessionError(f"Already editing workout {self.target_id}")
        self.state = SessionState.EDITING
        self.target_id = record.id
        self.prior = record.to_form_values()
        logger.debug(f"Editing workout {record.id}")
        return self.prior

    def _reset(self) -> None:
        self.state = SessionState.IDLE
        self.target_id = None
        self.prior = None

    def commit(
        self,
        values: FormValues,
        store: WorkoutStore,
        factory: WorkoutFactory,
        sync: SyncCoordinator,
    ) -> WorkoutRecord:
        """
        Apply ``values`` to the workout under edit.

        On success the store entry is replaced in place, the views are
        resynced and the session returns to IDLE. A ValidationError leaves
        the session EDITING and nothing mutated.
        """
        if not self.is_editing:
            raise EditSessionError()

        current = store.find_by_id(self.target_id)
        revised = factory.revise(current, values)
        store.replace(self.target_id, revised)
        sync.after_edit(revised)
        self._reset()
        logger.info(f"Committed edit of workout {revised.id}")
        return revised

    def cancel(self) -> None:
        if not self.is_editing:
            raise EditSessionError()
        logger.debug(f"Cancelled edit of workout {self.target_id}")
        self._reset()
