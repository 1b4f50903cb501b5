"""In-memory workout collection: the single source of truth."""

import logging
from typing import Iterator, List, Sequence

from .exceptions import DuplicateWorkoutError, WorkoutNotFoundError
from .models import WorkoutRecord

logger = logging.getLogger(__name__)


class WorkoutStore:
    """
    Ordered sequence of workouts in creation order.

    Every lookup is a linear scan; collections are small.
    """

    def __init__(self) -> None:
        self._records: List[WorkoutRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[WorkoutRecord]:
        return iter(tuple(self._records))

    def __contains__(self, workout_id: str) -> bool:
        return any(record.id == workout_id for record in self._records)

    def _index_of(self, workout_id: str) -> int:
        for index, record in enumerate(self._records):
            if record.id == workout_id:
                return index
        raise WorkoutNotFoundError(workout_id)

    def add(self, record: WorkoutRecord) -> None:
        """Append a workout. Raises DuplicateWorkoutError if the id is taken."""
        if record.id in self:
            raise DuplicateWorkoutError(record.id)
        self._records.append(record)
        logger.info(f"Added {record.type.value} workout {record.id}")

    def find_by_id(self, workout_id: str) -> WorkoutRecord:
        """Raises WorkoutNotFoundError if absent."""
        return self._records[self._index_of(workout_id)]

    def replace(self, workout_id: str, record: WorkoutRecord) -> None:
        """
        Overwrite the workout with ``workout_id`` in place.

        The replacement keeps its slot in the sequence. Its id must either
        match ``workout_id`` or be unused by any other workout.
        """
        index = self._index_of(workout_id)
        if record.id != workout_id and record.id in self:
            raise DuplicateWorkoutError(record.id)
        self._records[index] = record
        logger.info(f"Replaced workout {workout_id}")

    def remove(self, workout_id: str) -> WorkoutRecord:
        """Remove and return a workout. Raises WorkoutNotFoundError if absent."""
        record = self._records.pop(self._index_of(workout_id))
        logger.info(f"Removed workout {workout_id}")
        return record

    def clear(self) -> None:
        self._records.clear()
        logger.info("Cleared all workouts")

    def all(self) -> Sequence[WorkoutRecord]:
        """Read-only ordered view of the workouts."""
        return tuple(self._records)
