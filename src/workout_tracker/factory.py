"""
Workout construction from raw input and from persisted snapshots.

All validation lives here; the store and the views only ever see
records that passed these rules.
"""

import logging
import math
import numbers
from datetime import datetime
from typing import Callable, List, Tuple

from .db.snapshot import SnapshotEntry
from .exceptions import ValidationError, ValidationReason
from .models import FormValues, Position, WorkoutRecord, WorkoutType, new_workout_id

logger = logging.getLogger(__name__)


def coerce_number(raw: object) -> float:
    """
    Turn a raw form value into a float.

    Blank text counts as zero, anything that cannot be read as a number
    becomes NaN so that it fails the finiteness check.
    """
    if isinstance(raw, bool) or raw is None:
        return math.nan
    if isinstance(raw, numbers.Real):
        try:
            return float(raw)
        except OverflowError:
            # Integers beyond float range
            return math.inf
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


class WorkoutFactory:
    """
    Validates raw numeric input and builds typed workout records.

    Args:
        clock: Returns the creation timestamp for new workouts.
        id_factory: Returns a fresh workout id.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_workout_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory

    @staticmethod
    def validate(
        workout_type: WorkoutType,
        raw_distance: object,
        raw_duration: object,
        raw_extra: object,
    ) -> Tuple[float, float, float]:
        """
        Parse and check the metrics for one workout.

        Every value must be finite. Distance and duration must be positive,
        and so must cadence for running. Elevation gain for cycling is only
        checked for finiteness.

        Returns:
            (distance_km, duration_min, extra) as floats

        Raises:
            ValidationError: NON_FINITE before NON_POSITIVE, naming the
                first offending field.
        """
        workout_type = WorkoutType(workout_type)
        values = [
            ("distance", coerce_number(raw_distance)),
            ("duration", coerce_number(raw_duration)),
            (workout_type.extra_field, coerce_number(raw_extra)),
        ]

        for name, value in values:
            if not math.isfinite(value):
                raise ValidationError(ValidationReason.NON_FINITE, field=name)

        must_be_positive = values if workout_type is WorkoutType.RUNNING else values[:2]
        for name, value in must_be_positive:
            if value <= 0:
                raise ValidationError(ValidationReason.NON_POSITIVE, field=name)

        return values[0][1], values[1][1], values[2][1]

    def _build(
        self,
        workout_type: WorkoutType,
        raw_distance: object,
        raw_duration: object,
        raw_extra: object,
        position: Position,
        workout_id: str,
        created_at: datetime,
        interaction_count: int = 0,
    ) -> WorkoutRecord:
        workout_type = WorkoutType(workout_type)
        distance, duration, extra = self.validate(
            workout_type, raw_distance, raw_duration, raw_extra
        )
        running = workout_type is WorkoutType.RUNNING
        return WorkoutRecord(
            id=workout_id,
            created_at=created_at,
            position=Position(*position),
            type=workout_type,
            distance_km=distance,
            duration_min=duration,
            cadence_spm=extra if running else None,
            elevation_gain_m=None if running else extra,
            interaction_count=interaction_count,
        )

    def create(
        self,
        workout_type: WorkoutType,
        raw_distance: object,
        raw_duration: object,
        raw_extra: object,
        position: Position,
    ) -> WorkoutRecord:
        """Build a new workout with a fresh id and creation time."""
        record = self._build(
            workout_type,
            raw_distance,
            raw_duration,
            raw_extra,
            position,
            workout_id=self._id_factory(),
            created_at=self._clock(),
        )
        logger.debug(f"Created {record.type.value} workout {record.id}")
        return record

    def create_from_form(self, values: FormValues, position: Position) -> WorkoutRecord:
        return self.create(values.type, values.distance, values.duration, values.extra, position)

    def revise(self, record: WorkoutRecord, values: FormValues) -> WorkoutRecord:
        """
        Build the replacement for an edited workout.

        Identity, creation time, position and interaction count carry over;
        type and metrics come from ``values``.
        """
        return self._build(
            values.type,
            values.distance,
            values.duration,
            values.extra,
            record.position,
            workout_id=record.id,
            created_at=record.created_at,
            interaction_count=record.interaction_count,
        )

    def restore(self, entry: SnapshotEntry) -> WorkoutRecord:
        """
        Rebuild a workout from a persisted snapshot entry.

        The id and creation date are taken verbatim. The stored description
        and derived metrics are ignored and recomputed.
        """
        extra = entry.cadence_spm if entry.type is WorkoutType.RUNNING else entry.elevation_gain_m
        return self._build(
            entry.type,
            entry.distance_km,
            entry.duration_min,
            extra,
            Position(*entry.position),
            workout_id=entry.id,
            created_at=entry.created_at,
            interaction_count=entry.interaction_count,
        )

    def restore_all(self, entries: List[SnapshotEntry]) -> List[WorkoutRecord]:
        return [self.restore(entry) for entry in entries]
