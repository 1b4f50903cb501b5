"""Snapshot codec: the ordered workout list as field-named JSON."""

from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from ..exceptions import SnapshotError
from ..models import WorkoutRecord, WorkoutType


class SnapshotEntry(BaseModel):
    """One persisted workout, using camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., min_length=1)
    created_at: datetime
    type: WorkoutType
    position: Tuple[float, float]
    distance_km: float
    duration_min: float
    description: Optional[str] = None
    interaction_count: int = Field(default=0, ge=0)
    cadence_spm: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    pace_min_per_km: Optional[float] = None
    speed_km_per_h: Optional[float] = None

    @classmethod
    def from_record(cls, record: WorkoutRecord) -> "SnapshotEntry":
        return cls(
            id=record.id,
            created_at=record.created_at,
            type=record.type,
            position=(record.position.latitude, record.position.longitude),
            distance_km=record.distance_km,
            duration_min=record.duration_min,
            description=record.description,
            interaction_count=record.interaction_count,
            cadence_spm=record.cadence_spm,
            elevation_gain_m=record.elevation_gain_m,
            pace_min_per_km=record.pace_min_per_km,
            speed_km_per_h=record.speed_km_per_h,
        )


_SNAPSHOT_ADAPTER = TypeAdapter(List[SnapshotEntry])


def encode_snapshot(records: Sequence[WorkoutRecord]) -> bytes:
    """Serialize records in order, derived fields included."""
    entries = [SnapshotEntry.from_record(record) for record in records]
    return _SNAPSHOT_ADAPTER.dump_json(entries, by_alias=True, exclude_none=True)


def decode_snapshot(data: bytes) -> List[SnapshotEntry]:
    """
    Parse a persisted snapshot.

    Raises:
        SnapshotError: If the bytes are not a JSON list of workout entries.
    """
    try:
        return _SNAPSHOT_ADAPTER.validate_json(data)
    except PydanticValidationError as e:
        raise SnapshotError(
            "Stored workouts could not be read",
            details={"errors": e.error_count()},
        ) from e
