"""Workout data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NamedTuple, Optional
import uuid


MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


class WorkoutType(str, Enum):
    """Supported workout variants."""
    RUNNING = "running"
    CYCLING = "cycling"

    @property
    def label(self) -> str:
        return self.value[0].upper() + self.value[1:]

    @property
    def extra_field(self) -> str:
        """Name of the variant-specific form field."""
        return "cadence" if self is WorkoutType.RUNNING else "elevation"


class Position(NamedTuple):
    """A (latitude, longitude) pair."""
    latitude: float
    longitude: float


def new_workout_id() -> str:
    return uuid.uuid4().hex


def describe(workout_type: WorkoutType, created_at: datetime) -> str:
    """Build the '<Type> on <Month> <day>' title for a workout."""
    return f"{workout_type.label} on {MONTH_NAMES[created_at.month - 1]} {created_at.day}"


@dataclass
class WorkoutRecord:
    """
    A single recorded workout.

    Running and cycling share one shape; the ``type`` tag decides which
    of ``cadence_spm`` and ``elevation_gain_m`` is populated. Pace, speed
    and description are computed from the current fields so they can
    never go stale.
    """
    id: str
    created_at: datetime
    position: Position
    type: WorkoutType
    distance_km: float
    duration_min: float
    cadence_spm: Optional[float] = None
    elevation_gain_m: Optional[float] = None
    interaction_count: int = 0

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = WorkoutType(self.type)
        if not isinstance(self.position, Position):
            self.position = Position(*self.position)
        if self.type is WorkoutType.RUNNING:
            if self.cadence_spm is None or self.elevation_gain_m is not None:
                raise ValueError("Running workouts carry cadence and no elevation gain")
        elif self.elevation_gain_m is None or self.cadence_spm is not None:
            raise ValueError("Cycling workouts carry elevation gain and no cadence")

    @property
    def is_running(self) -> bool:
        return self.type is WorkoutType.RUNNING

    @property
    def pace_min_per_km(self) -> Optional[float]:
        """Minutes per kilometre (running only)."""
        if not self.is_running:
            return None
        return self.duration_min / self.distance_km

    @property
    def speed_km_per_h(self) -> Optional[float]:
        """Kilometres per hour (cycling only)."""
        if self.is_running:
            return None
        return self.distance_km / (self.duration_min / 60)

    @property
    def extra(self) -> float:
        """The variant-specific metric: cadence or elevation gain."""
        return self.cadence_spm if self.is_running else self.elevation_gain_m

    @property
    def description(self) -> str:
        return describe(self.type, self.created_at)

    def register_interaction(self) -> int:
        """Count a selection of this workout in the list."""
        self.interaction_count += 1
        return self.interaction_count

    def to_form_values(self) -> "FormValues":
        return FormValues(
            type=self.type,
            distance=self.distance_km,
            duration=self.duration_min,
            extra=self.extra,
        )


@dataclass(frozen=True)
class FormValues:
    """
    The four logical values plus type selector supplied by the form.

    Values are kept raw (numbers or text) until the factory validates them.
    """
    type: WorkoutType
    distance: object
    duration: object
    extra: object = None

    def __post_init__(self):
        if isinstance(self.type, str):
            object.__setattr__(self, "type", WorkoutType(self.type))

    def to_dict(self) -> dict:
        """Field values keyed by stable form field name."""
        return {
            "type": self.type.value,
            "distance": self.distance,
            "duration": self.duration,
            self.type.extra_field: self.extra,
        }
