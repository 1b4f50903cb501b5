"""Presentation of workouts for the map popup and the list."""

from dataclasses import dataclass, field
from typing import Dict, List

from .models import WorkoutRecord, WorkoutType


WORKOUT_ICONS = {
    WorkoutType.RUNNING: "🏃‍♂️",
    WorkoutType.CYCLING: "🚴‍♀️",
}


@dataclass(frozen=True)
class EntryDetail:
    """One labelled value in a list entry."""
    key: str
    icon: str
    value: str
    unit: str


@dataclass
class ListEntry:
    """
    A rendered workout in the list.

    Details are addressed by key (``distance``, ``duration``, ``pace``,
    ``speed``, ``cadence``, ``elevation``) rather than by position.
    """
    workout_id: str
    type: WorkoutType
    title: str
    details: List[EntryDetail] = field(default_factory=list)

    @property
    def css_class(self) -> str:
        return f"workout workout--{self.type.value}"

    def detail(self, key: str) -> EntryDetail:
        for item in self.details:
            if item.key == key:
                return item
        raise KeyError(key)

    def values(self) -> Dict[str, str]:
        return {item.key: item.value for item in self.details}


def format_number(value: float) -> str:
    """Whole numbers without a trailing '.0'."""
    return f"{value:g}"


def popup_content(record: WorkoutRecord) -> str:
    return f"{WORKOUT_ICONS[record.type]} {record.description}"


def marker_style(record: WorkoutRecord) -> str:
    return f"{record.type.value}-popup"


def build_list_entry(record: WorkoutRecord) -> ListEntry:
    details = [
        EntryDetail("distance", WORKOUT_ICONS[record.type], format_number(record.distance_km), "km"),
        EntryDetail("duration", "⏱", format_number(record.duration_min), "min"),
    ]
    if record.type is WorkoutType.RUNNING:
        details += [
            EntryDetail("pace", "⚡️", f"{record.pace_min_per_km:.1f}", "min/km"),
            EntryDetail("cadence", "🦶🏼", format_number(record.cadence_spm), "spm"),
        ]
    else:
        details += [
            EntryDetail("speed", "⚡️", f"{record.speed_km_per_h:.1f}", "km/h"),
            EntryDetail("elevation", "⛰", format_number(record.elevation_gain_m), "m"),
        ]
    return ListEntry(
        workout_id=record.id,
        type=record.type,
        title=record.description,
        details=details,
    )
