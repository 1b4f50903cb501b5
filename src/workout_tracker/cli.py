#!/usr/bin/env python3
"""
Workout Tracker CLI.

Record running and cycling workouts pinned to a map position.

Usage:
    workout-tracker add running 5 25 150 --lat 10 --lng 20
    workout-tracker add cycling 20 60 100          # uses the home position
    workout-tracker list
    workout-tracker edit <id> cycling 10 30 50
    workout-tracker select <id>
    workout-tracker delete <id>
    workout-tracker clear
    workout-tracker info
    workout-tracker --json delete <id>            # errors as JSON
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich import box

from .app import WorkoutTracker, build_storage
from .config import Settings, get_settings
from .exceptions import WorkoutTrackerError
from .models import FormValues, Position, WorkoutType
from .rendering import WORKOUT_ICONS, build_list_entry
from .views import FixedPositionProvider, InMemoryFormView, InMemoryListView, InMemoryMapView

console = Console()


class ConsoleNotifier:
    """Prints notices to the terminal."""

    def notify(self, message: str) -> None:
        console.print(f"[bold red]{message}[/bold red]")


def build_tracker(settings: Settings, position: Optional[Position] = None) -> WorkoutTracker:
    tracker = WorkoutTracker(
        list_view=InMemoryListView(),
        form_view=InMemoryFormView(),
        notifier=ConsoleNotifier(),
        storage=build_storage(settings),
        position_provider=FixedPositionProvider(position or settings.home_position),
        settings=settings,
    )
    tracker.start()
    return tracker


def bring_up_map(tracker: WorkoutTracker) -> Optional[InMemoryMapView]:
    map_view = InMemoryMapView()
    if asyncio.run(tracker.locate(map_view)) is None:
        return None
    return map_view


def print_workouts(tracker: WorkoutTracker) -> None:
    if not tracker.workouts:
        console.print("[dim]No workouts recorded yet.[/dim]")
        return

    table = Table(title="Workouts", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Workout")
    table.add_column("Distance", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Pace / Speed", justify="right")
    table.add_column("Cadence / Elevation", justify="right")
    table.add_column("Position")

    # Newest first, like the list view
    for record in reversed(tracker.workouts):
        entry = build_list_entry(record)
        rate = entry.detail("pace" if record.is_running else "speed")
        extra = entry.detail(record.type.extra_field)
        color = "green" if record.is_running else "yellow"
        table.add_row(
            record.id,
            f"[{color}]{WORKOUT_ICONS[record.type]} {entry.title}[/{color}]",
            f"{entry.detail('distance').value} km",
            f"{entry.detail('duration').value} min",
            f"{rate.value} {rate.unit}",
            f"{extra.value} {extra.unit}",
            f"{record.position.latitude:.4f}, {record.position.longitude:.4f}",
        )

    console.print(table)


def _form_values(args) -> FormValues:
    return FormValues(
        type=WorkoutType(args.type),
        distance=args.distance,
        duration=args.duration,
        extra=args.extra,
    )


def cmd_add(args, settings: Settings) -> int:
    """Record a new workout."""
    if (args.lat is None) != (args.lng is None):
        console.print("[red]--lat and --lng must be given together[/red]")
        return 1
    position = Position(args.lat, args.lng) if args.lat is not None else None
    tracker = build_tracker(settings, position)

    map_view = bring_up_map(tracker)
    if map_view is None:
        return 1
    map_view.click(position or settings.home_position)

    record = tracker.create_workout(_form_values(args))
    if record is None:
        return 1
    console.print(f"[green]Added[/green] {record.description} ({record.id})")
    return 0


def cmd_list(args, settings: Settings) -> int:
    print_workouts(build_tracker(settings))
    return 0


def cmd_edit(args, settings: Settings) -> int:
    """Edit an existing workout in place."""
    tracker = build_tracker(settings)
    tracker.request_edit(args.id)
    record = tracker.commit_edit(_form_values(args))
    if record is None:
        return 1
    console.print(f"[green]Updated[/green] {record.description} ({record.id})")
    return 0


def cmd_select(args, settings: Settings) -> int:
    tracker = build_tracker(settings)
    if bring_up_map(tracker) is None:
        return 1
    record = tracker.select_workout(args.id)
    tracker.sync.persist()
    console.print(
        f"Centered on {record.description} at "
        f"{record.position.latitude:.4f}, {record.position.longitude:.4f} "
        f"(selected {record.interaction_count}x)"
    )
    return 0


def cmd_delete(args, settings: Settings) -> int:
    tracker = build_tracker(settings)
    record = tracker.delete_workout(args.id)
    console.print(f"[yellow]Deleted[/yellow] {record.description}")
    return 0


def cmd_clear(args, settings: Settings) -> int:
    tracker = build_tracker(settings)
    count = len(tracker.workouts)
    tracker.delete_all()
    console.print(f"[yellow]Deleted {count} workouts[/yellow]")
    return 0


def cmd_info(args, settings: Settings) -> int:
    tracker = build_tracker(settings)
    home = settings.home_position
    console.print(f"Storage: {settings.storage_backend} ({settings.storage_path})")
    console.print(f"Workouts: {len(tracker.workouts)}")
    console.print(f"Home position: {f'{home.latitude}, {home.longitude}' if home else 'not set'}")
    return 0


def _add_metric_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("type", choices=[t.value for t in WorkoutType], help="Workout type")
    parser.add_argument("distance", help="Distance in km")
    parser.add_argument("duration", help="Duration in minutes")
    parser.add_argument("extra", help="Cadence (spm) for running, elevation gain (m) for cycling")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Workout Tracker CLI")
    parser.add_argument("--json", action="store_true", help="Print errors as JSON")
    subparsers = parser.add_subparsers(dest="command")

    add_p = subparsers.add_parser("add", help="Record a workout")
    _add_metric_args(add_p)
    add_p.add_argument("--lat", type=float, help="Latitude (defaults to home position)")
    add_p.add_argument("--lng", type=float, help="Longitude (defaults to home position)")

    subparsers.add_parser("list", help="List workouts")

    edit_p = subparsers.add_parser("edit", help="Edit a workout")
    edit_p.add_argument("id", help="Workout ID")
    _add_metric_args(edit_p)

    select_p = subparsers.add_parser("select", help="Center the map on a workout")
    select_p.add_argument("id", help="Workout ID")

    delete_p = subparsers.add_parser("delete", help="Delete a workout")
    delete_p.add_argument("id", help="Workout ID")

    subparsers.add_parser("clear", help="Delete all workouts")
    subparsers.add_parser("info", help="Show storage information")

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    commands = {
        "add": cmd_add,
        "list": cmd_list,
        "edit": cmd_edit,
        "select": cmd_select,
        "delete": cmd_delete,
        "clear": cmd_clear,
        "info": cmd_info,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args, settings)
    except WorkoutTrackerError as e:
        if args.json:
            console.print_json(data=e.to_dict())
        else:
            console.print(f"[red]{e.message}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
