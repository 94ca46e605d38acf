#!/usr/bin/env python3
"""
Interactive local booking harness (no HTTP, no database).

Usage:
  python3 scripts/booking_local.py

What it does:
- Builds the use cases through the project wiring (in-memory store)
- Runs typed commands through the same create/approve/delete workflow
- Prints the resulting booking, conflict warnings, and refusals
"""

from __future__ import annotations

import shlex
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from venue_booking.application.exceptions import (  # noqa: E402
    BookingNotFoundError,
    ConflictDetectedError,
    ConstraintError,
    TransitionError,
    ValidationError,
)
from venue_booking.application.use_cases.booking import BookingUseCase  # noqa: E402
from venue_booking.application.use_cases.catering import CateringUseCase  # noqa: E402
from venue_booking.domain.entities.booking import Booking  # noqa: E402
from venue_booking.wiring.dependencies import get_container  # noqa: E402

HELP = """Commands:
  /create <venue> <YYYY-MM-DD> <HH:MM> <extra_hours> <title...>
  /approve <id>   /reject <id>   /cancel <id>   /complete <id>   /delete <id>
  /list [status] [venue]
  /menu
  /dish <booking_id> <dish_id>
  /quit"""


def _print_header() -> None:
    print("\nLocal Booking Harness")
    print("-" * 60)
    print("Admin session: lead-time rule is not applied.")
    print(HELP)
    print("-" * 60)


def _describe(booking: Booking) -> str:
    start = booking.interval.start.strftime("%Y-%m-%d %H:%M")
    end = booking.interval.end.strftime("%H:%M")
    deleted = " [deleted]" if booking.is_deleted else ""
    return f"{booking.id} | {booking.title} | {booking.venue.label} | {start}-{end} | {booking.status.value}{deleted}"


def _run(command: str, args: list[str], booking: BookingUseCase, catering: CateringUseCase) -> None:
    if command == "/create":
        if len(args) < 5:
            print("usage: /create <venue> <date> <time> <extra_hours> <title...>")
            return
        venue, day, clock, hours, *title = args
        result = booking.create(
            {
                "title": " ".join(title),
                "venue": venue.replace("_", " "),
                "date": day,
                "startTime": clock,
                "additionalHours": int(hours) if hours.isdigit() else hours,
                "organizer": "Front desk",
                "category": "Local",
                "description": "Created from local harness",
            },
            is_admin=True,
        )
        print(_describe(result.booking))
        for other in result.conflicts:
            print(f"  ! overlaps {_describe(other)}")
        return

    if command in ("/approve", "/reject", "/cancel", "/complete", "/delete") and args:
        action = getattr(booking, command[1:])
        outcome = action(args[0])
        updated = getattr(outcome, "booking", outcome)
        print(_describe(updated))
        for other in getattr(outcome, "conflicts", []):
            print(f"  ! overlaps {_describe(other)}")
        return

    if command == "/list":
        status = args[0] if len(args) > 0 else "all"
        venue = args[1].replace("_", " ") if len(args) > 1 else "all"
        entries = booking.list_for_admin(status=status, venue=venue)
        if not entries:
            print("(no bookings)")
        for entry in entries:
            marker = "!" if entry.overlaps else " "
            print(f"{marker} {_describe(entry.booking)}")
        return

    if command == "/menu":
        for category, dishes in catering.menu().items():
            print(f"{category}: " + ", ".join(d.id for d in dishes))
        return

    if command == "/dish" and len(args) == 2:
        selection = catering.toggle_dish(args[0], args[1])
        cap = catering.max_dishes(selection)
        print(f"selected: {', '.join(selection.selected_dishes) or '-'} ({cap - len(selection)} left)")
        return

    print(HELP)


def main() -> None:
    container = get_container()
    booking = container["booking"]
    catering = container["catering"]
    _print_header()

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not line:
            continue
        try:
            command, *args = shlex.split(line)
        except ValueError as e:
            print(f"ERROR: {e}")
            continue

        command = command.lower()
        if command in ("/quit", "/exit"):
            print("Bye!")
            return

        try:
            _run(command, args, booking, catering)
        except ConflictDetectedError as e:
            print(f"BLOCKED: {e}")
        except (ValidationError, TransitionError, ConstraintError, BookingNotFoundError) as e:
            print(f"REFUSED: {e}")


if __name__ == "__main__":
    main()
