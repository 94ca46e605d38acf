from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone as dt_timezone
from zoneinfo import ZoneInfo

from venue_booking.application.exceptions import ValidationError
from venue_booking.domain.entities.booking import Interval

BASE_DURATION_HOURS = 4
MAX_ADDITIONAL_HOURS = 10

_CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")
_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})-(\d{1,2})$")


def parse_clock_time(value: str | time) -> time:
    """Parse an HH:MM clock string. Seconds are not accepted."""
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0, tzinfo=None)

    match = _CLOCK_PATTERN.match(str(value or "").strip())
    if not match:
        raise ValidationError(f"Malformed start time: {value!r} (expected HH:MM).")

    hour, minute = int(match.group(1)), int(match.group(2))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValidationError(f"Start time out of range: {value!r}.")
    return time(hour, minute)


def parse_calendar_date(value: str | date) -> date:
    """Parse a YYYY-MM-DD calendar day."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    match = _DATE_PATTERN.match(str(value or "").strip())
    if not match:
        raise ValidationError(f"Malformed date: {value!r} (expected YYYY-MM-DD).")

    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        raise ValidationError(f"Date does not exist: {value!r}.")


def derive_interval(
    event_date: str | date,
    start_time: str | time,
    additional_hours: int,
    *,
    timezone: ZoneInfo,
    base_hours: int = BASE_DURATION_HOURS,
    max_additional_hours: int = MAX_ADDITIONAL_HOURS,
) -> Interval:
    """
    Combine a calendar day and clock time into a [start, end) interval.
    end = start + base_hours + additional_hours, measured in elapsed time.
    """
    if isinstance(additional_hours, bool) or not isinstance(additional_hours, int):
        raise ValidationError(f"Additional hours must be an integer, got {additional_hours!r}.")
    if additional_hours < 0 or additional_hours > max_additional_hours:
        raise ValidationError(
            f"Additional hours must be between 0 and {max_additional_hours}, got {additional_hours}."
        )

    day = parse_calendar_date(event_date)
    clock = parse_clock_time(start_time)

    start = datetime.combine(day, clock, tzinfo=timezone)
    elapsed = timedelta(hours=base_hours + additional_hours)
    end = (start.astimezone(dt_timezone.utc) + elapsed).astimezone(timezone)

    try:
        return Interval(start=start, end=end)
    except ValueError as e:
        raise ValidationError(str(e))


def to_storage(value: datetime) -> str:
    """Serialize an aware timestamp as a UTC ISO string."""
    if value.tzinfo is None:
        raise ValidationError("Cannot store a naive timestamp.")
    return value.astimezone(dt_timezone.utc).isoformat().replace("+00:00", "Z")


def from_storage(value: str, timezone: ZoneInfo) -> datetime:
    """
    Read a stored UTC ISO string back into the reference zone.
    Inverse of to_storage: from_storage(to_storage(dt), tz) == dt.
    """
    text = str(value or "").strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Malformed stored timestamp: {value!r}.")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt_timezone.utc)
    return parsed.astimezone(timezone)


def clock_time_of(interval: Interval, timezone: ZoneInfo | None = None) -> str:
    """HH:MM start time in the reference zone, for re-editing a stored booking."""
    start = interval.start.astimezone(timezone) if timezone else interval.start
    return start.strftime("%H:%M")


def clamp_additional_hours(value: int, cap: int = MAX_ADDITIONAL_HOURS) -> int:
    return max(0, min(cap, value))


def check_lead_time(
    event_date: str | date,
    *,
    today: date,
    min_lead_days: int,
    is_admin: bool = False,
) -> None:
    """Regular users must book at least min_lead_days ahead. Admins are exempt."""
    if is_admin:
        return
    day = parse_calendar_date(event_date)
    # Whole calendar days in the reference zone. The time of day of the request
    # does not move the earliest date.
    earliest = today + timedelta(days=min_lead_days)
    if day < earliest:
        raise ValidationError(
            f"Event date should be at least {min_lead_days} days from now (earliest {earliest.isoformat()})."
        )
