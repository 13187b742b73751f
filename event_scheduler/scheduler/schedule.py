"""Human-readable descriptions of events and durations."""
from datetime import timedelta

from .models import ScheduledEvent


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def duration_to_human(duration: timedelta) -> str:
    """Convert a duration to a human-readable description.

    Args:
        duration: Duration to describe

    Returns:
        Description in the largest whole unit, e.g. "5 minutes"
    """
    seconds = int(duration.total_seconds())

    if seconds < 60:
        return _plural(seconds, "second")
    elif seconds < 3600:
        return _plural(seconds // 60, "minute")
    elif seconds < 86400:
        return _plural(seconds // 3600, "hour")
    else:
        return _plural(seconds // 86400, "day")


def describe_event(event: ScheduledEvent) -> str:
    """Convert an event to a one-line description for logs.

    Args:
        event: The event to describe

    Returns:
        e.g. "'Backup' at 2024-01-15 10:00 (warning 5 minutes before)"
    """
    label = f"'{event.name}'" if event.name else event.id
    text = f"{label} at {event.scheduled_time.strftime('%Y-%m-%d %H:%M')}"
    if event.has_warning:
        text += f" (warning {duration_to_human(event.warning_before)} before)"
    return text
