"""Core type definitions for the event scheduler.

This module defines:
- The time source protocol the scheduler reads "now" from
- Callback aliases for run/warning actions and run subscribers
- Records returned by the scheduler (run notifications, status)
"""
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from .models import ScheduledEvent


# ============== Time Source ==============

class TimeProvider(Protocol):
    """Anything that exposes the current instant."""

    @property
    def current_time(self) -> datetime:
        ...


# Type aliases for caller-supplied behavior
EventAction = Callable[[TimeProvider], Any]
RunHandler = Callable[["ScheduledEventRun"], Any]


# ============== Errors ==============

class DuplicateEventError(ValueError):
    """Raised when an event id is already scheduled and unique ids are enforced."""

    def __init__(self, event_id: str):
        super().__init__(f"Event already scheduled: {event_id}")
        self.event_id = event_id


# ============== Result Types ==============

@dataclass(frozen=True)
class ScheduledEventRun:
    """Notification raised once an event has executed and left the scheduler."""
    event: "ScheduledEvent"
    ran_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": self.event.to_dict(),
            "ran_at": self.ran_at.isoformat(),
        }


@dataclass
class SchedulerStatus:
    """Snapshot of the scheduler's contents."""
    events_total: int
    events_with_warning: int
    warnings_sent: int
    next_due_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "events_total": self.events_total,
            "events_with_warning": self.events_with_warning,
            "warnings_sent": self.warnings_sent,
            "next_due_at": self.next_due_at.isoformat() if self.next_due_at else None,
        }
