"""Data models for scheduled events."""
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta
from typing import Any
import uuid

from .types import EventAction, TimeProvider


def make_event_id() -> str:
    """Generate a new event ID."""
    return uuid.uuid4().hex


@dataclass
class EventState:
    """Runtime state of a scheduled event."""
    warning_sent: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"warning_sent": self.warning_sent}


@dataclass(frozen=True, eq=False)
class ScheduledEvent:
    """An event due at ``scheduled_time``, optionally warned ``warning_before`` ahead.

    The record is immutable once built. Moving an event to another time
    produces a new instance through ``reschedule_from``; the only thing that
    changes in place is ``state.warning_sent``, which flips once when the
    warning fires.
    """
    # Schedule
    scheduled_time: datetime
    warning_before: timedelta = timedelta(0)

    # Identity
    id: str = field(default_factory=make_event_id)

    # Display metadata
    name: str | None = None
    description: str | None = None

    # Behavior
    run_action: EventAction | None = field(default=None, repr=False)
    warning_action: EventAction | None = field(default=None, repr=False)

    # Runtime state
    state: EventState = field(default_factory=EventState, repr=False)

    @property
    def has_warning(self) -> bool:
        return self.warning_before > timedelta(0)

    @property
    def warning_sent(self) -> bool:
        return self.state.warning_sent

    @property
    def warning_time(self) -> datetime | None:
        """Instant the warning becomes due, or None when there is no warning stage."""
        if not self.has_warning:
            return None
        return self.scheduled_time - self.warning_before

    def is_due(self, world: TimeProvider) -> bool:
        return world.current_time >= self.scheduled_time

    def is_warning_due(self, world: TimeProvider) -> bool:
        # A zero warning would otherwise be due at execution time
        if not self.has_warning:
            return False
        return world.current_time >= self.scheduled_time - self.warning_before

    def run(self, world: TimeProvider) -> None:
        """Invoke the run action. Removal is up to the owning scheduler."""
        if self.run_action is not None:
            self.run_action(world)

    def run_warning(self, world: TimeProvider) -> None:
        """Invoke the warning action and mark the warning as sent.

        The flag is set even without a warning action: it records that the
        warning stage happened.
        """
        if self.warning_action is not None:
            self.warning_action(world)
        self.state.warning_sent = True

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary snapshot."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "scheduled_time": self.scheduled_time.isoformat(),
            "warning_before_seconds": self.warning_before.total_seconds(),
            "has_warning": self.has_warning,
            **self.state.to_dict(),
        }


@dataclass
class EventConfig:
    """Configuration for a new event. Every field is optional except the time."""
    id: str | None = None
    name: str | None = None
    description: str | None = None
    scheduled_time: datetime | None = None
    warning_before: timedelta | None = None
    run_action: EventAction | None = None
    warning_action: EventAction | None = None


def build_event(config: EventConfig) -> ScheduledEvent:
    """Assemble a ScheduledEvent from a config.

    No consistency checks are made: a warning action without a positive
    ``warning_before`` is accepted and simply never fires.
    """
    if config.scheduled_time is None:
        raise ValueError("scheduled_time is required")

    return ScheduledEvent(
        id=config.id or make_event_id(),
        name=config.name,
        description=config.description,
        scheduled_time=config.scheduled_time,
        warning_before=config.warning_before or timedelta(0),
        run_action=config.run_action,
        warning_action=config.warning_action,
    )


def reschedule_from(event: ScheduledEvent, new_time: datetime) -> ScheduledEvent:
    """Copy ``event`` to ``new_time``, keeping identity, metadata and callbacks.

    The copy starts with fresh state, so its warning is armed again.
    """
    return replace(event, scheduled_time=new_time, state=EventState())
