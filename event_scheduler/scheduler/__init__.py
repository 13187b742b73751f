"""Time-driven event scheduling - models, descriptions and the update engine."""
from .engine import EventScheduler, EventView
from .models import (
    EventConfig,
    EventState,
    ScheduledEvent,
    build_event,
    make_event_id,
    reschedule_from,
)
from .schedule import describe_event, duration_to_human
from .types import (
    DuplicateEventError,
    EventAction,
    RunHandler,
    ScheduledEventRun,
    SchedulerStatus,
    TimeProvider,
)

__all__ = [
    "EventScheduler",
    "EventView",
    "EventConfig",
    "EventState",
    "ScheduledEvent",
    "build_event",
    "make_event_id",
    "reschedule_from",
    "describe_event",
    "duration_to_human",
    "DuplicateEventError",
    "EventAction",
    "RunHandler",
    "ScheduledEventRun",
    "SchedulerStatus",
    "TimeProvider",
]
