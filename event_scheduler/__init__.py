"""In-process, time-driven event scheduler."""
from .clock import ManualClock, SystemClock
from .config import CallbackErrorPolicy, Settings, configure_logging, settings
from .scheduler import (
    DuplicateEventError,
    EventConfig,
    EventScheduler,
    ScheduledEvent,
    ScheduledEventRun,
    SchedulerStatus,
    TimeProvider,
    build_event,
    reschedule_from,
)

__version__ = "0.1.0"

__all__ = [
    "ManualClock",
    "SystemClock",
    "CallbackErrorPolicy",
    "Settings",
    "configure_logging",
    "settings",
    "DuplicateEventError",
    "EventConfig",
    "EventScheduler",
    "ScheduledEvent",
    "ScheduledEventRun",
    "SchedulerStatus",
    "TimeProvider",
    "build_event",
    "reschedule_from",
]
