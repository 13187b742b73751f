"""EventScheduler - time-ordered event collection and the periodic update pass.

The scheduler has no timer of its own. A host loop calls ``update`` with a
time source at whatever cadence it needs; each call fires the warnings and
executions that have become due and removes executed events.

Not thread-safe: callers sharing a scheduler across threads must serialize
every method call themselves.
"""
from collections.abc import Sequence
from datetime import datetime, timedelta
from itertools import takewhile
from typing import Any, Callable

from loguru import logger

from ..config import CallbackErrorPolicy, Settings, settings as default_settings
from .models import ScheduledEvent, reschedule_from
from .schedule import describe_event
from .types import (
    DuplicateEventError,
    RunHandler,
    ScheduledEventRun,
    SchedulerStatus,
    TimeProvider,
)

logger = logger.bind(module="scheduler.engine")


class EventView(Sequence):
    """Read-only live view over the scheduler's ordered events."""

    def __init__(self, events: list[ScheduledEvent]):
        self._events = events

    def __getitem__(self, index):
        return self._events[index]

    def __len__(self) -> int:
        return len(self._events)

    def __repr__(self) -> str:
        return f"EventView({self._events!r})"


class EventScheduler:
    """Keeps events ordered by scheduled time and fires them when due.

    Events with equal scheduled times keep their insertion order.

    Args:
        settings: Scheduler settings (default from environment).
    """

    def __init__(self, settings: Settings | None = None):
        self._settings = settings or default_settings
        self._events: list[ScheduledEvent] = []
        self._view = EventView(self._events)
        self._handlers: list[RunHandler] = []

    def __len__(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return any(e.id == event_id for e in self._events)

    # -- Subscriptions ---------------------------------------------------------

    def subscribe(self, handler: RunHandler) -> RunHandler:
        """Register a handler called once per executed event."""
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: RunHandler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        try:
            self._handlers.remove(handler)
        except ValueError:
            return False
        return True

    # -- Event management ------------------------------------------------------

    def schedule_event(self, event: ScheduledEvent) -> str:
        """Insert an event in schedule order and return its id.

        The event goes before the first event with a strictly later time, so
        it lands after any events already scheduled for the same time.
        """
        if self._settings.enforce_unique_ids and event.id in self:
            raise DuplicateEventError(event.id)

        for i, existing in enumerate(self._events):
            if existing.scheduled_time > event.scheduled_time:
                self._events.insert(i, event)
                break
        else:
            self._events.append(event)

        logger.info(f"Scheduled event {describe_event(event)}")
        return event.id

    def get_scheduled_events(self) -> EventView:
        """Return a live, read-only view of the events in schedule order."""
        return self._view

    def get_scheduled_event(self, event_id: str) -> ScheduledEvent | None:
        """Get the first event with the given id, or None."""
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def cancel_event(self, event_id: str) -> bool:
        """Remove an event. Returns False if no event had that id."""
        event = self.get_scheduled_event(event_id)
        if event is None:
            logger.debug(f"Cancel ignored, event {event_id} not scheduled")
            return False

        self._events.remove(event)
        logger.info(f"Cancelled event {describe_event(event)}")
        return True

    def reschedule_event(self, event_id: str, new_time: datetime) -> None:
        """Move an event to ``new_time``.

        The event is replaced by a copy with the same id, metadata and
        callbacks, so a warning that was already sent is armed again.
        Unknown ids are ignored.
        """
        event = self.get_scheduled_event(event_id)
        if event is None:
            logger.debug(f"Reschedule ignored, event {event_id} not scheduled")
            return

        self._events.remove(event)
        self.schedule_event(reschedule_from(event, new_time))

    # -- Queries ---------------------------------------------------------------

    def get_next_due_time(self) -> datetime | None:
        """Get the scheduled time of the earliest event."""
        return self._events[0].scheduled_time if self._events else None

    def get_upcoming_events(
        self,
        world: TimeProvider,
        within: timedelta,
    ) -> list[ScheduledEvent]:
        """Get events due no later than ``within`` from now, in schedule order."""
        until = world.current_time + within
        return list(takewhile(lambda e: e.scheduled_time <= until, self._events))

    def status(self) -> SchedulerStatus:
        return SchedulerStatus(
            events_total=len(self._events),
            events_with_warning=sum(1 for e in self._events if e.has_warning),
            warnings_sent=sum(1 for e in self._events if e.warning_sent),
            next_due_at=self.get_next_due_time(),
        )

    # -- Update pass -----------------------------------------------------------

    def update(self, world: TimeProvider) -> list[ScheduledEventRun]:
        """Fire due warnings and executions against the current time.

        Both batches are taken from the collection before any callback runs.
        An event can be in both batches, in which case its warning fires
        before its execution. Events scheduled by a callback wait for the
        next tick; events cancelled or rescheduled by an earlier callback in
        this tick are skipped.

        Returns:
            The run notifications raised during this tick, in execution order.
        """
        ran_at = world.current_time
        warning_batch = [
            e for e in self._events if not e.warning_sent and e.is_warning_due(world)
        ]
        execute_batch = [e for e in self._events if e.is_due(world)]

        if warning_batch or execute_batch:
            logger.debug(
                f"Tick at {ran_at.isoformat()}: {len(warning_batch)} warning(s), "
                f"{len(execute_batch)} execution(s)"
            )

        for event in warning_batch:
            if not self._is_scheduled(event):
                continue
            if not self._call(event.run_warning, world, f"Warning action failed for {event.id}"):
                event.state.warning_sent = True
            logger.info(f"Warning sent for {describe_event(event)}")

        runs: list[ScheduledEventRun] = []
        for event in execute_batch:
            if not self._is_scheduled(event):
                continue
            self._call(event.run, world, f"Run action failed for {event.id}")
            # The run action may have cancelled or rescheduled its own event
            if self._is_scheduled(event):
                self._events.remove(event)
            logger.info(f"Ran event {describe_event(event)}")

            run = ScheduledEventRun(event=event, ran_at=ran_at)
            runs.append(run)
            for handler in list(self._handlers):
                self._call(handler, run, f"Run handler failed for {event.id}")

        return runs

    def _is_scheduled(self, event: ScheduledEvent) -> bool:
        return any(e is event for e in self._events)

    def _call(self, func: Callable[..., Any], arg: Any, failure: str) -> bool:
        """Invoke a caller-supplied callback under the error policy.

        Returns True if the callback completed, False if it raised and the
        failure was isolated.
        """
        if self._settings.callback_errors == CallbackErrorPolicy.RAISE:
            func(arg)
            return True

        try:
            func(arg)
        except Exception:
            logger.exception(failure)
            return False
        return True
