"""Tests for the scheduled event model."""
from datetime import datetime, timedelta

import pytest

from event_scheduler.clock import ManualClock
from event_scheduler.scheduler.models import (
    EventConfig,
    ScheduledEvent,
    build_event,
    reschedule_from,
)

NOW = datetime(2024, 1, 15, 12, 0, 0)


class TestBuildEvent:
    """Tests for assembling events from a config."""

    def test_builds_basic_event(self):
        """Test that all config fields are carried onto the event."""
        event = build_event(EventConfig(
            name="Backup",
            description="Nightly backup",
            scheduled_time=NOW,
        ))

        assert event.id
        assert event.name == "Backup"
        assert event.description == "Nightly backup"
        assert event.scheduled_time == NOW
        assert event.warning_before == timedelta(0)
        assert event.has_warning is False
        assert event.warning_sent is False

    def test_generates_unique_ids(self):
        """Test that each build gets a fresh id."""
        a = build_event(EventConfig(scheduled_time=NOW))
        b = build_event(EventConfig(scheduled_time=NOW))

        assert a.id != b.id

    def test_keeps_supplied_id(self):
        """Test that an explicit id is used as-is."""
        event = build_event(EventConfig(id="fixed-id", scheduled_time=NOW))

        assert event.id == "fixed-id"

    def test_with_warning_sets_warning_properties(self):
        """Test warning configuration."""
        event = build_event(EventConfig(
            scheduled_time=NOW,
            warning_before=timedelta(minutes=5),
        ))

        assert event.has_warning is True
        assert event.warning_before == timedelta(minutes=5)
        assert event.warning_time == NOW - timedelta(minutes=5)

    def test_requires_scheduled_time(self):
        """Test that a config without a time is rejected."""
        with pytest.raises(ValueError):
            build_event(EventConfig(name="No time"))

    def test_warning_action_without_warning_is_accepted(self):
        """Test that inconsistent configs build but never warn."""
        fired = []
        event = build_event(EventConfig(
            scheduled_time=NOW,
            warning_action=lambda world: fired.append(world),
        ))

        assert event.has_warning is False
        assert event.warning_time is None
        assert event.is_warning_due(ManualClock(NOW + timedelta(hours=1))) is False

    def test_scheduled_time_is_required(self):
        """Test that events cannot be created without a time."""
        with pytest.raises(TypeError):
            ScheduledEvent()

    def test_event_is_immutable(self):
        """Test that fields cannot be reassigned after creation."""
        event = build_event(EventConfig(scheduled_time=NOW))

        with pytest.raises(AttributeError):
            event.scheduled_time = NOW + timedelta(minutes=1)


class TestDuePredicates:
    """Tests for is_due / is_warning_due."""

    def test_is_due(self):
        """Test due checks before, at and after the scheduled time."""
        event = ScheduledEvent(scheduled_time=NOW)

        assert event.is_due(ManualClock(NOW - timedelta(seconds=1))) is False
        assert event.is_due(ManualClock(NOW)) is True
        assert event.is_due(ManualClock(NOW + timedelta(minutes=1))) is True

    def test_warning_not_due_without_warning(self):
        """Test that no warning stage means never warning-due."""
        event = ScheduledEvent(scheduled_time=NOW)

        assert event.is_warning_due(ManualClock(NOW)) is False

    def test_zero_warning_is_never_due(self):
        """Test that a zero warning is not due even at execution time."""
        event = ScheduledEvent(scheduled_time=NOW, warning_before=timedelta(0))

        assert event.is_warning_due(ManualClock(NOW + timedelta(hours=1))) is False

    def test_negative_warning_is_never_due(self):
        """Test that a negative warning counts as no warning."""
        event = ScheduledEvent(scheduled_time=NOW, warning_before=timedelta(minutes=-5))

        assert event.has_warning is False
        assert event.is_warning_due(ManualClock(NOW + timedelta(hours=1))) is False

    def test_warning_before_warning_period(self):
        """Test that the warning is not due before its threshold."""
        event = ScheduledEvent(
            scheduled_time=NOW + timedelta(minutes=10),
            warning_before=timedelta(minutes=5),
        )

        assert event.is_warning_due(ManualClock(NOW)) is False

    def test_warning_during_warning_period(self):
        """Test that the warning is due from its threshold on."""
        event = ScheduledEvent(
            scheduled_time=NOW + timedelta(minutes=10),
            warning_before=timedelta(minutes=5),
        )

        assert event.is_warning_due(ManualClock(NOW + timedelta(minutes=5))) is True
        assert event.is_warning_due(ManualClock(NOW + timedelta(minutes=7))) is True


class TestActions:
    """Tests for run / run_warning."""

    def test_run_invokes_action_with_world(self):
        """Test that the run action receives the time source."""
        clock = ManualClock(NOW)
        seen = []
        event = ScheduledEvent(scheduled_time=NOW, run_action=seen.append)

        event.run(clock)

        assert seen == [clock]

    def test_run_without_action_is_noop(self):
        """Test that a missing run action is not an error."""
        ScheduledEvent(scheduled_time=NOW).run(ManualClock(NOW))

    def test_run_warning_executes_warning_action(self):
        """Test that the warning action runs and the flag is set."""
        seen = []
        event = ScheduledEvent(
            scheduled_time=NOW,
            warning_before=timedelta(minutes=5),
            warning_action=seen.append,
        )

        event.run_warning(ManualClock(NOW))

        assert len(seen) == 1
        assert event.warning_sent is True

    def test_run_warning_without_action_still_sets_flag(self):
        """Test that the flag tracks the warning stage, not the callback."""
        event = ScheduledEvent(scheduled_time=NOW, warning_before=timedelta(minutes=5))

        event.run_warning(ManualClock(NOW))

        assert event.warning_sent is True


class TestRescheduleFrom:
    """Tests for copying an event to a new time."""

    def test_copies_properties(self):
        """Test that everything but the time and state is kept."""
        def run(world):
            pass

        def warn(world):
            pass

        original = build_event(EventConfig(
            name="Standup",
            description="Daily standup",
            scheduled_time=NOW,
            warning_before=timedelta(minutes=5),
            run_action=run,
            warning_action=warn,
        ))
        new_time = NOW + timedelta(hours=1)

        copy = reschedule_from(original, new_time)

        assert copy is not original
        assert copy.id == original.id
        assert copy.name == "Standup"
        assert copy.description == "Daily standup"
        assert copy.warning_before == timedelta(minutes=5)
        assert copy.run_action is run
        assert copy.warning_action is warn
        assert copy.scheduled_time == new_time
        assert original.scheduled_time == NOW

    def test_resets_warning_state(self):
        """Test that the copy's warning is armed again."""
        original = ScheduledEvent(scheduled_time=NOW, warning_before=timedelta(minutes=5))
        original.run_warning(ManualClock(NOW))

        copy = reschedule_from(original, NOW + timedelta(hours=1))

        assert original.warning_sent is True
        assert copy.warning_sent is False


class TestToDict:
    """Tests for event snapshots."""

    def test_snapshot_fields(self):
        """Test the snapshot content."""
        event = ScheduledEvent(
            id="abc",
            name="Backup",
            scheduled_time=NOW,
            warning_before=timedelta(minutes=5),
        )

        data = event.to_dict()

        assert data == {
            "id": "abc",
            "name": "Backup",
            "description": None,
            "scheduled_time": NOW.isoformat(),
            "warning_before_seconds": 300.0,
            "has_warning": True,
            "warning_sent": False,
        }
