"""Time sources that can be handed to ``EventScheduler.update``."""
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from .config import Settings, settings as default_settings


class SystemClock:
    """Wall-clock time source.

    Args:
        timezone: IANA timezone name (default from settings, else local time).
        settings: Settings to take the default timezone from.
    """

    def __init__(self, timezone: str | None = None, settings: Settings | None = None):
        timezone = timezone or (settings or default_settings).timezone
        self._tz = ZoneInfo(timezone) if timezone else None

    @property
    def current_time(self) -> datetime:
        return datetime.now(self._tz)


class ManualClock:
    """Time source whose current time only moves when told to.

    Useful for simulating, accelerating or freezing time in a host loop or in
    tests.
    """

    def __init__(self, initial: datetime | None = None):
        self.current_time = initial or datetime.now()

    def advance(self, delta: timedelta) -> datetime:
        """Move the clock forward by ``delta`` and return the new time."""
        self.current_time = self.current_time + delta
        return self.current_time

    def set(self, instant: datetime) -> None:
        self.current_time = instant
