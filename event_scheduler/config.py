"""Configuration for the event scheduler."""
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

load_dotenv(override=False)


class CallbackErrorPolicy(str, Enum):
    """How a tick reacts to a failing callback."""
    ISOLATE = "isolate"  # Log the failure and keep processing the tick
    RAISE = "raise"      # Propagate the failure and abort the rest of the tick


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Scheduler settings."""

    # Logging
    log_level: str = "INFO"

    # What update() does when a run action, warning action or subscriber raises
    callback_errors: CallbackErrorPolicy = CallbackErrorPolicy.ISOLATE

    # Reject a second event with an id that is already scheduled
    enforce_unique_ids: bool = False

    # IANA timezone for SystemClock; None means local time
    timezone: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables."""
        return cls(
            log_level=os.getenv("EVENT_SCHEDULER_LOG_LEVEL", "INFO").upper(),
            callback_errors=CallbackErrorPolicy(
                os.getenv("EVENT_SCHEDULER_CALLBACK_ERRORS", "isolate").strip().lower()
            ),
            enforce_unique_ids=_env_bool("EVENT_SCHEDULER_UNIQUE_IDS"),
            timezone=os.getenv("EVENT_SCHEDULER_TIMEZONE") or None,
        )


def configure_logging(config: Optional[Settings] = None) -> None:
    """Install a stderr sink at the configured level."""
    config = config or settings
    logger.remove()
    logger.add(
        sys.stderr,
        level=config.log_level,
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[module]} | {message}",
    )
    logger.configure(extra={"module": "event_scheduler"})


# Global settings instance
settings = Settings.from_env()
