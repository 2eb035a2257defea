"""Core utilities - errors and the animation driver."""

# isort: skip_file
# Import order matters: scheduler imports the widget package, which needs errors.

from .errors import ConfigurationError, FlipbookError, SequencingError
from .scheduler import Driver, Scheduler, drive, drive_until_done

__all__ = [
    # Errors
    "FlipbookError",
    "ConfigurationError",
    "SequencingError",
    # Driver
    "Scheduler",
    "Driver",
    "drive",
    "drive_until_done",
]
