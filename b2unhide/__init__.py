"""Unhide hidden files in Backblaze B2 buckets."""

from b2unhide.config import Settings, settings
from b2unhide.errors import (
    B2UnhideError,
    EnvironmentCheckError,
    ListingError,
    UnhideCommandError,
    UsageError,
)
from b2unhide.main import RunState, UnhideRunner

__version__ = "1.0.0"

__all__ = [
    "B2UnhideError",
    "EnvironmentCheckError",
    "ListingError",
    "UnhideCommandError",
    "UsageError",
    "Settings",
    "settings",
    "RunState",
    "UnhideRunner",
]
