"""Models package initialization."""

from .version_record import ReconciliationResult, VersionRecord

__all__ = [
    "ReconciliationResult",
    "VersionRecord",
]
