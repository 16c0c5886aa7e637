"""Reduce version records to the set of hidden file names."""

from collections.abc import Iterable

from b2unhide.models import VersionRecord

# Field names that may carry the action, in order of preference
ACTION_FIELDS = ("action", "fileAction")

HIDE_ACTION = "hide"


def resolve_action(record: VersionRecord, fields: tuple[str, ...] = ACTION_FIELDS) -> str:
    """Return the first non-empty action field, or '' if none is set."""
    for field in fields:
        value = getattr(record, field, None)
        if value:
            return value
    return ""


def collect_hidden_names(records: Iterable[VersionRecord]) -> list[str]:
    """Unique, sorted names of every file that has a hide marker."""
    return sorted({
        record.fileName
        for record in records
        if record.fileName and resolve_action(record) == HIDE_ACTION
    })
