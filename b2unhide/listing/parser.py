"""Parse `b2 ls --json` output into version records."""

import json
from typing import Any

import structlog
from pydantic import ValidationError

from b2unhide.errors import ListingError
from b2unhide.models import VersionRecord

logger = structlog.get_logger()

_decoder = json.JSONDecoder()


def _iter_json_values(payload: str):
    """Yield each top-level JSON value in a payload.
    
    Handles a single document, newline-delimited documents, and
    pretty-printed documents written back to back.
    """
    pos = 0
    end = len(payload)
    while True:
        while pos < end and payload[pos].isspace():
            pos += 1
        if pos >= end:
            return
        try:
            value, pos = _decoder.raw_decode(payload, pos)
        except json.JSONDecodeError as e:
            raise ListingError(f"invalid JSON in listing output at offset {e.pos}: {e.msg}") from e
        yield value


def _to_record(item: Any) -> VersionRecord | None:
    if not isinstance(item, dict):
        logger.warning("listing_entry_skipped", reason="not an object", entry=repr(item)[:80])
        return None
    try:
        return VersionRecord.model_validate(item)
    except ValidationError as e:
        logger.warning("listing_entry_skipped", reason=str(e), file_name=item.get("fileName"))
        return None


def parse_records(payload: str) -> list[VersionRecord]:
    """Normalize array or newline-delimited listing output to one record list.
    
    Args:
        payload: Raw stdout of the listing command
        
    Returns:
        Records in the order they appear in the payload
        
    Raises:
        ListingError: If the payload is not valid JSON
    """
    records: list[VersionRecord] = []
    for value in _iter_json_values(payload):
        items = value if isinstance(value, list) else [value]
        for item in items:
            record = _to_record(item)
            if record is not None:
                records.append(record)
    
    logger.debug("listing_parsed", records=len(records))
    return records
