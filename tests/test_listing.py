import json

import pytest

from b2unhide.errors import ListingError, UsageError
from b2unhide.listing import (
    build_target_uri,
    collect_hidden_names,
    normalize_prefix,
    parse_records,
    resolve_action,
)
from b2unhide.models import VersionRecord


def test_prefix_gets_trailing_slash():
    assert normalize_prefix("folder") == "folder/"
    assert normalize_prefix("folder/") == "folder/"
    assert normalize_prefix("a/b") == "a/b/"
    assert normalize_prefix("") == ""
    assert normalize_prefix(None) == ""


def test_target_uri():
    assert build_target_uri("mybucket") == "b2://mybucket"
    assert build_target_uri("mybucket", "") == "b2://mybucket"
    assert build_target_uri("mybucket", "folder") == build_target_uri("mybucket", "folder/")
    assert build_target_uri("mybucket", "folder") == "b2://mybucket/folder/"


def test_target_uri_requires_bucket():
    with pytest.raises(UsageError):
        build_target_uri("", "folder")


def test_array_and_ndjson_parse_the_same(array_payload, ndjson_payload):
    from_array = parse_records(array_payload)
    from_lines = parse_records(ndjson_payload)
    assert len(from_array) == 7
    assert [r.model_dump() for r in from_array] == [r.model_dump() for r in from_lines]
    assert collect_hidden_names(from_array) == collect_hidden_names(from_lines)


def test_parse_concatenated_pretty_objects():
    payload = json.dumps({"fileName": "x", "action": "hide"}, indent=2) + "\n" + json.dumps(
        {"fileName": "y", "action": "upload"}, indent=2
    )
    records = parse_records(payload)
    assert [r.fileName for r in records] == ["x", "y"]


def test_parse_empty_payload():
    assert parse_records("") == []
    assert parse_records("  \n") == []
    assert parse_records("[]") == []


def test_parse_keeps_extra_fields():
    records = parse_records('[{"fileName": "a", "action": "hide", "fileId": "4_z123", "size": 0}]')
    assert records[0].model_extra["fileId"] == "4_z123"


def test_parse_skips_non_objects():
    records = parse_records('[{"fileName": "a", "action": "hide"}, 3, "text"]')
    assert [r.fileName for r in records] == ["a"]


def test_parse_invalid_json_is_listing_error():
    with pytest.raises(ListingError, match="invalid JSON"):
        parse_records('[{"fileName": "a", ')


def test_resolve_action_field_fallback():
    assert resolve_action(VersionRecord(fileName="a", action="hide")) == "hide"
    assert resolve_action(VersionRecord(fileName="a", fileAction="hide")) == "hide"
    assert resolve_action(VersionRecord(fileName="a", action="", fileAction="hide")) == "hide"
    assert resolve_action(VersionRecord(fileName="a", action="upload", fileAction="hide")) == "upload"
    assert resolve_action(VersionRecord(fileName="a")) == ""


def test_hidden_names_unique_and_sorted(array_payload):
    records = parse_records(array_payload)
    assert collect_hidden_names(records) == ["a.txt", "b/c.txt"]


def test_hidden_names_idempotent(ndjson_payload):
    records = parse_records(ndjson_payload)
    assert collect_hidden_names(records) == collect_hidden_names(records)
    assert collect_hidden_names(list(reversed(records))) == ["a.txt", "b/c.txt"]


def test_hidden_names_from_older_field_name():
    payload = "\n".join([
        json.dumps({"fileName": "z.txt", "fileAction": "hide"}),
        json.dumps({"fileName": "m.txt", "fileAction": "hide"}),
        json.dumps({"fileName": "q.txt", "fileAction": "upload"}),
        json.dumps({"action": "hide"}),
    ])
    assert collect_hidden_names(parse_records(payload)) == ["m.txt", "z.txt"]


def test_no_hidden_names():
    assert collect_hidden_names([]) == []
    assert collect_hidden_names(parse_records('[{"fileName": "a", "action": "upload"}]')) == []
