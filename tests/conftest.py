import json

import pytest
import structlog

from b2unhide.errors import ListingError, UnhideCommandError
from b2unhide.logging_config import remove_handlers
from b2unhide.storage import ObjectStorageClient


class FakeStorageClient(ObjectStorageClient):
    """Records calls instead of talking to B2."""

    def __init__(self, payload="", fail_names=(), listing_error=None):
        self.payload = payload
        self.fail_names = set(fail_names)
        self.listing_error = listing_error
        self.listed = []
        self.unhidden = []

    @property
    def name(self):
        return "fake"

    def unhide_command(self, bucket, name):
        return ["b2", "file", "unhide", f"b2://{bucket}/{name}"]

    async def list_versions(self, target_uri):
        self.listed.append(target_uri)
        if self.listing_error:
            raise ListingError(self.listing_error)
        return self.payload

    async def unhide(self, bucket, name):
        self.unhidden.append((bucket, name))
        if name in self.fail_names:
            raise UnhideCommandError(name, returncode=1, stderr="file not hidden")


@pytest.fixture
def listing_rows():
    return [
        {"fileName": "a.txt", "action": "upload"},
        {"fileName": "a.txt", "action": "hide"},
        {"fileName": "b/c.txt", "action": "hide"},
        {"fileName": "b/c.txt", "action": "upload"},
        {"fileName": "b/c.txt", "action": "hide"},
        {"fileName": "d.txt", "action": "upload"},
        {"fileName": "big.bin", "action": "start"},
    ]


@pytest.fixture
def array_payload(listing_rows):
    return json.dumps(listing_rows, indent=2)


@pytest.fixture
def ndjson_payload(listing_rows):
    return "\n".join(json.dumps(row) for row in listing_rows) + "\n"


@pytest.fixture
def fake_client_factory():
    return FakeStorageClient


@pytest.fixture(autouse=True)
def reset_structlog():
    """main() attaches log handlers to the captured stderr of the running test."""
    yield
    structlog.reset_defaults()
    remove_handlers()
