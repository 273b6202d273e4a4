import json

import pytest


@pytest.fixture
def status_payload():
    return {
        "message_type": "status",
        "seconds_elapsed": 34,
        "percent_done": 1.0,
        "total_files": 10,
        "total_bytes": 1000,
        "files_done": 10,
        "bytes_done": 1000,
    }


@pytest.fixture
def summary_payload():
    return {
        "message_type": "summary",
        "files_new": 4,
        "files_changed": 10,
        "files_unmodified": 2331042,
        "dirs_new": 0,
        "dirs_changed": 15,
        "dirs_unmodified": 888795,
        "data_blobs": 28,
        "tree_blobs": 14,
        "data_added": 27699291,
        "total_files_processed": 2331056,
        "total_bytes_processed": 2306593302132,
        "total_duration": 555.877498816,
        "snapshot_id": "59717ddd",
    }


@pytest.fixture
def error_payload():
    return {
        "message_type": "error",
        "error": {"message": "permission denied"},
        "during": "archival",
        "item": "/srv/private",
    }


@pytest.fixture
def status_line(status_payload):
    return json.dumps(status_payload)


@pytest.fixture
def summary_line(summary_payload):
    return json.dumps(summary_payload)


@pytest.fixture
def error_line(error_payload):
    return json.dumps(error_payload)


class FakeClock:
    """Manually advanced clock, callable like time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class RecordingSink:
    """Sink that keeps every point it is given."""

    def __init__(self):
        self.points = []
        self.closed = False

    def write(self, point):
        self.points.append(point)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_sink():
    return RecordingSink()
