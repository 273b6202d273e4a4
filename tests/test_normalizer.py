"""Tests for the normalizer module."""

import logging

import pytest
from restic_influx.models import ErrorRecord, RawEvent, StatusRecord, SummaryRecord
from restic_influx.normalizer import Normalizer


def _event(payload):
    return RawEvent(message_type=payload["message_type"], payload=payload)


class TestStatus:
    def test_optional_fields_default(self, status_payload):
        del status_payload["files_done"]
        del status_payload["bytes_done"]
        record = Normalizer().normalize(_event(status_payload))
        assert record == StatusRecord(
            seconds_elapsed=34,
            percent_done=1.0,
            total_files=10,
            total_bytes=1000,
            seconds_remaining=0,
            files_done=0,
            bytes_done=0,
            error_count=0,
            current_files="",
        )

    def test_current_files_joined_with_comma(self, status_payload):
        status_payload["current_files"] = ["/home/a.txt", "/home/b.txt"]
        record = Normalizer().normalize(_event(status_payload))
        assert record.current_files == "/home/a.txt,/home/b.txt"

    def test_current_files_null_is_empty(self, status_payload):
        status_payload["current_files"] = None
        record = Normalizer().normalize(_event(status_payload))
        assert record.current_files == ""

    def test_all_fields_present(self, status_payload):
        status_payload.update({
            "seconds_remaining": 12,
            "error_count": 2,
            "current_files": ["/x"],
        })
        record = Normalizer().normalize(_event(status_payload))
        assert record.seconds_remaining == 12
        assert record.error_count == 2
        assert record.current_files == "/x"
        assert record.files_done == 10

    def test_integer_percent_done_becomes_float(self, status_payload):
        status_payload["percent_done"] = 0
        record = Normalizer().normalize(_event(status_payload))
        assert record.percent_done == 0.0
        assert isinstance(record.percent_done, float)

    def test_unknown_keys_ignored(self, status_payload):
        status_payload["time"] = "2023-01-01T00:00:00Z"
        status_payload["total_files_new"] = 5
        record = Normalizer().normalize(_event(status_payload))
        assert isinstance(record, StatusRecord)

    @pytest.mark.parametrize("field", [
        "seconds_elapsed", "percent_done", "total_files", "total_bytes",
    ])
    def test_missing_required_field(self, status_payload, field, caplog):
        del status_payload[field]
        with caplog.at_level(logging.WARNING):
            assert Normalizer().normalize(_event(status_payload)) is None
        assert "Status parse error" in caplog.text
        assert field in caplog.text

    @pytest.mark.parametrize("field,value", [
        ("seconds_elapsed", -1),
        ("total_files", "10"),
        ("total_bytes", 1.5),
        ("files_done", True),
        ("percent_done", "100%"),
        ("current_files", "/single/path"),
        ("current_files", [1, 2]),
    ])
    def test_malformed_field(self, status_payload, field, value):
        status_payload[field] = value
        assert Normalizer().normalize(_event(status_payload)) is None


class TestSummary:
    def test_all_fields_preserved(self, summary_payload):
        record = Normalizer().normalize(_event(summary_payload))
        assert isinstance(record, SummaryRecord)
        assert record.files_unmodified == 2331042
        assert record.total_bytes_processed == 2306593302132
        assert record.total_duration == 555.877498816
        assert record.snapshot_id == "59717ddd"

    @pytest.mark.parametrize("field", ["files_new", "total_duration", "snapshot_id", "tree_blobs"])
    def test_missing_field_is_a_decode_failure(self, summary_payload, field, caplog):
        del summary_payload[field]
        with caplog.at_level(logging.WARNING):
            assert Normalizer().normalize(_event(summary_payload)) is None
        assert "Summary parse error" in caplog.text


class TestError:
    def test_builds_record(self, error_payload):
        record = Normalizer().normalize(_event(error_payload))
        assert record == ErrorRecord(during="archival", item="/srv/private")

    @pytest.mark.parametrize("field", ["during", "item"])
    def test_missing_field(self, error_payload, field, caplog):
        del error_payload[field]
        with caplog.at_level(logging.WARNING):
            assert Normalizer().normalize(_event(error_payload)) is None
        assert "Error parse error" in caplog.text


class TestStats:
    def test_counts_valid_and_invalid(self, status_payload, error_payload):
        normalizer = Normalizer()
        normalizer.normalize(_event(status_payload))
        del error_payload["item"]
        normalizer.normalize(_event(error_payload))

        stats = normalizer.get_stats()
        assert stats["total"] == 2
        assert stats["valid"] == 1
        assert stats["invalid"] == 1
        assert stats["invalid_by_kind"] == {"error": 1}

    def test_unknown_kind_returns_none(self):
        normalizer = Normalizer()
        assert normalizer.normalize(RawEvent("backup", {})) is None
        assert normalizer.get_stats()["total"] == 0
