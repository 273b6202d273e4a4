"""Maps classified restic messages onto typed records."""

import logging
from collections import defaultdict

import jsonschema

from restic_influx.models import (
    ERROR,
    STATUS,
    SUMMARY,
    ErrorRecord,
    RawEvent,
    Record,
    StatusRecord,
    SummaryRecord,
)
from restic_influx.schemas import ERROR_SCHEMA, STATUS_SCHEMA, SUMMARY_SCHEMA

logger = logging.getLogger(__name__)

_SUMMARY_COUNTS = (
    "files_new",
    "files_changed",
    "files_unmodified",
    "dirs_new",
    "dirs_changed",
    "dirs_unmodified",
    "data_blobs",
    "tree_blobs",
    "data_added",
    "total_files_processed",
    "total_bytes_processed",
)


def _build_status(payload: dict) -> StatusRecord:
    current_files = payload.get("current_files") or []
    return StatusRecord(
        seconds_elapsed=int(payload["seconds_elapsed"]),
        seconds_remaining=int(payload.get("seconds_remaining", 0)),
        percent_done=float(payload["percent_done"]),
        files_done=int(payload.get("files_done", 0)),
        total_files=int(payload["total_files"]),
        bytes_done=int(payload.get("bytes_done", 0)),
        total_bytes=int(payload["total_bytes"]),
        error_count=int(payload.get("error_count", 0)),
        current_files=",".join(current_files),
    )


def _build_summary(payload: dict) -> SummaryRecord:
    counts = {name: int(payload[name]) for name in _SUMMARY_COUNTS}
    return SummaryRecord(
        **counts,
        total_duration=float(payload["total_duration"]),
        snapshot_id=payload["snapshot_id"],
    )


def _build_error(payload: dict) -> ErrorRecord:
    return ErrorRecord(during=payload["during"], item=payload["item"])


class Normalizer:
    """Validates each message against its kind's schema and builds the record.

    A message that fails validation is logged and dropped; it never raises.
    """

    def __init__(self):
        self._rules = {
            STATUS: (jsonschema.Draft202012Validator(STATUS_SCHEMA), _build_status),
            SUMMARY: (jsonschema.Draft202012Validator(SUMMARY_SCHEMA), _build_summary),
            ERROR: (jsonschema.Draft202012Validator(ERROR_SCHEMA), _build_error),
        }
        self._stats = {
            "total": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_by_kind": defaultdict(int),
        }

    def normalize(self, event: RawEvent) -> Record | None:
        """Return the typed record for event, or None on a decode failure."""
        rule = self._rules.get(event.message_type)
        if rule is None:
            return None
        validator, build = rule

        self._stats["total"] += 1
        errors = sorted(
            validator.iter_errors(event.payload), key=lambda e: (e.json_path, e.message)
        )
        if errors:
            self._stats["invalid"] += 1
            self._stats["invalid_by_kind"][event.message_type] += 1
            logger.warning(
                "%s parse error: %s",
                event.message_type.capitalize(),
                "; ".join(error.message for error in errors),
            )
            return None

        self._stats["valid"] += 1
        return build(event.payload)

    def get_stats(self) -> dict:
        """Return a copy of the validation counters."""
        stats = dict(self._stats)
        stats["invalid_by_kind"] = dict(stats["invalid_by_kind"])
        return stats
