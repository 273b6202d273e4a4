"""Typed records for restic JSON messages and the points they become."""

from dataclasses import dataclass, field

STATUS = "status"
SUMMARY = "summary"
ERROR = "error"

MESSAGE_TYPES = (STATUS, SUMMARY, ERROR)


@dataclass(frozen=True)
class RawEvent:
    """A decoded JSON object plus its discriminant."""

    message_type: str
    payload: dict


@dataclass(frozen=True)
class StatusRecord:
    KIND = STATUS
    MEASUREMENT = "status_message"

    seconds_elapsed: int
    percent_done: float
    total_files: int
    total_bytes: int
    seconds_remaining: int = 0
    files_done: int = 0
    bytes_done: int = 0
    error_count: int = 0
    current_files: str = ""
    message_type: str = STATUS


@dataclass(frozen=True)
class SummaryRecord:
    KIND = SUMMARY
    MEASUREMENT = "summary_message"

    files_new: int
    files_changed: int
    files_unmodified: int
    dirs_new: int
    dirs_changed: int
    dirs_unmodified: int
    data_blobs: int
    tree_blobs: int
    data_added: int
    total_files_processed: int
    total_bytes_processed: int
    total_duration: float
    snapshot_id: str
    message_type: str = SUMMARY


@dataclass(frozen=True)
class ErrorRecord:
    KIND = ERROR
    MEASUREMENT = "error_message"

    during: str
    item: str
    message_type: str = ERROR


Record = StatusRecord | SummaryRecord | ErrorRecord


@dataclass(frozen=True)
class MetricPoint:
    """One timestamped point for the time-series store.

    Attributes:
        measurement: Series name, e.g. ``status_message``.
        timestamp: Emission time in nanoseconds since the epoch.
        fields: Field name to int, float or str value.
    """

    measurement: str
    timestamp: int
    fields: dict[str, int | float | str] = field(default_factory=dict)
