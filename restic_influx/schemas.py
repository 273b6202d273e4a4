"""JSON schemas for the restic messages we forward.

Counts are non-negative integers. Only the keys listed here are read;
anything else restic adds is ignored.
"""

_COUNT = {"type": "integer", "minimum": 0}

STATUS_SCHEMA = {
    "type": "object",
    "required": ["seconds_elapsed", "percent_done", "total_files", "total_bytes"],
    "properties": {
        "seconds_elapsed": _COUNT,
        "seconds_remaining": _COUNT,
        "percent_done": {"type": "number"},
        "files_done": _COUNT,
        "total_files": _COUNT,
        "bytes_done": _COUNT,
        "total_bytes": _COUNT,
        "error_count": _COUNT,
        "current_files": {
            "type": ["array", "null"],
            "items": {"type": "string"},
        },
    },
}

SUMMARY_SCHEMA = {
    "type": "object",
    "required": [
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
        "total_duration",
        "snapshot_id",
    ],
    "properties": {
        "files_new": _COUNT,
        "files_changed": _COUNT,
        "files_unmodified": _COUNT,
        "dirs_new": _COUNT,
        "dirs_changed": _COUNT,
        "dirs_unmodified": _COUNT,
        "data_blobs": _COUNT,
        "tree_blobs": _COUNT,
        "data_added": _COUNT,
        "total_files_processed": _COUNT,
        "total_bytes_processed": _COUNT,
        "total_duration": {"type": "number"},
        "snapshot_id": {"type": "string"},
    },
}

ERROR_SCHEMA = {
    "type": "object",
    "required": ["during", "item"],
    "properties": {
        "during": {"type": "string"},
        "item": {"type": "string"},
    },
}
