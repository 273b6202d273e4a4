"""Parses restic JSON lines and classifies them by message_type."""

import json
import logging
import math

from restic_influx.models import MESSAGE_TYPES, RawEvent

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    # NaN and Infinity are not JSON, and InfluxDB refuses them as field values
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_finite(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


def decode_line(line: str) -> RawEvent | None:
    """Decode one line into a RawEvent. Returns None for anything unusable.

    Garbled lines are routine on a pipe from restic, so nothing here is
    reported above DEBUG.
    """
    stripped = line.strip()
    if not stripped:
        return None

    try:
        data = json.loads(
            stripped, parse_constant=_reject_constant, parse_float=_parse_finite
        )
    except (ValueError, RecursionError):
        logger.debug("Skipping non-JSON line: %s", stripped[:100])
        return None

    if not isinstance(data, dict):
        return None

    message_type = data.get("message_type")
    if not isinstance(message_type, str) or message_type not in MESSAGE_TYPES:
        logger.debug("Skipping message with type %r", message_type)
        return None

    return RawEvent(message_type=message_type, payload=data)
