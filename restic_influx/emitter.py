"""Turns typed records into timestamped points."""

import dataclasses
import time

from restic_influx.models import MetricPoint, Record


class Emitter:
    """Stamps records with the ingestion wall clock.

    restic messages carry no trustworthy time of their own, so the
    timestamp is always taken here.
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time_ns

    def emit(self, record: Record) -> MetricPoint:
        fields = {f.name: getattr(record, f.name) for f in dataclasses.fields(record)}
        return MetricPoint(
            measurement=record.MEASUREMENT,
            timestamp=self._clock(),
            fields=fields,
        )
