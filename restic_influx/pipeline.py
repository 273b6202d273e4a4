"""The ingestion pipeline: decode, normalize, sample, emit, write."""

import logging
from typing import Iterable

from restic_influx.decoder import decode_line
from restic_influx.emitter import Emitter
from restic_influx.metrics import PipelineStats
from restic_influx.models import MetricPoint
from restic_influx.normalizer import Normalizer
from restic_influx.sampler import Sampler
from restic_influx.sink import Sink

logger = logging.getLogger(__name__)


class Pipeline:
    """Processes restic JSON lines strictly one after another.

    Each point is written before the next line is read, so a slow sink
    slows down reading as well. SinkError is not caught here.
    """

    def __init__(
        self,
        sink: Sink,
        sampler: Sampler,
        normalizer: Normalizer | None = None,
        emitter: Emitter | None = None,
        stats: PipelineStats | None = None,
    ):
        self._sink = sink
        self._sampler = sampler
        self._normalizer = normalizer or Normalizer()
        self._emitter = emitter or Emitter()
        self._stats = stats or PipelineStats()

    @property
    def stats(self) -> PipelineStats:
        return self._stats

    def process_line(self, line: str) -> MetricPoint | None:
        """Run one line through the pipeline. Returns the point written, if any."""
        self._stats.record_read()

        event = decode_line(line)
        if event is None:
            self._stats.record_ignored()
            return None

        record = self._normalizer.normalize(event)
        if record is None:
            self._stats.record_invalid()
            return None

        if not self._sampler.allow(record.KIND):
            self._stats.record_throttled()
            return None

        point = self._emitter.emit(record)
        self._sink.write(point)
        self._stats.record_emitted(point.measurement)
        return point

    def run(self, lines: Iterable[str]) -> PipelineStats:
        """Consume lines until the source is exhausted."""
        for line in lines:
            self.process_line(line)
        logger.info("Input exhausted: %s", self._stats.format_summary())
        return self._stats
