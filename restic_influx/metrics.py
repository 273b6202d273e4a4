"""Counters describing what the pipeline did with its input."""


class PipelineStats:
    """Per-run line counters. Single-threaded, like the pipeline itself."""

    def __init__(self):
        self.lines_read = 0
        self.ignored = 0
        self.invalid = 0
        self.throttled = 0
        self.emitted: dict[str, int] = {}

    def record_read(self):
        self.lines_read += 1

    def record_ignored(self):
        """A line that was not JSON or had no recognized message_type."""
        self.ignored += 1

    def record_invalid(self):
        self.invalid += 1

    def record_throttled(self):
        self.throttled += 1

    def record_emitted(self, measurement: str):
        self.emitted[measurement] = self.emitted.get(measurement, 0) + 1

    @property
    def total_emitted(self) -> int:
        return sum(self.emitted.values())

    def snapshot(self) -> dict:
        return {
            "lines_read": self.lines_read,
            "ignored": self.ignored,
            "invalid": self.invalid,
            "throttled": self.throttled,
            "emitted": self.total_emitted,
            "emitted_by_measurement": dict(self.emitted),
        }

    def format_summary(self) -> str:
        return (
            f"read={self.lines_read} ignored={self.ignored} "
            f"invalid={self.invalid} throttled={self.throttled} "
            f"emitted={self.total_emitted}"
        )
