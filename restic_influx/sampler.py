"""Per-kind minimum-interval sampling for chatty message kinds."""

import math
import time

from restic_influx.models import STATUS


class Sampler:
    """Admits at most one record of a throttled kind per interval.

    restic prints a status line several times a second; storing every
    one is wasteful. Kinds outside ``throttled`` always pass.
    """

    def __init__(self, interval: float, throttled=(STATUS,), time_func=None):
        if not math.isfinite(interval) or interval < 0:
            raise ValueError(f"interval must be finite and non-negative, got {interval}")
        self._interval = interval
        self._time_func = time_func or time.monotonic
        # Seeded in the past so the first throttled record always passes.
        start = self._time_func() - 2 * interval
        self._last_emitted: dict[str, float] = {kind: start for kind in throttled}

    @property
    def interval(self) -> float:
        return self._interval

    def allow(self, kind: str) -> bool:
        """Return True if a record of kind may be emitted now."""
        if kind not in self._last_emitted:
            return True

        now = self._time_func()
        if now - self._last_emitted[kind] < self._interval:
            return False

        self._last_emitted[kind] = now
        return True
