"""Destinations for emitted points: InfluxDB over HTTP, or a dry-run trace."""

import logging
import sys
from typing import Protocol, runtime_checkable

import requests

from restic_influx.line_protocol import encode_point
from restic_influx.models import MetricPoint

logger = logging.getLogger(__name__)


class SinkError(Exception):
    """Raised when a point could not be delivered."""


@runtime_checkable
class Sink(Protocol):
    def write(self, point: MetricPoint) -> None:
        ...

    def close(self) -> None:
        ...


class InfluxSink:
    """Writes points one at a time to the InfluxDB 1.x ``/write`` endpoint.

    There is no retry and no buffering: any failure raises SinkError and
    the caller decides what to do with it.
    """

    def __init__(
        self,
        host: str,
        database: str,
        user: str,
        password: str,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self._url = host.rstrip("/") + "/write"
        self._params = {"db": database, "u": user, "p": password, "precision": "ns"}
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "text/plain; charset=utf-8"})
        self._written = 0

    @property
    def written(self) -> int:
        return self._written

    def write(self, point: MetricPoint) -> None:
        body = encode_point(point).encode("utf-8")
        try:
            response = self._session.post(
                self._url, params=self._params, data=body, timeout=self._timeout
            )
        except requests.RequestException as e:
            raise SinkError(f"write to {self._url} failed: {e}") from e

        if not response.ok:
            raise SinkError(
                f"write to {self._url} rejected: HTTP {response.status_code} "
                f"{response.text.strip()[:200]}"
            )
        self._written += 1
        logger.debug("Wrote %s point", point.measurement)

    def close(self) -> None:
        self._session.close()


class DryRunSink:
    """Prints each point in line protocol instead of sending it anywhere."""

    def __init__(self, stream=None):
        self._stream = stream or sys.stdout
        self._written = 0

    @property
    def written(self) -> int:
        return self._written

    def write(self, point: MetricPoint) -> None:
        print(f"-> {encode_point(point)}", file=self._stream, flush=True)
        self._written += 1

    def close(self) -> None:
        pass
