"""restic-influx: forward restic backup progress events to InfluxDB."""

__version__ = "0.1.0"
