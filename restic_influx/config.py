"""Configuration: frozen dataclass built from YAML file, env vars and CLI args."""

import logging
import math
import os
import sys
from argparse import ArgumentParser
from dataclasses import dataclass, fields

import yaml

from restic_influx import __version__

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:8086"

ENV_VARS = {
    "dry_run": "RESTIC_INFLUX_DRY_RUN",
    "verbose": "RESTIC_INFLUX_VERBOSE",
    "interval": "RESTIC_INFLUX_INTERVAL",
    "user": "INFLUXDB_USER",
    "password": "INFLUXDB_PASSWORD",
    "database": "INFLUXDB_DATABASE",
    "host": "INFLUXDB_HOST",
    "timeout": "INFLUXDB_TIMEOUT",
}

CONFIG_PATH_ENV = "RESTIC_INFLUX_CONFIG"

REQUIRED = ("user", "password", "database")


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    user: str
    password: str
    database: str
    host: str = DEFAULT_HOST
    interval: float = 10.0
    timeout: float = 10.0
    dry_run: bool = False
    verbose: bool = False
    input_path: str = "-"


_CONVERTERS = {
    "dry_run": _parse_bool,
    "verbose": _parse_bool,
    "interval": float,
    "timeout": float,
}


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser.

    Every option defaults to None so that only flags given on the command
    line override the file and environment layers.
    """
    parser = ArgumentParser(
        prog="restic-influx",
        description="Forward `restic backup --json` progress messages to InfluxDB.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print points instead of writing them to InfluxDB",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=None,
        help="Enable debug logging",
    )
    parser.add_argument(
        "-i", "--interval",
        help="Minimum seconds between two status points (default: 10)",
    )
    parser.add_argument("-u", "--user", help="InfluxDB user")
    parser.add_argument("-p", "--password", help="InfluxDB password")
    parser.add_argument("-d", "--database", help="InfluxDB database")
    parser.add_argument(
        "--host",
        help=f"InfluxDB base URL (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "--timeout",
        help="HTTP timeout in seconds for each write (default: 10)",
    )
    parser.add_argument(
        "--input",
        dest="input_path",
        help="Read messages from this file instead of stdin (default: -)",
    )
    parser.add_argument(
        "--config",
        help=f"YAML file with default option values (env: {CONFIG_PATH_ENV})",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def load_yaml(path: str) -> dict:
    """Load a flat option mapping from YAML. Dashes in keys become underscores."""
    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    known = {f.name for f in fields(Config)}
    values = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            logger.warning("Ignoring unknown config key %r in %s", key, path)
            continue
        values[name] = value
    return values


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority)."""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    values: dict = {}

    config_path = args.config or os.environ.get(CONFIG_PATH_ENV)
    if config_path:
        try:
            values.update(load_yaml(config_path))
        except FileNotFoundError:
            parser.error(f"config file not found: {config_path}")
        except (yaml.YAMLError, ValueError) as e:
            parser.error(f"invalid config file {config_path}: {e}")

    for name, env_var in ENV_VARS.items():
        if env_var in os.environ:
            values[name] = os.environ[env_var]

    for name in ENV_VARS:
        value = getattr(args, name)
        if value is not None:
            values[name] = value
    if args.input_path is not None:
        values["input_path"] = args.input_path

    for name, convert in _CONVERTERS.items():
        if name in values:
            try:
                values[name] = convert(values[name])
            except (TypeError, ValueError):
                parser.error(f"invalid value for {name}: {values[name]!r}")

    missing = [name for name in REQUIRED if not values.get(name)]
    if missing:
        parser.error(
            "missing required option(s): "
            + ", ".join(f"--{name} (or {ENV_VARS[name]})" for name in missing)
        )

    for name in ("interval", "timeout"):
        value = values.get(name, 0)
        if not math.isfinite(value) or value < 0:
            parser.error(f"{name} must be a finite non-negative number")

    for name in ("user", "password", "database", "host", "input_path"):
        if name in values:
            values[name] = str(values[name])

    return Config(**values)
