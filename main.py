"""Entry point: restic backup --json | python main.py -u USER -p PASS -d DB"""

import logging
import sys

from restic_influx.config import load_config
from restic_influx.pipeline import Pipeline
from restic_influx.reader import read_lines
from restic_influx.sampler import Sampler
from restic_influx.sink import DryRunSink, InfluxSink, SinkError


def build_sink(config):
    if config.dry_run:
        return DryRunSink()
    return InfluxSink(
        config.host,
        config.database,
        config.user,
        config.password,
        timeout=config.timeout,
    )


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        stream=sys.stderr,
    )

    config = load_config()
    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    logger = logging.getLogger(__name__)
    logger.info(
        "Starting restic-influx - sink=%s, database=%s, interval=%ss",
        "dry-run" if config.dry_run else config.host,
        config.database,
        config.interval,
    )

    sink = build_sink(config)
    pipeline = Pipeline(sink, Sampler(config.interval))
    try:
        pipeline.run(read_lines(config.input_path))
    except SinkError as e:
        logger.error("Giving up: %s (%s)", e, pipeline.stats.format_summary())
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("Cannot read input: %s", e)
        sys.exit(1)
    finally:
        sink.close()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
