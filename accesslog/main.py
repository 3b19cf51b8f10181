"""access-log-loader — load a Traefik JSON access log into SQLite."""

import argparse
import logging
import sys

from accesslog.config import Config, load_config, load_yaml_config
from accesslog.errors import LogFileError, LogParseError, StorageError
from accesslog.parser import parse_access_log
from accesslog.storage import insert_logs

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [access-log-loader] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="access-log-loader",
        description="Load a line-delimited JSON access log into a SQLite table.",
    )
    parser.add_argument(
        "--log-file", "--log_file", "-log_file", dest="log_file", default=None,
        help="Path to the traefik log file",
    )
    parser.add_argument(
        "--sql-db", "--sql_db", "-sql_db", dest="sql_db", default=None,
        help="Path to the sqlite database (created if absent)",
    )
    parser.add_argument(
        "--truncate", "-truncate", action="store_true",
        help="Truncate the log file after reading (irreversible)",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to an optional YAML config file",
    )
    parser.add_argument(
        "--log-level", dest="log_level", default=None,
        help="Logging level (default: INFO)",
    )
    return parser


def run(config: Config) -> int:
    """Parse then insert. Returns the process exit code."""
    if not config.log_file:
        print("No log file specified, exiting.")
        return 1
    if not config.sql_db:
        print("No sql DB specified, exiting.")
        return 1

    logger.info("Parsing access logs from %s", config.log_file)
    try:
        logs = parse_access_log(config.log_file, config.truncate)
    except (LogFileError, LogParseError) as err:
        print(f"Unable to parse log file: {err}")
        return 1

    logger.info("Inserting %d logs to sql database %s", len(logs), config.sql_db)
    try:
        insert_logs(logs, config.sql_db)
    except StorageError as err:
        # Insert failures are reported but do not change the exit status.
        print(f"Error inserting logs to database: {err}")
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config(args, load_yaml_config(args.config))
    logging.getLogger().setLevel(config.log_level)
    return run(config)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
