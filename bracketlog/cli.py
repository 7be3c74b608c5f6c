"""bracketlog CLI — build one request/response record and append it to its log file."""

import logging
import sys
from argparse import ArgumentParser

import yaml

from bracketlog.config import Config, load_config
from bracketlog.models import (
    LogLevel,
    db_request,
    db_response,
    http_request,
    http_response,
)
from bracketlog.writer import write_record

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="bracketlog",
        description="Append a server or db request/response record to its log file.",
    )
    parser.add_argument("--config", help="Path to a YAML config file")
    parser.add_argument("--log-path", help="Directory holding the log files")
    parser.add_argument("--extension", help="Log file extension (default: log)")
    parser.add_argument(
        "--level",
        choices=["info", "error"],
        default="info",
        help="Log level (default: info)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the line without writing it",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("http-request", help="HTTP request received by the server")
    p.add_argument("origin", help="Origin address, e.g. 35.111.95.142")
    p.add_argument("api", help="API path, e.g. /api/v1/health_check")
    p.add_argument("method", help="HTTP method, e.g. GET")
    p.add_argument("--size", type=int, help="Payload size in bytes")
    p.add_argument("--body", help="Request body text")

    p = sub.add_parser("http-response", help="HTTP response sent by the server")
    p.add_argument("origin", help="Origin address of the request")
    p.add_argument("status", type=int, help="HTTP status code")
    p.add_argument("--body", help="Response body text")

    p = sub.add_parser("db-request", help="Command received by the data store")
    p.add_argument("socket", help="Peer socket address, e.g. 127.0.0.1:5000")
    p.add_argument("db_command", metavar="command", help="Command name")
    p.add_argument("--pile", help="Target pile name")
    p.add_argument("--size", type=int, help="Payload size in bytes")

    p = sub.add_parser("db-response", help="Result returned by the data store")
    p.add_argument("exit_code", type=int, help="Exit code")
    p.add_argument("--message", help="Response message")

    return parser


def _resolve_config(args) -> Config:
    config = load_config(args.config)
    return Config(
        log_path=args.log_path or config.log_path,
        log_format_extension=(args.extension or config.log_format_extension).lstrip("."),
    )


def build_record(args):
    """Turn parsed arguments into a record stamped with the current time."""
    level = LogLevel.parse(args.level)
    if args.command == "http-request":
        return http_request(args.origin, args.api, args.method, args.size, args.body, level)
    if args.command == "http-response":
        return http_response(args.origin, args.status, args.body, level)
    if args.command == "db-request":
        return db_request(args.socket, args.db_command, args.pile, args.size, level)
    if args.command == "db-response":
        return db_response(args.exit_code, args.message, level)
    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [bracketlog] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        record = build_record(args)
    except (TypeError, ValueError) as e:
        parser.error(str(e))

    line = record.as_log_str()
    print(line)
    if args.dry_run:
        return 0

    try:
        config = _resolve_config(args)
    except (yaml.YAMLError, ValueError) as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    try:
        path = write_record(record, config)
    except OSError as e:
        logger.error("Failed to write log line: %s", e)
        return 1
    logger.debug("Appended to %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
