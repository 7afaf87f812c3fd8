"""CLI for savepoint lookup."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from savepoints.exceptions import SavepointError
from savepoints.logging_config import get_logger, setup_logging
from savepoints.resolver import SavepointLocator, resolve_latest_savepoint
from savepoints.settings import LOG_LEVELS, get_settings

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="savepoints",
        description="Print the location of the most recent savepoint in an S3 prefix or local directory",
    )
    parser.add_argument("location", help="s3://bucket/prefix (also s3a://, s3p://) or a local directory")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Override the configured log level")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON lines")
    return parser


def main(argv: Sequence[str] | None = None, locator: SavepointLocator | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings(str(args.config) if args.config else None)
    except SavepointError as exc:
        setup_logging(level="ERROR")
        logger.error(exc.message)
        return 1

    setup_logging(
        settings.logging,
        level=args.log_level,
        json_format=True if args.json_logs else None,
    )

    try:
        result = resolve_latest_savepoint(args.location, settings=settings, locator=locator)
    except SavepointError as exc:
        logger.error("Unable to resolve savepoint in {}: {}", args.location, exc.message)
        return 1

    if not result:
        logger.warning("No savepoint metadata found under {}", args.location)
    else:
        logger.info("Latest savepoint: {}", result)
    sys.stdout.write(result + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
