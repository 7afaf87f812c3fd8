"""Structured logging configuration for savepoints."""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger

from savepoints.settings import LoggingSettings


class JSONFormatter:
    """JSON formatter for structured logging."""

    def __call__(self, record: dict[str, Any]) -> str:
        """Serialize the record into ``extra`` and return the loguru template."""
        log_data = {
            "timestamp": record["time"].isoformat(),
            "level": record["level"].name,
            "message": record["message"],
            "module": record.get("module", ""),
            "function": record.get("function", ""),
            "line": record.get("line", 0),
        }

        if record.get("exception"):
            exc_type, exc_value, _ = record["exception"]
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "value": str(exc_value) if exc_value else None,
            }

        extra = {key: value for key, value in record["extra"].items() if key != "serialized"}
        log_data.update(extra)

        record["extra"]["serialized"] = json.dumps(log_data, ensure_ascii=False, default=str)
        return "{extra[serialized]}\n"


TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(
    settings: LoggingSettings | None = None,
    *,
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """Route loguru output to stderr and the configured log file.

    Args:
        settings: Logging section of the configuration; defaults apply if None.
        level: Overrides ``settings.level`` (e.g. from the command line).
        json_format: Overrides ``settings.json_format``.
    """
    settings = settings or LoggingSettings()
    level = level or settings.level
    as_json = settings.json_format if json_format is None else json_format
    formatter: Any = JSONFormatter() if as_json else TEXT_FORMAT

    handlers: list[dict[str, Any]] = [
        {"sink": sys.stderr, "format": formatter, "level": level, "colorize": not as_json},
    ]
    if settings.log_file:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            {
                "sink": settings.log_file,
                "format": formatter,
                "level": level,
                "rotation": "10 MB",
                "retention": "7 days",
                "compression": "zip",
            }
        )
    logger.configure(handlers=handlers, extra={"component": "savepoints"})


def get_logger(component: str) -> Any:
    """Logger bound to a component name, shown in every record it emits."""
    return logger.bind(component=component)
