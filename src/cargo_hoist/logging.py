"""Logging configuration."""
import json
import logging
import sys
from typing import Any, List

import structlog
from structlog.types import EventDict, Processor

APP_LOGGER = "cargo_hoist"

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


class CompactJSONRenderer:
    """Single-line JSON renderer with minimal output."""
    def __call__(self, _: Any, __: str, event_dict: EventDict) -> str:
        items = {
            "ts": event_dict.pop("timestamp", None),
            "lvl": event_dict.pop("level", "???"),
            "msg": event_dict.pop("event", ""),
        }
        event_dict.pop("logger", None)
        if event_dict:
            items["data"] = event_dict
        return json.dumps(items, separators=(",", ":"), default=str)


def verbosity_to_level(verbosity: int = 0, quiet: bool = False) -> int:
    """Map the CLI verbosity count and quiet flag to a logging level."""
    if quiet:
        return logging.ERROR
    return VERBOSITY_LEVELS.get(max(verbosity, 0), logging.DEBUG)


def configure_logging(verbosity: int = 0, quiet: bool = False) -> None:
    """Configure structured logging for the application.

    Logs always go to stderr so stdout stays clean for command output
    (`hoist --path` is meant to be consumed by scripts). A TTY gets the
    colored console renderer, anything else gets compact JSON lines.
    """
    level = verbosity_to_level(verbosity, quiet)

    app_logger = logging.getLogger(APP_LOGGER)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if sys.stderr.isatty()
        else CompactJSONRenderer()
    )
    processors: List[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger under the application namespace."""
    if not name.startswith(APP_LOGGER):
        name = f"{APP_LOGGER}.{name}"
    return structlog.get_logger(name)
