# src/spatialmin/core/logging.py
"""Structured logging for spatialmin.

structlog events and plain ``logging.getLogger(__name__)`` records share one
stdlib handler whose ``ProcessorFormatter`` renders both the same way,
either as key=value console lines or as one JSON object per line.

Logs go to stderr. stdout belongs to the run report printed by the CLI, so
redirecting it (``spatialmin map.json > report.txt``) captures the report
alone.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Libraries that chatter at DEBUG; held at WARNING or above
_QUIET_LOGGERS: tuple[str, ...] = ("dynaconf",)


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Strip the bookkeeping keys ProcessorFormatter adds to every record."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _pre_chain() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _renderers(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _drop_formatter_keys,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [_drop_formatter_keys, structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        json_output: Render JSON lines instead of console text
        level: Root level name (DEBUG, INFO, WARNING, ERROR)
        stream: Destination; defaults to the current ``sys.stderr``
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Tests reconfigure between cases
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_renderers(json_output), foreign_pre_chain=pre_chain))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
