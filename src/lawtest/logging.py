# src/lawtest/logging.py
"""Structured logging for lawtest.

Every checker logs through ``get_logger(__name__)``: ``law_holds`` and
``structure_verified`` on success, ``parallel_*`` and ``check_timeout``
warnings otherwise. Until ``configure_logging`` is called these go through
structlog's defaults.

The pytest plugin calls ``configure_logging`` when ``--lawtest-log-format``
or ``--lawtest-log-level`` is given:

    pytest --lawtest-log-format=json --lawtest-log-level=WARNING

stdlib loggers are routed through the same ProcessorFormatter, so checker
events and any stdlib logging in the code under test share one format.
"""

import logging
import sys
from typing import Any, Literal, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

type LogFormat = Literal["console", "json"]

LOG_FORMATS: tuple[LogFormat, ...] = ("console", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _drop_formatter_keys(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _renderer(log_format: LogFormat) -> list[Any]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=False)]


def configure_logging(
    *,
    log_format: LogFormat = "console",
    level: str = "INFO",
    stream: TextIO | None = None,
) -> logging.Handler:
    """Route structlog and stdlib logging to one handler.

    Args:
        log_format: "console" for key=value lines, "json" for one object per line.
        level: DEBUG, INFO, WARNING or ERROR (case-insensitive).
        stream: Destination (default: sys.stdout at call time).

    Returns:
        The installed root handler.

    Raises:
        ValueError: For an unknown format or level.
    """
    if log_format not in LOG_FORMATS:
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got {log_format!r}")
    if level.upper() not in LOG_LEVELS:
        raise ValueError(f"level must be one of {LOG_LEVELS}, got {level!r}")

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfiguration between sessions must not hand out stale loggers
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(
        ProcessorFormatter(
            processors=[_drop_formatter_keys, *_renderer(log_format)],
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
    return handler


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Logger for a lawtest module (typically ``__name__``)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
