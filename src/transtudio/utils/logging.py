"""Structured logging setup shared by the CLI and the translation services."""

import sys
from pathlib import Path
from typing import Any, Optional, TextIO

import structlog

_log_stream: Optional[TextIO] = None


def _open_stream(log_file: Optional[Path]) -> TextIO:
    global _log_stream

    if log_file is None:
        return sys.stderr

    if _log_stream is not None and not _log_stream.closed:
        _log_stream.close()
    log_file.parent.mkdir(parents=True, exist_ok=True)
    _log_stream = open(log_file, "a", encoding="utf-8")
    return _log_stream


def configure_logging(
    level: str = "INFO",
    json: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """Configure structlog for the process.

    Console output is rendered for humans unless ``json`` is set. When a
    ``log_file`` is given, records are appended there instead of stderr.

    Args:
        level: Minimum level name (case-insensitive). Defaults to "INFO".
        json: Render records as JSON lines. Defaults to False.
        log_file: Optional file to append log records to.
    """
    stream = _open_stream(log_file)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info
            if not json
            else structlog.processors.format_exc_info,
            structlog.processors.dict_tracebacks
            if json
            else structlog.processors.ExceptionPrettyPrinter(file=stream),
            structlog.processors.JSONRenderer()
            if json
            else structlog.dev.ConsoleRenderer(colors=log_file is None),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level.upper()),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(stream),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None, **context: Any) -> structlog.BoundLogger:
    """Get a logger, optionally pre-bound with context fields.

    Args:
        name: Optional name for the logger.
        **context: Key/value pairs bound to every record.

    Returns:
        A structured logger instance.
    """
    logger = structlog.get_logger(name)
    if context:
        logger = logger.bind(**context)
    return logger
