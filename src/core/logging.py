"""Structured logging setup using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from src.core.config import get_settings

# Loggers of the HTTP stack that emit a line per request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _pre_chain() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and plain stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer()
    return structlog.processors.JSONRenderer()


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        level: Log level override (e.g. "DEBUG"). Uses config if None.
        fmt: "json" or "console". Uses config if None; unknown values
            fall back to JSON.
    """
    cfg = get_settings().logging
    log_level = logging.getLevelName((level or cfg.level).upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    stream = logging.StreamHandler(sys.stderr)
    stream.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(fmt or cfg.format),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stream)
    root.setLevel(log_level)

    noisy_level = logging.DEBUG if log_level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)
