"""Structured logging configuration using structlog."""

import logging
import sys

import structlog
from structlog.typing import Processor


def configure_logging(debug: bool = False, json_output: bool = True) -> None:
    """Configure structlog for sync engine and subscriber events.

    Args:
        debug: Enable debug-level logging when True. Per-document
            write events are only emitted at debug level.
        json_output: Render JSON lines when True, or human-readable
            console output when False (useful when running tests locally).
    """
    level = logging.DEBUG if debug else logging.INFO
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
