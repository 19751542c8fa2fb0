"""structlog setup for the Lambda runtime."""

import logging
import sys

import structlog

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure structlog to emit one JSON line per event.

    Safe to call more than once; only the first call installs the stdlib
    handler, later calls just adjust the level.
    """
    global _configured
    log_level = getattr(logging, level.upper(), logging.INFO)

    if not _configured:
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
        _configured = True
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(default=str),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
