"""structlog setup for the message store CLI and applications.

Library code only calls structlog.get_logger(); applications decide how the
output looks by calling configure_logging() once at startup.
"""

import logging
import sys

import structlog

from messagedb_store.config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog according to the logging configuration.

    "json" renders one JSON object per line; "text" uses structlog's console
    renderer. Events below the configured level are dropped. Output goes to
    stderr so command output on stdout stays parseable.
    """
    level = logging.getLevelName(config.log_level.upper())

    if config.log_format.lower() == "json":
        renderer: structlog.typing.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
