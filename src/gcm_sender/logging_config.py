"""Structured logging configuration using structlog.

The sender is a library, so configure_logging() only takes over the
"gcm_sender" logger hierarchy: the host application's root logger and its
handlers are left alone. Production renders JSON lines, development a
coloured console.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from gcm_sender.config import Settings


LOGGER_NAME = "gcm_sender"


class AppContext:
    """Processor stamping every event with the sender's name and version."""

    def __init__(self, app_name: str, app_version: str):
        self.app_name = app_name
        self.app_version = app_version

    def __call__(
        self, logger: WrappedLogger, method_name: str, event_dict: EventDict
    ) -> EventDict:
        event_dict.setdefault("app", self.app_name)
        event_dict.setdefault("version", self.app_version)
        return event_dict


def configure_logging(
    settings: Optional[Settings] = None,
    log_level: Optional[str] = None,
    environment: Optional[str] = None,
) -> logging.Handler:
    """Configure structlog output for the sender.

    Args:
        settings: Source of LOG_LEVEL, ENVIRONMENT, APP_NAME and APP_VERSION
            (defaults to the environment-loaded settings)
        log_level: Overrides settings.LOG_LEVEL
        environment: Overrides settings.ENVIRONMENT

    Returns:
        The handler installed on the "gcm_sender" logger
    """
    if settings is None:
        from gcm_sender.config import settings as default_settings
        settings = default_settings

    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)
    is_production = environment.lower() == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        AppContext(settings.APP_NAME, settings.APP_VERSION),
    ]

    if is_production:
        shared_processors.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    # Replace a handler left by a previous call
    for existing in list(package_logger.handlers):
        if getattr(existing, "_gcm_sender_handler", False):
            package_logger.removeHandler(existing)
    handler._gcm_sender_handler = True
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level_int)
    package_logger.propagate = False

    # Per-request lines from the HTTP stack
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
    return handler
