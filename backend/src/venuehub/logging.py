"""Structured logging for VenueHub.

Our own events and the records of third-party libraries (SQLAlchemy, httpx,
uvicorn) share one structlog renderer on stdout. Values bound through
``structlog.contextvars`` during a request (``request_id``) appear on every
event emitted while it is served.

Environment:
    LOG_LEVEL   root level, default INFO
    LOG_FORMAT  ``json`` (default) or ``console`` for local development
"""

import logging
import logging.config
import sys
from typing import Any, Literal

import structlog
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from structlog.stdlib import BoundLogger

# Third-party loggers that are too chatty at INFO. httpx logs every GeoNames
# request; uvicorn's access log duplicates the request_finished event.
QUIET_LOGGERS = ("sqlalchemy.pool", "httpx", "httpcore", "uvicorn.access")


class LoggingSettings(BaseSettings):
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def _pre_chain() -> list[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def _stdlib_config(settings: LoggingSettings, pre_chain: list[Any]) -> dict[str, Any]:
    if settings.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    loggers: dict[str, Any] = {
        "": {"handlers": ["stdout"], "level": settings.log_level, "propagate": True},
    }
    loggers.update({name: {"level": "WARNING"} for name in QUIET_LOGGERS})

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "venuehub": {
                "()": structlog.stdlib.ProcessorFormatter,
                "processor": renderer,
                "foreign_pre_chain": pre_chain,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "venuehub",
                "stream": sys.stdout,
            },
        },
        "loggers": loggers,
    }


def configure_logging(settings: LoggingSettings) -> None:
    """Configure structlog and the stdlib root logger.

    Runs on import of this module. Loggers handed out by get_logger() are
    lazy proxies, so module-level ``logger = get_logger(__name__)`` is safe
    anywhere.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.config.dictConfig(_stdlib_config(settings, pre_chain))


configure_logging(LoggingSettings())


def get_logger(name: str) -> BoundLogger:
    """Get a structured logger.

    Example:
        logger = get_logger(__name__)
        logger.info("venue_rated", venue_id=12, rating=4.5)
        # {"event": "venue_rated", "venue_id": 12, "rating": 4.5, "level": "info", ...}
    """
    return structlog.get_logger(name)  # type: ignore[no-any-return]
