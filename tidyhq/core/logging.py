"""Structured logging configuration using structlog."""

import logging
import re
import sys
from typing import Optional

import structlog
from structlog.typing import EventDict, Processor

from tidyhq import __version__
from tidyhq.core.config import get_settings

settings = get_settings()

REDACTED = "***"

# Event keys whose values never reach the log output
SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "authorization",
        "client_secret",
        "password",
        "signing_key",
    }
)

_SIGNATURE_VALUE = re.compile(r"(v\d+=)[0-9A-Fa-f]+")


def _mask_signatures(header: str) -> str:
    return _SIGNATURE_VALUE.sub(rf"\g<1>{REDACTED}", header)


def add_library_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add library name, version and environment to log entries."""
    event_dict["app"] = settings.app_name
    event_dict["version"] = __version__
    event_dict["env"] = settings.app_env
    return event_dict


def redact_secrets(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credentials and signature digests in log entries.

    Signature headers keep their timestamp so failed deliveries can still
    be matched against replay windows.
    """
    for key in SENSITIVE_KEYS.intersection(event_dict):
        if event_dict[key] is not None:
            event_dict[key] = REDACTED

    header = event_dict.get("header")
    if isinstance(header, str):
        event_dict["header"] = _mask_signatures(header)

    details = event_dict.get("details")
    if isinstance(details, dict) and isinstance(details.get("header"), str):
        event_dict["details"] = {**details, "header": _mask_signatures(details["header"])}

    return event_dict


def setup_logging(level: Optional[str] = None, json_logs: Optional[bool] = None) -> None:
    """Configure structured logging for the library.

    Args:
        level: Log level name (default from LOG_LEVEL)
        json_logs: Render JSON instead of console output (default: not DEBUG)
    """
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if json_logs is None:
        json_logs = not settings.debug

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_library_context,
        redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_logs:
        processors = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,  # type: ignore
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


# Initialize logging on module import
setup_logging()
