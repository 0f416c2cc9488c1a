"""
HAVEN Logging Configuration

Structured logging with:
- Correlation ID tracking
- Sensitive data redaction (secrets and conversation text)
- Configurable log levels per environment
- Human-readable format for development

SECURITY: All log processors include sensitive data filtering.
PRIVACY: User message text must never reach log output. Call sites
log counts and tags only; the redaction processor is a second line.
"""

import contextvars
import logging
import sys
from typing import Any, Mapping

import structlog

from haven.config.settings import Settings


# Key fragments whose values are redacted
SENSITIVE_PATTERNS: frozenset[str] = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "bearer",
    "credential",
    "private_key",
    "dsn",
})

# Exact keys that carry conversation text
SENSITIVE_TEXT_KEYS: frozenset[str] = frozenset({
    "message",
    "user_message",
    "reply",
    "text",
    "content",
    "history",
    "context_summary",
})


def _redact_sensitive_data(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Redact sensitive data from log entries.

    Redacts values for keys containing a secret pattern and for
    keys that carry conversation text. The `event` key is kept.

    Args:
        logger: Logger instance (unused but required by structlog)
        method_name: Log method name (unused but required by structlog)
        event_dict: Log event dictionary

    Returns:
        Sanitized event dictionary
    """
    def redact_value(key: str, value: Any) -> Any:
        key_lower = key.lower()
        if key_lower in SENSITIVE_TEXT_KEYS:
            return "[REDACTED]"
        for pattern in SENSITIVE_PATTERNS:
            if pattern in key_lower:
                return "[REDACTED]"

        if isinstance(value, dict):
            return {k: redact_value(k, v) for k, v in value.items()}
        elif isinstance(value, list):
            return [redact_value(key, item) for item in value]

        return value

    return {key: redact_value(key, value) for key, value in event_dict.items()}


def _add_service_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Add service-level context to all log entries."""
    event_dict["service"] = "haven-crisis-engine"
    event_dict["version"] = "0.1.0"
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """
    Get structlog processors based on environment.

    Args:
        is_development: Whether running in development mode

    Returns:
        List of log processors
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _redact_sensitive_data,
        _add_service_context,
    ]

    if is_development:
        shared_processors.extend([
            structlog.processors.ExceptionPrettyPrinter(),
            structlog.dev.ConsoleRenderer(colors=True),
        ])
    else:
        # JSON output for log aggregation
        shared_processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    return shared_processors


def configure_logging(settings: Settings) -> None:
    """
    Configure application logging.

    Should be called once during application startup.

    Args:
        settings: Application settings
    """
    is_development = settings.env == "development"
    log_level = getattr(logging, settings.log_level.upper())

    structlog.configure(
        processors=get_processors(is_development),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    # Set levels for noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_correlation_id(correlation_id: str) -> Mapping[str, contextvars.Token]:
    """
    Bind correlation ID to current context.

    All subsequent log entries in this context will include
    the correlation ID until the returned tokens are reset.

    Args:
        correlation_id: Unique identifier for one handled message

    Returns:
        Context variable tokens for reset_context()
    """
    return structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def reset_context(tokens: Mapping[str, contextvars.Token]) -> None:
    """Restore context variables to their values before binding."""
    structlog.contextvars.reset_contextvars(**tokens)


def clear_context() -> None:
    """Clear all context variables."""
    structlog.contextvars.clear_contextvars()
