"""
Sentry Error Tracking Integration

Error tracking with sensitive data scrubbing. Crisis collaborator
failures and human escalations are reported here.

SECURITY: All sensitive fields are stripped before sending to Sentry.
PRIVACY: User message text is never attached to events.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.asyncio import AsyncioIntegration
from sentry_sdk.integrations.logging import LoggingIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from haven.config.logging_config import get_logger

logger = get_logger(__name__)

# Patterns for sensitive data scrubbing
SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"api[_-]?key[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
    r"postgresql(\+\w+)?://[^\s]+",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "api_key",
    "apikey",
    "authorization",
    "credential",
    "private_key",
    "message",
    "user_message",
    "history",
    "context_summary",
})


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")

        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _scrub_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _scrub_dict(item) if isinstance(item, dict)
                else _scrub_string(item) if isinstance(item, str)
                else item
                for item in value
            ]
        elif isinstance(value, str):
            result[key] = _scrub_string(value)
        else:
            result[key] = value

    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """
    Process event before sending to Sentry.

    Scrubs extra context, breadcrumbs and exception values.
    """
    if "breadcrumbs" in event:
        for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
            if "data" in breadcrumb and isinstance(breadcrumb["data"], dict):
                breadcrumb["data"] = _scrub_dict(breadcrumb["data"])

    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    for exception in event.get("exception", {}).get("values", []):
        if isinstance(exception.get("value"), str):
            exception["value"] = _scrub_string(exception["value"])

    return event


def before_breadcrumb(breadcrumb: dict, hint: dict) -> Optional[dict]:
    """Filter and sanitize breadcrumbs."""
    if breadcrumb.get("category") == "sql":
        # SQL parameters may hold crisis record text
        if "message" in breadcrumb:
            breadcrumb["message"] = _scrub_string(breadcrumb["message"])
        breadcrumb.pop("data", None)

    return breadcrumb


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "haven@0.1.0",
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.1,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN
        environment: Environment name
        release: Release version
        sample_rate: Error sample rate (1.0 = all errors)
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.warning("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        before_breadcrumb=before_breadcrumb,
        integrations=[
            SqlalchemyIntegration(),
            AsyncioIntegration(),
            LoggingIntegration(
                level=None,  # Don't capture logs as breadcrumbs
                event_level=None,  # Don't capture logs as events
            ),
        ],
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )

    logger.info(
        "Sentry initialized",
        environment=environment,
        release=release,
    )
    return True


def set_crisis_context(
    user_id: str,
    risk_level: Optional[int] = None,
    session_id: Optional[str] = None,
) -> None:
    """Set crisis context for error correlation. Anonymized IDs only."""
    sentry_sdk.set_context("crisis", {
        "user_id": user_id,
        "session_id": session_id,
        "risk_level": risk_level,
    })


def capture_safety_event(
    message: str,
    level: str = "warning",
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture safety-related event for monitoring.

    Used for human escalations and crisis handling failures.

    Returns: Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("category", "safety")
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_message(
            message,
            level="error" if level in ("error", "fatal") else "warning",
        )


def capture_exception_with_context(
    exception: Exception,
    operation: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if operation:
            scope.set_tag("operation", operation)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
