"""
Domain Exceptions

Collaborator failures raised by record stores and notifiers.
The crisis pipeline catches all of these at the call site;
none of them may reach the user-facing response path.
"""

from typing import Optional


class HavenError(Exception):
    """Base exception for HAVEN errors."""

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.original_error = original_error


class CrisisStoreError(HavenError):
    """Crisis event record store failed to create, read or update."""

    def __init__(
        self,
        operation: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            f"Crisis event store failed during {operation}",
            original_error=original_error,
        )
        self.operation = operation


class CrisisEventNotFoundError(HavenError):
    """No crisis event exists with the requested id."""

    def __init__(self, event_id: str) -> None:
        super().__init__(f"Crisis event not found: {event_id}")
        self.event_id = event_id


class NotificationError(HavenError):
    """Human escalation notification could not be dispatched."""

    def __init__(
        self,
        channel: str,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            f"Escalation notification failed on {channel}",
            original_error=original_error,
        )
        self.channel = channel
