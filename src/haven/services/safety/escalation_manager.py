"""
Escalation Manager

Records crisis events and dispatches human escalations.

SAFETY-CRITICAL: Both side effects are best-effort. A failed
database write or a failed notification must never withhold or
alter the crisis response shown to the user.

ARCHITECTURE: Persistence and notification go through small
protocols so any record store or paging transport can be plugged
in. Each call is bounded by a timeout and isolated in its own
try/except. No retries.
"""

import asyncio
from typing import Optional, Protocol, Sequence, runtime_checkable

from haven.config.logging_config import get_logger
from haven.domain.clock import utc_now
from haven.domain.enums.crisis_enums import CrisisType
from haven.domain.exceptions import NotificationError
from haven.domain.models.conversation import ConversationContext
from haven.domain.models.crisis_event import CrisisEvent, EscalationNotice
from haven.domain.models.crisis_response import CrisisResource
from haven.infrastructure.metrics.prometheus_metrics import CrisisMetrics
from haven.infrastructure.monitoring.sentry_integration import (
    capture_exception_with_context,
    capture_safety_event,
)
from haven.services.safety.lexicon import CRISIS_TYPE_PHRASES, TRIGGER_KEYWORDS

logger = get_logger(__name__)


RESPONSE_GIVEN = "Crisis resources and support provided"
ESCALATION_REASON = "High crisis risk detected"


# =============================================================================
# COLLABORATOR PROTOCOLS
# =============================================================================

@runtime_checkable
class CrisisEventStore(Protocol):
    """Durable record store for crisis events."""

    async def create(self, event: CrisisEvent) -> CrisisEvent:
        """Persist a new event; returns it with id and created_at set."""
        ...

    async def get(self, event_id: str) -> Optional[CrisisEvent]:
        ...

    async def update(self, event: CrisisEvent) -> CrisisEvent:
        ...

    async def list_events(
        self,
        user_id: Optional[str] = None,
        resolved: Optional[bool] = None,
        limit: int = 50,
    ) -> list[CrisisEvent]:
        ...

    async def resolve(self, event_id: str, notes: str) -> CrisisEvent:
        ...


@runtime_checkable
class HumanNotifier(Protocol):
    """Transport that pages a human responder."""

    channel: str

    async def notify(self, notice: EscalationNotice) -> None:
        ...


# =============================================================================
# NOTIFIERS
# =============================================================================

class LoggingNotifier:
    """
    Notifier that emits a critical structured log line.

    Default channel until a paging transport is wired in.
    """

    channel = "log"

    async def notify(self, notice: EscalationNotice) -> None:
        logger.critical(
            "Crisis escalation required",
            user_id=notice.user_id,
            severity=notice.severity,
            reason=notice.reason,
            escalation_time=notice.timestamp.isoformat(),
            immediate_action_required=notice.immediate_action_required,
        )


class SentryNotifier:
    """Notifier that raises a safety event in Sentry for the on-call team."""

    channel = "sentry"

    async def notify(self, notice: EscalationNotice) -> None:
        try:
            capture_safety_event(
                "Crisis escalation required",
                level="error",
                extra={
                    "user_id": notice.user_id,
                    "severity": notice.severity,
                    "reason": notice.reason,
                    "escalation_time": notice.timestamp.isoformat(),
                },
            )
        except Exception as e:
            raise NotificationError(self.channel, original_error=e) from e


# =============================================================================
# ESCALATION MANAGER
# =============================================================================

def classify_crisis_type(message: str) -> CrisisType:
    """Classify a raw message into the closed crisis type set."""
    lower = message.lower()
    for crisis_type, phrases in CRISIS_TYPE_PHRASES:
        if any(p in lower for p in phrases):
            return CrisisType(crisis_type)
    return CrisisType.EMOTIONAL_CRISIS


def extract_trigger_keywords(message: str) -> list[str]:
    lower = message.lower()
    return [k for k in TRIGGER_KEYWORDS if k in lower]


def summarize_context(context: ConversationContext) -> str:
    """
    Summarize the last three turns and the profile snapshot.

    PRIVACY: The summary contains conversation text and is only
    written to the crisis record store, never to logs.
    """
    recent = " | ".join(turn.message for turn in context.recent_turns(3))
    profile = context.profile
    stress = profile.stress_level if profile else None
    state = profile.emotional_state if profile else None
    return (
        f"Recent conversation: {recent}. "
        f"User profile: stress_level={stress}, emotional_state={state}"
    )


class EscalationManager:
    """
    Crisis event recording and human escalation.

    Usage:
        manager = EscalationManager(store=store, notifier=LoggingNotifier())
        event = await manager.record(message, context, risk_level, resources)
        escalated = await manager.escalate(context, risk_level)
    """

    def __init__(
        self,
        store: CrisisEventStore,
        notifier: Optional[HumanNotifier] = None,
        metrics: Optional[CrisisMetrics] = None,
        intervention_threshold: int = 8,
        persistence_timeout: float = 5.0,
        notification_timeout: float = 5.0,
    ) -> None:
        """
        Initialize escalation manager.

        Args:
            store: Crisis event record store
            notifier: Human escalation transport
            metrics: Metrics holder
            intervention_threshold: Risk level that triggers escalation
            persistence_timeout: Seconds allowed for recording an event
            notification_timeout: Seconds allowed for a notification
        """
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self.metrics = metrics or CrisisMetrics()
        self.intervention_threshold = intervention_threshold
        self.persistence_timeout = persistence_timeout
        self.notification_timeout = notification_timeout

    def build_event(
        self,
        message: str,
        context: ConversationContext,
        risk_level: int,
        resources: Sequence[CrisisResource],
    ) -> CrisisEvent:
        """Build the event record for a crisis message."""
        return CrisisEvent(
            user_id=context.user_id,
            severity_level=risk_level,
            crisis_type=classify_crisis_type(message),
            trigger_keywords=extract_trigger_keywords(message),
            context_summary=summarize_context(context),
            response_given=RESPONSE_GIVEN,
            resources_provided=[r.name for r in resources],
            human_notified=risk_level >= self.intervention_threshold,
            follow_up_required=True,
            resolved=False,
        )

    async def record(
        self,
        message: str,
        context: ConversationContext,
        risk_level: int,
        resources: Sequence[CrisisResource],
    ) -> Optional[CrisisEvent]:
        """
        Persist a crisis event, best-effort.

        Returns:
            The stored event, or None if recording failed
        """
        event = self.build_event(message, context, risk_level, resources)

        try:
            stored = await asyncio.wait_for(
                self.store.create(event),
                timeout=self.persistence_timeout,
            )
        except Exception as e:
            # Includes TimeoutError; the response path continues regardless
            self._report_failure("record_event", e, context, risk_level)
            return None

        logger.info(
            "Crisis event recorded",
            event_id=stored.id,
            user_id=context.user_id,
            severity_level=risk_level,
            crisis_type=stored.crisis_type.value,
        )
        return stored

    async def escalate(
        self,
        context: ConversationContext,
        risk_level: int,
    ) -> bool:
        """
        Request human escalation for severe risk.

        Returns:
            True if an escalation attempt was made (risk at or above
            the intervention threshold), whether or not it succeeded
        """
        if risk_level < self.intervention_threshold:
            return False

        notice = EscalationNotice(
            user_id=context.user_id,
            severity=risk_level,
            reason=ESCALATION_REASON,
            timestamp=utc_now(),
            context_summary=summarize_context(context),
            immediate_action_required=True,
        )

        try:
            await asyncio.wait_for(
                self.notifier.notify(notice),
                timeout=self.notification_timeout,
            )
        except Exception as e:
            self.metrics.track_escalation(self.notifier.channel, "failed")
            self._report_failure("notify_human", e, context, risk_level)
            return True

        self.metrics.track_escalation(self.notifier.channel, "dispatched")
        logger.warning(
            "Human escalation dispatched",
            user_id=context.user_id,
            severity=risk_level,
            channel=self.notifier.channel,
        )
        return True

    def _report_failure(
        self,
        operation: str,
        error: Exception,
        context: ConversationContext,
        risk_level: int,
    ) -> None:
        """Log, count and report a collaborator failure."""
        logger.warning(
            "Crisis collaborator failed",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            user_id=context.user_id,
            risk_level=risk_level,
        )
        self.metrics.track_failure(operation)
        try:
            capture_exception_with_context(
                error,
                operation=operation,
                extra={"user_id": context.user_id, "risk_level": risk_level},
            )
        except Exception as capture_error:
            logger.warning(
                "Sentry capture failed",
                operation=operation,
                error=str(capture_error),
            )
