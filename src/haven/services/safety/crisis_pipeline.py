"""
Crisis Pipeline

Orchestrates scoring, crisis response generation, event recording
and human escalation. This is the entry point the reply-composition
layer calls for every inbound user message, and the gate every
outgoing AI reply passes through.

SAFETY-CRITICAL: Once a message reaches the intervention threshold
the caller always receives crisis resources. Generation errors are
replaced by the failsafe response; collaborator errors are absorbed
by the escalation manager.
"""

import dataclasses
import time
from dataclasses import dataclass
from typing import Optional

from haven.config.logging_config import (
    bind_correlation_id,
    get_logger,
    reset_context,
)
from haven.domain.enums.crisis_enums import MessageSafetyAction, RiskBand
from haven.domain.models.conversation import ConversationContext
from haven.domain.models.crisis_event import CrisisEvent
from haven.domain.models.crisis_response import CrisisResponse, ResponseMetadata
from haven.domain.models.risk_models import RiskAssessment
from haven.infrastructure.metrics.prometheus_metrics import CrisisMetrics
from haven.infrastructure.monitoring.sentry_integration import set_crisis_context
from haven.services.safety.escalation_manager import EscalationManager
from haven.services.safety.response_generator import CrisisResponseGenerator
from haven.services.safety.response_validator import (
    ResponseSafetyResult,
    ResponseSafetyValidator,
)
from haven.services.safety.risk_scorer import CrisisRiskScorer

logger = get_logger(__name__)


# Attributed to events recorded without conversation context
ANONYMOUS_USER_ID = "anonymous"


@dataclass(frozen=True)
class MessageSafetyCheck:
    """
    Inbound message gate result.

    Attributes:
        is_safe: Whether the message can be handled normally (risk < 8)
        crisis_detected: Whether crisis support is needed (risk >= 6)
        risk_level: Integer risk level 0-10
        required_actions: Ordered gate actions for the risk band
    """

    is_safe: bool
    crisis_detected: bool
    risk_level: int
    required_actions: tuple[MessageSafetyAction, ...] = ()

    def to_dict(self) -> dict:
        return {
            "is_safe": self.is_safe,
            "crisis_detected": self.crisis_detected,
            "risk_level": self.risk_level,
            "required_actions": [a.value for a in self.required_actions],
        }


@dataclass
class CrisisOutcome:
    """
    Result of handling one inbound message.

    `response` is present only when the intervention threshold was
    reached. `event` is the stored crisis record, if one was written.
    """

    assessment: RiskAssessment
    response: Optional[CrisisResponse] = None
    event: Optional[CrisisEvent] = None
    escalated: bool = False

    @property
    def requires_crisis_response(self) -> bool:
        return self.response is not None

    def to_dict(self) -> dict:
        return {
            "assessment": self.assessment.to_dict(),
            "response": self.response.to_dict() if self.response else None,
            "event_id": self.event.id if self.event else None,
            "escalated": self.escalated,
        }


@dataclass
class _Handled:
    response: CrisisResponse
    event: Optional[CrisisEvent] = None
    escalated: bool = False


class CrisisPipeline:
    """
    Crisis handling pipeline.

    Flow:
    1. Score the message in context
    2. At or above the intervention threshold: compose the crisis
       response, record the event, escalate to a human
    3. Below the threshold: optionally record the event on request

    Usage:
        pipeline = create_pipeline()
        outcome = await pipeline.handle_message(text, context)
        if outcome.response:
            deliver(outcome.response)
    """

    def __init__(
        self,
        scorer: CrisisRiskScorer,
        generator: CrisisResponseGenerator,
        escalation: EscalationManager,
        validator: Optional[ResponseSafetyValidator] = None,
        metrics: Optional[CrisisMetrics] = None,
        intervention_threshold: int = 8,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            scorer: Crisis risk scorer
            generator: Crisis response generator
            escalation: Event recording and human escalation
            validator: Outbound reply validator
            metrics: Metrics holder
            intervention_threshold: Risk level that triggers crisis handling
        """
        self.scorer = scorer
        self.generator = generator
        self.escalation = escalation
        self.validator = validator or ResponseSafetyValidator()
        self.metrics = metrics or CrisisMetrics()
        self.intervention_threshold = intervention_threshold

    def assess(
        self,
        message: str,
        context: Optional[ConversationContext] = None,
    ) -> RiskAssessment:
        """Score a message. Pure apart from logging and metrics."""
        start = time.perf_counter()
        assessment = self.scorer.assess(message, context)
        self.metrics.track_assessment(assessment.band, time.perf_counter() - start)
        return assessment

    def check_message_safety(
        self,
        message: str,
        context: Optional[ConversationContext] = None,
    ) -> MessageSafetyCheck:
        """
        Inbound message gate.

        Args:
            message: Raw user message
            context: Optional conversation context

        Returns:
            MessageSafetyCheck with the actions the caller must take
        """
        assessment = self.assess(message, context)
        band = assessment.band
        return MessageSafetyCheck(
            is_safe=band < RiskBand.CRITICAL,
            crisis_detected=band >= RiskBand.ELEVATED,
            risk_level=assessment.risk_level,
            required_actions=tuple(MessageSafetyAction.for_band(band)),
        )

    async def handle_message(
        self,
        message: str,
        context: Optional[ConversationContext] = None,
        log_event: bool = False,
        correlation_id: Optional[str] = None,
    ) -> CrisisOutcome:
        """
        Handle one inbound message.

        Args:
            message: Raw user message
            context: Optional conversation context
            log_event: Record an event even below the threshold
            correlation_id: Optional id bound to log lines for this call

        Returns:
            CrisisOutcome with assessment and optional crisis response
        """
        tokens = bind_correlation_id(correlation_id) if correlation_id else None
        try:
            return await self._handle(message, context, log_event)
        finally:
            if tokens:
                reset_context(tokens)

    async def _handle(
        self,
        message: str,
        context: Optional[ConversationContext],
        log_event: bool,
    ) -> CrisisOutcome:
        assessment = self.assess(message, context)

        if assessment.risk_level >= self.intervention_threshold:
            handled = await self._respond(message, context, assessment.risk_level)
            return CrisisOutcome(
                assessment=assessment,
                response=handled.response,
                event=handled.event,
                escalated=handled.escalated,
            )

        event = None
        if log_event:
            event = await self.escalation.record(
                message,
                context or ConversationContext(user_id=ANONYMOUS_USER_ID),
                assessment.risk_level,
                self.generator.catalog.select(assessment.risk_level),
            )

        return CrisisOutcome(assessment=assessment, event=event)

    async def generate_crisis_response(
        self,
        message: str,
        context: Optional[ConversationContext],
        risk_level: int,
    ) -> CrisisResponse:
        """
        Generate a crisis response with recording and escalation.

        SAFETY_CRITICAL: Never raises. Any generation error yields
        the failsafe response.

        Args:
            message: Raw user message
            context: Conversation context
            risk_level: Integer risk level 0-10

        Returns:
            CrisisResponse
        """
        handled = await self._respond(message, context, risk_level)
        return handled.response

    async def _respond(
        self,
        message: str,
        context: Optional[ConversationContext],
        risk_level: int,
    ) -> _Handled:
        start = time.perf_counter()
        context = context or ConversationContext(user_id=ANONYMOUS_USER_ID)
        set_crisis_context(context.user_id, risk_level, context.session_id)

        try:
            response = self.generator.generate(risk_level, context.display_name)
            tier = self.generator.tier_for(risk_level).name
        except Exception as e:
            logger.error(
                "Crisis response generation failed, using failsafe",
                error_type=type(e).__name__,
                error=str(e),
                user_id=context.user_id,
                risk_level=risk_level,
            )
            response = self.generator.failsafe_response()
            tier = "failsafe"

        event, escalated = await self._record_and_escalate(
            message, context, risk_level, response,
        )

        response = dataclasses.replace(
            response,
            # The failsafe always asks for a human responder
            human_escalation=escalated or tier == "failsafe",
            metadata=ResponseMetadata(
                response_time_ms=int((time.perf_counter() - start) * 1000),
                escalation_triggered=escalated,
                resource_count=len(response.resources),
            ),
        )
        self.metrics.track_crisis_response(tier)

        logger.info(
            "Crisis response ready",
            user_id=context.user_id,
            risk_level=risk_level,
            tier=tier,
            resource_count=len(response.resources),
            escalated=escalated,
            event_recorded=event is not None,
            response_time_ms=response.metadata.response_time_ms,
        )

        return _Handled(response=response, event=event, escalated=escalated)

    async def _record_and_escalate(
        self,
        message: str,
        context: ConversationContext,
        risk_level: int,
        response: CrisisResponse,
    ) -> tuple[Optional[CrisisEvent], bool]:
        """
        Record the event and request escalation for any crisis response,
        failsafe included.

        Store and notifier failures are absorbed by the escalation
        manager; an error building the record must not skip escalation.
        """
        event = None
        try:
            event = await self.escalation.record(
                message, context, risk_level, response.resources,
            )
        except Exception as e:
            logger.error(
                "Crisis event recording failed",
                error_type=type(e).__name__,
                error=str(e),
                user_id=context.user_id,
            )

        try:
            escalated = await self.escalation.escalate(context, risk_level)
        except Exception as e:
            logger.error(
                "Crisis escalation failed",
                error_type=type(e).__name__,
                error=str(e),
                user_id=context.user_id,
            )
            escalated = False

        return event, escalated

    def validate_reply(self, text: str) -> ResponseSafetyResult:
        """
        Gate an AI-generated reply before delivery.

        Args:
            text: Reply text

        Returns:
            ResponseSafetyResult
        """
        result = self.validator.validate(text)
        self.metrics.track_reply_validation(result.is_safe)
        return result
