"""
Crisis Event Models

Durable record of a crisis moment and the payload sent to human
responders on escalation.

LEGAL_REVIEW_REQUIRED: Retention and access policies for crisis
records need legal review. The engine creates records; only the
external moderation workflow updates resolution fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from haven.domain.clock import utc_now
from haven.domain.enums.crisis_enums import CrisisType


@dataclass
class CrisisEvent:
    """
    Persisted crisis event.

    `id` and `created_at` are assigned by the record store on create.

    Attributes:
        user_id: User involved
        severity_level: Risk level 0-10 at the time of the event
        crisis_type: Closed-set classification of the raw message
        trigger_keywords: Crisis phrases found in the raw message
        context_summary: Short summary of recent turns and profile
        response_given: Description of what was sent to the user
        resources_provided: Names of resources shown
        human_notified: Whether a human escalation was requested
        follow_up_required: Whether follow-up is required
        resolved: Set by the moderation workflow
    """

    user_id: str
    severity_level: int
    crisis_type: CrisisType = CrisisType.EMOTIONAL_CRISIS
    trigger_keywords: list[str] = field(default_factory=list)
    context_summary: str = ""
    response_given: str = ""
    resources_provided: list[str] = field(default_factory=list)
    human_notified: bool = False
    follow_up_required: bool = True
    resolved: bool = False

    # Resolution fields, owned by the moderation workflow
    resolution_notes: Optional[str] = None
    resolved_at: Optional[datetime] = None
    escalated_to: Optional[str] = None
    escalation_time: Optional[datetime] = None

    # Store-assigned
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "severity_level": self.severity_level,
            "crisis_type": self.crisis_type.value,
            "trigger_keywords": list(self.trigger_keywords),
            "context_summary": self.context_summary,
            "response_given": self.response_given,
            "resources_provided": list(self.resources_provided),
            "human_notified": self.human_notified,
            "follow_up_required": self.follow_up_required,
            "resolved": self.resolved,
            "resolution_notes": self.resolution_notes,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
            "escalated_to": self.escalated_to,
            "escalation_time": self.escalation_time.isoformat() if self.escalation_time else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class EscalationNotice:
    """
    Structured payload pushed to human responders.

    Attributes:
        user_id: User involved
        severity: Risk level 0-10
        reason: Why escalation was requested
        timestamp: When escalation was requested
        context_summary: Short summary of recent turns and profile
        immediate_action_required: Always True for crisis escalations
    """

    user_id: str
    severity: int
    reason: str
    timestamp: datetime = field(default_factory=utc_now)
    context_summary: str = ""
    immediate_action_required: bool = True

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "severity": self.severity,
            "reason": self.reason,
            "timestamp": self.timestamp.isoformat(),
            "context_summary": self.context_summary,
            "immediate_action_required": self.immediate_action_required,
        }


@dataclass(frozen=True)
class EscalationProtocol:
    """
    Escalation protocol handed to the moderation workflow.

    CLINICAL_REVIEW_REQUIRED: Targets and timelines are
    placeholders until the crisis team signs off.
    """

    trigger_conditions: tuple[str, ...] = (
        "risk_level >= 8",
        "suicide_ideation_with_plan",
        "immediate_self_harm_threat",
        "substance_abuse_in_crisis",
    )
    notification_targets: tuple[str, ...] = (
        "human_moderator",
        "crisis_specialist",
        "system_administrator",
    )
    response_timeline: str = "immediate (< 5 minutes)"
    documentation_required: tuple[str, ...] = (
        "crisis_event_log",
        "user_conversation_context",
        "recommended_actions",
        "escalation_reason",
    )
    follow_up_procedures: tuple[str, ...] = (
        "check_user_response_within_1_hour",
        "provide_additional_resources",
        "monitor_for_24_hours",
        "document_resolution",
    )
