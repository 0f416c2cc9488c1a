"""Domain models package."""

from haven.domain.models.conversation import (
    ConversationContext,
    ConversationTurn,
    UserProfile,
)
from haven.domain.models.risk_models import RiskAssessment, RiskAssessmentDetail
from haven.domain.models.crisis_response import (
    CrisisResource,
    CrisisResponse,
    ResponseMetadata,
    SafetyPlan,
)
from haven.domain.models.crisis_event import (
    CrisisEvent,
    EscalationNotice,
    EscalationProtocol,
)

__all__ = [
    # Conversation input
    "ConversationContext",
    "ConversationTurn",
    "UserProfile",
    # Risk assessment
    "RiskAssessment",
    "RiskAssessmentDetail",
    # Crisis response
    "CrisisResource",
    "CrisisResponse",
    "ResponseMetadata",
    "SafetyPlan",
    # Crisis events
    "CrisisEvent",
    "EscalationNotice",
    "EscalationProtocol",
]
