"""
HAVEN Domain Layer

Value types and closed vocabularies for crisis assessment.
These models are independent of storage and transport.
"""

from haven.domain.models import (
    ConversationContext,
    ConversationTurn,
    UserProfile,
    RiskAssessment,
    RiskAssessmentDetail,
    CrisisResource,
    CrisisResponse,
    ResponseMetadata,
    SafetyPlan,
    CrisisEvent,
    EscalationNotice,
    EscalationProtocol,
)
from haven.domain.enums import (
    CrisisType,
    ContextualFactor,
    ImmediateAction,
    RiskBand,
    Speaker,
    UrgencyLevel,
)

__all__ = [
    # Conversation
    "ConversationContext",
    "ConversationTurn",
    "UserProfile",
    # Risk
    "RiskAssessment",
    "RiskAssessmentDetail",
    # Response
    "CrisisResource",
    "CrisisResponse",
    "ResponseMetadata",
    "SafetyPlan",
    # Events
    "CrisisEvent",
    "EscalationNotice",
    "EscalationProtocol",
    # Enums
    "CrisisType",
    "ContextualFactor",
    "ImmediateAction",
    "RiskBand",
    "Speaker",
    "UrgencyLevel",
]
