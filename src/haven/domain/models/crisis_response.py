"""
Crisis Response Models

Output handed to the reply-composition layer when a message
reaches crisis tiers.

LEGAL_REVIEW_REQUIRED: Resource information shown to users
must be verified for accuracy in each jurisdiction.
"""

from dataclasses import dataclass, field
from typing import Optional

from haven.domain.enums.crisis_enums import ResourceType, UrgencyLevel


@dataclass(frozen=True)
class CrisisResource:
    """
    A single external help resource.

    Attributes:
        type: Resource kind (hotline, text line, ...)
        name: Display name
        contact: Phone number, text instruction or URL
        description: Brief description
        availability: Availability string (e.g. "24/7")
        urgency_level: Urgency tier used for selection
    """

    type: ResourceType
    name: str
    contact: str
    description: str = ""
    availability: str = "24/7"
    urgency_level: UrgencyLevel = UrgencyLevel.SUPPORTIVE

    @property
    def available_24_7(self) -> bool:
        return self.availability == "24/7"

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "name": self.name,
            "contact": self.contact,
            "description": self.description,
            "availability": self.availability,
            "urgency_level": self.urgency_level.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CrisisResource":
        """Create resource from a config record."""
        return cls(
            type=ResourceType(data["type"]),
            name=data["name"],
            contact=data["contact"],
            description=data.get("description", ""),
            availability=data.get("availability", "24/7"),
            urgency_level=UrgencyLevel(data.get("urgency_level", UrgencyLevel.SUPPORTIVE)),
        )


@dataclass(frozen=True)
class SafetyPlan:
    """
    Structured safety plan for acute risk.

    Content is static guidance, not derived from the message.

    CLINICAL_REVIEW_REQUIRED
    """

    immediate_coping_strategies: tuple[str, ...]
    support_contacts: tuple[str, ...]
    professional_contacts: tuple[str, ...]
    warning_signs: tuple[str, ...]
    environment_safety: tuple[str, ...]
    follow_up_timeline: str

    def to_dict(self) -> dict:
        return {
            "immediate_coping_strategies": list(self.immediate_coping_strategies),
            "support_contacts": list(self.support_contacts),
            "professional_contacts": list(self.professional_contacts),
            "warning_signs": list(self.warning_signs),
            "environment_safety": list(self.environment_safety),
            "follow_up_timeline": self.follow_up_timeline,
        }


@dataclass(frozen=True)
class ResponseMetadata:
    """Timing and escalation metadata for a crisis response."""

    response_time_ms: int = 0
    escalation_triggered: bool = False
    resource_count: int = 0

    def to_dict(self) -> dict:
        return {
            "response_time_ms": self.response_time_ms,
            "escalation_triggered": self.escalation_triggered,
            "resource_count": self.resource_count,
        }


@dataclass(frozen=True)
class CrisisResponse:
    """
    Crisis reply with resources and optional safety plan.

    Attributes:
        message: Display text
        resources: Ordered external resources
        follow_up_required: Whether a follow-up is needed
        human_escalation: Whether a human responder was engaged
        safety_plan: Present only at the intervention threshold
        metadata: Response timing and escalation metadata
        immediate_support: Always True for crisis responses
    """

    message: str
    resources: tuple[CrisisResource, ...] = ()
    follow_up_required: bool = True
    human_escalation: bool = False
    safety_plan: Optional[SafetyPlan] = None
    metadata: ResponseMetadata = field(default_factory=ResponseMetadata)
    immediate_support: bool = True

    def to_dict(self) -> dict:
        return {
            "immediate_support": self.immediate_support,
            "message": self.message,
            "resources": [r.to_dict() for r in self.resources],
            "follow_up_required": self.follow_up_required,
            "human_escalation": self.human_escalation,
            "safety_plan": self.safety_plan.to_dict() if self.safety_plan else None,
            "metadata": self.metadata.to_dict(),
        }
