"""
Crisis Response Generator

Tiered crisis reply text, resource selection and safety plans.

CLINICAL_REVIEW_REQUIRED: All template text requires review by
crisis counselors. Templates must never minimise what the user
shared and must always point to concrete resources.

ARCHITECTURE: Pure function of (risk level, display name). The only
non-determinism is the template variant, drawn from an injected
random source.
"""

import random
from dataclasses import dataclass
from typing import Optional

from haven.config.logging_config import get_logger
from haven.domain.enums.crisis_enums import UrgencyLevel
from haven.domain.models.crisis_response import (
    CrisisResponse,
    ResponseMetadata,
    SafetyPlan,
)
from haven.services.safety.crisis_resources import CrisisResourceCatalog

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResponseTier:
    """A risk tier and its template variants."""

    name: str
    min_risk_level: int
    templates: tuple[str, ...]


# Ordered highest first; the first tier whose minimum is met wins.
# CLINICAL_REVIEW_REQUIRED
RESPONSE_TIERS: tuple[ResponseTier, ...] = (
    ResponseTier(
        name="immediate_danger",
        min_risk_level=9,
        templates=(
            "{greeting}I'm deeply concerned about what you're sharing with me. "
            "Your life has value and meaning, even when it doesn't feel that way right now.\n\n"
            "🚨 **Please reach out for immediate help:**\n"
            "• Call 988 (Suicide & Crisis Lifeline) - they have trained counselors available 24/7\n"
            "• Text HOME to 741741 for Crisis Text Line\n"
            "• If you're in immediate danger, please call 911\n\n"
            "You don't have to face this alone. There are people who want to help you "
            "through this crisis. Please stay safe and reach out to one of these resources right now.\n\n"
            "I'm here with you, but professional crisis support can provide the immediate help "
            "you need. You matter, and your life is worth saving.",

            "{greeting}Thank you for telling me. What you're describing sounds like you may be "
            "in danger right now, and your safety matters more than anything else in this conversation.\n\n"
            "🚨 **Please contact someone right now:**\n"
            "• Call 988 (Suicide & Crisis Lifeline), available 24/7\n"
            "• Text HOME to 741741 to reach a crisis counselor by text\n"
            "• Call 911 if you are in immediate danger or have already hurt yourself\n\n"
            "If you can, move away from anything you could use to hurt yourself and stay near "
            "someone you trust. You deserve support, and people are ready to help you tonight.",
        ),
    ),
    ResponseTier(
        name="high_risk",
        min_risk_level=7,
        templates=(
            "{greeting}I can hear how much pain you're in right now, and I'm really concerned "
            "about your safety. These feelings are overwhelming, but they can change with the right support.\n\n"
            "💙 **Important resources for you:**\n"
            "• National Suicide Prevention Lifeline: 988\n"
            "• Crisis Text Line: Text HOME to 741741\n"
            "• Both are free, confidential, and available 24/7\n\n"
            "Please consider reaching out to one of these resources. They have trained counselors "
            "who understand exactly what you're going through and can provide immediate support.\n\n"
            "You're not alone in this, even when it feels that way. Crisis situations can improve "
            "with proper help and support.",
        ),
    ),
    ResponseTier(
        name="elevated",
        min_risk_level=5,
        templates=(
            "{greeting}I can see you're going through something really difficult right now. "
            "When we're in this much emotional pain, it's important to have extra support.\n\n"
            "🤗 **Support options:**\n"
            "• Crisis Text Line: Text HOME to 741741\n"
            "• National Suicide Prevention Lifeline: 988\n"
            "• Both offer free, confidential support 24/7\n\n"
            "Consider reaching out if you need someone to talk to beyond our conversation. "
            "Sometimes having a trained crisis counselor can provide additional perspective "
            "and coping strategies.\n\n"
            "I'm here to support you, and so are these resources. You don't have to handle this alone.",
        ),
    ),
    ResponseTier(
        name="supportive",
        min_risk_level=0,
        templates=(
            "{greeting}I can hear that you're struggling right now. Thank you for sharing what's "
            "going on with me. When things feel overwhelming, it's okay to ask for help.\n\n"
            "If you ever need additional support beyond our conversations, resources like "
            "Crisis Text Line (text HOME to 741741) are always available.\n\n"
            "Let's talk about what you're experiencing and see how I can best support you right now.",
        ),
    ),
)


FAILSAFE_MESSAGE = (
    "I'm concerned about your safety. Please reach out for immediate help:\n\n"
    "🚨 **Crisis Support:**\n"
    "• National Suicide Prevention Lifeline: 988\n"
    "• Crisis Text Line: Text HOME to 741741\n"
    "• Emergency Services: 911\n\n"
    "You don't have to face this alone. Professional crisis counselors are "
    "available 24/7 to help."
)


# CLINICAL_REVIEW_REQUIRED
STANDARD_SAFETY_PLAN = SafetyPlan(
    immediate_coping_strategies=(
        "Take slow, deep breaths for 2-3 minutes",
        "Call or text a crisis helpline (988 or text HOME to 741741)",
        "Go to a safe space with other people",
        "Remove any means of self-harm from your immediate area",
        "Use grounding techniques (5-4-3-2-1: 5 things you see, 4 you hear, etc.)",
    ),
    support_contacts=(
        "National Suicide Prevention Lifeline: 988",
        "Crisis Text Line: Text HOME to 741741",
        "Emergency Services: 911",
        "Trusted friend or family member",
        "Mental health professional",
    ),
    professional_contacts=(
        "Local emergency room",
        "Mental health crisis center",
        "Your therapist or counselor",
        "Your doctor",
        "Mobile crisis team",
    ),
    warning_signs=(
        "Thoughts of suicide or self-harm",
        "Feeling completely hopeless",
        "Substance use to cope",
        "Extreme mood changes",
        "Isolation from others",
        "Giving away possessions",
    ),
    environment_safety=(
        "Remove or secure potentially harmful items",
        "Stay with trusted people when possible",
        "Avoid alcohol and drugs",
        "Keep emergency numbers easily accessible",
        "Have a plan for getting to safety if needed",
    ),
    follow_up_timeline=(
        "Within 24 hours, contact a mental health professional "
        "or crisis center for ongoing support"
    ),
)


class CrisisResponseGenerator:
    """
    Tiered crisis response generator.

    Tiers:
    - 9+: immediate danger (988, text line, 911)
    - 7-8: high risk
    - 5-6: elevated
    - below 5: supportive

    A safety plan is attached iff risk level >= the safety plan
    threshold (8).

    Usage:
        generator = CrisisResponseGenerator()
        response = generator.generate(risk_level=9, display_name="Sam")
    """

    def __init__(
        self,
        catalog: Optional[CrisisResourceCatalog] = None,
        rng: Optional[random.Random] = None,
        safety_plan_threshold: int = 8,
    ) -> None:
        """
        Initialize generator.

        Args:
            catalog: Resource catalog
            rng: Random source for template variant choice
            safety_plan_threshold: Minimum risk level for a safety plan
        """
        self.catalog = catalog or CrisisResourceCatalog()
        self.rng = rng or random.Random()
        self.safety_plan_threshold = safety_plan_threshold

    def tier_for(self, risk_level: int) -> ResponseTier:
        for tier in RESPONSE_TIERS:
            if risk_level >= tier.min_risk_level:
                return tier
        return RESPONSE_TIERS[-1]

    def compose_message(
        self,
        risk_level: int,
        display_name: Optional[str] = None,
    ) -> str:
        """
        Compose the reply text for a risk level.

        Args:
            risk_level: Integer risk level 0-10
            display_name: Optional name for personalisation

        Returns:
            Reply text
        """
        tier = self.tier_for(risk_level)
        template = self.rng.choice(tier.templates)
        greeting = f"{display_name}, " if display_name else ""
        return template.format(greeting=greeting)

    def safety_plan_for(self, risk_level: int) -> Optional[SafetyPlan]:
        if risk_level >= self.safety_plan_threshold:
            return STANDARD_SAFETY_PLAN
        return None

    def generate(
        self,
        risk_level: int,
        display_name: Optional[str] = None,
        human_escalation: bool = False,
        response_time_ms: int = 0,
    ) -> CrisisResponse:
        """
        Generate a crisis response.

        Args:
            risk_level: Integer risk level 0-10
            display_name: Optional name for personalisation
            human_escalation: Whether a human responder was engaged
            response_time_ms: Elapsed handling time

        Returns:
            CrisisResponse with message, resources and optional plan
        """
        resources = tuple(self.catalog.select(risk_level))
        response = CrisisResponse(
            message=self.compose_message(risk_level, display_name),
            resources=resources,
            follow_up_required=True,
            human_escalation=human_escalation,
            safety_plan=self.safety_plan_for(risk_level),
            metadata=ResponseMetadata(
                response_time_ms=response_time_ms,
                escalation_triggered=human_escalation,
                resource_count=len(resources),
            ),
        )

        logger.info(
            "Crisis response generated",
            risk_level=risk_level,
            tier=self.tier_for(risk_level).name,
            resource_count=len(resources),
            safety_plan=response.safety_plan is not None,
        )

        return response

    def failsafe_response(self) -> CrisisResponse:
        """
        Minimal crisis response used when generation fails.

        SAFETY_CRITICAL: Must not depend on anything that can fail.
        The caller records the event and requests escalation, then
        sets escalation_triggered from the real attempt.
        """
        resources = tuple(
            r for r in CrisisResourceCatalog.BUILT_IN_RESOURCES
            if r.urgency_level == UrgencyLevel.IMMEDIATE
        )
        return CrisisResponse(
            message=FAILSAFE_MESSAGE,
            resources=resources,
            follow_up_required=True,
            human_escalation=True,
            metadata=ResponseMetadata(resource_count=len(resources)),
        )
