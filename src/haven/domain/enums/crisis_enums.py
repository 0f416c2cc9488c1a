"""
Crisis Enumerations

Closed vocabularies shared by the scorer, the response generator
and the escalation layer.

CLINICAL_REVIEW_REQUIRED: Band boundaries and crisis categories
should be validated by mental health professionals before
production deployment.
"""

from enum import IntEnum, StrEnum


class LexiconCategory(StrEnum):
    """Category of a lexicon phrase."""

    HIGH_RISK = "high_risk"
    """Direct crisis language (suicide ideation, self-harm, immediate danger)."""

    MEDIUM_RISK = "medium_risk"
    """Hopelessness, emotional crisis and isolation language."""

    CONTEXTUAL_MODIFIER = "contextual_modifier"
    """Does not indicate danger alone but qualifies nearby risk language."""

    FALSE_POSITIVE = "false_positive"
    """Idiomatically benign phrases resembling crisis language."""


class RiskBand(IntEnum):
    """
    Coarse bands over the 0-10 risk scale.

    The integer risk level stays authoritative; bands exist only
    to select action sets and for metrics labels.
    """

    LOW = 0
    """Risk 0-3. No crisis-specific action."""

    MODERATE = 4
    """Risk 4-5. Acknowledge difficulty, emotional support."""

    ELEVATED = 6
    """Risk 6-7. Support resources, close monitoring."""

    CRITICAL = 8
    """
    Risk 8-10. Intervention threshold.

    SAFETY_NOTE: At this band crisis resources, a safety plan
    and human escalation are always produced.
    """

    @classmethod
    def from_risk_level(cls, risk_level: int) -> "RiskBand":
        """
        Map a 0-10 risk level to its band.

        Args:
            risk_level: Integer risk level

        Returns:
            Corresponding band
        """
        if risk_level >= cls.CRITICAL:
            return cls.CRITICAL
        if risk_level >= cls.ELEVATED:
            return cls.ELEVATED
        if risk_level >= cls.MODERATE:
            return cls.MODERATE
        return cls.LOW


class Speaker(StrEnum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class UrgencyLevel(StrEnum):
    """Urgency attached to an external help resource."""

    IMMEDIATE = "immediate"
    URGENT = "urgent"
    SUPPORTIVE = "supportive"


class ResourceType(StrEnum):
    """Kind of external help resource."""

    HOTLINE = "hotline"
    TEXT_LINE = "text_line"
    EMERGENCY = "emergency"
    PROFESSIONAL = "professional"
    ONLINE = "online"


class CrisisType(StrEnum):
    """
    Classification stored on a crisis event record.

    Closed set; anything not matching a specific category is
    recorded as EMOTIONAL_CRISIS.
    """

    SUICIDE = "suicide"
    SELF_HARM = "self_harm"
    ABUSE = "abuse"
    SUBSTANCE = "substance"
    EMOTIONAL_CRISIS = "emotional_crisis"


class ContextualFactor(StrEnum):
    """Short factor tags attached to a risk assessment."""

    POSSIBLE_FALSE_POSITIVE = "possible_false_positive"
    IMMEDIACY_INDICATED = "immediacy_indicated"
    DIRECT_CRISIS_LANGUAGE = "direct_crisis_language"
    ESCALATING_PATTERN = "escalating_pattern"
    HIGH_STRESS_LEVEL = "high_stress_level"
    POOR_EMOTIONAL_REGULATION = "poor_emotional_regulation"
    PREVIOUS_CRISIS_HISTORY = "previous_crisis_history"
    SUBSTANCE_USE_MENTIONED = "substance_use_mentioned"
    SOCIAL_ISOLATION = "social_isolation"
    MILD_SADNESS_EXPRESSION = "mild_sadness_expression"


class ImmediateAction(StrEnum):
    """Action tags derived from the risk band."""

    # Critical band
    PROVIDE_CRISIS_RESOURCES = "provide_crisis_resources"
    EXPRESS_IMMEDIATE_SUPPORT = "express_immediate_support"
    ENCOURAGE_PROFESSIONAL_HELP = "encourage_professional_help"
    SUGGEST_SAFETY_PLANNING = "suggest_safety_planning"
    ESCALATE_TO_HUMAN = "escalate_to_human"

    # Elevated band
    PROVIDE_SUPPORT_RESOURCES = "provide_support_resources"
    VALIDATE_FEELINGS = "validate_feelings"
    SUGGEST_COPING_STRATEGIES = "suggest_coping_strategies"
    MONITOR_CLOSELY = "monitor_closely"

    # Moderate band
    ACKNOWLEDGE_DIFFICULTY = "acknowledge_difficulty"
    PROVIDE_EMOTIONAL_SUPPORT = "provide_emotional_support"
    EXPLORE_SUPPORT_SYSTEM = "explore_support_system"

    @classmethod
    def for_band(cls, band: RiskBand) -> list["ImmediateAction"]:
        """
        Ordered actions for a risk band.

        Args:
            band: Risk band

        Returns:
            Ordered list of actions (empty for LOW)
        """
        mapping = {
            RiskBand.CRITICAL: [
                cls.PROVIDE_CRISIS_RESOURCES,
                cls.EXPRESS_IMMEDIATE_SUPPORT,
                cls.ENCOURAGE_PROFESSIONAL_HELP,
                cls.SUGGEST_SAFETY_PLANNING,
                cls.ESCALATE_TO_HUMAN,
            ],
            RiskBand.ELEVATED: [
                cls.PROVIDE_SUPPORT_RESOURCES,
                cls.VALIDATE_FEELINGS,
                cls.SUGGEST_COPING_STRATEGIES,
                cls.MONITOR_CLOSELY,
            ],
            RiskBand.MODERATE: [
                cls.ACKNOWLEDGE_DIFFICULTY,
                cls.PROVIDE_EMOTIONAL_SUPPORT,
                cls.EXPLORE_SUPPORT_SYSTEM,
            ],
        }
        return list(mapping.get(band, []))


class MessageSafetyAction(StrEnum):
    """Actions required by the inbound message safety gate."""

    IMMEDIATE_CRISIS_RESPONSE = "immediate_crisis_response"
    HUMAN_ESCALATION = "human_escalation"
    SAFETY_PLANNING = "safety_planning"
    ENHANCED_SUPPORT = "enhanced_support"
    RESOURCE_PROVISION = "resource_provision"
    CLOSE_MONITORING = "close_monitoring"
    EMOTIONAL_SUPPORT = "emotional_support"
    CHECK_IN_REQUIRED = "check_in_required"

    @classmethod
    def for_band(cls, band: RiskBand) -> list["MessageSafetyAction"]:
        """Ordered gate actions for a risk band."""
        mapping = {
            RiskBand.CRITICAL: [
                cls.IMMEDIATE_CRISIS_RESPONSE,
                cls.HUMAN_ESCALATION,
                cls.SAFETY_PLANNING,
            ],
            RiskBand.ELEVATED: [
                cls.ENHANCED_SUPPORT,
                cls.RESOURCE_PROVISION,
                cls.CLOSE_MONITORING,
            ],
            RiskBand.MODERATE: [
                cls.EMOTIONAL_SUPPORT,
                cls.CHECK_IN_REQUIRED,
            ],
        }
        return list(mapping.get(band, []))


class ReplyConcern(StrEnum):
    """Concerns raised by the outbound reply validator."""

    INAPPROPRIATE_THERAPEUTIC_ADVICE = "inappropriate_therapeutic_advice"
    CRISIS_MINIMIZATION = "crisis_minimization"
    POTENTIALLY_HARMFUL_SUGGESTIONS = "potentially_harmful_suggestions"


class ReplyRemediation(StrEnum):
    """Remediation tags paired 1:1 with reply concerns."""

    REVIEW_THERAPEUTIC_BOUNDARIES = "review_therapeutic_boundaries"
    ENHANCE_CRISIS_ACKNOWLEDGMENT = "enhance_crisis_acknowledgment"
    REMOVE_HARMFUL_CONTENT = "remove_harmful_content"
