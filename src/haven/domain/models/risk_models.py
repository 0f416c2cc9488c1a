"""
Risk Models

Value types produced by the crisis risk scorer.

SAFETY-CRITICAL: `risk_level` is the single authoritative number
every other component acts on. Category sub-scores are explanatory
only and need not sum to it.
"""

from dataclasses import dataclass, field

from haven.domain.enums.crisis_enums import (
    ContextualFactor,
    ImmediateAction,
    RiskBand,
)


@dataclass(frozen=True)
class RiskAssessmentDetail:
    """
    Category-level breakdown of a risk assessment.

    Each sub-score is 0-10. `reasoning` holds one short
    human-readable line per triggered category.
    """

    suicide_risk: int = 0
    self_harm_risk: int = 0
    substance_abuse_risk: int = 0
    abuse_situation_risk: int = 0
    medical_emergency_risk: int = 0
    emotional_crisis_risk: int = 0
    reasoning: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "suicide_risk": self.suicide_risk,
            "self_harm_risk": self.self_harm_risk,
            "substance_abuse_risk": self.substance_abuse_risk,
            "abuse_situation_risk": self.abuse_situation_risk,
            "medical_emergency_risk": self.medical_emergency_risk,
            "emotional_crisis_risk": self.emotional_crisis_risk,
            "reasoning": list(self.reasoning),
        }


@dataclass(frozen=True)
class RiskAssessment:
    """
    Complete risk assessment for one message in context.

    Attributes:
        risk_level: Integer composite score, clamped to 0-10
        confidence: Confidence in the score, clamped to 0.0-1.0
        detected_keywords: Matched lexicon phrases (unique)
        contextual_factors: Factor tags (unique)
        immediate_actions: Ordered action tags for the risk band
        details: Category sub-scores with reasoning
        intervention_threshold: Level at which intervention starts
    """

    risk_level: int = 0
    confidence: float = 0.0
    detected_keywords: frozenset[str] = frozenset()
    contextual_factors: frozenset[ContextualFactor] = frozenset()
    immediate_actions: tuple[ImmediateAction, ...] = ()
    details: RiskAssessmentDetail = field(default_factory=RiskAssessmentDetail)
    intervention_threshold: int = 8

    @property
    def requires_intervention(self) -> bool:
        """Whether the intervention threshold is reached."""
        return self.risk_level >= self.intervention_threshold

    @property
    def escalation_required(self) -> bool:
        """Whether a human must be notified (same threshold)."""
        return self.risk_level >= self.intervention_threshold

    @property
    def band(self) -> RiskBand:
        """Coarse band for this risk level."""
        return RiskBand.from_risk_level(self.risk_level)

    def has_factor(self, factor: ContextualFactor) -> bool:
        return factor in self.contextual_factors

    def to_dict(self) -> dict:
        return {
            "risk_level": self.risk_level,
            "confidence": round(self.confidence, 3),
            "requires_intervention": self.requires_intervention,
            "escalation_required": self.escalation_required,
            "detected_keywords": sorted(self.detected_keywords),
            "contextual_factors": sorted(f.value for f in self.contextual_factors),
            "immediate_actions": [a.value for a in self.immediate_actions],
            "details": self.details.to_dict(),
        }

    def to_audit_record(self) -> dict:
        """Create audit record without any message text."""
        return {
            "risk_level": self.risk_level,
            "band": self.band.name,
            "confidence": round(self.confidence, 3),
            "keyword_count": len(self.detected_keywords),
            "contextual_factors": sorted(f.value for f in self.contextual_factors),
            "intervention_threshold": self.intervention_threshold,
        }
