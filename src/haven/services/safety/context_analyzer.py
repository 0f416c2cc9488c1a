"""
Conversation Context Analyzer

Derives risk adjustments from prior turns and the user's profile.

CLINICAL_REVIEW_REQUIRED: Profile thresholds and adjustment
weights are heuristics pending clinical validation.
"""

from dataclasses import dataclass, field
from typing import Optional

from haven.domain.enums.crisis_enums import ContextualFactor
from haven.domain.models.conversation import ConversationContext, ConversationTurn
from haven.services.safety.lexicon import (
    ESCALATION_TONE_SEQUENCES,
    INTENSITY_KEYWORDS,
    ISOLATION_PHRASES,
    SUBSTANCE_PHRASES,
)


@dataclass(frozen=True)
class ContextWeights:
    """
    Context adjustment weights.

    CLINICAL_VALIDATION_REQUIRED
    """

    escalation_risk: float = 1.0
    escalation_confidence: float = 0.1

    high_stress_min: int = 8
    high_stress_risk: float = 0.5

    poor_regulation_max: int = 3
    poor_regulation_risk: float = 0.5

    crisis_history_min: int = 5
    crisis_history_risk: float = 1.0
    crisis_history_confidence: float = 0.15

    substance_risk: float = 1.0
    substance_confidence: float = 0.1

    isolation_risk: float = 0.5


@dataclass
class ContextAnalysis:
    """Additive adjustments produced by context analysis."""

    risk_adjustment: float = 0.0
    confidence_adjustment: float = 0.0
    factors: list[ContextualFactor] = field(default_factory=list)

    def add(
        self,
        factor: ContextualFactor,
        risk: float,
        confidence: float = 0.0,
    ) -> None:
        self.factors.append(factor)
        self.risk_adjustment += risk
        self.confidence_adjustment += confidence


class ContextAnalyzer:
    """
    Conversation context analyzer.

    Pure: reads the context, never mutates it.

    Usage:
        analyzer = ContextAnalyzer()
        analysis = analyzer.analyze(context, message.lower())
    """

    def __init__(self, weights: Optional[ContextWeights] = None) -> None:
        self.weights = weights or ContextWeights()

    def analyze(
        self,
        context: ConversationContext,
        current_message: str,
    ) -> ContextAnalysis:
        """
        Analyze context around the current message.

        Args:
            context: Conversation context
            current_message: Lowercased current message

        Returns:
            ContextAnalysis with risk and confidence adjustments
        """
        w = self.weights
        analysis = ContextAnalysis()
        current = current_message.lower()

        if self.detect_escalation(context.history):
            analysis.add(
                ContextualFactor.ESCALATING_PATTERN,
                w.escalation_risk,
                w.escalation_confidence,
            )

        profile = context.profile
        if profile is not None:
            if profile.stress_level is not None and profile.stress_level >= w.high_stress_min:
                analysis.add(ContextualFactor.HIGH_STRESS_LEVEL, w.high_stress_risk)

            if (
                profile.emotional_regulation is not None
                and profile.emotional_regulation <= w.poor_regulation_max
            ):
                analysis.add(
                    ContextualFactor.POOR_EMOTIONAL_REGULATION,
                    w.poor_regulation_risk,
                )

            if (
                profile.crisis_risk_level is not None
                and profile.crisis_risk_level >= w.crisis_history_min
            ):
                analysis.add(
                    ContextualFactor.PREVIOUS_CRISIS_HISTORY,
                    w.crisis_history_risk,
                    w.crisis_history_confidence,
                )

        # Substance use in the current message or anywhere in history
        texts = [current] + [turn.message.lower() for turn in context.history]
        if any(_contains_any(text, SUBSTANCE_PHRASES) for text in texts):
            analysis.add(
                ContextualFactor.SUBSTANCE_USE_MENTIONED,
                w.substance_risk,
                w.substance_confidence,
            )

        if _contains_any(current, ISOLATION_PHRASES):
            analysis.add(ContextualFactor.SOCIAL_ISOLATION, w.isolation_risk)

        return analysis

    def detect_escalation(self, history: tuple[ConversationTurn, ...]) -> bool:
        """
        Detect escalating emotional intensity across prior turns.

        Escalation is either a consecutive tone pair from the
        escalation table or a turn-over-turn increase in the number
        of intensity keywords. Requires at least two turns.
        """
        if len(history) < 2:
            return False

        tones = [
            turn.emotional_tone.lower()
            for turn in history
            if turn.emotional_tone
        ]
        for previous, current in zip(tones, tones[1:]):
            if (previous, current) in ESCALATION_TONE_SEQUENCES:
                return True

        intensities = [_count_present(turn.message.lower(), INTENSITY_KEYWORDS) for turn in history]
        for previous, current in zip(intensities, intensities[1:]):
            if current > previous and current > 0:
                return True

        return False


def _contains_any(text: str, phrases: tuple[str, ...]) -> bool:
    return any(p in text for p in phrases)


def _count_present(text: str, phrases: tuple[str, ...]) -> int:
    return sum(1 for p in phrases if p in text)
