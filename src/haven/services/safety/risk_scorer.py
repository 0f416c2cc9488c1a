"""
Crisis Risk Scorer

Scores a single message, optionally in conversation context, on a
0-10 crisis scale.

SAFETY-CRITICAL: The risk level decides whether a user receives
crisis resources and whether a human is paged. Scoring rules are
ordered; changing the order changes outcomes.

ARCHITECTURE: Pure function of (message, context). Reads only
immutable lexicon data; no I/O apart from one log line.
"""

import math
from dataclasses import dataclass
from typing import Optional

from haven.config.logging_config import get_logger
from haven.domain.enums.crisis_enums import (
    ContextualFactor,
    ImmediateAction,
    LexiconCategory,
    RiskBand,
)
from haven.domain.models.conversation import ConversationContext
from haven.domain.models.risk_models import RiskAssessment, RiskAssessmentDetail
from haven.services.safety import lexicon
from haven.services.safety.context_analyzer import ContextAnalyzer
from haven.services.safety.normalizer import MatchText

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScoringConstants:
    """
    Numeric heuristics used by the scorer.

    CLINICAL_VALIDATION_REQUIRED: These values reproduce the
    behaviour crisis staff have reviewed so far. Changes need
    sign-off and a re-run of the labelled phrase suite.
    """

    baseline_confidence: float = 0.5

    # False positives
    false_positive_confidence: float = 0.9

    # High-risk language
    high_risk_floor: float = 8.0
    high_risk_per_match: float = 5.0
    high_risk_confidence: float = 0.3

    # Medium-risk language
    medium_risk_floor: float = 4.0
    medium_risk_per_match: float = 3.5
    medium_only_cap: float = 6.0
    medium_risk_confidence: float = 0.15

    # Immediacy
    immediacy_add: float = 3.0
    immediacy_multiplier: float = 1.4
    immediacy_confidence: float = 0.2

    # Specific high-risk phrases
    specific_floor: float = 8.0
    specific_confidence: float = 0.25

    # Mild sadness
    mild_sadness_reduction: float = 2.0
    low_risk_ceiling: float = 6.0

    # Category detail sub-scores
    suicide_detail: int = 8
    self_harm_detail: int = 7
    substance_detail: int = 6
    emotional_detail: int = 6
    abuse_detail: int = 7

    max_risk: float = 10.0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


class CrisisRiskScorer:
    """
    Lexicon-driven crisis risk scorer.

    Deterministic: the same message and context always produce
    the same assessment. Never raises for any string input.

    Scoring steps:
    1. False-positive idioms
    2. High-risk phrases
    3. Medium-risk phrases (medium-only cap)
    4. Immediacy modifiers
    5. Specific high-risk phrases (overrides the cap)
    6. Conversation context
    7. Mild sadness reduction
    8. Clamp and round

    Usage:
        scorer = CrisisRiskScorer()
        assessment = scorer.assess("I can't go on", context)
    """

    def __init__(
        self,
        constants: Optional[ScoringConstants] = None,
        context_analyzer: Optional[ContextAnalyzer] = None,
        intervention_threshold: int = 8,
    ) -> None:
        """
        Initialize scorer.

        Args:
            constants: Scoring heuristics
            context_analyzer: Conversation context analyzer
            intervention_threshold: Risk level at which intervention starts
        """
        self.constants = constants or ScoringConstants()
        self.context_analyzer = context_analyzer or ContextAnalyzer()
        self.intervention_threshold = intervention_threshold

    def assess(
        self,
        message: str,
        context: Optional[ConversationContext] = None,
    ) -> RiskAssessment:
        """
        Assess crisis risk for a message.

        Args:
            message: Raw user message
            context: Optional conversation context

        Returns:
            RiskAssessment with integer risk level 0-10
        """
        c = self.constants
        text = MatchText.from_message(message)
        risk = 0.0
        confidence = c.baseline_confidence
        keywords: list[str] = []
        factors: list[ContextualFactor] = []

        # Step 1: False positives, checked on the raw lowercased message
        false_positives = [
            fp for fp in lexicon.phrases(LexiconCategory.FALSE_POSITIVE)
            if fp in text.raw
        ]
        if false_positives:
            factors.append(ContextualFactor.POSSIBLE_FALSE_POSITIVE)
            if any(fp in lexicon.UNAMBIGUOUS_FALSE_POSITIVES for fp in false_positives):
                return self._build(
                    text,
                    risk=0.0,
                    confidence=c.false_positive_confidence,
                    keywords=[],
                    factors=factors,
                    with_actions=False,
                )

        # Step 2: High-risk phrases
        high_matches = self._match_category(text, LexiconCategory.HIGH_RISK)
        if high_matches:
            risk = max(c.high_risk_floor, len(high_matches) * c.high_risk_per_match)
            keywords.extend(high_matches)
            confidence += c.high_risk_confidence

        # Step 3: Medium-risk phrases
        medium_matches = self._match_category(text, LexiconCategory.MEDIUM_RISK)
        if medium_matches:
            if text.contains_any(lexicon.MEDIUM_ONLY_PHRASES):
                risk = max(risk, c.medium_only_cap)
            else:
                medium_score = len(medium_matches) * c.medium_risk_per_match
                risk = max(risk, max(c.medium_risk_floor, medium_score))
            keywords.extend(medium_matches)
            confidence += c.medium_risk_confidence

        # Step 4: Immediacy modifiers
        modifiers = text.matches(lexicon.phrases(LexiconCategory.CONTEXTUAL_MODIFIER))
        if any(m in lexicon.IMMEDIACY_MODIFIERS for m in modifiers):
            risk = (risk + c.immediacy_add) * c.immediacy_multiplier
            factors.append(ContextualFactor.IMMEDIACY_INDICATED)
            confidence += c.immediacy_confidence

        # Step 5: Specific high-risk phrases override the medium-only cap
        if text.contains_any(lexicon.SPECIFIC_HIGH_RISK_PHRASES):
            risk = max(risk, c.specific_floor)
            confidence += c.specific_confidence
            factors.append(ContextualFactor.DIRECT_CRISIS_LANGUAGE)

        # Step 6: Conversation context
        if context is not None:
            analysis = self.context_analyzer.analyze(context, text.raw)
            risk += analysis.risk_adjustment
            confidence += analysis.confidence_adjustment
            factors.extend(analysis.factors)

        # Step 7: Mild sadness lowers low scores
        if text.contains_any(lexicon.MILD_SADNESS_PHRASES) and risk < c.low_risk_ceiling:
            risk = max(risk - c.mild_sadness_reduction, 0.0)
            factors.append(ContextualFactor.MILD_SADNESS_EXPRESSION)

        return self._build(
            text,
            risk=risk,
            confidence=confidence,
            keywords=keywords,
            factors=factors,
        )

    def _match_category(
        self,
        text: MatchText,
        category: LexiconCategory,
    ) -> list[str]:
        """Match a lexicon category, including fuzzy variants."""
        matches = []
        for phrase in lexicon.phrases(category):
            if text.contains(phrase) or any(
                v in text.normalized for v in lexicon.variants_for(phrase)
            ):
                matches.append(phrase)
        return matches

    def _build(
        self,
        text: MatchText,
        risk: float,
        confidence: float,
        keywords: list[str],
        factors: list[ContextualFactor],
        with_actions: bool = True,
    ) -> RiskAssessment:
        """Clamp, round and assemble the assessment (steps 8-10)."""
        c = self.constants

        # Step 8: Clamp to scale
        risk_level = round_half_up(min(max(risk, 0.0), c.max_risk))
        confidence = min(max(confidence, 0.0), 1.0)

        # Step 9: Category details
        details = self._build_details(text, set(keywords), set(factors))

        # Step 10: Actions for the band
        actions = (
            tuple(ImmediateAction.for_band(RiskBand.from_risk_level(risk_level)))
            if with_actions
            else ()
        )

        assessment = RiskAssessment(
            risk_level=risk_level,
            confidence=confidence,
            detected_keywords=frozenset(keywords),
            contextual_factors=frozenset(factors),
            immediate_actions=actions,
            details=details,
            intervention_threshold=self.intervention_threshold,
        )

        logger.info(
            "Crisis risk assessed",
            requires_intervention=assessment.requires_intervention,
            **assessment.to_audit_record(),
        )

        return assessment

    def _build_details(
        self,
        text: MatchText,
        keywords: set[str],
        factors: set[ContextualFactor],
    ) -> RiskAssessmentDetail:
        """Build category sub-scores with reasoning."""
        c = self.constants
        scores: dict[str, int] = {}
        reasoning: list[str] = []

        if keywords & lexicon.SUICIDE_DETAIL_PHRASES:
            scores["suicide_risk"] = c.suicide_detail
            reasoning.append("Direct suicide ideation expressed")

        if keywords & lexicon.SELF_HARM_DETAIL_PHRASES:
            scores["self_harm_risk"] = c.self_harm_detail
            reasoning.append("Self-harm intentions indicated")

        if ContextualFactor.SUBSTANCE_USE_MENTIONED in factors:
            scores["substance_abuse_risk"] = c.substance_detail
            reasoning.append("Substance use mentioned in crisis context")

        if keywords & lexicon.EMOTIONAL_DETAIL_PHRASES:
            scores["emotional_crisis_risk"] = c.emotional_detail
            reasoning.append("Severe emotional distress indicated")

        if any(p in text.raw for p in lexicon.ABUSE_PHRASES):
            scores["abuse_situation_risk"] = c.abuse_detail
            reasoning.append("Potential abuse situation detected")

        return RiskAssessmentDetail(reasoning=tuple(reasoning), **scores)
