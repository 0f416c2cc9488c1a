"""
Unit Tests for Crisis Risk Scorer

Tests phrase scoring, rule ordering, context adjustments and
the invariants every assessment must hold.
"""

import pytest

from haven.domain.enums.crisis_enums import (
    ContextualFactor,
    ImmediateAction,
    RiskBand,
)
from haven.domain.models.conversation import (
    ConversationContext,
    ConversationTurn,
    UserProfile,
)
from haven.services.safety.risk_scorer import CrisisRiskScorer, round_half_up


class TestHighRiskLanguage:
    """Tests for direct crisis language."""

    def test_immediate_suicide_intent(self, scorer: CrisisRiskScorer) -> None:
        """Test explicit intent with a time marker scores at the top."""
        result = scorer.assess("I want to kill myself tonight")

        assert result.risk_level >= 9
        assert result.requires_intervention
        assert result.escalation_required
        assert result.has_factor(ContextualFactor.IMMEDIACY_INDICATED)
        assert result.has_factor(ContextualFactor.DIRECT_CRISIS_LANGUAGE)
        assert "kill myself" in result.detected_keywords
        assert result.confidence == 1.0

    @pytest.mark.parametrize(
        "message",
        [
            "I want to end it all",
            "I'm going to hurt myself",
            "I have a plan to take my own life",
            "I'd be better off dead",
            "I don't want to live anymore",
        ],
    )
    def test_unambiguous_phrases_require_intervention(
        self,
        scorer: CrisisRiskScorer,
        message: str,
    ) -> None:
        """Test unambiguous high-risk phrases always reach the threshold."""
        result = scorer.assess(message)

        assert result.risk_level >= 8
        assert result.requires_intervention

    def test_informal_spelling_is_normalized(self, scorer: CrisisRiskScorer) -> None:
        """Test "im gonna" is matched as "i am going to"."""
        result = scorer.assess("im gonna kill myself")

        assert result.risk_level == 10
        assert "going to kill myself" in result.detected_keywords
        assert result.has_factor(ContextualFactor.IMMEDIACY_INDICATED)

    def test_suicide_detail_score(self, scorer: CrisisRiskScorer) -> None:
        """Test suicide phrases produce a suicide sub-score with reasoning."""
        result = scorer.assess("I want to kill myself tonight")

        assert result.details.suicide_risk == 8
        assert "Direct suicide ideation expressed" in result.details.reasoning


class TestMediumRiskLanguage:
    """Tests for hopelessness and emotional crisis language."""

    def test_hopeless_and_trapped(self, scorer: CrisisRiskScorer) -> None:
        """Test two medium phrases stay below the threshold."""
        result = scorer.assess("I feel hopeless and trapped")

        assert 4 <= result.risk_level <= 7
        assert result.risk_level == 7
        assert not result.requires_intervention
        assert result.detected_keywords == frozenset({"hopeless", "trapped"})
        assert result.details.emotional_crisis_risk == 6

    def test_medium_only_phrase_caps_score(self, scorer: CrisisRiskScorer) -> None:
        """Test "no meaning" phrases pin the score to the cap."""
        result = scorer.assess("My life has no meaning")

        assert result.risk_level == 6
        assert result.band == RiskBand.ELEVATED

    def test_specific_phrase_overrides_cap(self, scorer: CrisisRiskScorer) -> None:
        """Test a specific high-risk phrase wins over the medium-only cap."""
        result = scorer.assess("My life has no meaning and I want to die")

        assert result.risk_level == 8
        assert result.has_factor(ContextualFactor.DIRECT_CRISIS_LANGUAGE)
        assert {"want to die", "no meaning"} <= result.detected_keywords

    def test_fuzzy_variant_counts_as_phrase(self, scorer: CrisisRiskScorer) -> None:
        """Test a registered variant matches its canonical phrase."""
        result = scorer.assess("I just can't handle this")

        assert "can't take this" in result.detected_keywords
        assert result.risk_level == 7

    def test_abuse_detail_score(self, scorer: CrisisRiskScorer) -> None:
        """Test abuse language sets the abuse sub-score only."""
        result = scorer.assess("He keeps hitting me and I feel hopeless")

        assert result.risk_level == 4
        assert result.details.abuse_situation_risk == 7
        assert result.details.suicide_risk == 0


class TestFalsePositives:
    """Tests for idioms resembling crisis language."""

    @pytest.mark.parametrize(
        "message",
        [
            "I need to kill time before my appointment",
            "I'm dying to know the results",
            "I'm dead tired after that shift",
            "Traffic is killing me today",
        ],
    )
    def test_unambiguous_idioms_score_zero(
        self,
        scorer: CrisisRiskScorer,
        message: str,
    ) -> None:
        """Test unambiguous idioms short-circuit to zero."""
        result = scorer.assess(message)

        assert result.risk_level == 0
        assert result.confidence == pytest.approx(0.9)
        assert result.contextual_factors == frozenset(
            {ContextualFactor.POSSIBLE_FALSE_POSITIVE}
        )
        assert result.detected_keywords == frozenset()
        assert result.immediate_actions == ()

    def test_other_idioms_only_add_factor(self, scorer: CrisisRiskScorer) -> None:
        """Test remaining false positives tag the result but keep scoring."""
        result = scorer.assess("That cut off my plans")

        assert result.risk_level == 0
        assert result.has_factor(ContextualFactor.POSSIBLE_FALSE_POSITIVE)


class TestMildSadness:
    """Tests for the mild sadness reduction."""

    def test_sad_today_is_reduced(self, scorer: CrisisRiskScorer) -> None:
        """Test mild sadness lowers a low score."""
        result = scorer.assess("I feel sad today")

        assert result.risk_level == 2
        assert result.has_factor(ContextualFactor.MILD_SADNESS_EXPRESSION)
        assert not result.requires_intervention

    def test_reduction_floors_at_zero(self, scorer: CrisisRiskScorer) -> None:
        """Test the reduction never goes below zero."""
        result = scorer.assess("I'm having a bad day")

        assert result.risk_level == 0
        assert result.has_factor(ContextualFactor.MILD_SADNESS_EXPRESSION)


class TestContextAdjustments:
    """Tests for conversation context adjustments."""

    def test_escalating_history_raises_score(
        self,
        scorer: CrisisRiskScorer,
        escalating_context: ConversationContext,
    ) -> None:
        """Test escalation across turns pushes a 7 over the threshold."""
        result = scorer.assess("I feel hopeless and trapped", escalating_context)

        assert result.has_factor(ContextualFactor.ESCALATING_PATTERN)
        assert result.risk_level == 8
        assert result.requires_intervention

    def test_profile_adjustments(self, scorer: CrisisRiskScorer) -> None:
        """Test stress, regulation and crisis history each add risk."""
        context = ConversationContext(
            user_id="user-1",
            profile=UserProfile(
                stress_level=9,
                emotional_regulation=2,
                crisis_risk_level=6,
            ),
        )

        result = scorer.assess("hello there", context)

        assert result.risk_level == 2
        assert result.confidence == pytest.approx(0.65)
        assert {
            ContextualFactor.HIGH_STRESS_LEVEL,
            ContextualFactor.POOR_EMOTIONAL_REGULATION,
            ContextualFactor.PREVIOUS_CRISIS_HISTORY,
        } <= result.contextual_factors

    def test_substance_in_history(self, scorer: CrisisRiskScorer) -> None:
        """Test substance use in any prior turn is considered."""
        context = ConversationContext(
            user_id="user-1",
            history=(ConversationTurn(message="I've been drinking a lot"),),
        )

        result = scorer.assess("hello there", context)

        assert result.has_factor(ContextualFactor.SUBSTANCE_USE_MENTIONED)
        assert result.risk_level == 1
        assert result.details.substance_abuse_risk == 6

    def test_isolation_rounds_half_up(self, scorer: CrisisRiskScorer) -> None:
        """Test a 0.5 adjustment rounds up to 1."""
        context = ConversationContext(user_id="user-1")

        result = scorer.assess("nobody gets it", context)

        assert result.has_factor(ContextualFactor.SOCIAL_ISOLATION)
        assert result.risk_level == 1

    def test_context_is_not_mutated(
        self,
        scorer: CrisisRiskScorer,
        escalating_context: ConversationContext,
    ) -> None:
        """Test scoring leaves the context untouched."""
        before = escalating_context.history

        scorer.assess("I feel hopeless", escalating_context)

        assert escalating_context.history == before


class TestAssessmentInvariants:
    """Tests for properties every assessment holds."""

    @pytest.mark.parametrize(
        "message",
        [
            "",
            "   ",
            "😢",
            "kill myself " * 50,
            "hopeless trapped alone worthless numb drowning tonight",
            "\x00\x01 binary-ish",
        ],
    )
    def test_bounds(self, scorer: CrisisRiskScorer, message: str) -> None:
        """Test risk and confidence stay in range for any input."""
        result = scorer.assess(message)

        assert isinstance(result.risk_level, int)
        assert 0 <= result.risk_level <= 10
        assert 0.0 <= result.confidence <= 1.0

    def test_deterministic(
        self,
        scorer: CrisisRiskScorer,
        escalating_context: ConversationContext,
    ) -> None:
        """Test the same input always produces the same assessment."""
        first = scorer.assess("I can't go on like this", escalating_context)
        second = scorer.assess("I can't go on like this", escalating_context)

        assert first == second

    @pytest.mark.parametrize(
        "message,count",
        [
            ("I want to kill myself tonight", 5),
            ("I feel hopeless and trapped", 4),
            ("He keeps hitting me and I feel hopeless", 3),
            ("What a lovely afternoon", 0),
        ],
    )
    def test_actions_follow_band(
        self,
        scorer: CrisisRiskScorer,
        message: str,
        count: int,
    ) -> None:
        """Test the number of immediate actions per band."""
        result = scorer.assess(message)

        assert len(result.immediate_actions) == count

    def test_critical_actions_include_escalation(self, scorer: CrisisRiskScorer) -> None:
        """Test the critical band always asks for a human."""
        result = scorer.assess("I want to kill myself tonight")

        assert result.immediate_actions[-1] == ImmediateAction.ESCALATE_TO_HUMAN

    def test_custom_threshold(self) -> None:
        """Test the intervention threshold is configurable."""
        scorer = CrisisRiskScorer(intervention_threshold=6)

        result = scorer.assess("My life has no meaning")

        assert result.requires_intervention

    def test_audit_record_has_no_text(self, scorer: CrisisRiskScorer) -> None:
        """Test the audit record carries counts only."""
        record = scorer.assess("I feel hopeless and trapped").to_audit_record()

        assert record["keyword_count"] == 2
        assert "hopeless" not in str(record)


class TestRoundHalfUp:
    """Tests for round_half_up()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (7.0, 7), (0.0, 0)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        """Test halves round up, unlike banker's rounding."""
        assert round_half_up(value) == expected
