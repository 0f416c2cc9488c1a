"""
Integration Tests - Crisis Flow

Tests the complete scoring → response → record → escalation flow
through a bootstrapped pipeline, and the reply gate on the result.
"""

import random

import pytest

from haven.bootstrap import create_pipeline
from haven.config import Settings
from haven.domain.enums.crisis_enums import ContextualFactor
from haven.domain.models.conversation import ConversationContext
from haven.infrastructure.memory import InMemoryCrisisEventStore
from haven.infrastructure.metrics import CrisisMetrics
from haven.services.safety.crisis_pipeline import CrisisPipeline


class TestCrisisFlowIntegration:
    """Integration tests for the complete crisis flow."""

    @pytest.fixture
    def flow_store(self) -> InMemoryCrisisEventStore:
        return InMemoryCrisisEventStore()

    @pytest.fixture
    def flow_metrics(self) -> CrisisMetrics:
        return CrisisMetrics()

    @pytest.fixture
    def flow(
        self,
        test_settings: Settings,
        flow_store: InMemoryCrisisEventStore,
        notifier,
        flow_metrics: CrisisMetrics,
    ) -> CrisisPipeline:
        return create_pipeline(
            test_settings,
            store=flow_store,
            notifier=notifier,
            metrics=flow_metrics,
            rng=random.Random(3),
        )

    @pytest.mark.asyncio
    async def test_conversation_escalates_to_crisis(
        self,
        flow: CrisisPipeline,
        flow_store: InMemoryCrisisEventStore,
        notifier,
        escalating_context: ConversationContext,
    ) -> None:
        """Test a worsening conversation ends in a recorded, escalated crisis."""
        outcome = await flow.handle_message(
            "I want to kill myself tonight",
            escalating_context,
            correlation_id="conv-1",
        )

        assessment = outcome.assessment
        assert assessment.risk_level >= 9
        assert assessment.has_factor(ContextualFactor.IMMEDIACY_INDICATED)
        assert assessment.has_factor(ContextualFactor.ESCALATING_PATTERN)

        response = outcome.response
        assert response.safety_plan is not None
        assert any(r.available_24_7 for r in response.resources)
        assert "988" in response.message
        assert flow.validate_reply(response.message).is_safe

        events = await flow_store.list_events(user_id="user-123")
        assert len(events) == 1
        assert events[0].human_notified
        assert "Everything is overwhelming" in events[0].context_summary

        assert len(notifier.notices) == 1
        assert notifier.notices[0].severity == assessment.risk_level

    @pytest.mark.asyncio
    async def test_moderation_resolves_event(
        self,
        flow: CrisisPipeline,
        flow_store: InMemoryCrisisEventStore,
    ) -> None:
        """Test a recorded event can be resolved by the moderation workflow."""
        outcome = await flow.handle_message("I'm going to hurt myself")

        resolved = await flow_store.resolve(outcome.event.id, "Spoke with user; safe")

        assert resolved.resolved
        assert await flow_store.list_events(resolved=False) == []

    @pytest.mark.asyncio
    async def test_benign_conversation_has_no_side_effects(
        self,
        flow: CrisisPipeline,
        flow_store: InMemoryCrisisEventStore,
        notifier,
        flow_metrics: CrisisMetrics,
    ) -> None:
        """Test idioms and mild sadness never reach crisis handling."""
        for message in (
            "I need to kill time before my appointment",
            "I'm dying to know the results",
            "I feel sad today",
        ):
            outcome = await flow.handle_message(message)
            assert not outcome.requires_crisis_response

        assert len(flow_store) == 0
        assert notifier.notices == []
        assert flow_metrics.value("haven_risk_assessments_total", {"band": "LOW"}) == 3.0

    @pytest.mark.asyncio
    async def test_reply_gate_blocks_minimisation(self, flow: CrisisPipeline) -> None:
        """Test an unsafe AI reply is flagged before delivery."""
        result = flow.validate_reply("It's not that bad, just think positive!")

        assert not result.is_safe
        assert result.to_dict()["concerns"] == ["crisis_minimization"]
