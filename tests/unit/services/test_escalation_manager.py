"""
Unit Tests for Escalation Manager

Tests event construction, best-effort persistence and human
escalation with failure isolation.
"""

import pytest

from haven.domain.enums.crisis_enums import CrisisType
from haven.domain.exceptions import NotificationError
from haven.domain.models.conversation import ConversationContext
from haven.domain.models.crisis_event import EscalationNotice
from haven.infrastructure.memory import InMemoryCrisisEventStore
from haven.infrastructure.metrics import CrisisMetrics
from haven.services.safety import escalation_manager as escalation_module
from haven.services.safety.crisis_resources import CrisisResourceCatalog
from haven.services.safety.escalation_manager import (
    ESCALATION_REASON,
    RESPONSE_GIVEN,
    EscalationManager,
    LoggingNotifier,
    SentryNotifier,
    classify_crisis_type,
    extract_trigger_keywords,
    summarize_context,
)


class TestEventHelpers:
    """Tests for crisis type, trigger keyword and summary helpers."""

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("I want to kill myself", CrisisType.SUICIDE),
            ("I cut myself again", CrisisType.SELF_HARM),
            ("The violence at home is getting worse", CrisisType.ABUSE),
            ("I took too many pills", CrisisType.SUBSTANCE),
            ("Everything is too much", CrisisType.EMOTIONAL_CRISIS),
        ],
    )
    def test_classify_crisis_type(self, message: str, expected: CrisisType) -> None:
        """Test crisis type sniffing on the raw message."""
        assert classify_crisis_type(message) == expected

    def test_suicide_wins_over_later_types(self) -> None:
        """Test rules are checked in order."""
        assert classify_crisis_type("suicide by overdose") == CrisisType.SUICIDE

    def test_extract_trigger_keywords(self) -> None:
        """Test trigger keywords are extracted in table order."""
        keywords = extract_trigger_keywords("Hopeless. I want to die. I might overdose.")

        assert keywords == ["overdose", "hopeless", "want to die"]

    def test_summarize_context(self, escalating_context: ConversationContext) -> None:
        """Test the summary holds the last three turns and profile snapshot."""
        summary = summarize_context(escalating_context)

        assert summary == (
            "Recent conversation: I feel sad | Everything feels hopeless | "
            "Everything is overwhelming. "
            "User profile: stress_level=6, emotional_state=distressed"
        )

    def test_summarize_bare_context(self) -> None:
        """Test the summary of an empty context."""
        summary = summarize_context(ConversationContext(user_id="u"))

        assert summary == (
            "Recent conversation: . User profile: stress_level=None, emotional_state=None"
        )


class TestRecord:
    """Tests for EscalationManager.record()."""

    @pytest.mark.asyncio
    async def test_records_event(
        self,
        escalation: EscalationManager,
        store: InMemoryCrisisEventStore,
        escalating_context: ConversationContext,
    ) -> None:
        """Test a crisis event is built and stored."""
        resources = CrisisResourceCatalog().select(9)

        event = await escalation.record(
            "I want to kill myself tonight", escalating_context, 10, resources,
        )

        assert event is not None
        assert event.id is not None
        assert event.created_at is not None
        assert event.user_id == "user-123"
        assert event.severity_level == 10
        assert event.crisis_type == CrisisType.SUICIDE
        assert event.trigger_keywords == ["kill myself"]
        assert event.response_given == RESPONSE_GIVEN
        assert event.resources_provided == [r.name for r in resources]
        assert event.human_notified
        assert event.follow_up_required
        assert not event.resolved
        assert len(store) == 1

    @pytest.mark.asyncio
    async def test_below_threshold_not_notified(
        self,
        escalation: EscalationManager,
    ) -> None:
        """Test human_notified follows the intervention threshold."""
        event = await escalation.record("so tired", ConversationContext(user_id="u"), 5, [])

        assert event is not None
        assert not event.human_notified

    @pytest.mark.asyncio
    async def test_store_failure_is_absorbed(
        self,
        failing_store,
        metrics: CrisisMetrics,
    ) -> None:
        """Test a store error returns None and is counted, never raised."""
        manager = EscalationManager(store=failing_store, metrics=metrics)

        event = await manager.record("help", ConversationContext(user_id="u"), 9, [])

        assert event is None
        assert failing_store.attempts == 1
        assert metrics.value(
            "haven_collaborator_failures_total", {"operation": "record_event"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_store_timeout_is_absorbed(
        self,
        slow_store,
        metrics: CrisisMetrics,
    ) -> None:
        """Test a hung store is cut off by the persistence timeout."""
        manager = EscalationManager(
            store=slow_store,
            metrics=metrics,
            persistence_timeout=0.05,
        )

        event = await manager.record("help", ConversationContext(user_id="u"), 9, [])

        assert event is None
        assert len(slow_store) == 0
        assert metrics.value(
            "haven_collaborator_failures_total", {"operation": "record_event"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_sentry_capture_failure_is_absorbed(
        self,
        failing_store,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test a broken error reporter does not break recording."""
        def broken_capture(*args, **kwargs):
            raise RuntimeError("sentry down")

        monkeypatch.setattr(escalation_module, "capture_exception_with_context", broken_capture)
        manager = EscalationManager(store=failing_store)

        assert await manager.record("help", ConversationContext(user_id="u"), 9, []) is None


class TestEscalate:
    """Tests for EscalationManager.escalate()."""

    @pytest.mark.asyncio
    async def test_dispatches_notice(
        self,
        escalation: EscalationManager,
        notifier,
        metrics: CrisisMetrics,
        escalating_context: ConversationContext,
    ) -> None:
        """Test a notice is sent at the threshold."""
        escalated = await escalation.escalate(escalating_context, 9)

        assert escalated
        assert len(notifier.notices) == 1
        notice = notifier.notices[0]
        assert notice.user_id == "user-123"
        assert notice.severity == 9
        assert notice.reason == ESCALATION_REASON
        assert notice.immediate_action_required
        assert notice.context_summary == summarize_context(escalating_context)
        assert metrics.value(
            "haven_escalations_total", {"channel": "test", "outcome": "dispatched"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_below_threshold_is_skipped(
        self,
        escalation: EscalationManager,
        notifier,
    ) -> None:
        """Test no notice below the threshold."""
        assert not await escalation.escalate(ConversationContext(user_id="u"), 7)
        assert notifier.notices == []

    @pytest.mark.asyncio
    async def test_notifier_failure_is_absorbed(
        self,
        store: InMemoryCrisisEventStore,
        failing_notifier,
        metrics: CrisisMetrics,
    ) -> None:
        """Test a failed notification still counts as an attempt."""
        manager = EscalationManager(store=store, notifier=failing_notifier, metrics=metrics)

        escalated = await manager.escalate(ConversationContext(user_id="u"), 10)

        assert escalated
        assert failing_notifier.attempts == 1
        assert metrics.value(
            "haven_escalations_total", {"channel": "test", "outcome": "failed"}
        ) == 1.0
        assert metrics.value(
            "haven_collaborator_failures_total", {"operation": "notify_human"}
        ) == 1.0

    @pytest.mark.asyncio
    async def test_default_notifier_logs(self, store: InMemoryCrisisEventStore) -> None:
        """Test the logging notifier is the default channel."""
        manager = EscalationManager(store=store)

        assert isinstance(manager.notifier, LoggingNotifier)
        assert await manager.escalate(ConversationContext(user_id="u"), 8)


class TestSentryNotifier:
    """Tests for SentryNotifier."""

    @pytest.mark.asyncio
    async def test_sends_safety_event(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the notice is sent as a safety event without context text."""
        sent = []

        def fake_capture(message, level="warning", extra=None):
            sent.append((message, level, extra))
            return "event-id"

        monkeypatch.setattr(escalation_module, "capture_safety_event", fake_capture)

        await SentryNotifier().notify(
            EscalationNotice(user_id="u", severity=9, reason=ESCALATION_REASON)
        )

        message, level, extra = sent[0]
        assert level == "error"
        assert extra["severity"] == 9
        assert "context_summary" not in extra

    @pytest.mark.asyncio
    async def test_wraps_errors(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test transport errors surface as NotificationError."""
        def broken_capture(*args, **kwargs):
            raise ConnectionError("no route")

        monkeypatch.setattr(escalation_module, "capture_safety_event", broken_capture)

        with pytest.raises(NotificationError) as exc_info:
            await SentryNotifier().notify(
                EscalationNotice(user_id="u", severity=9, reason=ESCALATION_REASON)
            )

        assert exc_info.value.channel == "sentry"
