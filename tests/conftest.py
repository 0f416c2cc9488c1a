"""Tests configuration and fixtures."""

import asyncio
import random
from datetime import datetime
from typing import Optional

import pytest

from haven.config import Settings
from haven.config.logging_config import clear_context
from haven.domain.enums.crisis_enums import Speaker
from haven.domain.models.conversation import (
    ConversationContext,
    ConversationTurn,
    UserProfile,
)
from haven.domain.models.crisis_event import CrisisEvent, EscalationNotice
from haven.infrastructure.memory import InMemoryCrisisEventStore
from haven.infrastructure.metrics import CrisisMetrics
from haven.services.safety.crisis_pipeline import CrisisPipeline
from haven.services.safety.crisis_resources import CrisisResourceCatalog
from haven.services.safety.escalation_manager import EscalationManager
from haven.services.safety.response_generator import CrisisResponseGenerator
from haven.services.safety.response_validator import ResponseSafetyValidator
from haven.services.safety.risk_scorer import CrisisRiskScorer


# =============================================================================
# TEST DOUBLES
# =============================================================================

class FailingStore(InMemoryCrisisEventStore):
    """Store whose create always raises."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        super().__init__()
        self.error = error or ConnectionError("database unavailable")
        self.attempts = 0

    async def create(self, event: CrisisEvent) -> CrisisEvent:
        self.attempts += 1
        raise self.error


class SlowStore(InMemoryCrisisEventStore):
    """Store whose create never finishes within a test timeout."""

    async def create(self, event: CrisisEvent) -> CrisisEvent:
        await asyncio.sleep(10)
        return await super().create(event)


class RecordingNotifier:
    """Notifier that keeps every notice it receives."""

    channel = "test"

    def __init__(self) -> None:
        self.notices: list[EscalationNotice] = []

    async def notify(self, notice: EscalationNotice) -> None:
        self.notices.append(notice)


class FailingNotifier:
    """Notifier that always raises."""

    channel = "test"

    def __init__(self) -> None:
        self.attempts = 0

    async def notify(self, notice: EscalationNotice) -> None:
        self.attempts += 1
        raise RuntimeError("pager unreachable")


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep correlation ids from leaking between tests."""
    yield
    clear_context()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with in-process collaborators."""
    return Settings(
        env="development",
        debug=True,
    )


@pytest.fixture
def scorer() -> CrisisRiskScorer:
    return CrisisRiskScorer()


@pytest.fixture
def catalog() -> CrisisResourceCatalog:
    return CrisisResourceCatalog()


@pytest.fixture
def generator(catalog: CrisisResourceCatalog) -> CrisisResponseGenerator:
    """Generator with a seeded random source."""
    return CrisisResponseGenerator(catalog=catalog, rng=random.Random(0))


@pytest.fixture
def metrics() -> CrisisMetrics:
    return CrisisMetrics()


@pytest.fixture
def store() -> InMemoryCrisisEventStore:
    return InMemoryCrisisEventStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def escalation(
    store: InMemoryCrisisEventStore,
    notifier: RecordingNotifier,
    metrics: CrisisMetrics,
) -> EscalationManager:
    return EscalationManager(store=store, notifier=notifier, metrics=metrics)


@pytest.fixture
def pipeline(
    scorer: CrisisRiskScorer,
    generator: CrisisResponseGenerator,
    escalation: EscalationManager,
    metrics: CrisisMetrics,
) -> CrisisPipeline:
    return CrisisPipeline(
        scorer=scorer,
        generator=generator,
        escalation=escalation,
        validator=ResponseSafetyValidator(),
        metrics=metrics,
    )


@pytest.fixture
def escalating_context() -> ConversationContext:
    """Three user turns growing in intensity: sad, hopeless, overwhelmed."""
    return ConversationContext(
        user_id="user-123",
        session_id="session-1",
        history=(
            ConversationTurn(
                message="I feel sad",
                speaker=Speaker.USER,
                timestamp=datetime(2024, 1, 1, 10, 0),
                emotional_tone="sad",
            ),
            ConversationTurn(
                message="Everything feels hopeless",
                speaker=Speaker.USER,
                timestamp=datetime(2024, 1, 1, 10, 5),
                emotional_tone="hopeless",
            ),
            ConversationTurn(
                message="Everything is overwhelming",
                speaker=Speaker.USER,
                timestamp=datetime(2024, 1, 1, 10, 10),
                emotional_tone="overwhelmed",
            ),
        ),
        profile=UserProfile(stress_level=6, emotional_state="distressed"),
        display_name="Sam",
    )


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()


@pytest.fixture
def slow_store() -> SlowStore:
    return SlowStore()


@pytest.fixture
def failing_notifier() -> FailingNotifier:
    return FailingNotifier()
