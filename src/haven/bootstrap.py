"""
HAVEN Bootstrap

Wires settings, logging, monitoring and collaborators into a ready
CrisisPipeline. This is the entry point for the reply-composition
layer.
"""

import random
from typing import Optional

from haven.config.logging_config import configure_logging, get_logger
from haven.config.settings import Settings, get_settings
from haven.infrastructure.database.connection import DatabaseManager
from haven.infrastructure.database.crisis_event_store import SqlCrisisEventStore
from haven.infrastructure.metrics.prometheus_metrics import CrisisMetrics
from haven.infrastructure.monitoring.sentry_integration import init_sentry
from haven.services.safety.context_analyzer import ContextAnalyzer
from haven.services.safety.crisis_pipeline import CrisisPipeline
from haven.services.safety.crisis_resources import CrisisResourceCatalog
from haven.services.safety.escalation_manager import (
    CrisisEventStore,
    EscalationManager,
    HumanNotifier,
    LoggingNotifier,
    SentryNotifier,
)
from haven.services.safety.response_generator import CrisisResponseGenerator
from haven.services.safety.response_validator import ResponseSafetyValidator
from haven.services.safety.risk_scorer import CrisisRiskScorer

logger = get_logger(__name__)


def _default_notifier(settings: Settings) -> HumanNotifier:
    if settings.crisis.notifier == "sentry":
        return SentryNotifier()
    return LoggingNotifier()


def create_pipeline(
    settings: Optional[Settings] = None,
    store: Optional[CrisisEventStore] = None,
    notifier: Optional[HumanNotifier] = None,
    metrics: Optional[CrisisMetrics] = None,
    rng: Optional[random.Random] = None,
) -> CrisisPipeline:
    """
    Build a crisis pipeline from settings.

    Args:
        settings: Application settings (defaults to get_settings())
        store: Crisis event store (defaults to the SQL store)
        notifier: Human escalation transport (defaults per settings)
        metrics: Metrics holder (defaults to a private registry)
        rng: Random source for response template selection

    Returns:
        Configured CrisisPipeline
    """
    settings = settings or get_settings()
    configure_logging(settings)

    init_sentry(
        dsn=settings.monitoring.dsn.get_secret_value(),
        environment=settings.env,
        traces_sample_rate=settings.monitoring.traces_sample_rate,
    )

    crisis = settings.crisis
    metrics = metrics or CrisisMetrics()

    if store is None:
        store = SqlCrisisEventStore(
            DatabaseManager(settings.database, echo=settings.debug)
        )

    catalog = CrisisResourceCatalog(crisis.resources_config_path)
    scorer = CrisisRiskScorer(
        context_analyzer=ContextAnalyzer(),
        intervention_threshold=crisis.intervention_threshold,
    )
    escalation = EscalationManager(
        store=store,
        notifier=notifier or _default_notifier(settings),
        metrics=metrics,
        intervention_threshold=crisis.intervention_threshold,
        persistence_timeout=crisis.persistence_timeout_seconds,
        notification_timeout=crisis.notification_timeout_seconds,
    )
    generator = CrisisResponseGenerator(
        catalog=catalog,
        rng=rng,
        safety_plan_threshold=crisis.intervention_threshold,
    )

    logger.info(
        "Crisis pipeline ready",
        env=settings.env,
        intervention_threshold=crisis.intervention_threshold,
        notifier=escalation.notifier.channel,
        resource_count=len(catalog.resources),
    )

    return CrisisPipeline(
        scorer=scorer,
        generator=generator,
        escalation=escalation,
        validator=ResponseSafetyValidator(),
        metrics=metrics,
        intervention_threshold=crisis.intervention_threshold,
    )
