"""
Prometheus Metrics

Crisis engine metrics held by an explicit metrics object.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
Each CrisisMetrics instance registers on its own registry, so
tests and multiple pipelines never share counters.
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from haven.domain.enums.crisis_enums import RiskBand


class CrisisMetrics:
    """
    Crisis engine metrics.

    Usage:
        metrics = CrisisMetrics()
        metrics.track_assessment(assessment.band)
        payload = metrics.render()
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        """
        Initialize metrics.

        Args:
            registry: Registry to register on (a fresh one if omitted)
        """
        self.registry = registry or CollectorRegistry()

        # =====================================================================
        # ASSESSMENT METRICS
        # =====================================================================

        self.assessments_total = Counter(
            "haven_risk_assessments_total",
            "Risk assessments by band",
            ["band"],  # LOW, MODERATE, ELEVATED, CRITICAL
            registry=self.registry,
        )

        self.assessment_duration = Histogram(
            "haven_risk_assessment_duration_seconds",
            "Time spent scoring one message",
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1],
            registry=self.registry,
        )

        # =====================================================================
        # RESPONSE & ESCALATION METRICS
        # =====================================================================

        self.crisis_responses_total = Counter(
            "haven_crisis_responses_total",
            "Crisis responses by template tier",
            ["tier"],  # immediate_danger, high_risk, elevated, supportive, failsafe
            registry=self.registry,
        )

        self.escalations_total = Counter(
            "haven_escalations_total",
            "Human escalation attempts",
            ["channel", "outcome"],  # outcome: dispatched, failed
            registry=self.registry,
        )

        self.collaborator_failures_total = Counter(
            "haven_collaborator_failures_total",
            "Store and notifier failures",
            ["operation"],  # record_event, notify_human
            registry=self.registry,
        )

        # =====================================================================
        # REPLY VALIDATION METRICS
        # =====================================================================

        self.reply_validations_total = Counter(
            "haven_reply_validations_total",
            "Outbound reply validations",
            ["result"],  # safe, flagged
            registry=self.registry,
        )

    def track_assessment(self, band: RiskBand, duration_seconds: Optional[float] = None) -> None:
        """Record a risk assessment."""
        self.assessments_total.labels(band=band.name).inc()
        if duration_seconds is not None:
            self.assessment_duration.observe(duration_seconds)

    def track_crisis_response(self, tier: str) -> None:
        self.crisis_responses_total.labels(tier=tier).inc()

    def track_escalation(self, channel: str, outcome: str) -> None:
        self.escalations_total.labels(channel=channel, outcome=outcome).inc()

    def track_failure(self, operation: str) -> None:
        """Record a collaborator failure."""
        self.collaborator_failures_total.labels(operation=operation).inc()

    def track_reply_validation(self, is_safe: bool) -> None:
        self.reply_validations_total.labels(result="safe" if is_safe else "flagged").inc()

    def value(self, name: str, labels: Optional[dict] = None) -> float:
        """
        Read a sample value from this registry.

        Returns 0.0 when the sample has not been recorded yet.
        """
        result = self.registry.get_sample_value(name, labels or {})
        return result if result is not None else 0.0

    def render(self) -> bytes:
        """Render metrics in Prometheus text format for scraping."""
        return generate_latest(self.registry)
