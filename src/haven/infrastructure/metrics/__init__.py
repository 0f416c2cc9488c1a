"""Metrics infrastructure package."""

from haven.infrastructure.metrics.prometheus_metrics import CrisisMetrics

__all__ = ["CrisisMetrics"]
