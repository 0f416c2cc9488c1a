"""Safety services package - crisis assessment and response."""

from haven.services.safety.risk_scorer import CrisisRiskScorer, ScoringConstants
from haven.services.safety.context_analyzer import ContextAnalyzer, ContextWeights
from haven.services.safety.crisis_resources import CrisisResourceCatalog
from haven.services.safety.response_generator import CrisisResponseGenerator
from haven.services.safety.escalation_manager import (
    CrisisEventStore,
    EscalationManager,
    HumanNotifier,
    LoggingNotifier,
    SentryNotifier,
)
from haven.services.safety.response_validator import (
    ResponseSafetyResult,
    ResponseSafetyValidator,
)
from haven.services.safety.crisis_pipeline import (
    CrisisOutcome,
    CrisisPipeline,
    MessageSafetyCheck,
)

__all__ = [
    # Scoring
    "CrisisRiskScorer",
    "ScoringConstants",
    "ContextAnalyzer",
    "ContextWeights",
    # Resources & responses
    "CrisisResourceCatalog",
    "CrisisResponseGenerator",
    # Escalation
    "CrisisEventStore",
    "EscalationManager",
    "HumanNotifier",
    "LoggingNotifier",
    "SentryNotifier",
    # Reply validation
    "ResponseSafetyResult",
    "ResponseSafetyValidator",
    # Pipeline
    "CrisisOutcome",
    "CrisisPipeline",
    "MessageSafetyCheck",
]
