"""Domain enums package."""

from haven.domain.enums.crisis_enums import (
    LexiconCategory,
    RiskBand,
    Speaker,
    UrgencyLevel,
    ResourceType,
    CrisisType,
    ContextualFactor,
    ImmediateAction,
    MessageSafetyAction,
    ReplyConcern,
    ReplyRemediation,
)

__all__ = [
    "LexiconCategory",
    "RiskBand",
    "Speaker",
    "UrgencyLevel",
    "ResourceType",
    "CrisisType",
    "ContextualFactor",
    "ImmediateAction",
    "MessageSafetyAction",
    "ReplyConcern",
    "ReplyRemediation",
]
