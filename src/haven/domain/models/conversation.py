"""
Conversation Context Models

Read-only input assembled by the session layer from stored history
and a user profile snapshot. The crisis engine reads these models
and never mutates them.

PRIVACY: Message content is sensitive and must not be logged.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from haven.domain.clock import utc_now
from haven.domain.enums.crisis_enums import Speaker


@dataclass(frozen=True)
class ConversationTurn:
    """
    A single prior turn in the conversation.

    Attributes:
        message: Turn text
        speaker: Who wrote the turn
        timestamp: When the turn was recorded
        emotional_tone: Optional tone tag set upstream (e.g. "sad")
    """

    message: str
    speaker: Speaker = Speaker.USER
    timestamp: datetime = field(default_factory=utc_now)
    emotional_tone: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ConversationTurn":
        """Create a turn from a stored history record."""
        timestamp = data.get("timestamp")
        if isinstance(timestamp, str):
            timestamp = datetime.fromisoformat(timestamp)
        return cls(
            message=data.get("message") or "",
            speaker=Speaker(data.get("speaker") or data.get("type") or Speaker.USER),
            timestamp=timestamp or utc_now(),
            emotional_tone=data.get("emotional_tone"),
        )


@dataclass(frozen=True)
class UserProfile:
    """
    Psychological profile snapshot.

    All scores are on a 1-10 scale or None when unknown.

    CLINICAL_REVIEW_REQUIRED: Profile thresholds used by the
    context analyzer need clinical validation.
    """

    stress_level: Optional[int] = None
    support_system_strength: Optional[int] = None
    crisis_risk_level: Optional[int] = None
    emotional_regulation: Optional[int] = None
    emotional_state: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Create profile from a stored profile record."""
        return cls(
            stress_level=data.get("stress_level"),
            support_system_strength=data.get("support_system_strength"),
            crisis_risk_level=data.get("crisis_risk_level"),
            emotional_regulation=data.get("emotional_regulation"),
            emotional_state=data.get("emotional_state"),
        )


@dataclass(frozen=True)
class ConversationContext:
    """
    Conversation context for a single inbound message.

    Attributes:
        user_id: Opaque user identifier
        session_id: Optional session identifier
        history: Prior turns, oldest first
        profile: Optional profile snapshot
        display_name: Optional name used to personalise responses
    """

    user_id: str
    session_id: Optional[str] = None
    history: tuple[ConversationTurn, ...] = ()
    profile: Optional[UserProfile] = None
    display_name: Optional[str] = None

    def recent_turns(self, count: int = 3) -> tuple[ConversationTurn, ...]:
        """Get the trailing `count` turns."""
        if count <= 0:
            return ()
        return self.history[-count:]

    @classmethod
    def from_dict(cls, data: dict) -> "ConversationContext":
        """Create context from a session-layer payload."""
        profile = data.get("profile")
        return cls(
            user_id=str(data["user_id"]),
            session_id=data.get("session_id"),
            history=tuple(
                ConversationTurn.from_dict(turn) for turn in data.get("history", [])
            ),
            profile=UserProfile.from_dict(profile) if profile else None,
            display_name=data.get("display_name"),
        )
