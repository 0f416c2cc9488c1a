"""
Crisis Event Database Model

SQLAlchemy ORM model for crisis event persistence.

LEGAL_REVIEW_REQUIRED: Retention and access policies for crisis
records (context summaries contain conversation text) need legal
review before production.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from haven.domain.clock import utc_now
from haven.domain.enums.crisis_enums import CrisisType
from haven.domain.models.crisis_event import CrisisEvent
from haven.infrastructure.database.connection import Base


class CrisisEventModel(Base):
    """
    Crisis event table ORM model.

    Created by the crisis engine; resolution columns are written
    only by the moderation workflow.

    Table: crisis_events
    """

    __tablename__ = "crisis_events"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        doc="Unique event identifier"
    )

    # Opaque user identifier owned by the session layer
    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Associated user ID"
    )

    # Classification
    severity_level: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        doc="Risk level (0-10)"
    )
    crisis_type: Mapped[str] = mapped_column(
        String(30),
        default=CrisisType.EMOTIONAL_CRISIS.value,
        nullable=False,
        doc="suicide, self_harm, abuse, substance, emotional_crisis"
    )
    trigger_keywords: Mapped[list] = mapped_column(
        JSON,
        default=list,
        doc="Crisis phrases found in the message"
    )
    context_summary: Mapped[str] = mapped_column(
        Text,
        default="",
        doc="Recent turns and profile snapshot"
    )

    # Response
    response_given: Mapped[str] = mapped_column(
        Text,
        default="",
        doc="What was sent to the user"
    )
    resources_provided: Mapped[list] = mapped_column(
        JSON,
        default=list,
        doc="Names of resources shown"
    )
    human_notified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        doc="Whether a human escalation was requested"
    )
    follow_up_required: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        doc="Whether follow-up is required"
    )

    # Resolution (moderation workflow)
    resolved: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        index=True,
        doc="Whether the event has been resolved"
    )
    resolution_notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    resolved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    escalated_to: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    escalation_time: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
        index=True,
        doc="When the event was recorded"
    )

    def __repr__(self) -> str:
        return (
            f"<CrisisEventModel(id={self.id}, severity={self.severity_level}, "
            f"resolved={self.resolved})>"
        )

    @classmethod
    def from_domain(cls, event: CrisisEvent) -> "CrisisEventModel":
        """Create a row from a domain event (id and created_at assigned on insert)."""
        model = cls(
            user_id=event.user_id,
            severity_level=event.severity_level,
            crisis_type=event.crisis_type.value,
            trigger_keywords=list(event.trigger_keywords),
            context_summary=event.context_summary,
            response_given=event.response_given,
            resources_provided=list(event.resources_provided),
            human_notified=event.human_notified,
            follow_up_required=event.follow_up_required,
            resolved=event.resolved,
            resolution_notes=event.resolution_notes,
            resolved_at=event.resolved_at,
            escalated_to=event.escalated_to,
            escalation_time=event.escalation_time,
        )
        if event.id:
            model.id = UUID(event.id)
        return model

    def apply(self, event: CrisisEvent) -> None:
        """Copy mutable fields from a domain event."""
        self.severity_level = event.severity_level
        self.crisis_type = event.crisis_type.value
        self.trigger_keywords = list(event.trigger_keywords)
        self.context_summary = event.context_summary
        self.response_given = event.response_given
        self.resources_provided = list(event.resources_provided)
        self.human_notified = event.human_notified
        self.follow_up_required = event.follow_up_required
        self.resolved = event.resolved
        self.resolution_notes = event.resolution_notes
        self.resolved_at = event.resolved_at
        self.escalated_to = event.escalated_to
        self.escalation_time = event.escalation_time

    def to_domain(self) -> CrisisEvent:
        return CrisisEvent(
            id=str(self.id),
            created_at=self.created_at,
            user_id=self.user_id,
            severity_level=self.severity_level,
            crisis_type=CrisisType(self.crisis_type),
            trigger_keywords=list(self.trigger_keywords or []),
            context_summary=self.context_summary or "",
            response_given=self.response_given or "",
            resources_provided=list(self.resources_provided or []),
            human_notified=self.human_notified,
            follow_up_required=self.follow_up_required,
            resolved=self.resolved,
            resolution_notes=self.resolution_notes,
            resolved_at=self.resolved_at,
            escalated_to=self.escalated_to,
            escalation_time=self.escalation_time,
        )
