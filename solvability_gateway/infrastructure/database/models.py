"""SQLAlchemy ORM models for stored assessments and their audit trail"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class SolvabilityAssessment(Base):
    """Computed solvability score for a rental application"""

    __tablename__ = "solvability_assessment"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    application_id = Column(Text, nullable=False, index=True)
    owner_id = Column(Text, nullable=False, index=True)
    total_score = Column(Integer, nullable=False)
    risk_level = Column(Text, nullable=False)
    recommendation = Column(Text, nullable=False)
    policy_version = Column(Text, nullable=False)
    result = Column(JSON, nullable=False)  # full SolvabilityScore, opaque to queries
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),  # sub-second precision on SQLite too
        server_default=func.now(),
    )

    audit_events = relationship("ScoringAuditEvent", back_populates="assessment", cascade="all, delete-orphan")


class ScoringAuditEvent(Base):
    """Audit trail entry recording who triggered a scoring and when"""

    __tablename__ = "scoring_audit_event"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    assessment_id = Column(
        UUID(as_uuid=True), ForeignKey("solvability_assessment.id", ondelete="CASCADE"), nullable=False
    )
    actor_id = Column(Text, nullable=False)
    action = Column(Text, nullable=False)
    details = Column(JSON, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),  # sub-second precision on SQLite too
        server_default=func.now(),
    )

    assessment = relationship("SolvabilityAssessment", back_populates="audit_events")
