import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Boolean, Integer, DateTime, JSON, Index

from .base import Base

ALERT_FREQUENCIES = ('Daily', 'Weekly', 'Instant')


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ResumeAlert(Base):
    """
    Criteria an employer saved to be told about matching candidates.
    """
    __tablename__ = 'resume_alert'

    id = Column(String(36), primary_key=True, default=_new_id)
    employer_id = Column(Text, nullable=False, index=True)

    title = Column(Text, nullable=False)
    criteria = Column(JSON, nullable=False, default=dict)
    frequency = Column(String(16), nullable=False, default='Daily')
    is_active = Column(Boolean, nullable=False, default=True)

    # Incremented each time a saved candidate matches
    matching_count = Column(Integer, nullable=False, default=0)

    # Alert performance
    emails_sent = Column(Integer, nullable=False, default=0)
    total_matches = Column(Integer, nullable=False, default=0)
    last_match_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index('idx_resume_alert_active', 'is_active', 'frequency'),
    )


class JobAlert(Base):
    """
    Criteria a candidate saved to be told about matching job postings.
    """
    __tablename__ = 'job_alert'

    id = Column(String(36), primary_key=True, default=_new_id)
    candidate_id = Column(Text, nullable=False, index=True)

    criteria = Column(JSON, nullable=False, default=dict)
    frequency = Column(String(16), nullable=False, default='Daily')
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        Index('idx_job_alert_active', 'is_active', 'frequency'),
    )

    @property
    def title(self) -> str:
        return (self.criteria or {}).get('title') or 'Untitled Alert'
