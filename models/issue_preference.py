"""User issue severity preference model."""

from sqlalchemy import Column, String, DateTime, UniqueConstraint
from sqlalchemy.sql import func
import uuid

from database import Base


class UserIssuePreference(Base):
    """A user's severity override for one issue type."""

    __tablename__ = "user_issue_preferences"
    __table_args__ = (
        UniqueConstraint("user_id", "issue_key", name="uq_user_issue_preferences_user_issue"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    issue_key = Column(String, nullable=False)
    severity = Column(String, nullable=False)  # critical, moderate, minor, ignored
    original_severity = Column(String, nullable=False)  # critical, moderate, minor
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
