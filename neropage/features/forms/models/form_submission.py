from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from neropage.platform.db.base import BaseModel


class FormSubmission(BaseModel):
    __tablename__ = "form_submissions"

    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    block_id = Column(String(36), nullable=True)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    user_agent = Column(String(500), nullable=True)
