from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, String

from neropage.platform.db.base import BaseModel


def _utcnow():
    return datetime.now(timezone.utc)


class LinkClick(BaseModel):
    __tablename__ = "link_clicks"

    link_id = Column(String(36), ForeignKey("social_links.id", ondelete="CASCADE"), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    user_agent = Column(String(500), nullable=True)
    referrer = Column(String(2000), nullable=True)


class ProfileView(BaseModel):
    __tablename__ = "profile_views"

    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    user_agent = Column(String(500), nullable=True)
    referrer = Column(String(2000), nullable=True)
