from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from neropage.platform.db.base import BaseModel


class SocialLink(BaseModel):
    __tablename__ = "social_links"

    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(String(36), ForeignKey("link_groups.id", ondelete="SET NULL"), nullable=True)
    platform = Column(String(50), nullable=False)
    url = Column(String(2000), nullable=False)
    custom_title = Column(String(200), nullable=True)
    badge = Column(String(20), nullable=True)  # new, popular, limited, hot
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    clicks = Column(Integer, nullable=False, default=0)

    is_scheduled = Column(Boolean, nullable=False, default=False)
    schedule_start = Column(DateTime(timezone=True), nullable=True)
    schedule_end = Column(DateTime(timezone=True), nullable=True)
