from sqlalchemy import Column, ForeignKey, Integer, String

from neropage.platform.db.base import BaseModel


class LinkGroup(BaseModel):
    __tablename__ = "link_groups"

    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    order = Column(Integer, nullable=False, default=0)
