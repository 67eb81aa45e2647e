from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text

from neropage.platform.db.base import BaseModel


class ContentBlock(BaseModel):
    __tablename__ = "content_blocks"

    profile_id = Column(String(36), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), nullable=False)
    title = Column(String(200), nullable=True)
    content = Column(Text, nullable=True)
    media_url = Column(String(2000), nullable=True)
    order = Column(Integer, nullable=False, default=0)
    is_visible = Column(Boolean, nullable=False, default=True)
