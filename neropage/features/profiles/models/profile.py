from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, Text, func

from neropage.platform.db.base import BaseModel


class Profile(BaseModel):
    __tablename__ = "profiles"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)

    # Display
    bio = Column(Text, default="")
    avatar = Column(String(1000), default="")
    cover_photo = Column(String(1000), nullable=True)

    # Theme
    theme = Column(String(50), nullable=False, default="neon")
    primary_color = Column(String(50), nullable=False, default="#8B5CF6")
    background_color = Column(String(200), nullable=False, default="#0A0A0F")
    background_type = Column(String(20), nullable=False, default="color")
    background_image = Column(String(1000), nullable=True)
    background_video = Column(String(1000), nullable=True)
    custom_css = Column(Text, nullable=True)
    layout = Column(String(20), nullable=False, default="stacked")
    font_family = Column(String(100), nullable=False, default="DM Sans")
    button_style = Column(String(20), nullable=False, default="rounded")

    # SEO
    seo_title = Column(String(200), nullable=True)
    seo_description = Column(String(500), nullable=True)
    og_image = Column(String(1000), nullable=True)

    # Custom template
    template_html = Column(Text, nullable=True)
    use_custom_template = Column(Boolean, nullable=False, default=False)

    views = Column(Integer, nullable=False, default=0)

    # usernames are unique regardless of case
    __table_args__ = (Index("uq_profiles_username_lower", func.lower(username), unique=True),)

    def __repr__(self):
        return f"<Profile(id={self.id}, username={self.username})>"
