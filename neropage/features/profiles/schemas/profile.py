import re
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from neropage.platform.schemas import CamelModel

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")
# Path segments that would shadow /api/profiles/me
RESERVED_USERNAMES = {"me"}


class BackgroundType(str, Enum):
    COLOR = "color"
    GRADIENT = "gradient"
    IMAGE = "image"
    VIDEO = "video"


class Layout(str, Enum):
    STACKED = "stacked"
    GRID = "grid"
    MINIMAL = "minimal"


class ButtonStyle(str, Enum):
    ROUNDED = "rounded"
    SQUARE = "square"
    PILL = "pill"


def validate_username_value(v: str) -> str:
    """Usernames appear in public URLs, so keep them path-safe. Case is preserved."""
    v = v.strip()
    if not v or len(v) > 50:
        raise ValueError("Username must be between 1 and 50 characters long")
    if not USERNAME_PATTERN.match(v):
        raise ValueError("Username can only contain letters, numbers, dots, underscores, and hyphens")
    if v.lower() in RESERVED_USERNAMES:
        raise ValueError("This username is reserved")
    return v


class ProfileResponse(CamelModel):
    id: str
    user_id: Optional[str] = None
    username: str
    bio: Optional[str] = ""
    avatar: Optional[str] = ""
    cover_photo: Optional[str] = None

    theme: str = "neon"
    primary_color: str = "#8B5CF6"
    background_color: str = "#0A0A0F"
    background_type: BackgroundType = BackgroundType.COLOR
    background_image: Optional[str] = None
    background_video: Optional[str] = None
    custom_css: Optional[str] = Field(default=None, alias="customCSS")
    layout: Layout = Layout.STACKED
    font_family: str = "DM Sans"
    button_style: ButtonStyle = ButtonStyle.ROUNDED

    seo_title: Optional[str] = None
    seo_description: Optional[str] = None
    og_image: Optional[str] = None

    template_html: Optional[str] = Field(default=None, alias="templateHTML")
    use_custom_template: bool = False

    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdateRequest(CamelModel):
    """Partial profile update. Only the fields present in the body change."""

    username: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=1000)
    avatar: Optional[str] = Field(default=None, max_length=1000)
    cover_photo: Optional[str] = Field(default=None, max_length=1000)

    theme: Optional[str] = Field(default=None, max_length=50)
    primary_color: Optional[str] = Field(default=None, max_length=50)
    background_color: Optional[str] = Field(default=None, max_length=200)
    background_type: Optional[BackgroundType] = None
    background_image: Optional[str] = Field(default=None, max_length=1000)
    background_video: Optional[str] = Field(default=None, max_length=1000)
    custom_css: Optional[str] = Field(default=None, alias="customCSS", max_length=50_000)
    layout: Optional[Layout] = None
    font_family: Optional[str] = Field(default=None, max_length=100)
    button_style: Optional[ButtonStyle] = None

    seo_title: Optional[str] = Field(default=None, max_length=200)
    seo_description: Optional[str] = Field(default=None, max_length=500)
    og_image: Optional[str] = Field(default=None, max_length=1000)

    template_html: Optional[str] = Field(default=None, alias="templateHTML", max_length=100_000)
    use_custom_template: Optional[bool] = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return validate_username_value(v)


class TemplatePreviewRequest(CamelModel):
    template_html: str = Field(alias="templateHTML", max_length=100_000)


class TemplatePreviewResponse(CamelModel):
    html: str
