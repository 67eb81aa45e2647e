from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from neropage.platform.schemas import CamelModel


class ContentBlockType(str, Enum):
    VIDEO = "video"
    IMAGE = "image"
    GALLERY = "gallery"
    TEXT = "text"
    EMBED = "embed"
    FORM = "form"
    MUSIC = "music"
    PODCAST = "podcast"
    TESTIMONIAL = "testimonial"
    FAQ = "faq"


class ContentBlockResponse(CamelModel):
    id: str
    profile_id: str
    type: ContentBlockType
    title: Optional[str] = None
    content: Optional[str] = None
    media_url: Optional[str] = None
    order: int = 0
    is_visible: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ContentBlockCreateRequest(CamelModel):
    type: ContentBlockType
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=50_000)
    media_url: Optional[str] = Field(default=None, max_length=2000)
    order: Optional[int] = None
    is_visible: bool = True


class ContentBlockUpdateRequest(CamelModel):
    type: Optional[ContentBlockType] = None
    title: Optional[str] = Field(default=None, max_length=200)
    content: Optional[str] = Field(default=None, max_length=50_000)
    media_url: Optional[str] = Field(default=None, max_length=2000)
    is_visible: Optional[bool] = None


class BlockOrderItem(CamelModel):
    id: str
    order: int


class ReorderBlocksRequest(CamelModel):
    blocks: List[BlockOrderItem]
