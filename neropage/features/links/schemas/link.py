from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from neropage.features.links.utils.scheduling import as_utc
from neropage.platform.schemas import CamelModel

BLOCKED_URL_SCHEMES = ("javascript:", "vbscript:", "data:")


def validate_link_url(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("URL cannot be empty")
    if v.lower().replace(" ", "").startswith(BLOCKED_URL_SCHEMES):
        raise ValueError("URL scheme is not allowed")
    return v


class LinkBadge(str, Enum):
    NEW = "new"
    POPULAR = "popular"
    LIMITED = "limited"
    HOT = "hot"


class SocialLinkResponse(CamelModel):
    id: str
    profile_id: str
    group_id: Optional[str] = None
    platform: str
    url: str
    custom_title: Optional[str] = None
    badge: Optional[LinkBadge] = None
    description: Optional[str] = None
    order: int = 0
    clicks: int = 0
    is_scheduled: bool = False
    schedule_start: Optional[datetime] = None
    schedule_end: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class _ScheduleWindow(CamelModel):
    schedule_start: Optional[datetime] = None
    schedule_end: Optional[datetime] = None

    @model_validator(mode="after")
    def check_schedule_window(self):
        start, end = as_utc(self.schedule_start), as_utc(self.schedule_end)
        if start is not None and end is not None and start > end:
            raise ValueError("scheduleStart must be before scheduleEnd")
        return self

    @field_validator("url", check_fields=False)
    @classmethod
    def validate_url(cls, v: Optional[str]) -> Optional[str]:
        return validate_link_url(v)


class SocialLinkCreateRequest(_ScheduleWindow):
    platform: str = Field(..., min_length=1, max_length=50)
    url: str = Field(..., min_length=1, max_length=2000)
    custom_title: Optional[str] = Field(default=None, max_length=200)
    badge: Optional[LinkBadge] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    group_id: Optional[str] = None
    order: Optional[int] = None
    is_scheduled: bool = False


class SocialLinkUpdateRequest(_ScheduleWindow):
    platform: Optional[str] = Field(default=None, min_length=1, max_length=50)
    url: Optional[str] = Field(default=None, min_length=1, max_length=2000)
    custom_title: Optional[str] = Field(default=None, max_length=200)
    badge: Optional[LinkBadge] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    group_id: Optional[str] = None
    is_scheduled: Optional[bool] = None


class OrderItem(CamelModel):
    id: str
    order: int


class ReorderLinksRequest(CamelModel):
    links: List[OrderItem]
