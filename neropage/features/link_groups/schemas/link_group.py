from datetime import datetime
from typing import Optional

from pydantic import Field

from neropage.platform.schemas import CamelModel


class LinkGroupResponse(CamelModel):
    id: str
    profile_id: str
    name: str
    order: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LinkGroupCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    order: Optional[int] = None
