from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from neropage.platform.schemas import CamelModel


class FormSubmissionResponse(CamelModel):
    id: str
    profile_id: str
    block_id: Optional[str] = None
    name: Optional[str] = None
    email: str
    message: Optional[str] = None
    timestamp: datetime
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None


class FormSubmitRequest(CamelModel):
    """Visitor-submitted lead form."""

    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=255)
    message: Optional[str] = Field(default=None, max_length=5000)
    block_id: Optional[str] = None


class FormSubmitResponse(CamelModel):
    success: bool = True
    id: str
