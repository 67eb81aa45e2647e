from datetime import datetime
from typing import List, Optional

from neropage.platform.schemas import CamelModel


class ProfileViewRecord(CamelModel):
    id: str
    profile_id: str
    timestamp: datetime
    user_agent: Optional[str] = None
    referrer: Optional[str] = None


class AnalyticsSummaryResponse(CamelModel):
    views: int
    total_clicks: int
    link_count: int


class TopLink(CamelModel):
    id: str
    platform: str
    url: str
    clicks: int


class RecentView(CamelModel):
    timestamp: datetime
    user_agent: Optional[str] = None
    referrer: Optional[str] = None


class DetailedAnalyticsResponse(CamelModel):
    total_views: int
    total_clicks: int
    link_count: int
    form_submissions: int
    top_links: List[TopLink]
    recent_views: List[RecentView]
