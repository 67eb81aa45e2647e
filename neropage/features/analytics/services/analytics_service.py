from neropage.features.analytics.schemas.analytics import (
    AnalyticsSummaryResponse,
    DetailedAnalyticsResponse,
    RecentView,
    TopLink,
)
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.storage.base import Storage

TOP_LINKS_LIMIT = 5
RECENT_VIEWS_LIMIT = 10


class AnalyticsService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def get_summary(self, profile: ProfileResponse) -> AnalyticsSummaryResponse:
        links = await self.storage.get_social_links(profile.id)
        return AnalyticsSummaryResponse(
            views=profile.views,
            total_clicks=sum(link.clicks for link in links),
            link_count=len(links),
        )

    async def get_detailed(self, profile: ProfileResponse) -> DetailedAnalyticsResponse:
        links = await self.storage.get_social_links(profile.id)
        submissions = await self.storage.get_form_submissions(profile.id)
        views = await self.storage.get_recent_profile_views(profile.id, RECENT_VIEWS_LIMIT)

        # sorted() is stable, so ties keep display order
        top = sorted(links, key=lambda link: link.clicks, reverse=True)[:TOP_LINKS_LIMIT]

        return DetailedAnalyticsResponse(
            total_views=profile.views,
            total_clicks=sum(link.clicks for link in links),
            link_count=len(links),
            form_submissions=len(submissions),
            top_links=[TopLink(id=link.id, platform=link.platform, url=link.url, clicks=link.clicks) for link in top],
            recent_views=[
                RecentView(timestamp=view.timestamp, user_agent=view.user_agent, referrer=view.referrer)
                for view in views
            ],
        )
