from fastapi import APIRouter, Depends

from neropage.features.analytics.schemas.analytics import AnalyticsSummaryResponse, DetailedAnalyticsResponse
from neropage.features.analytics.services.analytics_service import AnalyticsService
from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=AnalyticsSummaryResponse)
async def get_analytics(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await AnalyticsService(storage).get_summary(profile)


@router.get("/detailed", response_model=DetailedAnalyticsResponse)
async def get_detailed_analytics(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await AnalyticsService(storage).get_detailed(profile)
