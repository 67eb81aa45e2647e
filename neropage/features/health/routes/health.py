from fastapi import APIRouter

from neropage.platform.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check():
    return {"status": "ok", "service": settings.APP_NAME}
