from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse

from neropage.features.rendering.services.public_page_service import PublicPageService
from neropage.platform.config import settings
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(tags=["Public Page"])


@router.get("/user/{username}", response_class=HTMLResponse, summary="Public profile page")
async def public_profile_page(username: str, storage: Storage = Depends(get_storage)):
    service = PublicPageService(storage)
    profile = await storage.get_profile_by_username(username)
    if profile is None:
        return HTMLResponse(service.render_not_found(username), status_code=status.HTTP_404_NOT_FOUND)
    return HTMLResponse(await service.render(profile))


@router.get("/", summary="Service info, or the default profile in single-tenant mode")
async def root(storage: Storage = Depends(get_storage)):
    if settings.SINGLE_TENANT_MODE:
        profile = await storage.get_default_profile()
        if profile is not None:
            return HTMLResponse(await PublicPageService(storage).render(profile))

    return {
        "app_name": settings.APP_NAME,
        "description": "Link-in-bio pages with custom templates and click analytics.",
        "version": "1.0.0",
        "docs_url": "/docs",
        "api_base": "/api",
    }
