from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Response, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.links.schemas.link import (
    ReorderLinksRequest,
    SocialLinkCreateRequest,
    SocialLinkResponse,
    SocialLinkUpdateRequest,
)
from neropage.features.links.services.link_service import LinkService
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.schemas import SuccessResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/links", tags=["Links"])


@router.get("", response_model=List[SocialLinkResponse], summary="All links of the current profile")
async def list_links(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await LinkService(storage).list_links(profile)


@router.post(
    "",
    response_model=SocialLinkResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_csrf_token)],
)
async def create_link(
    request: SocialLinkCreateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await LinkService(storage).create_link(profile, request)


# Declared before /{link_id} routes so "reorder" is never read as an id
@router.post(
    "/reorder",
    response_model=SuccessResponse,
    dependencies=[Depends(verify_csrf_token)],
    summary="Rewrite the display order of the current profile's links",
)
async def reorder_links(
    request: ReorderLinksRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await LinkService(storage).reorder_links(profile, request)
    return SuccessResponse()


@router.patch("/{link_id}", response_model=SocialLinkResponse, dependencies=[Depends(verify_csrf_token)])
async def update_link(
    link_id: str,
    request: SocialLinkUpdateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await LinkService(storage).update_link(link_id, profile, request)


@router.delete(
    "/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(verify_csrf_token)],
)
async def delete_link(
    link_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await LinkService(storage).delete_link(link_id, profile)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{link_id}/click", response_model=SuccessResponse, summary="Record a link click")
async def track_link_click(
    link_id: str,
    user_agent: Optional[str] = Header(None),
    referer: Optional[str] = Header(None),
    storage: Storage = Depends(get_storage),
):
    await LinkService(storage).track_click(link_id, user_agent, referer)
    return SuccessResponse()
