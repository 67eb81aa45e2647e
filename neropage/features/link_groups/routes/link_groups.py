from typing import List

from fastapi import APIRouter, Depends, Response, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.link_groups.schemas.link_group import LinkGroupCreateRequest, LinkGroupResponse
from neropage.features.link_groups.services.link_group_service import LinkGroupService
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/link-groups", tags=["Link Groups"])


@router.get("", response_model=List[LinkGroupResponse])
async def list_link_groups(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await LinkGroupService(storage).list_groups(profile)


@router.post(
    "",
    response_model=LinkGroupResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_csrf_token)],
)
async def create_link_group(
    request: LinkGroupCreateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await LinkGroupService(storage).create_group(profile, request)


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(verify_csrf_token)],
    summary="Delete a group; its links are kept and become ungrouped",
)
async def delete_link_group(
    group_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await LinkGroupService(storage).delete_group(group_id, profile)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
