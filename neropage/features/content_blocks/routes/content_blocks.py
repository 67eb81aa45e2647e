from typing import List

from fastapi import APIRouter, Depends, Response, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.content_blocks.schemas.content_block import (
    ContentBlockCreateRequest,
    ContentBlockResponse,
    ContentBlockUpdateRequest,
    ReorderBlocksRequest,
)
from neropage.features.content_blocks.services.content_block_service import ContentBlockService
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.schemas import SuccessResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/content-blocks", tags=["Content Blocks"])


@router.get("", response_model=List[ContentBlockResponse])
async def list_content_blocks(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await ContentBlockService(storage).list_blocks(profile)


@router.post(
    "",
    response_model=ContentBlockResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(verify_csrf_token)],
)
async def create_content_block(
    request: ContentBlockCreateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await ContentBlockService(storage).create_block(profile, request)


@router.post("/reorder", response_model=SuccessResponse, dependencies=[Depends(verify_csrf_token)])
async def reorder_content_blocks(
    request: ReorderBlocksRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await ContentBlockService(storage).reorder_blocks(profile, request)
    return SuccessResponse()


@router.patch("/{block_id}", response_model=ContentBlockResponse, dependencies=[Depends(verify_csrf_token)])
async def update_content_block(
    block_id: str,
    request: ContentBlockUpdateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await ContentBlockService(storage).update_block(block_id, profile, request)


@router.delete(
    "/{block_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(verify_csrf_token)],
)
async def delete_content_block(
    block_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await ContentBlockService(storage).delete_block(block_id, profile)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
