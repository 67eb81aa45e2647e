from typing import List

from fastapi import HTTPException, status

from neropage.features.content_blocks.schemas.content_block import (
    ContentBlockCreateRequest,
    ContentBlockResponse,
    ContentBlockUpdateRequest,
    ReorderBlocksRequest,
)
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import Storage

logger = get_logger(__name__)


class ContentBlockService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_blocks(self, profile: ProfileResponse) -> List[ContentBlockResponse]:
        return await self.storage.get_content_blocks(profile.id)

    async def _get_owned_block(self, block_id: str, profile: ProfileResponse) -> ContentBlockResponse:
        block = await self.storage.get_content_block(block_id)
        if block is None or block.profile_id != profile.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content block not found")
        return block

    async def create_block(self, profile: ProfileResponse, request: ContentBlockCreateRequest) -> ContentBlockResponse:
        fields = request.model_dump()
        if fields["order"] is None:
            existing = await self.storage.get_content_blocks(profile.id)
            fields["order"] = max((block.order for block in existing), default=-1) + 1

        block = await self.storage.create_content_block(profile.id, fields)
        logger.info(f"Content block {block.id} ({block.type.value}) created for profile {profile.id}")
        return block

    async def update_block(
        self, block_id: str, profile: ProfileResponse, request: ContentBlockUpdateRequest
    ) -> ContentBlockResponse:
        await self._get_owned_block(block_id, profile)

        updates = {
            key: value
            for key, value in request.model_dump(exclude_unset=True).items()
            if value is not None or key not in ("type", "is_visible")
        }
        block = await self.storage.update_content_block(block_id, updates)
        if block is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content block not found")
        return block

    async def delete_block(self, block_id: str, profile: ProfileResponse) -> None:
        await self._get_owned_block(block_id, profile)
        if not await self.storage.delete_content_block(block_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Content block not found")
        logger.info(f"Content block {block_id} deleted from profile {profile.id}")

    async def reorder_blocks(self, profile: ProfileResponse, request: ReorderBlocksRequest) -> None:
        owned_ids = {block.id for block in await self.storage.get_content_blocks(profile.id)}
        if any(item.id not in owned_ids for item in request.blocks):
            logger.warning(f"Profile {profile.id} tried to reorder blocks it does not own")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot reorder blocks from another profile",
            )

        await self.storage.reorder_content_blocks([item.model_dump() for item in request.blocks])
