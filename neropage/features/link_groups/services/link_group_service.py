from typing import List

from fastapi import HTTPException, status

from neropage.features.link_groups.schemas.link_group import LinkGroupCreateRequest, LinkGroupResponse
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import Storage

logger = get_logger(__name__)


class LinkGroupService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_groups(self, profile: ProfileResponse) -> List[LinkGroupResponse]:
        return await self.storage.get_link_groups(profile.id)

    async def create_group(self, profile: ProfileResponse, request: LinkGroupCreateRequest) -> LinkGroupResponse:
        fields = request.model_dump()
        if fields["order"] is None:
            existing = await self.storage.get_link_groups(profile.id)
            fields["order"] = max((group.order for group in existing), default=-1) + 1
        return await self.storage.create_link_group(profile.id, fields)

    async def delete_group(self, group_id: str, profile: ProfileResponse) -> None:
        group = await self.storage.get_link_group(group_id)
        if group is None or group.profile_id != profile.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
        if not await self.storage.delete_link_group(group_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Group not found")
        logger.info(f"Link group {group_id} deleted from profile {profile.id}")
