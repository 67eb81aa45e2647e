from typing import List, Optional

from fastapi import HTTPException, status

from neropage.features.links.schemas.link import (
    ReorderLinksRequest,
    SocialLinkCreateRequest,
    SocialLinkResponse,
    SocialLinkUpdateRequest,
)
from neropage.features.links.utils.scheduling import as_utc
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import Storage

logger = get_logger(__name__)


class LinkService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def list_links(self, profile: ProfileResponse) -> List[SocialLinkResponse]:
        return await self.storage.get_social_links(profile.id)

    async def _get_owned_link(self, link_id: str, profile: ProfileResponse) -> SocialLinkResponse:
        link = await self.storage.get_social_link(link_id)
        # someone else's link looks exactly like a missing one
        if link is None or link.profile_id != profile.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
        return link

    async def _check_group(self, group_id: Optional[str], profile: ProfileResponse) -> None:
        if group_id is None:
            return
        group = await self.storage.get_link_group(group_id)
        if group is None or group.profile_id != profile.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown link group")

    async def create_link(self, profile: ProfileResponse, request: SocialLinkCreateRequest) -> SocialLinkResponse:
        await self._check_group(request.group_id, profile)

        fields = request.model_dump()
        if fields["order"] is None:
            existing = await self.storage.get_social_links(profile.id)
            fields["order"] = max((link.order for link in existing), default=-1) + 1

        link = await self.storage.create_social_link(profile.id, fields)
        logger.info(f"Link {link.id} ({link.platform}) created for profile {profile.id}")
        return link

    async def update_link(
        self, link_id: str, profile: ProfileResponse, request: SocialLinkUpdateRequest
    ) -> SocialLinkResponse:
        current = await self._get_owned_link(link_id, profile)

        updates = request.model_dump(exclude_unset=True)
        start = as_utc(updates.get("schedule_start", current.schedule_start))
        end = as_utc(updates.get("schedule_end", current.schedule_end))
        if start is not None and end is not None and start > end:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="scheduleStart must be before scheduleEnd",
            )

        if updates.get("platform") is None:
            updates.pop("platform", None)
        if updates.get("url") is None:
            updates.pop("url", None)
        if updates.get("is_scheduled") is None:
            updates.pop("is_scheduled", None)
        if "group_id" in updates:
            await self._check_group(updates["group_id"], profile)

        link = await self.storage.update_social_link(link_id, updates)
        if link is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
        return link

    async def delete_link(self, link_id: str, profile: ProfileResponse) -> None:
        await self._get_owned_link(link_id, profile)
        if not await self.storage.delete_social_link(link_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
        logger.info(f"Link {link_id} deleted from profile {profile.id}")

    async def reorder_links(self, profile: ProfileResponse, request: ReorderLinksRequest) -> None:
        owned_ids = {link.id for link in await self.storage.get_social_links(profile.id)}
        foreign = [item.id for item in request.links if item.id not in owned_ids]
        if foreign:
            logger.warning(f"Profile {profile.id} tried to reorder links it does not own: {foreign}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Cannot reorder links from another profile",
            )

        await self.storage.reorder_social_links([item.model_dump() for item in request.links])

    async def track_click(self, link_id: str, user_agent: Optional[str], referrer: Optional[str]) -> None:
        if not await self.storage.track_link_click(link_id, user_agent, referrer):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Link not found")
