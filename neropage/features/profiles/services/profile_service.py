from typing import List, Optional

from fastapi import HTTPException, status

from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.links.utils.scheduling import filter_active_links
from neropage.features.profiles.schemas.profile import ProfileResponse, ProfileUpdateRequest
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import ConflictError, Storage

logger = get_logger(__name__)

# Columns that cannot hold NULL; an explicit null in a PATCH body leaves them untouched
NON_NULLABLE_FIELDS = {
    "username",
    "theme",
    "primary_color",
    "background_color",
    "background_type",
    "layout",
    "font_family",
    "button_style",
    "use_custom_template",
}
EMPTY_STRING_FIELDS = {"bio", "avatar"}


class ProfileService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def get_by_username(self, username: str) -> ProfileResponse:
        profile = await self.storage.get_profile_by_username(username)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
        return profile

    async def update_profile(self, profile: ProfileResponse, request: ProfileUpdateRequest) -> ProfileResponse:
        updates = {}
        for key, value in request.model_dump(exclude_unset=True).items():
            if value is None and key in NON_NULLABLE_FIELDS:
                continue
            if value is None and key in EMPTY_STRING_FIELDS:
                value = ""
            updates[key] = value

        new_username: Optional[str] = updates.get("username")
        if new_username is not None and new_username != profile.username:
            await self._ensure_username_available(new_username, profile)

        if not updates:
            return profile

        try:
            updated = await self.storage.update_profile(profile.id, updates)
        except ConflictError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

        if updated is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

        logger.info(f"Profile {profile.id} updated: {', '.join(sorted(updates))}")
        return updated

    async def _ensure_username_available(self, username: str, profile: ProfileResponse) -> None:
        existing = await self.storage.get_profile_by_username(username)
        if existing is not None and existing.id != profile.id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

        # a login name held by someone else is taken too
        user = await self.storage.get_user_by_username(username)
        if user is not None and user.id != profile.user_id:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

    async def get_public_links(self, username: str) -> List[SocialLinkResponse]:
        """Links a visitor would see right now, in display order."""
        profile = await self.get_by_username(username)
        return filter_active_links(await self.storage.get_social_links(profile.id))

    async def get_public_content_blocks(self, username: str) -> List[ContentBlockResponse]:
        profile = await self.get_by_username(username)
        return [block for block in await self.storage.get_content_blocks(profile.id) if block.is_visible]

    async def track_view(self, username: str, user_agent: Optional[str], referrer: Optional[str]) -> None:
        profile = await self.get_by_username(username)
        if not await self.storage.track_profile_view(profile.id, user_agent, referrer):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
