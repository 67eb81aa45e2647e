"""
Persistence contract shared by every backend.

Lookups return None (or False for deletes) when the record does not exist;
only genuine I/O faults raise. Every write is committed before the call
returns, so a caller that awaits it can immediately read its own write.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from neropage.features.analytics.schemas.analytics import ProfileViewRecord
from neropage.features.auth.schemas.auth import UserRecord
from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.forms.schemas.form_submission import FormSubmissionResponse
from neropage.features.link_groups.schemas.link_group import LinkGroupResponse
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.profiles.schemas.profile import ProfileResponse


class StorageError(Exception):
    """Base class for storage faults."""


class ConflictError(StorageError):
    """A write would violate a uniqueness constraint (e.g. username)."""


def plain_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    """Unwrap Enum members so both backends store plain strings."""
    return {key: value.value if isinstance(value, Enum) else value for key, value in fields.items()}


class Storage(ABC):
    # ── Users ───────────────────────────────────
    @abstractmethod
    async def create_user(self, username: str, password_hash: str) -> UserRecord: ...

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[UserRecord]: ...

    @abstractmethod
    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]: ...

    # ── Profiles ────────────────────────────────
    @abstractmethod
    async def get_profile(self, profile_id: str) -> Optional[ProfileResponse]: ...

    @abstractmethod
    async def get_profile_by_username(self, username: str) -> Optional[ProfileResponse]:
        """Case-insensitive."""

    @abstractmethod
    async def get_profile_by_user_id(self, user_id: str) -> Optional[ProfileResponse]: ...

    @abstractmethod
    async def get_default_profile(self) -> Optional[ProfileResponse]:
        """The first profile ever created; backs single-tenant mode."""

    @abstractmethod
    async def create_profile(self, fields: Mapping[str, Any]) -> ProfileResponse: ...

    @abstractmethod
    async def update_profile(self, profile_id: str, fields: Mapping[str, Any]) -> Optional[ProfileResponse]:
        """Merge: only keys present in `fields` change."""

    # ── Social links ────────────────────────────
    @abstractmethod
    async def get_social_links(self, profile_id: str) -> List[SocialLinkResponse]:
        """Sorted by `order` ascending."""

    @abstractmethod
    async def get_social_link(self, link_id: str) -> Optional[SocialLinkResponse]: ...

    @abstractmethod
    async def create_social_link(self, profile_id: str, fields: Mapping[str, Any]) -> SocialLinkResponse: ...

    @abstractmethod
    async def update_social_link(self, link_id: str, fields: Mapping[str, Any]) -> Optional[SocialLinkResponse]: ...

    @abstractmethod
    async def delete_social_link(self, link_id: str) -> bool: ...

    @abstractmethod
    async def reorder_social_links(self, items: Iterable[Mapping[str, Any]]) -> None:
        """Apply [{id, order}] atomically. Only `order` changes."""

    # ── Link groups ─────────────────────────────
    @abstractmethod
    async def get_link_groups(self, profile_id: str) -> List[LinkGroupResponse]: ...

    @abstractmethod
    async def get_link_group(self, group_id: str) -> Optional[LinkGroupResponse]: ...

    @abstractmethod
    async def create_link_group(self, profile_id: str, fields: Mapping[str, Any]) -> LinkGroupResponse: ...

    @abstractmethod
    async def delete_link_group(self, group_id: str) -> bool:
        """Links in the group are detached, never deleted."""

    # ── Content blocks ──────────────────────────
    @abstractmethod
    async def get_content_blocks(self, profile_id: str) -> List[ContentBlockResponse]: ...

    @abstractmethod
    async def get_content_block(self, block_id: str) -> Optional[ContentBlockResponse]: ...

    @abstractmethod
    async def create_content_block(self, profile_id: str, fields: Mapping[str, Any]) -> ContentBlockResponse: ...

    @abstractmethod
    async def update_content_block(self, block_id: str, fields: Mapping[str, Any]) -> Optional[ContentBlockResponse]: ...

    @abstractmethod
    async def delete_content_block(self, block_id: str) -> bool: ...

    @abstractmethod
    async def reorder_content_blocks(self, items: Iterable[Mapping[str, Any]]) -> None: ...

    # ── Form submissions ────────────────────────
    @abstractmethod
    async def get_form_submissions(self, profile_id: str) -> List[FormSubmissionResponse]:
        """Newest first."""

    @abstractmethod
    async def get_form_submission(self, submission_id: str) -> Optional[FormSubmissionResponse]: ...

    @abstractmethod
    async def create_form_submission(self, profile_id: str, fields: Mapping[str, Any]) -> FormSubmissionResponse: ...

    @abstractmethod
    async def delete_form_submission(self, submission_id: str) -> bool: ...

    # ── Analytics ───────────────────────────────
    @abstractmethod
    async def track_link_click(
        self, link_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool:
        """Increment the link's counter and record the event. False if the link is gone."""

    @abstractmethod
    async def track_profile_view(
        self, profile_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool: ...

    @abstractmethod
    async def get_recent_profile_views(self, profile_id: str, limit: int = 10) -> List[ProfileViewRecord]:
        """Newest first."""
