import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from neropage.features.analytics.schemas.analytics import ProfileViewRecord
from neropage.features.auth.schemas.auth import UserRecord
from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.forms.schemas.form_submission import FormSubmissionResponse
from neropage.features.link_groups.schemas.link_group import LinkGroupResponse
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.db.base import new_id
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import ConflictError, Storage, plain_fields

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MemoryStorage(Storage):
    """
    Process-local store used when no DATABASE_URL is configured.

    Writes are serialized on a single asyncio.Lock. Every record handed out
    is a deep copy, so callers can never mutate stored state by accident.
    """

    def __init__(self):
        self._lock = asyncio.Lock()
        self.users: Dict[str, UserRecord] = {}
        self.profiles: Dict[str, ProfileResponse] = {}
        self.social_links: Dict[str, SocialLinkResponse] = {}
        self.link_groups: Dict[str, LinkGroupResponse] = {}
        self.content_blocks: Dict[str, ContentBlockResponse] = {}
        self.form_submissions: Dict[str, FormSubmissionResponse] = {}
        self.link_clicks: List[dict] = []
        self.profile_views: List[ProfileViewRecord] = []

    @staticmethod
    def _copy(record):
        return record.model_copy(deep=True) if record is not None else None

    @staticmethod
    def _merge(record, fields: Mapping[str, Any]):
        data = record.model_dump()
        data.update(plain_fields(fields))
        data["updated_at"] = _utcnow()
        return type(record).model_validate(data)

    @staticmethod
    def _new_record(model, **fields):
        now = _utcnow()
        return model.model_validate({"id": new_id(), "created_at": now, "updated_at": now, **plain_fields(fields)})

    # ── Users ───────────────────────────────────
    async def create_user(self, username: str, password_hash: str) -> UserRecord:
        async with self._lock:
            if any(u.username.lower() == username.lower() for u in self.users.values()):
                raise ConflictError(f"Username {username} already exists")
            user = self._new_record(UserRecord, username=username, password_hash=password_hash)
            self.users[user.id] = user
            return self._copy(user)

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        wanted = username.lower()
        return self._copy(next((u for u in self.users.values() if u.username.lower() == wanted), None))

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._copy(self.users.get(user_id))

    # ── Profiles ────────────────────────────────
    def _username_taken(self, username: str, exclude_id: Optional[str] = None) -> bool:
        wanted = username.lower()
        return any(p.username.lower() == wanted and p.id != exclude_id for p in self.profiles.values())

    async def get_profile(self, profile_id: str) -> Optional[ProfileResponse]:
        return self._copy(self.profiles.get(profile_id))

    async def get_profile_by_username(self, username: str) -> Optional[ProfileResponse]:
        wanted = username.lower()
        return self._copy(next((p for p in self.profiles.values() if p.username.lower() == wanted), None))

    async def get_profile_by_user_id(self, user_id: str) -> Optional[ProfileResponse]:
        return self._copy(next((p for p in self.profiles.values() if p.user_id == user_id), None))

    async def get_default_profile(self) -> Optional[ProfileResponse]:
        # dicts keep insertion order, so the first value is the oldest profile
        return self._copy(next(iter(self.profiles.values()), None))

    async def create_profile(self, fields: Mapping[str, Any]) -> ProfileResponse:
        async with self._lock:
            if self._username_taken(fields["username"]):
                raise ConflictError(f"Username {fields['username']} already exists")
            profile = self._new_record(ProfileResponse, **fields)
            self.profiles[profile.id] = profile
            return self._copy(profile)

    async def update_profile(self, profile_id: str, fields: Mapping[str, Any]) -> Optional[ProfileResponse]:
        async with self._lock:
            current = self.profiles.get(profile_id)
            if current is None:
                return None
            if "username" in fields and self._username_taken(fields["username"], exclude_id=profile_id):
                raise ConflictError(f"Username {fields['username']} already exists")
            updated = self._merge(current, fields)
            self.profiles[profile_id] = updated
            return self._copy(updated)

    # ── Social links ────────────────────────────
    async def get_social_links(self, profile_id: str) -> List[SocialLinkResponse]:
        links = [link for link in self.social_links.values() if link.profile_id == profile_id]
        return [self._copy(link) for link in sorted(links, key=lambda link: (link.order, link.id))]

    async def get_social_link(self, link_id: str) -> Optional[SocialLinkResponse]:
        return self._copy(self.social_links.get(link_id))

    async def create_social_link(self, profile_id: str, fields: Mapping[str, Any]) -> SocialLinkResponse:
        async with self._lock:
            link = self._new_record(SocialLinkResponse, **fields, profile_id=profile_id)
            self.social_links[link.id] = link
            return self._copy(link)

    async def update_social_link(self, link_id: str, fields: Mapping[str, Any]) -> Optional[SocialLinkResponse]:
        async with self._lock:
            current = self.social_links.get(link_id)
            if current is None:
                return None
            updated = self._merge(current, fields)
            self.social_links[link_id] = updated
            return self._copy(updated)

    async def delete_social_link(self, link_id: str) -> bool:
        async with self._lock:
            if self.social_links.pop(link_id, None) is None:
                return False
            self.link_clicks = [click for click in self.link_clicks if click["link_id"] != link_id]
            return True

    async def reorder_social_links(self, items: Iterable[Mapping[str, Any]]) -> None:
        async with self._lock:
            self._reorder(self.social_links, items)

    def _reorder(self, table: dict, items: Iterable[Mapping[str, Any]]) -> None:
        # Build every new record first so the swap below cannot fail halfway
        updated = {}
        for item in items:
            current = table.get(item["id"])
            if current is not None:
                updated[item["id"]] = self._merge(current, {"order": item["order"]})
        table.update(updated)

    # ── Link groups ─────────────────────────────
    async def get_link_groups(self, profile_id: str) -> List[LinkGroupResponse]:
        groups = [group for group in self.link_groups.values() if group.profile_id == profile_id]
        return [self._copy(group) for group in sorted(groups, key=lambda group: (group.order, group.id))]

    async def get_link_group(self, group_id: str) -> Optional[LinkGroupResponse]:
        return self._copy(self.link_groups.get(group_id))

    async def create_link_group(self, profile_id: str, fields: Mapping[str, Any]) -> LinkGroupResponse:
        async with self._lock:
            group = self._new_record(LinkGroupResponse, **fields, profile_id=profile_id)
            self.link_groups[group.id] = group
            return self._copy(group)

    async def delete_link_group(self, group_id: str) -> bool:
        async with self._lock:
            if self.link_groups.pop(group_id, None) is None:
                return False
            for link_id, link in list(self.social_links.items()):
                if link.group_id == group_id:
                    self.social_links[link_id] = self._merge(link, {"group_id": None})
            return True

    # ── Content blocks ──────────────────────────
    async def get_content_blocks(self, profile_id: str) -> List[ContentBlockResponse]:
        blocks = [block for block in self.content_blocks.values() if block.profile_id == profile_id]
        return [self._copy(block) for block in sorted(blocks, key=lambda block: (block.order, block.id))]

    async def get_content_block(self, block_id: str) -> Optional[ContentBlockResponse]:
        return self._copy(self.content_blocks.get(block_id))

    async def create_content_block(self, profile_id: str, fields: Mapping[str, Any]) -> ContentBlockResponse:
        async with self._lock:
            block = self._new_record(ContentBlockResponse, **fields, profile_id=profile_id)
            self.content_blocks[block.id] = block
            return self._copy(block)

    async def update_content_block(self, block_id: str, fields: Mapping[str, Any]) -> Optional[ContentBlockResponse]:
        async with self._lock:
            current = self.content_blocks.get(block_id)
            if current is None:
                return None
            updated = self._merge(current, fields)
            self.content_blocks[block_id] = updated
            return self._copy(updated)

    async def delete_content_block(self, block_id: str) -> bool:
        async with self._lock:
            return self.content_blocks.pop(block_id, None) is not None

    async def reorder_content_blocks(self, items: Iterable[Mapping[str, Any]]) -> None:
        async with self._lock:
            self._reorder(self.content_blocks, items)

    # ── Form submissions ────────────────────────
    async def get_form_submissions(self, profile_id: str) -> List[FormSubmissionResponse]:
        submissions = [s for s in self.form_submissions.values() if s.profile_id == profile_id]
        submissions.sort(key=lambda s: (s.timestamp, s.id), reverse=True)
        return [self._copy(s) for s in submissions]

    async def get_form_submission(self, submission_id: str) -> Optional[FormSubmissionResponse]:
        return self._copy(self.form_submissions.get(submission_id))

    async def create_form_submission(self, profile_id: str, fields: Mapping[str, Any]) -> FormSubmissionResponse:
        async with self._lock:
            submission = self._new_record(
                FormSubmissionResponse,
                timestamp=_utcnow(),
                **fields,
                profile_id=profile_id,
            )
            self.form_submissions[submission.id] = submission
            return self._copy(submission)

    async def delete_form_submission(self, submission_id: str) -> bool:
        async with self._lock:
            return self.form_submissions.pop(submission_id, None) is not None

    # ── Analytics ───────────────────────────────
    async def track_link_click(
        self, link_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool:
        async with self._lock:
            link = self.social_links.get(link_id)
            if link is None:
                return False
            self.social_links[link_id] = link.model_copy(update={"clicks": link.clicks + 1})
            self.link_clicks.append(
                {
                    "id": new_id(),
                    "link_id": link_id,
                    "timestamp": _utcnow(),
                    "user_agent": user_agent,
                    "referrer": referrer,
                }
            )
            return True

    async def track_profile_view(
        self, profile_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool:
        async with self._lock:
            profile = self.profiles.get(profile_id)
            if profile is None:
                return False
            self.profiles[profile_id] = profile.model_copy(update={"views": profile.views + 1})
            self.profile_views.append(
                ProfileViewRecord(
                    id=new_id(),
                    profile_id=profile_id,
                    timestamp=_utcnow(),
                    user_agent=user_agent,
                    referrer=referrer,
                )
            )
            return True

    async def get_recent_profile_views(self, profile_id: str, limit: int = 10) -> List[ProfileViewRecord]:
        views = [v for v in self.profile_views if v.profile_id == profile_id]
        return [self._copy(v) for v in reversed(views[-limit:])] if limit > 0 else []
