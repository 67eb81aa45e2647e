from datetime import datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from neropage.features.analytics.models.events import LinkClick, ProfileView
from neropage.features.analytics.schemas.analytics import ProfileViewRecord
from neropage.features.auth.models.user import User
from neropage.features.auth.schemas.auth import UserRecord
from neropage.features.content_blocks.models.content_block import ContentBlock
from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.forms.models.form_submission import FormSubmission
from neropage.features.forms.schemas.form_submission import FormSubmissionResponse
from neropage.features.link_groups.models.link_group import LinkGroup
from neropage.features.link_groups.schemas.link_group import LinkGroupResponse
from neropage.features.links.models.social_link import SocialLink
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.profiles.models.profile import Profile
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import ConflictError, Storage, StorageError, plain_fields

logger = get_logger(__name__)


class DatabaseStorage(Storage):
    """SQLAlchemy-backed storage. One instance per request session."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, *refresh) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(f"Integrity error on commit: {exc.orig}")
            raise ConflictError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("Database commit failed", exc_info=exc)
            raise StorageError("Database write failed") from exc

        # server-side defaults (timestamps) are only visible after a refresh
        for obj in refresh:
            await self.db.refresh(obj)

    async def _first(self, stmt):
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def _all(self, stmt) -> list:
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _create(self, model, schema, fields: Mapping[str, Any]):
        obj = model(**plain_fields(fields))
        self.db.add(obj)
        await self._commit(obj)
        return schema.model_validate(obj)

    async def _update(self, model, schema, obj_id: str, fields: Mapping[str, Any]):
        obj = await self.db.get(model, obj_id)
        if obj is None:
            return None
        for key, value in plain_fields(fields).items():
            setattr(obj, key, value)
        await self._commit(obj)
        return schema.model_validate(obj)

    async def _delete(self, model, obj_id: str) -> bool:
        obj = await self.db.get(model, obj_id)
        if obj is None:
            return False
        await self.db.delete(obj)
        await self._commit()
        return True

    async def _reorder(self, model, items: Iterable[Mapping[str, Any]]) -> None:
        # Single transaction: either every row moves or none does
        try:
            for item in items:
                await self.db.execute(
                    update(model).where(model.id == item["id"]).values(order=item["order"])
                )
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception(f"Reorder of {model.__tablename__} failed", exc_info=exc)
            raise StorageError("Reorder failed") from exc
        await self._commit()

    # ── Users ───────────────────────────────────
    async def create_user(self, username: str, password_hash: str) -> UserRecord:
        return await self._create(User, UserRecord, {"username": username, "password_hash": password_hash})

    async def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        user = await self._first(select(User).where(func.lower(User.username) == username.lower()))
        return UserRecord.model_validate(user) if user else None

    async def get_user_by_id(self, user_id: str) -> Optional[UserRecord]:
        user = await self.db.get(User, user_id)
        return UserRecord.model_validate(user) if user else None

    # ── Profiles ────────────────────────────────
    async def get_profile(self, profile_id: str) -> Optional[ProfileResponse]:
        profile = await self.db.get(Profile, profile_id)
        return ProfileResponse.model_validate(profile) if profile else None

    async def get_profile_by_username(self, username: str) -> Optional[ProfileResponse]:
        profile = await self._first(select(Profile).where(func.lower(Profile.username) == username.lower()))
        return ProfileResponse.model_validate(profile) if profile else None

    async def get_profile_by_user_id(self, user_id: str) -> Optional[ProfileResponse]:
        profile = await self._first(select(Profile).where(Profile.user_id == user_id))
        return ProfileResponse.model_validate(profile) if profile else None

    async def get_default_profile(self) -> Optional[ProfileResponse]:
        # uuid7 ids sort by creation time
        profile = await self._first(select(Profile).order_by(Profile.created_at, Profile.id).limit(1))
        return ProfileResponse.model_validate(profile) if profile else None

    async def create_profile(self, fields: Mapping[str, Any]) -> ProfileResponse:
        return await self._create(Profile, ProfileResponse, fields)

    async def update_profile(self, profile_id: str, fields: Mapping[str, Any]) -> Optional[ProfileResponse]:
        return await self._update(Profile, ProfileResponse, profile_id, fields)

    # ── Social links ────────────────────────────
    async def get_social_links(self, profile_id: str) -> List[SocialLinkResponse]:
        links = await self._all(
            select(SocialLink)
            .where(SocialLink.profile_id == profile_id)
            .order_by(SocialLink.order.asc(), SocialLink.id.asc())
        )
        return [SocialLinkResponse.model_validate(link) for link in links]

    async def get_social_link(self, link_id: str) -> Optional[SocialLinkResponse]:
        link = await self.db.get(SocialLink, link_id)
        return SocialLinkResponse.model_validate(link) if link else None

    async def create_social_link(self, profile_id: str, fields: Mapping[str, Any]) -> SocialLinkResponse:
        return await self._create(SocialLink, SocialLinkResponse, {**fields, "profile_id": profile_id})

    async def update_social_link(self, link_id: str, fields: Mapping[str, Any]) -> Optional[SocialLinkResponse]:
        return await self._update(SocialLink, SocialLinkResponse, link_id, fields)

    async def delete_social_link(self, link_id: str) -> bool:
        return await self._delete(SocialLink, link_id)

    async def reorder_social_links(self, items: Iterable[Mapping[str, Any]]) -> None:
        await self._reorder(SocialLink, items)

    # ── Link groups ─────────────────────────────
    async def get_link_groups(self, profile_id: str) -> List[LinkGroupResponse]:
        groups = await self._all(
            select(LinkGroup)
            .where(LinkGroup.profile_id == profile_id)
            .order_by(LinkGroup.order.asc(), LinkGroup.id.asc())
        )
        return [LinkGroupResponse.model_validate(group) for group in groups]

    async def get_link_group(self, group_id: str) -> Optional[LinkGroupResponse]:
        group = await self.db.get(LinkGroup, group_id)
        return LinkGroupResponse.model_validate(group) if group else None

    async def create_link_group(self, profile_id: str, fields: Mapping[str, Any]) -> LinkGroupResponse:
        return await self._create(LinkGroup, LinkGroupResponse, {**fields, "profile_id": profile_id})

    async def delete_link_group(self, group_id: str) -> bool:
        group = await self.db.get(LinkGroup, group_id)
        if group is None:
            return False
        await self.db.execute(
            update(SocialLink).where(SocialLink.group_id == group_id).values(group_id=None)
        )
        await self.db.delete(group)
        await self._commit()
        return True

    # ── Content blocks ──────────────────────────
    async def get_content_blocks(self, profile_id: str) -> List[ContentBlockResponse]:
        blocks = await self._all(
            select(ContentBlock)
            .where(ContentBlock.profile_id == profile_id)
            .order_by(ContentBlock.order.asc(), ContentBlock.id.asc())
        )
        return [ContentBlockResponse.model_validate(block) for block in blocks]

    async def get_content_block(self, block_id: str) -> Optional[ContentBlockResponse]:
        block = await self.db.get(ContentBlock, block_id)
        return ContentBlockResponse.model_validate(block) if block else None

    async def create_content_block(self, profile_id: str, fields: Mapping[str, Any]) -> ContentBlockResponse:
        return await self._create(ContentBlock, ContentBlockResponse, {**fields, "profile_id": profile_id})

    async def update_content_block(self, block_id: str, fields: Mapping[str, Any]) -> Optional[ContentBlockResponse]:
        return await self._update(ContentBlock, ContentBlockResponse, block_id, fields)

    async def delete_content_block(self, block_id: str) -> bool:
        return await self._delete(ContentBlock, block_id)

    async def reorder_content_blocks(self, items: Iterable[Mapping[str, Any]]) -> None:
        await self._reorder(ContentBlock, items)

    # ── Form submissions ────────────────────────
    async def get_form_submissions(self, profile_id: str) -> List[FormSubmissionResponse]:
        submissions = await self._all(
            select(FormSubmission)
            .where(FormSubmission.profile_id == profile_id)
            .order_by(FormSubmission.timestamp.desc(), FormSubmission.id.desc())
        )
        return [FormSubmissionResponse.model_validate(s) for s in submissions]

    async def get_form_submission(self, submission_id: str) -> Optional[FormSubmissionResponse]:
        submission = await self.db.get(FormSubmission, submission_id)
        return FormSubmissionResponse.model_validate(submission) if submission else None

    async def create_form_submission(self, profile_id: str, fields: Mapping[str, Any]) -> FormSubmissionResponse:
        return await self._create(
            FormSubmission,
            FormSubmissionResponse,
            {"timestamp": datetime.now(timezone.utc), **fields, "profile_id": profile_id},
        )

    async def delete_form_submission(self, submission_id: str) -> bool:
        return await self._delete(FormSubmission, submission_id)

    # ── Analytics ───────────────────────────────
    async def track_link_click(
        self, link_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool:
        result = await self.db.execute(
            update(SocialLink).where(SocialLink.id == link_id).values(clicks=SocialLink.clicks + 1)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return False
        self.db.add(LinkClick(link_id=link_id, user_agent=user_agent, referrer=referrer))
        await self._commit()
        return True

    async def track_profile_view(
        self, profile_id: str, user_agent: Optional[str] = None, referrer: Optional[str] = None
    ) -> bool:
        result = await self.db.execute(
            update(Profile).where(Profile.id == profile_id).values(views=Profile.views + 1)
        )
        if result.rowcount == 0:
            await self.db.rollback()
            return False
        self.db.add(ProfileView(profile_id=profile_id, user_agent=user_agent, referrer=referrer))
        await self._commit()
        return True

    async def get_recent_profile_views(self, profile_id: str, limit: int = 10) -> List[ProfileViewRecord]:
        views = await self._all(
            select(ProfileView)
            .where(ProfileView.profile_id == profile_id)
            .order_by(ProfileView.timestamp.desc(), ProfileView.id.desc())
            .limit(limit)
        )
        return [ProfileViewRecord.model_validate(view) for view in views]
