from typing import List, Optional

from fastapi import APIRouter, Depends, Header, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.content_blocks.schemas.content_block import ContentBlockResponse
from neropage.features.forms.schemas.form_submission import FormSubmitRequest, FormSubmitResponse
from neropage.features.forms.services.form_service import FormService
from neropage.features.links.schemas.link import SocialLinkResponse
from neropage.features.profiles.schemas.profile import (
    ProfileResponse,
    ProfileUpdateRequest,
    TemplatePreviewRequest,
    TemplatePreviewResponse,
)
from neropage.features.profiles.services.profile_service import ProfileService
from neropage.features.rendering.services.sanitizer import SanitizeMode
from neropage.features.rendering.services.template_renderer import render_custom_template
from neropage.platform.schemas import SuccessResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/profiles", tags=["Profiles"])


@router.get("/me", response_model=ProfileResponse, summary="Current user's profile")
async def get_my_profile(profile: ProfileResponse = Depends(get_current_profile)):
    return profile


@router.patch(
    "/me",
    response_model=ProfileResponse,
    dependencies=[Depends(verify_csrf_token)],
    summary="Partially update the current user's profile",
)
async def update_my_profile(
    request: ProfileUpdateRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await ProfileService(storage).update_profile(profile, request)


@router.post(
    "/me/template-preview",
    response_model=TemplatePreviewResponse,
    summary="Render a custom template against the current profile without saving it",
)
async def preview_template(
    request: TemplatePreviewRequest,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    links = await storage.get_social_links(profile.id)
    blocks = await storage.get_content_blocks(profile.id)
    html = render_custom_template(
        profile, links, blocks, mode=SanitizeMode.STRICT, template_html=request.template_html
    )
    return TemplatePreviewResponse(html=html)


@router.get("/{username}", response_model=ProfileResponse, summary="Public profile by username")
async def get_profile(username: str, storage: Storage = Depends(get_storage)):
    return await ProfileService(storage).get_by_username(username)


@router.get("/{username}/links", response_model=List[SocialLinkResponse])
async def get_profile_links(username: str, storage: Storage = Depends(get_storage)):
    return await ProfileService(storage).get_public_links(username)


@router.get("/{username}/content-blocks", response_model=List[ContentBlockResponse])
async def get_profile_content_blocks(username: str, storage: Storage = Depends(get_storage)):
    return await ProfileService(storage).get_public_content_blocks(username)


@router.post("/{username}/view", response_model=SuccessResponse, summary="Record a profile view")
async def track_profile_view(
    username: str,
    user_agent: Optional[str] = Header(None),
    referer: Optional[str] = Header(None),
    storage: Storage = Depends(get_storage),
):
    await ProfileService(storage).track_view(username, user_agent, referer)
    return SuccessResponse()


@router.post(
    "/{username}/form-submit",
    response_model=FormSubmitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a lead form on a public profile",
)
async def submit_form(
    username: str,
    request: FormSubmitRequest,
    user_agent: Optional[str] = Header(None),
    storage: Storage = Depends(get_storage),
):
    submission = await FormService(storage).submit(username, request, user_agent)
    return FormSubmitResponse(id=submission.id)
