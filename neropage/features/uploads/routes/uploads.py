from fastapi import APIRouter, Depends, File, UploadFile, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.config import settings
from neropage.platform.schemas import UploadResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.utils.file_upload import IMAGE_CONTENT_TYPES, VIDEO_CONTENT_TYPES, save_upload

router = APIRouter(tags=["Uploads"], dependencies=[Depends(verify_csrf_token)])


@router.post("/upload-image", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_image(
    file: UploadFile = File(...),
    profile: ProfileResponse = Depends(get_current_profile),
):
    """Images: JPEG, PNG, GIF or WebP up to MAX_IMAGE_SIZE."""
    url = await save_upload(
        file,
        kind="images",
        owner_id=profile.id,
        allowed_types=IMAGE_CONTENT_TYPES,
        max_size=settings.MAX_IMAGE_SIZE,
    )
    return UploadResponse(url=url)


@router.post("/upload-video", response_model=UploadResponse, status_code=status.HTTP_200_OK)
async def upload_video(
    file: UploadFile = File(...),
    profile: ProfileResponse = Depends(get_current_profile),
):
    """Videos: MP4, WebM or QuickTime up to MAX_VIDEO_SIZE."""
    url = await save_upload(
        file,
        kind="videos",
        owner_id=profile.id,
        allowed_types=VIDEO_CONTENT_TYPES,
        max_size=settings.MAX_VIDEO_SIZE,
    )
    return UploadResponse(url=url)
