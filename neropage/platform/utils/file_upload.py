import uuid
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from neropage.platform.config import settings
from neropage.platform.logger import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024

IMAGE_CONTENT_TYPES = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}
VIDEO_CONTENT_TYPES = {
    "video/mp4": ".mp4",
    "video/webm": ".webm",
    "video/quicktime": ".mov",
}


def validate_upload(file: UploadFile, allowed_types: dict) -> str:
    """
    Check the declared content type and return the extension to store the file under.

    Raises:
        HTTPException: If the type is not allowed
    """
    if file.content_type not in allowed_types:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file type. Allowed types: {', '.join(sorted(allowed_types))}",
        )
    return allowed_types[file.content_type]


async def save_upload(file: UploadFile, *, kind: str, owner_id: str, allowed_types: dict, max_size: int) -> str:
    """
    Save an uploaded file under UPLOAD_DIR/<kind>/ and return its public URL.

    Raises:
        HTTPException: If validation fails or the file cannot be written
    """
    extension = validate_upload(file, allowed_types)

    upload_dir = Path(settings.UPLOAD_DIR) / kind
    upload_dir.mkdir(parents=True, exist_ok=True)

    filename = f"{owner_id}_{uuid.uuid4().hex}{extension}"
    file_path = upload_dir / filename

    # Read in chunks so an oversized upload is rejected without buffering all of it
    contents = bytearray()
    while True:
        chunk = await file.read(CHUNK_SIZE)
        if not chunk:
            break
        contents.extend(chunk)
        if len(contents) > max_size:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"File too large. Maximum size is {max_size // (1024 * 1024)}MB",
            )

    if not contents:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")

    try:
        with open(file_path, "wb") as f:
            f.write(contents)
    except OSError as e:
        logger.exception(f"Failed to save upload {file_path}", exc_info=e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save file",
        )

    logger.info(f"Stored {kind} upload {filename} ({len(contents)} bytes)")
    return f"/static/uploads/{kind}/{filename}"
