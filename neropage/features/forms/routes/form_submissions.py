from typing import List

from fastapi import APIRouter, Depends, Response, status

from neropage.features.auth.routes.auth import get_current_profile
from neropage.features.forms.schemas.form_submission import FormSubmissionResponse
from neropage.features.forms.services.form_service import FormService
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.security.csrf import verify_csrf_token
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/form-submissions", tags=["Form Submissions"])


@router.get("", response_model=List[FormSubmissionResponse], summary="Leads captured by the current profile")
async def list_form_submissions(
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    return await FormService(storage).list_submissions(profile)


@router.delete(
    "/{submission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(verify_csrf_token)],
)
async def delete_form_submission(
    submission_id: str,
    profile: ProfileResponse = Depends(get_current_profile),
    storage: Storage = Depends(get_storage),
):
    await FormService(storage).delete_submission(submission_id, profile)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
