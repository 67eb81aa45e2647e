from typing import List, Optional

from fastapi import HTTPException, status

from neropage.features.forms.schemas.form_submission import FormSubmissionResponse, FormSubmitRequest
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import Storage

logger = get_logger(__name__)


class FormService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def submit(
        self, username: str, request: FormSubmitRequest, user_agent: Optional[str]
    ) -> FormSubmissionResponse:
        profile = await self.storage.get_profile_by_username(username)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

        if request.block_id is not None:
            block = await self.storage.get_content_block(request.block_id)
            if block is None or block.profile_id != profile.id:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown form block")

        fields = request.model_dump()
        fields["user_agent"] = user_agent
        submission = await self.storage.create_form_submission(profile.id, fields)
        logger.info(f"Form submission {submission.id} received for profile {profile.id}")
        return submission

    async def list_submissions(self, profile: ProfileResponse) -> List[FormSubmissionResponse]:
        return await self.storage.get_form_submissions(profile.id)

    async def delete_submission(self, submission_id: str, profile: ProfileResponse) -> None:
        submission = await self.storage.get_form_submission(submission_id)
        if submission is None or submission.profile_id != profile.id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
        if not await self.storage.delete_form_submission(submission_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Submission not found")
