from fastapi import APIRouter, Request

from neropage.platform.schemas import CamelModel
from neropage.platform.security.csrf import issue_csrf_token

router = APIRouter(tags=["CSRF"])


class CsrfTokenResponse(CamelModel):
    csrf_token: str


@router.get("/csrf-token", response_model=CsrfTokenResponse)
async def get_csrf_token(request: Request):
    return CsrfTokenResponse(csrf_token=issue_csrf_token(request))
