"""
Double-submit CSRF protection.

The token lives in the signed session cookie (Starlette SessionMiddleware)
and must be echoed back in the `csrf-token` header on every authenticated
state-changing request. Issuing a new token invalidates the previous one.
"""

import secrets

from fastapi import HTTPException, Request, status

from neropage.platform.config import settings
from neropage.platform.logger import get_logger

logger = get_logger(__name__)

SESSION_KEY = "csrf_token"


def issue_csrf_token(request: Request) -> str:
    token = secrets.token_urlsafe(32)
    request.session[SESSION_KEY] = token
    return token


async def verify_csrf_token(request: Request) -> None:
    """Dependency for mutating endpoints. 403 when the header is missing or stale."""
    expected = request.session.get(SESSION_KEY)
    provided = request.headers.get(settings.CSRF_HEADER_NAME)

    if not expected or not provided or not secrets.compare_digest(expected, provided):
        logger.warning(f"CSRF check failed for {request.method} {request.url.path}")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid CSRF token")
