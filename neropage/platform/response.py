from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def error_response(
    *,
    error: str,
    status_code: int = status.HTTP_400_BAD_REQUEST,
    details: Optional[Any] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Single source of truth for ALL API error bodies.
    Shape is {"error": str} with an optional "details" entry.
    """
    content = {"error": error}
    if details is not None:
        content["details"] = jsonable_encoder(details)

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def success_response(status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": True})
