from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from neropage.features.auth.schemas.auth import AuthResponse, LoginRequest, MeResponse, SignupRequest, UserRecord, UserResponse
from neropage.features.auth.services.auth_service import AuthService
from neropage.features.auth.utils.security import decode_access_token
from neropage.features.profiles.schemas.profile import ProfileResponse
from neropage.platform.logger import get_logger
from neropage.platform.schemas import SuccessResponse
from neropage.platform.storage.base import Storage
from neropage.platform.storage.dependencies import get_storage

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    storage: Storage = Depends(get_storage),
) -> UserRecord:
    """
    Dependency to get the current authenticated user.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = decode_access_token(credentials.credentials)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await storage.get_user_by_id(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_profile(
    user: UserRecord = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
) -> ProfileResponse:
    profile = await storage.get_profile_by_user_id(user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create a user account and its profile with the default theme",
)
async def signup(request: SignupRequest, storage: Storage = Depends(get_storage)):
    return await AuthService(storage).register_user(request)


@router.post("/login", response_model=AuthResponse, summary="Log in with username and password")
async def login(request: LoginRequest, storage: Storage = Depends(get_storage)):
    return await AuthService(storage).login_user(request)


@router.get("/me", response_model=MeResponse, summary="Current user and profile")
async def me(
    user: UserRecord = Depends(get_current_user),
    profile: ProfileResponse = Depends(get_current_profile),
):
    return MeResponse(user=UserResponse(id=user.id, username=profile.username), profile=profile)


@router.post("/logout", response_model=SuccessResponse, summary="Log out")
async def logout(request: Request):
    """
    Access tokens are dropped client-side; this ends the server session,
    so the CSRF token bound to it stops working.
    """
    request.session.clear()
    logger.info("Session cleared on logout")
    return SuccessResponse()
