from fastapi import HTTPException, status

from neropage.features.auth.schemas.auth import AuthResponse, LoginRequest, SignupRequest, UserResponse
from neropage.features.auth.utils.security import create_access_token, hash_password, verify_password
from neropage.features.profiles.schemas.profile import BackgroundType, ButtonStyle, Layout
from neropage.platform.logger import get_logger
from neropage.platform.storage.base import ConflictError, Storage

logger = get_logger(__name__)

DEFAULT_PROFILE_FIELDS = {
    "bio": "Welcome to my link hub!",
    "avatar": "",
    "theme": "neon",
    "primary_color": "#8B5CF6",
    "background_color": "#0A0A0F",
    "background_type": BackgroundType.COLOR,
    "layout": Layout.STACKED,
    "font_family": "DM Sans",
    "button_style": ButtonStyle.ROUNDED,
    "use_custom_template": False,
}


class AuthService:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def register_user(self, request: SignupRequest) -> AuthResponse:
        if (
            await self.storage.get_user_by_username(request.username)
            or await self.storage.get_profile_by_username(request.username)
        ):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

        try:
            user = await self.storage.create_user(request.username, hash_password(request.password))
            profile = await self.storage.create_profile(
                {**DEFAULT_PROFILE_FIELDS, "user_id": user.id, "username": request.username}
            )
        except ConflictError:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Username already taken")

        logger.info(f"Registered user {user.username} ({user.id})")
        return AuthResponse(
            user=UserResponse(id=user.id, username=user.username),
            profile=profile,
            access_token=create_access_token(data={"sub": user.id, "username": user.username}),
        )

    async def login_user(self, request: LoginRequest) -> AuthResponse:
        user = await self.storage.get_user_by_username(request.username)
        if user is None:
            # the profile username may have been changed since signup
            renamed = await self.storage.get_profile_by_username(request.username)
            if renamed is not None and renamed.user_id:
                user = await self.storage.get_user_by_id(renamed.user_id)

        if not user or not verify_password(request.password, user.password_hash):
            logger.warning(f"Failed login attempt for username {request.username}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
                headers={"WWW-Authenticate": "Bearer"},
            )

        profile = await self.storage.get_profile_by_user_id(user.id)
        if profile is None:
            logger.error(f"User {user.id} has no profile")
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")

        return AuthResponse(
            user=UserResponse(id=user.id, username=profile.username),
            profile=profile,
            access_token=create_access_token(data={"sub": user.id, "username": user.username}),
        )
