# backend/userapi/api/auth.py
from fastapi import APIRouter, Depends, Request

from userapi.core.deps import get_bearer_token, get_user_service
from userapi.core.i18n import detect_language, translate
from userapi.schemas.user import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    PasswordResetRequest,
    PasswordUpdate,
)
from userapi.services.users.service import UserService

router = APIRouter(tags=["auth"])


@router.post("/auth", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    users: UserService = Depends(get_user_service),
) -> LoginResponse:
    """Check credentials and issue a bearer token."""
    return await users.login(credentials)


@router.post("/logout")
async def logout(
    token: str | None = Depends(get_bearer_token),
    users: UserService = Depends(get_user_service),
) -> dict:
    """Revoke the presented token. Anonymous callers get 200 too."""
    await users.logout(token)
    return {}


@router.post("/user/password", response_model=MessageResponse)
async def request_password_reset(
    data: PasswordResetRequest,
    request: Request,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    await users.password_reset_request(data.email)
    language = detect_language(request.headers.get("accept-language"))
    return MessageResponse(message=translate("password_reset_request_success", language))


@router.put("/user/password")
async def update_password(
    data: PasswordUpdate,
    users: UserService = Depends(get_user_service),
) -> dict:
    """Set a new password using an emailed reset token."""
    await users.update_password(data)
    return {}
