# backend/userapi/api/users.py
from fastapi import APIRouter, Depends, Request

from userapi.core.deps import get_identity, get_pagination, get_user_service, require_owner
from userapi.core.i18n import detect_language, translate
from userapi.schemas.user import MessageResponse, UserCreate, UserPage, UserResponse, UserUpdate
from userapi.services.auth.tokens import AuthenticatedIdentity
from userapi.services.users.service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _message(request: Request, key: str) -> MessageResponse:
    language = detect_language(request.headers.get("accept-language"))
    return MessageResponse(message=translate(key, language))


@router.post("", response_model=MessageResponse)
async def register_user(
    data: UserCreate,
    request: Request,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    """Register a new, inactive account and send its activation email."""
    await users.register(data)
    return _message(request, "user_create_success")


@router.post("/token/{token}", response_model=MessageResponse)
async def activate_user(
    token: str,
    request: Request,
    users: UserService = Depends(get_user_service),
) -> MessageResponse:
    await users.activate(token)
    return _message(request, "account_activation_success")


@router.get("", response_model=UserPage)
async def list_users(
    pagination: tuple[int, int] = Depends(get_pagination),
    identity: AuthenticatedIdentity | None = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserPage:
    """List active users, excluding the caller."""
    page, size = pagination
    return await users.get_users(page, size, identity)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    return await users.get_user(user_id)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    data: UserUpdate | None = None,
    identity: AuthenticatedIdentity | None = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> UserResponse:
    """Update the caller's own profile."""
    require_owner(identity, user_id, "unauthorised_user_update")
    return await users.update_user(user_id, data or UserUpdate())


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    identity: AuthenticatedIdentity | None = Depends(get_identity),
    users: UserService = Depends(get_user_service),
) -> dict:
    require_owner(identity, user_id, "unauthorised_user_delete")
    await users.delete_user(user_id)
    return {}
