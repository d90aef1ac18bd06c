from userapi.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserPage,
    LoginRequest,
    LoginResponse,
    PasswordResetRequest,
    PasswordUpdate,
    MessageResponse,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserPage",
    "LoginRequest",
    "LoginResponse",
    "PasswordResetRequest",
    "PasswordUpdate",
    "MessageResponse",
]
