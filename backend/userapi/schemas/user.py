from pydantic import BaseModel, ConfigDict


class UserCreate(BaseModel):
    """Registration body. Fields are optional so validation can report
    localized messages instead of framework errors."""
    username: str | None = None
    email: str | None = None
    password: str | None = None


class UserUpdate(BaseModel):
    username: str | None = None
    image: str | None = None  # base64 encoded JPEG or PNG


class UserResponse(BaseModel):
    """Public view of a user."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    image: str | None


class UserPage(BaseModel):
    content: list[UserResponse]
    page: int
    size: int
    totalPages: int


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    id: int
    username: str
    token: str
    image: str | None


class PasswordResetRequest(BaseModel):
    email: str | None = None


class PasswordUpdate(BaseModel):
    password: str | None = None
    passwordResetToken: str | None = None


class MessageResponse(BaseModel):
    message: str
