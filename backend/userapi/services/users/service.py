# backend/userapi/services/users/service.py
import asyncio
import logging
import math

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from userapi.core.errors import (
    AuthenticationError,
    EmailError,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    ValidationFailure,
)
from userapi.core.logging import redact_email
from userapi.core.security import ONE_TIME_TOKEN_BYTES, hash_password, random_token, verify_password
from userapi.models.user import User
from userapi.schemas.user import (
    LoginRequest,
    LoginResponse,
    PasswordUpdate,
    UserCreate,
    UserPage,
    UserResponse,
    UserUpdate,
)
from userapi.services.auth.tokens import AuthenticatedIdentity, TokenService
from userapi.services.email.sender import EmailService
from userapi.services.files.storage import FileService, decode_base64_image, detect_image_type
from userapi.services.users.validation import validate_email, validate_password, validate_username

logger = logging.getLogger(__name__)


class UserService:
    """Account operations. Drives the token lifecycle on login, logout,
    account deletion and password reset."""

    def __init__(
        self,
        session: AsyncSession,
        tokens: TokenService,
        email: EmailService,
        files: FileService,
    ):
        self.session = session
        self.tokens = tokens
        self.email = email
        self.files = files

    async def find_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def find_by_password_reset_token(self, token: str | None) -> User | None:
        if not token:
            return None
        result = await self.session.execute(select(User).where(User.password_reset_token == token))
        return result.scalar_one_or_none()

    async def register(self, data: UserCreate) -> None:
        """Create an inactive account and email its activation token.

        The account is only kept if the activation email goes out.
        """
        errors: dict[str, str] = {}
        if key := validate_username(data.username):
            errors["username"] = key
        if key := validate_email(data.email):
            errors["email"] = key
        elif await self.find_by_email(data.email):
            errors["email"] = "email_in_use"
        if key := validate_password(data.password):
            errors["password"] = key
        if errors:
            raise ValidationFailure(errors)

        user = User(
            username=data.username,
            email=data.email,
            password=await asyncio.to_thread(hash_password, data.password),
            inactive=True,
            activation_token=random_token(ONE_TIME_TOKEN_BYTES),
        )
        self.session.add(user)
        await self.session.flush()

        try:
            await self.email.send_account_activation(user.email, user.activation_token)
        except EmailError:
            await self.session.rollback()
            raise

        await self.session.commit()
        logger.info(f"Registered user {user.id} ({redact_email(user.email)})")

    async def activate(self, token: str) -> None:
        result = await self.session.execute(select(User).where(User.activation_token == token))
        user = result.scalar_one_or_none()
        if not user:
            raise InvalidTokenError()

        user.inactive = False
        user.activation_token = None
        await self.session.commit()
        logger.info(f"Activated user {user.id}")

    async def get_users(
        self,
        page: int,
        size: int,
        identity: AuthenticatedIdentity | None = None,
    ) -> UserPage:
        """Page through active users, leaving out the caller."""
        conditions = [User.inactive.is_(False)]
        if identity is not None:
            conditions.append(User.id != identity.user_id)

        total = (await self.session.execute(
            select(func.count()).select_from(User).where(*conditions)
        )).scalar_one()

        result = await self.session.execute(
            select(User).where(*conditions).order_by(User.id).limit(size).offset(page * size)
        )
        users = result.scalars().all()

        return UserPage(
            content=[UserResponse.model_validate(u) for u in users],
            page=page,
            size=size,
            totalPages=math.ceil(total / size),
        )

    async def get_user(self, user_id: int) -> UserResponse:
        result = await self.session.execute(
            select(User).where(User.id == user_id, User.inactive.is_(False))
        )
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("user_not_found")
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: int, data: UserUpdate) -> UserResponse:
        """Update username and, optionally, replace the profile image."""
        errors: dict[str, str] = {}
        if key := validate_username(data.username):
            errors["username"] = key

        image_bytes = None
        if data.image:
            image_bytes = decode_base64_image(data.image)
            if image_bytes is None:
                errors["image"] = "unsupported_file_type"
            elif not self.files.is_within_size_limit(image_bytes):
                errors["image"] = "profile_image_size"
            elif detect_image_type(image_bytes) is None:
                errors["image"] = "unsupported_file_type"
        if errors:
            raise ValidationFailure(errors)

        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("user_not_found")

        user.username = data.username
        old_image = None
        if image_bytes is not None:
            old_image = user.image
            user.image = await self.files.save_profile_image(image_bytes)

        await self.session.commit()
        await self.files.delete_profile_image(old_image)

        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: int) -> None:
        """Delete an account together with all of its tokens."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            return

        image = user.image
        await self.tokens.revoke_all(user_id)
        await self.session.delete(user)
        await self.session.commit()
        await self.files.delete_profile_image(image)
        logger.info(f"Deleted user {user_id}")

    async def login(self, data: LoginRequest) -> LoginResponse:
        if not data.email or not data.password:
            raise AuthenticationError()

        user = await self.find_by_email(data.email)
        if not user:
            raise AuthenticationError()

        if not await asyncio.to_thread(verify_password, data.password, user.password):
            raise AuthenticationError()

        if user.inactive:
            raise ForbiddenError("inactive_authentication_failure")

        token = await self.tokens.issue(user.id)
        await self.session.commit()

        return LoginResponse(id=user.id, username=user.username, token=token, image=user.image)

    async def logout(self, token: str | None) -> None:
        await self.tokens.revoke(token)
        await self.session.commit()

    async def password_reset_request(self, email: str | None) -> None:
        if key := validate_email(email):
            raise ValidationFailure({"email": "email_not_valid" if key == "email_not_null" else key})

        user = await self.find_by_email(email)
        if not user:
            raise NotFoundError("email_not_in_use")

        user.password_reset_token = random_token(ONE_TIME_TOKEN_BYTES)
        await self.session.commit()

        await self.email.send_password_reset(user.email, user.password_reset_token)

    async def update_password(self, data: PasswordUpdate) -> None:
        """Set a new password from a reset token and log out every session."""
        user = await self.find_by_password_reset_token(data.passwordResetToken)
        if not user:
            raise ForbiddenError("unauthorised_password_reset")

        if key := validate_password(data.password):
            raise ValidationFailure({"password": key})

        user.password = await asyncio.to_thread(hash_password, data.password)
        user.password_reset_token = None
        user.inactive = False
        user.activation_token = None
        await self.tokens.revoke_all(user.id)
        await self.session.commit()
        logger.info(f"Password reset for user {user.id}")
