from userapi.models.base import Base, TimestampMixin
from userapi.models.user import User
from userapi.models.token import Token

__all__ = [
    "Base", "TimestampMixin",
    "User",
    "Token",
]
