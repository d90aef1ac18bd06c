# backend/userapi/models/user.py
from sqlalchemy import String, Boolean
from sqlalchemy.orm import Mapped, mapped_column
from userapi.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    # New accounts stay inactive until the emailed activation token is posted back
    inactive: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    activation_token: Mapped[str | None] = mapped_column(String(64), index=True)
    password_reset_token: Mapped[str | None] = mapped_column(String(64), index=True)

    # Stored file name under the profile image folder
    image: Mapped[str | None] = mapped_column(String(255))
