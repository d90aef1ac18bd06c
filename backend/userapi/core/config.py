# backend/userapi/core/config.py
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    app_name: str = "UserAPI"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "dev"  # "dev" or "structured"

    # Database
    database_url: str = "postgresql+asyncpg://localhost:5432/userapi"

    # Bearer tokens
    token_expire_days: int = 7
    token_sweep_interval_minutes: int = 60

    # Profile images
    upload_dir: str = "uploads"
    profile_dir: str = "profile"
    max_profile_image_bytes: int = 2 * 1024 * 1024

    # Listing
    default_page_size: int = 10

    # Localization
    default_language: str = "en"

    # Frontend (used for links in emails)
    frontend_url: str = "http://localhost:8080"

    # SMTP (unset host means emails are only logged)
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_use_tls: bool = True
    mail_from: str = "My App <info@my-app.com>"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
