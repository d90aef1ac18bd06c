"""Field validation for account requests.

Each validator returns an i18n message key describing the first problem
found, or None if the value is acceptable.
"""
import re

from email_validator import EmailNotValidError, validate_email as parse_email

USERNAME_MIN = 4
USERNAME_MAX = 32
PASSWORD_MIN = 8
TLD_MIN = 2

PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d).*$")


def validate_username(username: str | None) -> str | None:
    if not username:
        return "username_not_null"
    if not USERNAME_MIN <= len(username) <= USERNAME_MAX:
        return "username_size"
    return None


def validate_email(email: str | None) -> str | None:
    if not email:
        return "email_not_null"
    try:
        parsed = parse_email(email, check_deliverability=False)
    except EmailNotValidError:
        return "email_not_valid"
    # Top-level domain needs at least two characters
    if len(parsed.ascii_domain.rsplit(".", 1)[-1]) < TLD_MIN:
        return "email_not_valid"
    return None


def validate_password(password: str | None) -> str | None:
    if not password:
        return "password_not_null"
    if len(password) < PASSWORD_MIN:
        return "password_size"
    if not PASSWORD_PATTERN.match(password):
        return "password_pattern"
    return None
