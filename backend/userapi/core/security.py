# backend/userapi/core/security.py
import hashlib
import secrets

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# Bytes of entropy behind every bearer token (hex-encoded to twice the length)
TOKEN_BYTES = 32
# Activation and password-reset tokens
ONE_TIME_TOKEN_BYTES = 16

_password_hasher = PasswordHasher()


def random_token(num_bytes: int = TOKEN_BYTES) -> str:
    """Generate a hex-encoded random string from the OS CSPRNG."""
    return secrets.token_hex(num_bytes)


def hash_token(token: str) -> str:
    """Hash an opaque token for storage."""
    return hashlib.sha256(token.encode()).hexdigest()


def hash_password(password: str) -> str:
    """Hash a password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored Argon2 hash."""
    try:
        return _password_hasher.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False
