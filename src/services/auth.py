"""Admin session tokens and password check."""

import hmac
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from src.config import get_settings

settings = get_settings()

ADMIN_SUBJECT = "admin"
ADMIN_SCOPE = "admin"


def verify_admin_password(password: str) -> bool:
    """Compare against the configured admin password in constant time."""
    return hmac.compare_digest(password.encode(), settings.admin_password.encode())


def create_admin_token() -> tuple[str, datetime]:
    """Create a signed admin token. Returns the token and its expiry."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.admin_token_minutes)
    to_encode = {
        "sub": ADMIN_SUBJECT,
        "scope": ADMIN_SCOPE,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt, expire


def decode_admin_token(token: str) -> dict | None:
    """Decode and validate an admin token; None if invalid, expired or not admin."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if payload.get("scope") != ADMIN_SCOPE or payload.get("sub") != ADMIN_SUBJECT:
        return None
    return payload
