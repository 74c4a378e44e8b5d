"""Admin authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class AdminLogin(BaseModel):
    """Admin login request."""

    password: str = Field(..., min_length=1, max_length=128)


class AdminToken(BaseModel):
    """Signed admin session token."""

    access_token: str
    token_type: str = "bearer"  # noqa: S105
    expires_at: datetime


class AdminSession(BaseModel):
    """Current admin session info."""

    subject: str
    expires_at: datetime
