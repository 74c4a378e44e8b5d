"""Admin authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from src.api.dependencies import get_admin_session
from src.schemas.auth import AdminLogin, AdminSession, AdminToken
from src.services.auth import create_admin_token, verify_admin_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["auth"])


@router.post("/login", response_model=AdminToken)
async def login(credentials: AdminLogin):
    """Exchange the admin password for a short-lived token."""
    if not verify_admin_password(credentials.password):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token, expires_at = create_admin_token()
    return AdminToken(access_token=access_token, expires_at=expires_at)


@router.get("/session", response_model=AdminSession)
async def get_session(
    session: Annotated[AdminSession, Depends(get_admin_session)],
):
    """Get current admin session information."""
    return session


@router.post("/logout")
async def logout(
    session: Annotated[AdminSession, Depends(get_admin_session)],
):
    """Logout (client should discard token)."""
    return {"message": "Logged out successfully"}
