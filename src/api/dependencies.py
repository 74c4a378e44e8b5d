"""FastAPI dependencies for admin authentication and services."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.models.enums import VariantType
from src.schemas.auth import AdminSession
from src.services.auth import decode_admin_token
from src.services.catalog_service import CatalogService
from src.services.favorites import FavoritesStore, open_profile

security = HTTPBearer(auto_error=False)


def get_admin_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> AdminSession:
    """Require a valid, unexpired admin token."""
    payload = decode_admin_token(credentials.credentials) if credentials else None

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired admin session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AdminSession(
        subject=payload["sub"],
        expires_at=datetime.fromtimestamp(payload["exp"], UTC),
    )


def get_catalog_service(
    db: Annotated[Session, Depends(get_db)],
) -> CatalogService:
    """Get catalog service with dependencies."""
    return CatalogService(db)


def get_favorites_store(
    x_favorites_profile: Annotated[str, Header()],
) -> FavoritesStore:
    """Open the favorites store named by the X-Favorites-Profile header."""
    try:
        return open_profile(get_settings().favorites_dir, x_favorites_profile)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e


def parse_category_type(slug: str) -> VariantType:
    """Resolve a category type URL slug or raise 400."""
    category_type = VariantType.from_slug(slug)
    if category_type is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown category type '{slug}'",
        )
    return category_type
