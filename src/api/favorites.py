"""Favorites API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from src.api.dependencies import get_catalog_service, get_favorites_store
from src.schemas.flavor import Flavor
from src.services.catalog_service import CatalogService
from src.services.favorites import FavoritesStore

router = APIRouter(prefix="/api/v1/favorites", tags=["favorites"])


class FavoriteAdd(BaseModel):
    """Add a flavor to favorites by id."""

    flavor_id: str


@router.get("", response_model=list[Flavor])
def list_favorites(
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
):
    """Favorites in the order they were added."""
    return store.favorites


@router.post("", response_model=list[Flavor], status_code=status.HTTP_201_CREATED)
def add_favorite(
    body: FavoriteAdd,
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Snapshot a flavor into favorites. Adding twice is a no-op."""
    flavor = service.get_flavor(body.flavor_id)
    if flavor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Flavor not found")
    store.add(flavor)
    return store.favorites


@router.delete("/{flavor_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_favorite(
    flavor_id: str,
    store: Annotated[FavoritesStore, Depends(get_favorites_store)],
):
    """Remove a flavor from favorites."""
    if not store.remove(flavor_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Favorite not found")
