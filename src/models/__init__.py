"""SQLAlchemy models."""

from src.models.flavor import Flavor
from src.models.store_settings import StoreSettings

__all__ = [
    "Flavor",
    "StoreSettings",
]
