"""File-backed favorites store."""

import logging
import re
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from src.schemas.flavor import Flavor

logger = logging.getLogger(__name__)

PROFILE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

_favorites_adapter = TypeAdapter(list[Flavor])


class FavoritesStore:
    """Ordered set of flavor snapshots mirrored to a JSON file.

    The file is read once on construction and rewritten after every change.
    Snapshots are point-in-time copies; they are not refreshed when the
    catalog entry changes later.
    """

    def __init__(self, path: Path):
        self.path = path
        self._favorites: list[Flavor] = self._load()

    def _load(self) -> list[Flavor]:
        if not self.path.exists():
            return []
        try:
            return _favorites_adapter.validate_json(self.path.read_bytes())
        except (ValidationError, ValueError) as e:
            logger.warning(f"Discarding unreadable favorites at {self.path}: {e}")
            self.path.unlink(missing_ok=True)
            return []

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(_favorites_adapter.dump_json(self._favorites))

    @property
    def favorites(self) -> list[Flavor]:
        return list(self._favorites)

    def is_favorite(self, flavor_id: str) -> bool:
        return any(f.id == flavor_id for f in self._favorites)

    def add(self, flavor: Flavor) -> bool:
        """Add a snapshot. Returns False if the id is already a favorite."""
        if self.is_favorite(flavor.id):
            return False
        self._favorites.append(flavor.model_copy(deep=True))
        self._save()
        return True

    def remove(self, flavor_id: str) -> bool:
        """Remove by id. Returns False if it was not a favorite."""
        remaining = [f for f in self._favorites if f.id != flavor_id]
        if len(remaining) == len(self._favorites):
            return False
        self._favorites = remaining
        self._save()
        return True


def open_profile(favorites_dir: str | Path, profile_id: str) -> FavoritesStore:
    """Open the store for one favorites profile."""
    if not PROFILE_ID_PATTERN.match(profile_id):
        raise ValueError(f"Invalid favorites profile id: {profile_id!r}")
    return FavoritesStore(Path(favorites_dir) / f"{profile_id}.json")
