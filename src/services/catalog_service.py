"""Catalog store service: flavor and settings persistence."""

import logging
from datetime import UTC, datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from src.models.enums import FlavorType, VariantType
from src.models.flavor import Flavor as FlavorRow
from src.models.store_settings import SETTINGS_ROW_ID, StoreSettings
from src.schemas.flavor import Flavor
from src.schemas.settings import SettingsData, SettingsUpdate
from src.services.flavor_validation import ValidatedFlavor
from src.services.normalizer import normalize_flavor, parse_timestamp, prepare_flavor_for_storage

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class CatalogService:
    """Reads and writes catalog entries and the settings singleton.

    Every read goes through ``normalize_flavor`` so callers always receive
    fully populated ``Flavor`` objects.
    """

    def __init__(self, db: Session):
        self.db = db

    def _normalize_rows(self, rows: list[FlavorRow]) -> list[Flavor]:
        return [normalize_flavor(row.to_record()) for row in rows]

    def _get_row(self, flavor_id: str) -> FlavorRow | None:
        return self.db.query(FlavorRow).filter(FlavorRow.id == flavor_id).first()

    # --- Reads ---

    def get_all_flavors(self) -> list[Flavor]:
        """All flavors, newest first."""
        rows = self.db.query(FlavorRow).order_by(FlavorRow.date_added.desc()).all()
        return self._normalize_rows(rows)

    def get_flavor(self, flavor_id: str) -> Flavor | None:
        """A single flavor, or None when the id is unknown."""
        row = self._get_row(flavor_id)
        if row is None:
            logger.info(f"Flavor {flavor_id} not found")
            return None
        return normalize_flavor(row.to_record())

    def get_flavors_by_category(self, category_type: VariantType, category: str) -> list[Flavor]:
        """Flavors carrying ``category_type`` variants and tagged ``category``.

        ``all`` matches every category. Category matching ignores case.
        """
        rows = (
            self.db.query(FlavorRow)
            .filter(FlavorRow.type.in_([category_type.value, FlavorType.BOTH.value]))
            .order_by(FlavorRow.flavor_name)
            .all()
        )
        flavors = self._normalize_rows(rows)

        wanted = category.strip().lower()
        if wanted != ALL_CATEGORIES:
            flavors = [f for f in flavors if wanted in {c.lower() for c in f.categories}]

        logger.info(f"Found {len(flavors)} flavors for {category_type.value} / {category}")
        return flavors

    def get_new_flavors(self, limit: int) -> list[Flavor]:
        """The ``limit`` most recently added flavors."""
        rows = self.db.query(FlavorRow).order_by(FlavorRow.date_added.desc()).limit(limit).all()
        return self._normalize_rows(rows)

    def search_flavors(self, query: str) -> list[Flavor]:
        """Case-insensitive substring search over name, manufacturer and description."""
        term = query.strip()
        if not term:
            return []
        pattern = f"%{_escape_like(term.lower())}%"
        rows = (
            self.db.query(FlavorRow)
            .filter(
                or_(
                    func.lower(FlavorRow.flavor_name).like(pattern, escape="\\"),
                    func.lower(FlavorRow.manufacturer).like(pattern, escape="\\"),
                    func.lower(FlavorRow.description).like(pattern, escape="\\"),
                )
            )
            .order_by(FlavorRow.flavor_name)
            .all()
        )
        return self._normalize_rows(rows)

    def get_unique_manufacturers(self) -> list[str]:
        """Distinct non-empty manufacturer names, sorted."""
        rows = (
            self.db.query(FlavorRow.manufacturer)
            .filter(FlavorRow.manufacturer.is_not(None), FlavorRow.manufacturer != "")
            .distinct()
            .order_by(FlavorRow.manufacturer)
            .all()
        )
        return [manufacturer for (manufacturer,) in rows]

    def get_settings(self) -> SettingsData:
        """Current settings; defaults when the row does not exist yet."""
        row = self.db.get(StoreSettings, SETTINGS_ROW_ID)
        if row is None:
            return SettingsData()
        return SettingsData.model_validate(row)

    def get_line_of_the_month(self) -> tuple[str | None, list[Flavor]]:
        """Promoted manufacturer and its flavors ordered by name."""
        manufacturer = self.get_settings().line_of_the_month
        if manufacturer is None:
            logger.info("No line of the month is set")
            return None, []

        rows = (
            self.db.query(FlavorRow)
            .filter(FlavorRow.manufacturer == manufacturer)
            .order_by(FlavorRow.flavor_name)
            .all()
        )
        logger.info(f"Line of the month '{manufacturer}': {len(rows)} flavors")
        return manufacturer, self._normalize_rows(rows)

    # --- Writes ---

    def _apply(self, row: FlavorRow, flavor: ValidatedFlavor) -> None:
        values = prepare_flavor_for_storage(flavor)
        if "date_added" in values:
            values["date_added"] = parse_timestamp(values["date_added"]) or datetime.now(UTC)
        for field, value in values.items():
            setattr(row, field, value)

    def add_flavor(self, flavor: ValidatedFlavor) -> Flavor:
        """Insert a validated flavor. ``date_added`` defaults to now."""
        row = FlavorRow()
        self._apply(row, flavor)
        if row.date_added is None:
            row.date_added = datetime.now(UTC)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Added flavor {row.id} '{row.flavor_name}'")
        return normalize_flavor(row.to_record())

    def update_flavor(self, flavor_id: str, flavor: ValidatedFlavor) -> Flavor | None:
        """Replace a flavor's fields. Returns None when the id is unknown."""
        row = self._get_row(flavor_id)
        if row is None:
            return None
        self._apply(row, flavor)
        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Updated flavor {row.id} '{row.flavor_name}'")
        return normalize_flavor(row.to_record())

    def delete_flavor(self, flavor_id: str) -> bool:
        """Delete a flavor. Returns False when the id is unknown."""
        row = self._get_row(flavor_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        logger.info(f"Deleted flavor {flavor_id}")
        return True

    def update_settings(self, update: SettingsUpdate) -> SettingsData:
        """Update the settings row, inserting it on first use."""
        row = self.db.get(StoreSettings, SETTINGS_ROW_ID)
        if row is None:
            logger.info("Settings row not found, inserting")
            row = StoreSettings(id=SETTINGS_ROW_ID)
            self.db.add(row)

        for field, value in update.model_dump(exclude_unset=True).items():
            setattr(row, field, value)

        self.db.commit()
        self.db.refresh(row)
        logger.info(f"Settings updated: {update.model_dump(exclude_unset=True)}")
        return SettingsData.model_validate(row)
