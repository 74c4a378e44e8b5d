"""Flavor model."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, String, Text

from src.database import Base
from src.models.mixins import TimestampMixin


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(UTC)


class Flavor(Base, TimestampMixin):
    """Catalog entry with its purchasable variants."""

    __tablename__ = "flavors"

    id = Column(String(36), primary_key=True, default=_new_id)
    flavor_name = Column(String(255), nullable=False, index=True)
    manufacturer = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    short_description = Column(String(500), nullable=False, default="")
    # Cached projection of variant types: "E-Liquid", "Salt Nic" or "Both"
    type = Column(String(20), nullable=False, index=True)
    categories = Column(JSON, nullable=False, default=list)
    # [{"size": "60ml", "price": 19.99, "type": "E-Liquid", "nic_levels": [0, 3]}, ...]
    variants = Column(JSON, nullable=False, default=list)
    vg_pg_ratio = Column(String(20), nullable=False, default="")
    image_url = Column(String(1000), nullable=True)
    date_added = Column(DateTime(timezone=True), nullable=False, default=_now, index=True)

    # Column names, in declaration order, used to build raw records
    RECORD_FIELDS = (
        "id",
        "flavor_name",
        "manufacturer",
        "description",
        "short_description",
        "type",
        "categories",
        "variants",
        "vg_pg_ratio",
        "image_url",
        "date_added",
    )

    def to_record(self) -> dict:
        """Return the row as a plain mapping for the normalizer."""
        return {field: getattr(self, field) for field in self.RECORD_FIELDS}
