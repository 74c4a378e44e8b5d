"""Store settings model."""

from sqlalchemy import Column, Integer, String

from src.database import Base
from src.models.mixins import TimestampMixin

SETTINGS_ROW_ID = 1


class StoreSettings(Base, TimestampMixin):
    """Singleton row holding storefront configuration."""

    __tablename__ = "store_settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ROW_ID)
    logo_url = Column(String(1000), nullable=True)
    # Manufacturer promoted on the deals page; NULL disables the feature
    line_of_the_month = Column(String(255), nullable=True)
