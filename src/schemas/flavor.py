"""Flavor schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.models.enums import FlavorType, VariantType


class FlavorVariant(BaseModel):
    """One purchasable SKU of a flavor."""

    size: str = ""
    price: float = 0
    type: VariantType = VariantType.E_LIQUID
    nic_levels: list[int] = Field(default_factory=list)


class Flavor(BaseModel):
    """Canonical in-memory flavor, as produced by the normalizer."""

    id: str
    flavor_name: str = ""
    manufacturer: str = ""
    description: str = ""
    short_description: str = ""
    type: FlavorType = FlavorType.BOTH
    categories: list[str] = Field(default_factory=list)
    variants: list[FlavorVariant] = Field(default_factory=list)
    vg_pg_ratio: str = ""
    image_url: str | None = None
    date_added: datetime


class VariantForm(BaseModel):
    """A variant row as submitted by the admin form.

    Fields are loosely typed on purpose; the validator reports the first
    problem instead of a schema error.
    """

    size: str = ""
    price: str | float | int | None = None
    type: str | None = None
    nic_levels: list[int] = Field(default_factory=list)


class FlavorForm(BaseModel):
    """Admin create/update submission."""

    flavor_name: str = Field("", max_length=255)
    manufacturer: str = Field("", max_length=255)
    description: str = ""
    short_description: str = Field("", max_length=500)
    categories: list[str] = Field(default_factory=list)
    vg_pg_ratio: str = Field("", max_length=20)
    image_url: str | None = Field(None, max_length=1000)
    variants: list[VariantForm] = Field(default_factory=list)
    date_added: datetime | None = None


class FlavorCard(Flavor):
    """Flavor plus the values a grid card displays for a category type."""

    display_size: str
    display_price: str
    blurb: str
    image: str


class FlavorDetail(Flavor):
    """Flavor detail with variants grouped by type."""

    e_liquid_variants: list[FlavorVariant]
    salt_nic_variants: list[FlavorVariant]
    image: str
