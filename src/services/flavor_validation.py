"""Admin flavor form validation."""

import math
import re
from datetime import datetime

from pydantic import BaseModel, Field

from src.models.enums import FlavorCategory, FlavorType, VariantType
from src.schemas.flavor import FlavorForm, FlavorVariant
from src.services.normalizer import derive_flavor_type

SHORT_DESCRIPTION_FALLBACK_LENGTH = 100

_BARE_SIZE = re.compile(r"^\d+$")

_REQUIRED_TEXT_FIELDS = {
    "flavor_name": "Flavor name",
    "manufacturer": "Manufacturer",
    "description": "Description",
    "vg_pg_ratio": "VG/PG ratio",
}


class FlavorValidationError(ValueError):
    """First problem found in an admin form submission."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class ValidatedFlavor(BaseModel):
    """A form submission that passed validation, ready for storage."""

    flavor_name: str
    manufacturer: str
    description: str
    short_description: str
    categories: list[str]
    vg_pg_ratio: str
    image_url: str | None
    type: FlavorType
    variants: list[FlavorVariant] = Field(min_length=1)
    date_added: datetime | None = None


def normalize_size(size: str) -> str:
    """Append ``ml`` to bare integer sizes."""
    size = size.strip()
    if _BARE_SIZE.match(size):
        return f"{size}ml"
    return size


def _parse_price(value: object) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        price = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(price) or price < 0:
        return None
    return price


def validate_flavor_form(form: FlavorForm) -> ValidatedFlavor:
    """Validate an admin submission, raising on the first violation.

    On success variant sizes are normalized and the overall type is derived
    from the variant types.
    """
    for field, label in _REQUIRED_TEXT_FIELDS.items():
        if not getattr(form, field).strip():
            raise FlavorValidationError(field, f"{label} is required")

    if not form.categories:
        raise FlavorValidationError("categories", "Select at least one category")
    categories = []
    for name in form.categories:
        category = FlavorCategory.lookup(name)
        if category is None:
            raise FlavorValidationError("categories", f"Unknown category '{name}'")
        if category.value not in categories:
            categories.append(category.value)

    if not form.variants:
        raise FlavorValidationError("variants", "Add at least one variant")

    variants = []
    for index, variant in enumerate(form.variants, start=1):
        field = f"variants[{index}]"
        size = variant.size.strip()
        if not size:
            raise FlavorValidationError(f"{field}.size", "Size is required")
        if "ml" not in size.lower() and not _BARE_SIZE.match(size):
            raise FlavorValidationError(
                f"{field}.size", 'Size should be a number (e.g. 60) or include "ml" (e.g. 60ml)'
            )
        price = _parse_price(variant.price)
        if price is None:
            raise FlavorValidationError(f"{field}.price", "Price must be a non-negative number")
        if variant.type not in (VariantType.E_LIQUID.value, VariantType.SALT_NIC.value):
            raise FlavorValidationError(f"{field}.type", "Select E-Liquid or Salt Nic")
        if not variant.nic_levels:
            raise FlavorValidationError(f"{field}.nic_levels", f"Select at least one nic level for {variant.type}")
        variants.append(
            FlavorVariant(
                size=normalize_size(size),
                price=price,
                type=VariantType(variant.type),
                nic_levels=sorted(set(variant.nic_levels)),
            )
        )

    description = form.description.strip()
    short_description = form.short_description.strip() or description[:SHORT_DESCRIPTION_FALLBACK_LENGTH].strip()
    image_url = (form.image_url or "").strip() or None

    validated = ValidatedFlavor(
        flavor_name=form.flavor_name.strip(),
        manufacturer=form.manufacturer.strip(),
        description=description,
        short_description=short_description,
        categories=categories,
        vg_pg_ratio=form.vg_pg_ratio.strip(),
        image_url=image_url,
        type=derive_flavor_type(v.type for v in variants),
        variants=variants,
    )
    if form.date_added is not None:
        validated.date_added = form.date_added
    return validated
