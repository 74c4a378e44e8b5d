"""Conversion between raw storage records and canonical flavors.

``normalize_flavor`` is total: any mapping, however partial or loosely typed,
becomes a fully populated ``Flavor``. ``prepare_flavor_for_storage`` is its
inverse for partial updates and only emits the keys it was given.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.models.enums import FlavorType, VariantType
from src.schemas.flavor import Flavor, FlavorVariant

# Storage column -> legacy camelCase key accepted on input
_FIELD_ALIASES = {
    "flavor_name": "flavorName",
    "short_description": "shortDescription",
    "vg_pg_ratio": "vgPgRatio",
    "image_url": "imageURL",
    "date_added": "dateAdded",
    "nic_levels": "nicLevels",
}

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

STORAGE_FIELDS = (
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


def _pick(record: Mapping[str, Any], key: str) -> Any:
    if key in record:
        return record[key]
    alias = _FIELD_ALIASES.get(key)
    if alias is not None:
        return record.get(alias)
    return None


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _finite_float(value: Any) -> float | None:
    """Float value of a number or numeric string, or None if it has none."""
    if isinstance(value, str):
        value = value.strip()
    elif not _is_number(value):
        return None
    try:
        number = float(value)
    except (OverflowError, ValueError):
        return None
    return number if math.isfinite(number) else None


def coerce_price(value: Any) -> float:
    """Coerce a price to a float, falling back to 0."""
    price = _finite_float(value)
    return 0.0 if price is None else price


def _nic_levels(value: Any) -> list[int]:
    if not isinstance(value, list):
        return []
    levels = []
    for level in value:
        if isinstance(level, str):
            continue
        number = _finite_float(level)
        if number is not None and number.is_integer():
            levels.append(int(level))
    return levels


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a stored timestamp; naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _date_added(value: Any) -> datetime:
    # Absent dates become "now" and the original value is lost. Unparseable
    # ones become the epoch so they sort as the oldest.
    if value is None:
        return datetime.now(UTC)
    return parse_timestamp(value) or EPOCH


def derive_flavor_type(variant_types: Iterable[VariantType]) -> FlavorType | None:
    """Overall type from the variant types present, or None if there are none."""
    present = set(variant_types)
    if {VariantType.E_LIQUID, VariantType.SALT_NIC} <= present:
        return FlavorType.BOTH
    if VariantType.E_LIQUID in present:
        return FlavorType.E_LIQUID
    if VariantType.SALT_NIC in present:
        return FlavorType.SALT_NIC
    return None


def normalize_variant(raw: Any) -> FlavorVariant:
    """Rebuild a single variant from a loosely typed mapping."""
    if not isinstance(raw, Mapping):
        raw = {}
    raw_type = raw.get("type")
    variant_type = VariantType(raw_type) if raw_type in ("E-Liquid", "Salt Nic") else VariantType.E_LIQUID
    size = raw.get("size")
    if isinstance(size, float):
        size = str(int(size)) if size.is_integer() else str(size)
    elif _is_number(size):
        size = str(size)
    return FlavorVariant(
        size=_text(size),
        price=coerce_price(raw.get("price")),
        type=variant_type,
        nic_levels=_nic_levels(_pick(raw, "nic_levels")),
    )


def normalize_flavor(record: Mapping[str, Any]) -> Flavor:
    """Convert a raw record into a canonical ``Flavor``. Never raises."""
    if not isinstance(record, Mapping):
        record = {}

    raw_variants = record.get("variants")
    variants = [normalize_variant(v) for v in raw_variants] if isinstance(raw_variants, list) else []

    flavor_type = derive_flavor_type(v.type for v in variants)
    if flavor_type is None:
        stored_type = record.get("type")
        flavor_type = FlavorType(stored_type) if stored_type in ("E-Liquid", "Salt Nic", "Both") else FlavorType.BOTH

    raw_categories = record.get("categories")
    categories = [c for c in raw_categories if isinstance(c, str)] if isinstance(raw_categories, list) else []

    raw_id = record.get("id")
    image_url = _pick(record, "image_url")

    return Flavor(
        id=str(raw_id) if raw_id is not None else "",
        flavor_name=_text(_pick(record, "flavor_name")),
        manufacturer=_text(record.get("manufacturer")),
        description=_text(record.get("description")),
        short_description=_text(_pick(record, "short_description")),
        type=flavor_type,
        categories=categories,
        variants=variants,
        vg_pg_ratio=_text(_pick(record, "vg_pg_ratio")),
        image_url=image_url if isinstance(image_url, str) and image_url else None,
        date_added=_date_added(_pick(record, "date_added")),
    )


def prepare_flavor_for_storage(flavor: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """Map a (partial) flavor to storage columns, keeping only provided keys.

    Pydantic models contribute only the fields that were explicitly set. The
    ``id`` is always dropped and ``date_added`` is serialized to ISO 8601.
    """
    if isinstance(flavor, BaseModel):
        data = flavor.model_dump(exclude_unset=True)
    else:
        data = dict(flavor)

    prepared: dict[str, Any] = {}
    for field in STORAGE_FIELDS:
        if field not in data:
            continue
        value = data[field]
        if field == "variants" and value is not None:
            value = [_variant_for_storage(v) for v in value]
        elif field == "type" and isinstance(value, Enum):
            value = value.value
        elif field == "categories" and value is not None:
            value = [c.value if isinstance(c, Enum) else c for c in value]
        elif field == "date_added" and isinstance(value, datetime):
            value = value.isoformat()
        prepared[field] = value
    return prepared


def _variant_for_storage(variant: Any) -> dict[str, Any]:
    if isinstance(variant, BaseModel):
        return variant.model_dump(mode="json")
    stored = dict(variant)
    if isinstance(stored.get("type"), Enum):
        stored["type"] = stored["type"].value
    return stored
