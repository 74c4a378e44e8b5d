"""Enums for model fields."""

from enum import Enum


class VariantType(str, Enum):
    """Nicotine-delivery format of a single variant."""

    E_LIQUID = "E-Liquid"
    SALT_NIC = "Salt Nic"

    @classmethod
    def from_slug(cls, slug: str) -> "VariantType | None":
        """Resolve a URL slug such as ``e-liquid`` or ``Salt-Nic``."""
        normalized = slug.strip().lower().replace(" ", "-")
        return _VARIANT_TYPE_SLUGS.get(normalized)


_VARIANT_TYPE_SLUGS = {
    "e-liquid": VariantType.E_LIQUID,
    "eliquid": VariantType.E_LIQUID,
    "salt-nic": VariantType.SALT_NIC,
    "saltnic": VariantType.SALT_NIC,
}


class FlavorType(str, Enum):
    """Overall flavor type, derived from the variant types present."""

    E_LIQUID = "E-Liquid"
    SALT_NIC = "Salt Nic"
    BOTH = "Both"


class FlavorCategory(str, Enum):
    """Closed vocabulary of flavor categories."""

    FRUIT = "Fruit"
    DESSERT = "Dessert"
    BREAKFAST = "Breakfast"
    CANDY = "Candy"
    DRINKS = "Drinks"
    MENTHOL = "Menthol"
    TOBACCO = "Tobacco"
    NUTS = "Nuts"
    OTHER = "Other"

    @classmethod
    def lookup(cls, name: str) -> "FlavorCategory | None":
        """Case-insensitive lookup by display name."""
        for category in cls:
            if category.value.lower() == name.strip().lower():
                return category
        return None


class SortOrder(str, Enum):
    """Sort keys offered on catalog views."""

    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NEWEST = "newest"


# Nic levels (mg) offered by the admin form per variant type.
NIC_LEVEL_OPTIONS: dict[VariantType, list[int]] = {
    VariantType.E_LIQUID: [0, 3, 6, 9, 12, 18, 24],
    VariantType.SALT_NIC: [10, 15, 20, 24, 25, 28, 30, 35, 48, 50, 55],
}
