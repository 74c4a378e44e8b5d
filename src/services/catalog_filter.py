"""Catalog filter/sort engine.

Filtering is catalog-wide: every clause looks at all of a flavor's variants.
Price sorting and card display are scoped to the current category type, so a
flavor matched on its Salt Nic variant still shows up on an E-Liquid page but
is priced by its E-Liquid variant there.
"""

import math
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext
from functools import cached_property

from src.models.enums import SortOrder, VariantType
from src.schemas.catalog import FacetDomains, FilterOptions
from src.schemas.flavor import Flavor, FlavorCard, FlavorDetail, FlavorVariant

NOT_AVAILABLE = "N/A"
PLACEHOLDER_IMAGE_URL = "/placeholder.svg"
BLURB_LENGTH = 50


def derive_facets(flavors: Sequence[Flavor]) -> FacetDomains:
    """Compute the filter control domains for a catalog list."""
    sizes: set[str] = set()
    nic_levels: set[int] = set()
    ratios: set[str] = set()
    max_price = 1.0

    for flavor in flavors:
        if flavor.vg_pg_ratio:
            ratios.add(flavor.vg_pg_ratio)
        for variant in flavor.variants:
            sizes.add(variant.size)
            nic_levels.update(variant.nic_levels)
            max_price = max(max_price, variant.price)

    return FacetDomains(
        sizes=sorted(sizes),
        nic_levels=sorted(nic_levels),
        vg_pg_ratios=sorted(ratios),
        max_price=max_price,
    )


def matches_filters(flavor: Flavor, options: FilterOptions) -> bool:
    """Check a flavor against every active filter clause."""
    variants = flavor.variants

    if options.sizes:
        wanted_sizes = set(options.sizes)
        if not any(v.size in wanted_sizes for v in variants):
            return False

    if options.nic_levels:
        wanted_levels = set(options.nic_levels)
        if not any(wanted_levels.intersection(v.nic_levels) for v in variants):
            return False

    if options.price_range is not None:
        low, high = options.price_range
        if not any(low <= v.price <= high for v in variants):
            return False

    if options.vg_pg_ratios and flavor.vg_pg_ratio not in options.vg_pg_ratios:
        return False

    return True


def filter_flavors(flavors: Sequence[Flavor], options: FilterOptions) -> list[Flavor]:
    """Return the flavors passing all active filters, in input order."""
    if options.is_empty:
        return list(flavors)
    return [flavor for flavor in flavors if matches_filters(flavor, options)]


def matching_variants(flavor: Flavor, category_type: VariantType) -> list[FlavorVariant]:
    """Variants of ``flavor`` that belong to ``category_type``."""
    return [v for v in flavor.variants if v.type == category_type]


def min_price(flavor: Flavor, category_type: VariantType) -> float:
    """Lowest price among matching variants; infinity when there are none."""
    prices = [v.price for v in matching_variants(flavor, category_type)]
    return min(prices) if prices else math.inf


def _name_key(flavor: Flavor) -> tuple[str, str]:
    # Case-insensitive first so "apple" and "Banana" sort alphabetically
    name = flavor.flavor_name or ""
    return name.casefold(), name


def sort_flavors(
    flavors: Sequence[Flavor],
    sort_order: SortOrder,
    category_type: VariantType,
) -> list[Flavor]:
    """Stable sort of ``flavors``.

    Flavors without a variant of ``category_type`` price as infinity, so they
    sort last for ``price-asc`` and first for ``price-desc``. Descending
    orders use ``reverse=True`` which keeps ties in input order.
    """
    if sort_order == SortOrder.NAME_ASC:
        return sorted(flavors, key=_name_key)
    if sort_order == SortOrder.NAME_DESC:
        return sorted(flavors, key=_name_key, reverse=True)
    if sort_order == SortOrder.PRICE_ASC:
        return sorted(flavors, key=lambda f: min_price(f, category_type))
    if sort_order == SortOrder.PRICE_DESC:
        return sorted(flavors, key=lambda f: min_price(f, category_type), reverse=True)
    if sort_order == SortOrder.NEWEST:
        return sorted(flavors, key=lambda f: f.date_added, reverse=True)
    raise ValueError(f"Unknown sort order: {sort_order}")


def format_size(size: str) -> str:
    """Append ``ml`` unless the size already mentions it."""
    if "ml" in size.lower():
        return size
    return f"{size}ml"


def format_price(price: float) -> str:
    """Whole-dollar price, rounding halves up."""
    if not math.isfinite(price):
        return NOT_AVAILABLE
    with localcontext() as ctx:
        # Enough digits for the integer part of any finite float
        ctx.prec = 400
        rounded = Decimal(str(price)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"${rounded}"


def display_size(flavor: Flavor, category_type: VariantType) -> str:
    """Size of the first variant of ``category_type``, or ``N/A``."""
    variants = matching_variants(flavor, category_type)
    if not variants or not variants[0].size.strip():
        return NOT_AVAILABLE
    return format_size(variants[0].size)


def display_price(flavor: Flavor, category_type: VariantType) -> str:
    """Price of the first variant of ``category_type``, or ``N/A``."""
    variants = matching_variants(flavor, category_type)
    if not variants:
        return NOT_AVAILABLE
    return format_price(variants[0].price)


def blurb(flavor: Flavor) -> str:
    """Short description, or a truncated description."""
    if flavor.short_description:
        return flavor.short_description
    if not flavor.description:
        return ""
    return flavor.description[:BLURB_LENGTH] + "..."


def image_or_placeholder(flavor: Flavor) -> str:
    return flavor.image_url or PLACEHOLDER_IMAGE_URL


def to_card(flavor: Flavor, category_type: VariantType) -> FlavorCard:
    """Attach the card display values for ``category_type``."""
    return FlavorCard(
        **flavor.model_dump(),
        display_size=display_size(flavor, category_type),
        display_price=display_price(flavor, category_type),
        blurb=blurb(flavor),
        image=image_or_placeholder(flavor),
    )


def to_detail(flavor: Flavor) -> FlavorDetail:
    """Group a flavor's variants by type for the detail view."""
    return FlavorDetail(
        **flavor.model_dump(),
        e_liquid_variants=matching_variants(flavor, VariantType.E_LIQUID),
        salt_nic_variants=matching_variants(flavor, VariantType.SALT_NIC),
        image=image_or_placeholder(flavor),
    )


class CatalogBrowser:
    """Filter/sort views over one catalog list.

    Facet domains depend only on the catalog list, so they are computed once
    per browser and reused across filter and sort changes.
    """

    def __init__(self, flavors: Sequence[Flavor]):
        self.flavors = list(flavors)

    @cached_property
    def facets(self) -> FacetDomains:
        return derive_facets(self.flavors)

    def view(
        self,
        options: FilterOptions | None = None,
        sort_order: SortOrder = SortOrder.NAME_ASC,
        category_type: VariantType = VariantType.E_LIQUID,
    ) -> list[Flavor]:
        """Filtered, sorted flavors."""
        filtered = filter_flavors(self.flavors, options or FilterOptions())
        return sort_flavors(filtered, sort_order, category_type)

    def cards(
        self,
        options: FilterOptions | None = None,
        sort_order: SortOrder = SortOrder.NAME_ASC,
        category_type: VariantType = VariantType.E_LIQUID,
    ) -> list[FlavorCard]:
        """Filtered, sorted flavors rendered as cards."""
        return [to_card(f, category_type) for f in self.view(options, sort_order, category_type)]
