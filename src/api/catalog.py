"""Public catalog API endpoints."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from src.api.dependencies import get_catalog_service, parse_category_type
from src.config import get_settings
from src.models.enums import NIC_LEVEL_OPTIONS, FlavorCategory, SortOrder, VariantType
from src.schemas.catalog import CatalogPage, CategoryVocabulary, DealsPage, FilterOptions
from src.schemas.flavor import Flavor, FlavorCard, FlavorDetail
from src.schemas.settings import SettingsData
from src.services.catalog_filter import CatalogBrowser, to_card, to_detail
from src.services.catalog_service import ALL_CATEGORIES, CatalogService

router = APIRouter(prefix="/api/v1", tags=["catalog"])


def get_filter_options(
    sizes: Annotated[list[str], Query()] = [],  # noqa: B006
    nic_levels: Annotated[list[int], Query()] = [],  # noqa: B006
    vg_pg_ratios: Annotated[list[str], Query()] = [],  # noqa: B006
    min_price: Annotated[float | None, Query(ge=0)] = None,
    max_price: Annotated[float | None, Query(ge=0)] = None,
) -> FilterOptions:
    """Build filter options from query parameters."""
    price_range = None
    if min_price is not None or max_price is not None:
        price_range = (min_price or 0, max_price if max_price is not None else math.inf)
    try:
        return FilterOptions(
            sizes=sizes,
            nic_levels=nic_levels,
            vg_pg_ratios=vg_pg_ratios,
            price_range=price_range,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="min_price must not exceed max_price",
        ) from e


def build_catalog_page(
    flavors: list[Flavor],
    options: FilterOptions,
    sort: SortOrder,
    category_type: VariantType,
) -> CatalogPage:
    """Run flavors through the filter/sort engine."""
    browser = CatalogBrowser(flavors)
    items = browser.cards(options, sort, category_type)
    return CatalogPage(
        category_type=category_type,
        sort=sort,
        total=len(items),
        items=items,
        facets=browser.facets,
    )


@router.get("/flavors", response_model=CatalogPage)
def list_flavors(
    options: Annotated[FilterOptions, Depends(get_filter_options)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    sort: SortOrder = SortOrder.NAME_ASC,
    category_type: VariantType = VariantType.E_LIQUID,
):
    """Browse the whole catalog."""
    return build_catalog_page(service.get_all_flavors(), options, sort, category_type)


@router.get("/flavors/new", response_model=list[FlavorCard])
def new_flavors(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    category_type: VariantType = VariantType.E_LIQUID,
):
    """Recently added flavors."""
    flavors = service.get_new_flavors(limit or get_settings().new_flavors_limit)
    return [to_card(f, category_type) for f in flavors]


@router.get("/flavors/{flavor_id}", response_model=FlavorDetail)
def get_flavor(
    flavor_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Flavor detail page."""
    flavor = service.get_flavor(flavor_id)
    if flavor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Flavor not found")
    return to_detail(flavor)


@router.get("/types/{type_slug}/categories/{category}", response_model=CatalogPage)
def category_page(
    type_slug: str,
    category: str,
    options: Annotated[FilterOptions, Depends(get_filter_options)],
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    sort: SortOrder = SortOrder.NAME_ASC,
):
    """Browse one category of one category type."""
    category_type = parse_category_type(type_slug)
    if category.lower() != ALL_CATEGORIES and FlavorCategory.lookup(category) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown category '{category}'",
        )
    flavors = service.get_flavors_by_category(category_type, category)
    return build_catalog_page(flavors, options, sort, category_type)


@router.get("/search", response_model=list[FlavorCard])
def search(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str, Query(max_length=200)] = "",
    category_type: VariantType = VariantType.E_LIQUID,
):
    """Search flavors by name, manufacturer or description."""
    return [to_card(f, category_type) for f in service.search_flavors(q)]


@router.get("/deals", response_model=DealsPage)
def deals(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    category_type: VariantType = VariantType.E_LIQUID,
):
    """Flavors of the line of the month."""
    manufacturer, flavors = service.get_line_of_the_month()
    return DealsPage(
        manufacturer=manufacturer,
        items=[to_card(f, category_type) for f in flavors],
    )


@router.get("/categories", response_model=CategoryVocabulary)
def categories():
    """Category vocabulary and nic level choices."""
    return CategoryVocabulary(
        categories=[c.value for c in FlavorCategory],
        nic_levels={t.value: levels for t, levels in NIC_LEVEL_OPTIONS.items()},
    )


@router.get("/manufacturers", response_model=list[str])
def manufacturers(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Distinct manufacturer names."""
    return service.get_unique_manufacturers()


@router.get("/settings", response_model=SettingsData)
def store_settings(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Logo and line of the month."""
    return service.get_settings()
