"""Catalog view schemas."""

from pydantic import BaseModel, Field, model_validator

from src.models.enums import SortOrder, VariantType
from src.schemas.flavor import FlavorCard


class FilterOptions(BaseModel):
    """Active filter criteria. Empty selections match everything."""

    sizes: list[str] = Field(default_factory=list)
    nic_levels: list[int] = Field(default_factory=list)
    price_range: tuple[float, float] | None = None
    vg_pg_ratios: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_price_range(self) -> "FilterOptions":
        """Reject an inverted price range."""
        if self.price_range is not None and self.price_range[0] > self.price_range[1]:
            raise ValueError("price_range minimum must not exceed maximum")
        return self

    @property
    def is_empty(self) -> bool:
        """Check if no filter is active."""
        return not (self.sizes or self.nic_levels or self.vg_pg_ratios) and self.price_range is None


class FacetDomains(BaseModel):
    """Distinct values available to the filter controls."""

    sizes: list[str]
    nic_levels: list[int]
    vg_pg_ratios: list[str]
    max_price: float


class CatalogPage(BaseModel):
    """A filtered, sorted catalog view."""

    category_type: VariantType
    sort: SortOrder
    total: int
    items: list[FlavorCard]
    facets: FacetDomains


class DealsPage(BaseModel):
    """Line of the month view."""

    manufacturer: str | None
    items: list[FlavorCard]


class CategoryVocabulary(BaseModel):
    """Categories and nic level choices offered to clients."""

    categories: list[str]
    nic_levels: dict[str, list[int]]
