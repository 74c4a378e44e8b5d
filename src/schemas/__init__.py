"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AdminLogin, AdminSession, AdminToken
from src.schemas.catalog import CatalogPage, CategoryVocabulary, DealsPage, FacetDomains, FilterOptions
from src.schemas.flavor import Flavor, FlavorCard, FlavorDetail, FlavorForm, FlavorVariant, VariantForm
from src.schemas.settings import LineOfTheMonthUpdate, SettingsData, SettingsUpdate

__all__ = [
    "AdminLogin",
    "AdminToken",
    "AdminSession",
    "Flavor",
    "FlavorVariant",
    "FlavorForm",
    "VariantForm",
    "FlavorCard",
    "FlavorDetail",
    "FilterOptions",
    "FacetDomains",
    "CatalogPage",
    "DealsPage",
    "CategoryVocabulary",
    "SettingsData",
    "SettingsUpdate",
    "LineOfTheMonthUpdate",
]
