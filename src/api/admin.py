"""Admin back-office API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import get_admin_session, get_catalog_service
from src.schemas.flavor import Flavor, FlavorForm
from src.schemas.settings import LineOfTheMonthUpdate, SettingsData, SettingsUpdate
from src.services.catalog_service import CatalogService
from src.services.flavor_validation import FlavorValidationError, ValidatedFlavor, validate_flavor_form

router = APIRouter(
    prefix="/api/v1/admin",
    tags=["admin"],
    dependencies=[Depends(get_admin_session)],
)


def validate_or_422(form: FlavorForm) -> ValidatedFlavor:
    """Validate a form submission, reporting the first violation."""
    try:
        return validate_flavor_form(form)
    except FlavorValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"field": e.field, "message": e.message},
        ) from e


@router.get("/flavors", response_model=list[Flavor])
def dashboard_flavors(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    q: Annotated[str, Query(max_length=200)] = "",
):
    """All flavors, optionally filtered by name or manufacturer."""
    flavors = service.get_all_flavors()
    term = q.strip().lower()
    if term:
        flavors = [f for f in flavors if term in f.flavor_name.lower() or term in f.manufacturer.lower()]
    return flavors


@router.post("/flavors", response_model=Flavor, status_code=status.HTTP_201_CREATED)
def create_flavor(
    form: FlavorForm,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Create a flavor from the admin form."""
    return service.add_flavor(validate_or_422(form))


@router.put("/flavors/{flavor_id}", response_model=Flavor)
def update_flavor(
    flavor_id: str,
    form: FlavorForm,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Update a flavor from the admin form."""
    validated = validate_or_422(form)
    flavor = service.update_flavor(flavor_id, validated)
    if flavor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Flavor not found")
    return flavor


@router.delete("/flavors/{flavor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_flavor(
    flavor_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Delete a flavor."""
    if not service.delete_flavor(flavor_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Flavor not found")


@router.put("/settings", response_model=SettingsData)
def update_settings(
    update: SettingsUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Update logo and/or line of the month."""
    return service.update_settings(update)


@router.put("/line-of-the-month", response_model=SettingsData)
def set_line_of_the_month(
    body: LineOfTheMonthUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Set the promoted manufacturer; null or blank disables the deals page."""
    return service.update_settings(SettingsUpdate(line_of_the_month=body.manufacturer))
