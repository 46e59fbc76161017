from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db, require_roles
from roomivo.core.config import settings
from roomivo.db.models.user import User
import roomivo.repositories.property as property_repo
from roomivo.schemas.property import Property, PropertyCreate, PropertyUpdate
from roomivo.services.property import (
    create_property,
    delete_property,
    get_property,
    list_properties_for_landlord,
    update_property,
)

router = APIRouter(tags=["properties"])


@router.get("/properties", response_model=list[Property])
def search_properties(
    city: str | None = Query(None, description="Case-insensitive partial city match"),
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    rooms: int | None = Query(None, ge=0, description="Exact number of rooms"),
    db: Session = Depends(get_db),
):
    """
    Search listings. Public endpoint.

    Every filter is optional; price bounds are inclusive and independent.
    At most 50 listings are returned, in catalog order.
    """
    properties = property_repo.search_properties(
        db,
        city=city,
        min_price=min_price,
        max_price=max_price,
        rooms=rooms,
        limit=settings.search_result_limit,
    )
    return [Property.model_validate(p) for p in properties]


@router.get("/properties/{property_id}", response_model=Property)
def get_property_by_id(property_id: int, db: Session = Depends(get_db)):
    """Get a listing by ID. Public endpoint."""
    return Property.model_validate(get_property(db, property_id))


@router.get("/my-properties", response_model=list[Property])
def get_my_properties(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Listings owned by the caller."""
    properties = list_properties_for_landlord(db, current_user)
    return [Property.model_validate(p) for p in properties]


@router.post("/properties", response_model=Property, status_code=status.HTTP_201_CREATED)
def create_new_property(
    property_data: PropertyCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("landlord", "admin")),
):
    """
    Create a listing owned by the caller. Only landlords (and admins) can list.
    """
    return Property.model_validate(create_property(db, current_user, property_data))


@router.put("/properties/{property_id}", response_model=Property)
def update_property_by_id(
    property_id: int,
    property_data: PropertyUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Update a listing. Only its owner can update it.

    Fields not included in the request are not updated; sending ``images``
    replaces the whole image list.
    """
    updated = update_property(db, property_id, current_user, property_data)
    return Property.model_validate(updated)


@router.delete("/properties/{property_id}")
def delete_property_by_id(
    property_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete a listing. Only its owner can delete it."""
    delete_property(db, property_id, current_user)
    return {"message": "Property deleted"}
