import logging

from sqlalchemy.orm import Session

import roomivo.repositories.property as property_repo
from roomivo.db.models.property import Property as PropertyModel
from roomivo.db.models.user import User
from roomivo.domain.ownership import ensure_owner
from roomivo.errors import NotFoundError
from roomivo.schemas.property import PropertyCreate, PropertyUpdate

logger = logging.getLogger(__name__)


def get_property(db: Session, property_id: int) -> PropertyModel:
    """
    Raises:
        NotFoundError: If the property doesn't exist
    """
    db_property = property_repo.get_property_by_id(db, property_id)
    if not db_property:
        raise NotFoundError("Property not found")
    return db_property


def list_properties_for_landlord(db: Session, landlord: User) -> list[PropertyModel]:
    return property_repo.get_properties_by_landlord_id(db, landlord.id)


def create_property(db: Session, landlord: User, data: PropertyCreate) -> PropertyModel:
    """Create a listing owned by the caller. Verification and compliance are set server-side."""
    fields = data.model_dump(exclude={"images"})
    images = [image.model_dump() for image in data.images]
    db_property = property_repo.create_property(
        db, landlord_id=landlord.id, images=images, **fields
    )
    logger.info("Landlord %s listed property %s", landlord.id, db_property.id)
    return db_property


def update_property(
    db: Session, property_id: int, current_user: User, data: PropertyUpdate
) -> PropertyModel:
    """
    Update a listing with ownership validation.

    Fields not included in the request are not updated.

    Raises:
        NotFoundError: If the property doesn't exist
        ForbiddenError: If the caller doesn't own the property
    """
    db_property = get_property(db, property_id)
    ensure_owner(current_user, db_property.landlord_id, action="update this property")

    update_fields = data.model_dump(exclude_unset=True)
    if "images" in update_fields:
        update_fields["images"] = [image.model_dump() for image in data.images or []]
    # Required columns cannot be cleared
    for key in ("title", "price"):
        if key in update_fields and update_fields[key] is None:
            del update_fields[key]

    return property_repo.update_property(db, property_id, **update_fields)


def delete_property(db: Session, property_id: int, current_user: User) -> None:
    """
    Delete a listing with ownership validation.

    Applications, contracts and messages that reference it are kept.

    Raises:
        NotFoundError: If the property doesn't exist
        ForbiddenError: If the caller doesn't own the property
    """
    db_property = get_property(db, property_id)
    ensure_owner(current_user, db_property.landlord_id, action="delete this property")

    property_repo.delete_property(db, property_id)
    logger.info("Landlord %s deleted property %s", current_user.id, property_id)
