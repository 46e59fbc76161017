from datetime import datetime, timezone

from sqlalchemy.orm import Session

from roomivo.db.models.property import DEFAULT_COMPLIANCE_SCORE
from roomivo.db.models.property import Property as PropertyModel
from roomivo.db.models.property import PropertyImage as PropertyImageModel
from roomivo.errors import NotFoundError

# Columns a landlord may write through create/update
EDITABLE_FIELDS = (
    "title",
    "description",
    "address",
    "city",
    "country",
    "lat",
    "lng",
    "property_type",
    "rooms",
    "bathrooms",
    "price",
    "amenities",
)


def get_property_by_id(db: Session, property_id: int) -> PropertyModel | None:
    """Get a property by ID."""
    return db.query(PropertyModel).filter(PropertyModel.id == property_id).first()


def get_properties_by_landlord_id(db: Session, landlord_id: int) -> list[PropertyModel]:
    """Get all properties listed by a landlord."""
    return (
        db.query(PropertyModel)
        .filter(PropertyModel.landlord_id == landlord_id)
        .order_by(PropertyModel.id)
        .all()
    )


def get_property_ids_by_landlord_id(db: Session, landlord_id: int) -> list[int]:
    rows = db.query(PropertyModel.id).filter(PropertyModel.landlord_id == landlord_id).all()
    return [row.id for row in rows]


def get_verified_properties(db: Session) -> list[PropertyModel]:
    """Get every verified property in catalog (id) order."""
    return (
        db.query(PropertyModel)
        .filter(PropertyModel.verified.is_(True))
        .order_by(PropertyModel.id)
        .all()
    )


def search_properties(
    db: Session,
    city: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    rooms: int | None = None,
    limit: int = 50,
) -> list[PropertyModel]:
    """
    Search the catalog.

    Args:
        city: Case-insensitive substring of the city
        min_price: Inclusive lower price bound
        max_price: Inclusive upper price bound
        rooms: Exact room count
        limit: Maximum number of rows returned

    Each bound is applied on its own, so a missing bound leaves that side open.
    """
    query = db.query(PropertyModel)

    if city:
        # autoescape keeps % and _ in the query literal
        query = query.filter(PropertyModel.city.icontains(city, autoescape=True))
    if min_price is not None:
        query = query.filter(PropertyModel.price >= min_price)
    if max_price is not None:
        query = query.filter(PropertyModel.price <= max_price)
    if rooms is not None:
        query = query.filter(PropertyModel.rooms == rooms)

    return query.order_by(PropertyModel.id).limit(limit).all()


def _build_images(images: list[dict]) -> list[PropertyImageModel]:
    now = datetime.now(timezone.utc)
    return [
        PropertyImageModel(url=image["url"], public_id=image["public_id"], uploaded_at=now)
        for image in images
    ]


def create_property(
    db: Session,
    landlord_id: int,
    title: str,
    price: float,
    images: list[dict] | None = None,
    **fields,
) -> PropertyModel:
    """Create a new property in the database. Pure data access - no business logic."""
    db_property = PropertyModel(
        landlord_id=landlord_id,
        title=title,
        price=price,
        verified=True,
        legal_compliance_score=DEFAULT_COMPLIANCE_SCORE,
        created_at=datetime.now(timezone.utc),
        **{key: value for key, value in fields.items() if key in EDITABLE_FIELDS},
    )
    if db_property.amenities is None:
        db_property.amenities = []
    db_property.images = _build_images(images or [])
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    return db_property


def update_property(db: Session, property_id: int, **kwargs) -> PropertyModel:
    """
    Update a property. Only updates fields that are explicitly provided.

    Passing ``images`` replaces the whole image list.
    """
    db_property = get_property_by_id(db, property_id)
    if not db_property:
        raise NotFoundError("Property not found")

    for key in EDITABLE_FIELDS:
        if key in kwargs:
            setattr(db_property, key, kwargs[key])
    if db_property.amenities is None:
        db_property.amenities = []
    if "images" in kwargs:
        db_property.images = _build_images(kwargs["images"] or [])

    db.commit()
    db.refresh(db_property)
    return db_property


def delete_property(db: Session, property_id: int) -> None:
    """Delete a property and its images. Applications and messages are left alone."""
    db_property = get_property_by_id(db, property_id)
    if not db_property:
        raise NotFoundError("Property not found")

    db.delete(db_property)
    db.commit()
