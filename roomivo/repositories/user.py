from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roomivo.db.models.user import User as UserModel
from roomivo.errors import DuplicateResourceError, NotFoundError


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def create_user(
    db: Session,
    email: str,
    password_hash: str,
    role_id: int,
    first_name: str | None = None,
    last_name: str | None = None,
) -> UserModel:
    """Create a new user in the database. Pure data access - no business logic."""
    db_user = UserModel(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=password_hash,
        role_id=role_id,
        preferred_locations=[],
        amenities_required=[],
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateResourceError("Email already registered") from e
    db.refresh(db_user)
    return db_user


def update_user_profile(db: Session, user_id: int, **kwargs) -> UserModel:
    """
    Update the matching profile of a user.

    Only keys present in kwargs are written; an explicit None clears a budget bound.
    """
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    if "budget_min" in kwargs:
        user.budget_min = kwargs["budget_min"]
    if "budget_max" in kwargs:
        user.budget_max = kwargs["budget_max"]
    if "preferred_locations" in kwargs:
        user.preferred_locations = list(kwargs["preferred_locations"] or [])
    if "amenities_required" in kwargs:
        user.amenities_required = list(kwargs["amenities_required"] or [])

    db.commit()
    db.refresh(user)
    return user
