from sqlalchemy.orm import Session

import roomivo.repositories.user as user_repo
from roomivo.db.models.user import User as UserModel
from roomivo.errors import DomainValidationError
from roomivo.schemas.user import ProfileUpdate


def update_profile(db: Session, current_user: UserModel, data: ProfileUpdate) -> UserModel:
    """
    Update the caller's matching profile.

    Only fields present in the request are written. The resulting budget range
    (stored bounds merged with the new ones) must stay ordered.

    Raises:
        DomainValidationError: If budget_min would exceed budget_max
    """
    update_fields = data.model_dump(exclude_unset=True)

    final_min = update_fields.get("budget_min", current_user.budget_min)
    final_max = update_fields.get("budget_max", current_user.budget_max)
    if final_min is not None and final_max is not None and final_min > final_max:
        raise DomainValidationError("budgetMin cannot exceed budgetMax")

    return user_repo.update_user_profile(db, current_user.id, **update_fields)
