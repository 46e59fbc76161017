from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db
from roomivo.db.models.user import User as UserModel
from roomivo.schemas.user import ProfileUpdate, User
from roomivo.services.user import update_profile

router = APIRouter(prefix="/users", tags=["users"])


@router.put("/me/profile", response_model=User)
def update_my_profile(
    profile_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: UserModel = Depends(get_current_user),
):
    """
    Update the caller's matching profile (budget range, preferred locations,
    required amenities). Fields not included in the request are not updated.
    """
    user = update_profile(db, current_user, profile_data)
    return User.model_validate(user)
