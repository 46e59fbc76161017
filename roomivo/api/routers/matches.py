from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db
from roomivo.db.models.user import User
from roomivo.schemas.property import PropertyMatch
from roomivo.services.matching import find_matches

router = APIRouter(prefix="/matches", tags=["matches"])


@router.get("", response_model=list[PropertyMatch])
def get_matches(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Top five verified listings for the caller's profile, best score first.

    Scores combine budget fit, preferred location, required amenities and the
    listing's compliance score.
    """
    return find_matches(db, current_user)
