from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from roomivo.api.deps import get_db
import roomivo.repositories.role as role_repo
from roomivo.schemas.role import Role

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("", response_model=list[Role])
def get_roles(db: Session = Depends(get_db)):
    return role_repo.get_all_roles(db)
