from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db
from roomivo.db.models.user import User as UserModel
from roomivo.schemas.user import AuthResponse, LoginRequest, User, UserRegister
from roomivo.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(data: UserRegister, db: Session = Depends(get_db)):
    """
    Register a tenant or landlord account and return a bearer token.

    Missing email or password and duplicate emails both answer 400.
    """
    return auth_service.register(db, data)


@router.post("/login", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """Login endpoint - returns a bearer token valid for 24 hours by default."""
    return auth_service.login(db, credentials.email, credentials.password)


@router.get("/me", response_model=User)
def get_current_user_info(current_user: UserModel = Depends(get_current_user)):
    """Get current authenticated user information, including the matching profile."""
    return User.model_validate(current_user)
