from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session, sessionmaker

from roomivo.core.security import user_id_from_token
from roomivo.db import SessionLocal
from roomivo.db.models.user import User
from roomivo.errors import ForbiddenError, UnauthorizedError
import roomivo.repositories.user as user_repo

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """Session factory for long-lived connections that open a session per unit of work."""
    return SessionLocal


def authenticate_token(db: Session, token: str) -> User:
    """
    Resolve a bearer token to its user.

    Raises:
        ForbiddenError: If the token is invalid, expired or not an access token
        UnauthorizedError: If the token's user no longer exists
    """
    user_id = user_id_from_token(token)
    if user_id is None:
        raise ForbiddenError("Invalid token")

    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Get the current authenticated user from the Authorization: Bearer header."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token provided")
    return authenticate_token(db, credentials.credentials)


def require_roles(*role_names: str):
    """
    Create a dependency that requires the current user to have one of the specified roles.

    Example:
        Depends(require_roles("landlord"))
        Depends(require_roles("landlord", "admin"))
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role.name not in role_names:
            raise ForbiddenError("Not enough permissions")
        return current_user

    return role_checker
