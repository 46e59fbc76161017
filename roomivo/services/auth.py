"""Auth service: registration and login."""

import logging

from sqlalchemy.orm import Session

import roomivo.repositories.role as role_repo
import roomivo.repositories.user as user_repo
from roomivo.core.security import (
    create_access_token,
    get_password_hash,
    validate_password,
    verify_password,
)
from roomivo.errors import (
    DomainValidationError,
    DuplicateResourceError,
    MissingCredentialsError,
    NotFoundError,
    UnauthorizedError,
)
from roomivo.schemas.user import AuthResponse, User, UserRegister

logger = logging.getLogger(__name__)


def _auth_response(user) -> AuthResponse:
    token = create_access_token(user.id, user.email)
    return AuthResponse(token=token, token_type="bearer", user=User.model_validate(user))


def register(db: Session, data: UserRegister) -> AuthResponse:
    """
    Register a tenant or landlord and return a bearer token.

    Raises:
        MissingCredentialsError: If email or password is absent.
        DuplicateResourceError: If the email is already registered.
        DomainValidationError: If the password is too weak.
    """
    if not data.email or not data.password:
        raise MissingCredentialsError("Email and password required")

    if user_repo.get_user_by_email(db, data.email):
        raise DuplicateResourceError("Email already registered")

    is_valid, error_message = validate_password(data.password)
    if not is_valid:
        raise DomainValidationError(error_message)

    role = role_repo.get_role_by_name(db, data.role)
    if not role:
        raise NotFoundError(f"Role '{data.role}' not found")

    user = user_repo.create_user(
        db,
        email=data.email,
        first_name=data.first_name,
        last_name=data.last_name,
        password_hash=get_password_hash(data.password),
        role_id=role.id,
    )
    logger.info("Registered %s user %s", role.name, user.id)
    return _auth_response(user)


def login(db: Session, email: str | None, password: str | None) -> AuthResponse:
    """
    Authenticate user by email and password, return a bearer token.

    Raises:
        MissingCredentialsError: If email or password is absent.
        UnauthorizedError: If email not found or password incorrect.
    """
    if not email or not password:
        raise MissingCredentialsError("Email and password required")

    user = user_repo.get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for %s", email)
        raise UnauthorizedError("Incorrect email or password")

    return _auth_response(user)
