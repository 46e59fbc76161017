import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy.orm import Session

import roomivo.repositories.application as application_repo
import roomivo.repositories.property as property_repo
import roomivo.repositories.user as user_repo
from roomivo.db.models.application import Application as ApplicationModel
from roomivo.db.models.role import ADMIN, LANDLORD, TENANT
from roomivo.db.models.user import User
from roomivo.domain.application_status import ApplicationStatusPolicy
from roomivo.domain.ownership import ensure_owner, is_party
from roomivo.errors import DomainValidationError, ForbiddenError, NotFoundError
from roomivo.schemas.application import ApplicationCreate

logger = logging.getLogger(__name__)

status_policy = ApplicationStatusPolicy()


@dataclass(frozen=True, slots=True)
class NotificationTargets:
    tenant_email: str | None
    landlord_email: str | None
    property_title: str


def submit_application(
    db: Session, tenant: User, data: ApplicationCreate
) -> ApplicationModel:
    """
    Record a tenant's application for a property. Starts as pending.

    Raises:
        NotFoundError: If the property doesn't exist
    """
    if not property_repo.get_property_by_id(db, data.property_id):
        raise NotFoundError(f"Property with id {data.property_id} not found")

    application = application_repo.create_application(
        db,
        tenant_id=tenant.id,
        property_id=data.property_id,
        **data.application_data.model_dump(),
    )
    logger.info(
        "Tenant %s applied for property %s (application %s)",
        tenant.id,
        data.property_id,
        application.id,
    )
    return application


def list_applications_for_user(db: Session, current_user: User) -> list[ApplicationModel]:
    """
    List applications visible to the given user.

    - Tenant: their own applications
    - Landlord: applications on properties they own
    - Admin: every application
    """
    role = current_user.role.name
    if role == ADMIN:
        return application_repo.get_all_applications(db)
    if role == LANDLORD:
        property_ids = property_repo.get_property_ids_by_landlord_id(db, current_user.id)
        return application_repo.get_applications_by_property_ids(db, property_ids)
    if role == TENANT:
        return application_repo.get_applications_by_tenant_id(db, current_user.id)
    return []


def _landlord_id_for(db: Session, application: ApplicationModel) -> int | None:
    db_property = property_repo.get_property_by_id(db, application.property_id)
    return db_property.landlord_id if db_property else None


def get_application(db: Session, application_id: int, current_user: User) -> ApplicationModel:
    """
    Get an application visible to the caller (applicant, property landlord or admin).

    Raises:
        NotFoundError: If the application doesn't exist
        ForbiddenError: If the caller is not a party
    """
    application = application_repo.get_application_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")

    if current_user.role.name != ADMIN and not is_party(
        current_user, application.tenant_id, _landlord_id_for(db, application)
    ):
        raise ForbiddenError("Not enough permissions")
    return application


def review_application(
    db: Session, application_id: int, current_user: User, status: str
) -> ApplicationModel:
    """
    Accept or reject a pending application.

    - Only the landlord owning the application's property may review it
    - Only pending -> accepted/rejected is allowed

    Raises:
        NotFoundError: If the application doesn't exist
        ForbiddenError: If the caller doesn't own the property
        DomainValidationError: If the transition is not allowed
    """
    application = application_repo.get_application_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")

    ensure_owner(
        current_user, _landlord_id_for(db, application), action="review this application"
    )

    if not status_policy.can_transition(application.status, status):
        raise DomainValidationError(
            f"Cannot change application status from '{application.status}' to '{status}'"
        )

    application = application_repo.set_application_status(
        db, application_id, status, reviewed_at=datetime.now(timezone.utc)
    )
    logger.info(
        "Landlord %s %s application %s", current_user.id, status, application_id
    )
    return application


def notification_targets(db: Session, application: ApplicationModel) -> NotificationTargets:
    """Who to e-mail about an application, and what the listing is called."""
    db_property = property_repo.get_property_by_id(db, application.property_id)
    tenant = user_repo.get_user_by_id(db, application.tenant_id)
    landlord = user_repo.get_user_by_id(db, db_property.landlord_id) if db_property else None
    return NotificationTargets(
        tenant_email=tenant.email if tenant else None,
        landlord_email=landlord.email if landlord else None,
        property_title=db_property.title if db_property else f"property #{application.property_id}",
    )


def authorize_application_join(db: Session, application_id: int, current_user: User) -> None:
    """
    Check that the caller may follow an application's real-time room.

    Raises:
        NotFoundError: If the application doesn't exist
        ForbiddenError: If the caller is neither the applicant nor the landlord
    """
    application = application_repo.get_application_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")
    ensure_owner(
        current_user,
        application.tenant_id,
        _landlord_id_for(db, application),
        action="join this application room",
    )
