from datetime import datetime, timezone

from sqlalchemy.orm import Session

from roomivo.db.models.application import Application as ApplicationModel
from roomivo.domain.application_status import PENDING
from roomivo.errors import NotFoundError


def get_application_by_id(db: Session, application_id: int) -> ApplicationModel | None:
    """Get an application by ID."""
    return db.query(ApplicationModel).filter(ApplicationModel.id == application_id).first()


def get_all_applications(db: Session) -> list[ApplicationModel]:
    return db.query(ApplicationModel).order_by(ApplicationModel.id).all()


def get_applications_by_tenant_id(db: Session, tenant_id: int) -> list[ApplicationModel]:
    """Get all applications submitted by a tenant."""
    return (
        db.query(ApplicationModel)
        .filter(ApplicationModel.tenant_id == tenant_id)
        .order_by(ApplicationModel.id)
        .all()
    )


def get_applications_by_property_ids(
    db: Session, property_ids: list[int]
) -> list[ApplicationModel]:
    """Get all applications for any of the given properties."""
    if not property_ids:
        return []
    return (
        db.query(ApplicationModel)
        .filter(ApplicationModel.property_id.in_(property_ids))
        .order_by(ApplicationModel.id)
        .all()
    )


def create_application(
    db: Session, tenant_id: int, property_id: int, **application_data
) -> ApplicationModel:
    """Create a new pending application. Pure data access - no business logic."""
    db_application = ApplicationModel(
        tenant_id=tenant_id,
        property_id=property_id,
        status=PENDING,
        move_in_date=application_data.get("move_in_date"),
        employment_status=application_data.get("employment_status"),
        annual_income=application_data.get("annual_income"),
        references=application_data.get("references"),
        pet_friendly=application_data.get("pet_friendly"),
        notes=application_data.get("notes"),
        submitted_at=datetime.now(timezone.utc),
    )
    db.add(db_application)
    db.commit()
    db.refresh(db_application)
    return db_application


def set_application_status(
    db: Session, application_id: int, status: str, reviewed_at: datetime
) -> ApplicationModel:
    """Overwrite the status and review time of an application."""
    application = get_application_by_id(db, application_id)
    if not application:
        raise NotFoundError("Application not found")

    application.status = status
    application.reviewed_at = reviewed_at
    db.commit()
    db.refresh(application)
    return application
