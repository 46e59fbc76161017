from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db, require_roles
from roomivo.db.models.user import User
from roomivo.schemas.application import Application, ApplicationCreate, ApplicationReview
from roomivo.services.application import (
    get_application,
    list_applications_for_user,
    notification_targets,
    review_application,
    submit_application,
)
from roomivo.services.chat_relay import (
    APPLICATION_UPDATED,
    ChatRelay,
    application_room,
    get_chat_relay,
)
from roomivo.services.email import notify_application_reviewed, notify_new_application

router = APIRouter(prefix="/applications", tags=["applications"])


@router.post("", response_model=Application, status_code=status.HTTP_201_CREATED)
def create_new_application(
    application_data: ApplicationCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles("tenant")),
):
    """
    Apply for a property. Only tenants can apply.

    The landlord is e-mailed in the background when SMTP is configured.
    """
    application = submit_application(db, current_user, application_data)
    targets = notification_targets(db, application)
    if targets.landlord_email:
        background_tasks.add_task(
            notify_new_application, targets.landlord_email, targets.property_title, application.id
        )
    return Application.from_model(application)


@router.get("", response_model=list[Application])
def get_applications(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Get applications.
    - Tenant: their own applications
    - Landlord: applications for the properties they own
    - Admin: all applications
    """
    applications = list_applications_for_user(db, current_user)
    return [Application.from_model(a) for a in applications]


@router.get("/{application_id}", response_model=Application)
def get_application_by_id(
    application_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get an application. Visible to the applicant, the property's landlord and admins."""
    return Application.from_model(get_application(db, application_id, current_user))


@router.put("/{application_id}", response_model=Application)
async def review_application_by_id(
    application_id: int,
    review: ApplicationReview,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    relay: ChatRelay = Depends(get_chat_relay),
):
    """
    Accept or reject a pending application. Only the landlord owning the
    property can review it, and only once.

    The change is pushed to the application's real-time room and e-mailed to
    the tenant.
    """
    application = review_application(db, application_id, current_user, review.status)
    targets = notification_targets(db, application)
    if targets.tenant_email:
        background_tasks.add_task(
            notify_application_reviewed,
            targets.tenant_email,
            targets.property_title,
            application.id,
            application.status,
        )

    response = Application.from_model(application)
    await relay.broadcast(
        application_room(application.id),
        APPLICATION_UPDATED,
        response.model_dump(by_alias=True),
    )
    return response
