from sqlalchemy.orm import Session

import roomivo.repositories.message as message_repo
import roomivo.repositories.property as property_repo
from roomivo.db.models.message import Message as MessageModel
from roomivo.db.models.user import User
from roomivo.domain.conversations import ConversationSummary, aggregate_conversations
from roomivo.domain.ownership import ensure_owner
from roomivo.errors import DomainValidationError, NotFoundError


def authorize_conversation(
    db: Session, current_user: User, property_id: int, tenant_id: int, landlord_id: int
) -> None:
    """
    Check that a (property, tenant, landlord) conversation is valid for the caller.

    - The property must exist and belong to the landlord
    - The caller must be the tenant or the landlord

    Raises:
        NotFoundError: If the property doesn't exist
        DomainValidationError: If the landlord doesn't own the property
        ForbiddenError: If the caller is not a participant
    """
    db_property = property_repo.get_property_by_id(db, property_id)
    if not db_property:
        raise NotFoundError(f"Property with id {property_id} not found")

    if db_property.landlord_id != landlord_id:
        raise DomainValidationError(
            f"User {landlord_id} is not the landlord of property {property_id}"
        )

    ensure_owner(current_user, tenant_id, landlord_id, action="take part in this conversation")


def send_message(
    db: Session,
    sender: User,
    tenant_id: int,
    landlord_id: int,
    property_id: int,
    body: str,
) -> MessageModel:
    """Persist an inquiry message. The sender's role is recorded with it."""
    authorize_conversation(db, sender, property_id, tenant_id, landlord_id)
    return message_repo.create_message(
        db,
        tenant_id=tenant_id,
        landlord_id=landlord_id,
        property_id=property_id,
        sender_id=sender.id,
        sender_role=sender.role.name,
        body=body,
    )


def get_conversation(
    db: Session, current_user: User, property_id: int, other_user_id: int
) -> list[MessageModel]:
    """Messages between the caller and another user about a property, oldest first."""
    return message_repo.get_messages_between(db, property_id, current_user.id, other_user_id)


def list_conversations(db: Session, current_user: User) -> list[ConversationSummary]:
    """The most recent message of each conversation the caller takes part in."""
    messages = message_repo.get_messages_for_user_newest_first(db, current_user.id)
    return aggregate_conversations(messages, current_user.id)
