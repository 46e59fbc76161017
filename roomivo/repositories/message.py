from datetime import datetime, timezone

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from roomivo.db.models.message import Message as MessageModel


def create_message(
    db: Session,
    tenant_id: int,
    landlord_id: int,
    property_id: int,
    sender_id: int,
    sender_role: str,
    body: str,
    created_at: datetime | None = None,
) -> MessageModel:
    """Insert a message. Pure data access - no business logic."""
    db_message = MessageModel(
        tenant_id=tenant_id,
        landlord_id=landlord_id,
        property_id=property_id,
        sender_id=sender_id,
        sender_role=sender_role,
        body=body,
        created_at=created_at or datetime.now(timezone.utc),
    )
    db.add(db_message)
    db.commit()
    db.refresh(db_message)
    return db_message


def get_messages_between(
    db: Session, property_id: int, user_id: int, other_user_id: int
) -> list[MessageModel]:
    """Messages about a property exchanged by two users, oldest first."""
    return (
        db.query(MessageModel)
        .filter(
            MessageModel.property_id == property_id,
            or_(
                and_(
                    MessageModel.tenant_id == user_id,
                    MessageModel.landlord_id == other_user_id,
                ),
                and_(
                    MessageModel.tenant_id == other_user_id,
                    MessageModel.landlord_id == user_id,
                ),
            ),
        )
        .order_by(MessageModel.created_at.asc(), MessageModel.id.asc())
        .all()
    )


def get_messages_for_user_newest_first(db: Session, user_id: int) -> list[MessageModel]:
    """Every message the user takes part in, newest first."""
    return (
        db.query(MessageModel)
        .filter(or_(MessageModel.tenant_id == user_id, MessageModel.landlord_id == user_id))
        .order_by(MessageModel.created_at.desc(), MessageModel.id.desc())
        .all()
    )
