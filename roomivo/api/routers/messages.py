from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from roomivo.api.deps import get_current_user, get_db
from roomivo.db.models.user import User
from roomivo.schemas.message import Conversation, Message, MessageCreate
from roomivo.services.chat_relay import (
    RECEIVE_MESSAGE,
    ChatRelay,
    conversation_room,
    get_chat_relay,
)
from roomivo.services.message import get_conversation, list_conversations, send_message

router = APIRouter(tags=["messages"])


@router.post("/messages", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_new_message(
    message_data: MessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    relay: ChatRelay = Depends(get_chat_relay),
):
    """
    Send a message about a property. The caller must be the tenant or the
    landlord of the conversation; the message is pushed to everyone who joined
    the conversation room.
    """
    message = send_message(
        db,
        current_user,
        tenant_id=message_data.tenant_id,
        landlord_id=message_data.landlord_id,
        property_id=message_data.property_id,
        body=message_data.message,
    )
    response = Message.model_validate(message)
    await relay.broadcast(
        conversation_room(message.property_id, message.tenant_id, message.landlord_id),
        RECEIVE_MESSAGE,
        response.model_dump(by_alias=True),
    )
    return response


@router.get("/messages/{property_id}/{other_user_id}", response_model=list[Message])
def get_messages(
    property_id: int,
    other_user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Messages between the caller and another user about a property, oldest first."""
    messages = get_conversation(db, current_user, property_id, other_user_id)
    return [Message.model_validate(m) for m in messages]


@router.get("/conversations", response_model=list[Conversation])
def get_conversations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """One entry per (property, counterpart) with the latest message, newest first."""
    return [Conversation.model_validate(c) for c in list_conversations(db, current_user)]
