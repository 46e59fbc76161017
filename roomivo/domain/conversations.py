from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable


@dataclass(frozen=True, slots=True)
class ConversationSummary:
    property_id: int
    other_user_id: int
    last_message: str
    last_message_time: datetime
    sender_role: str


def counterpart_of(message: Any, user_id: int) -> int:
    """The participant of ``message`` who is not ``user_id``."""
    return message.landlord_id if message.tenant_id == user_id else message.tenant_id


def aggregate_conversations(messages: Iterable[Any], user_id: int) -> list[ConversationSummary]:
    """Reduce a newest-first message log to one summary per conversation.

    A conversation is identified by (property_id, counterpart id). The first
    message met for a key is the most recent one, so later ones are skipped.
    Output keeps the order in which conversations were first met.
    """
    conversations: dict[tuple[int, int], ConversationSummary] = {}
    for message in messages:
        other_user_id = counterpart_of(message, user_id)
        key = (message.property_id, other_user_id)
        if key in conversations:
            continue
        conversations[key] = ConversationSummary(
            property_id=message.property_id,
            other_user_id=other_user_id,
            last_message=message.body,
            last_message_time=message.created_at,
            sender_role=message.sender_role,
        )
    return list(conversations.values())
