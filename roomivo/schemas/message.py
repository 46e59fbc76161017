from datetime import datetime

from pydantic import Field

from roomivo.schemas.base import CamelModel


class Message(CamelModel):
    id: int
    tenant_id: int
    landlord_id: int
    property_id: int
    sender_id: int
    sender_role: str
    message: str = Field(validation_alias="body")
    created_at: datetime | None = None


class MessageCreate(CamelModel):
    tenant_id: int
    landlord_id: int
    property_id: int
    message: str = Field(..., min_length=1, max_length=5000)


class Conversation(CamelModel):
    property_id: int
    other_user_id: int
    last_message: str
    last_message_time: datetime
    sender_role: str


class RoomJoin(CamelModel):
    property_id: int
    tenant_id: int
    landlord_id: int


class ApplicationJoin(CamelModel):
    application_id: int
