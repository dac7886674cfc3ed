from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from message_store.domain.entities.message import Message, MsgType


class CamelSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateMessageRequestSchema(CamelSchema):
    sender_id: UUID
    receiver_id: UUID
    msg_body: str
    msg_type: MsgType


class MessageResponseSchema(CamelSchema):
    message_id: UUID
    sender_id: UUID
    receiver_id: UUID
    msg_body: str
    created_at: datetime
    msg_type: str
    has_read: bool

    @classmethod
    def from_entity(cls, message: Message) -> "MessageResponseSchema":
        return cls(
            message_id=message.message_id,
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            msg_body=message.msg_body,
            created_at=message.created_at,
            msg_type=message.msg_type,
            has_read=message.has_read,
        )


class ErrorResponseSchema(CamelSchema):
    timestamp: str
    status: int
    error: str
    message: str
    path: str | None = None
    error_code: str = Field(examples=["MESSAGE_NOT_FOUND"])
