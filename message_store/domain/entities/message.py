from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class MsgType(str, Enum):
    video = "Video"
    text = "Text"
    link = "Link"


@dataclass(frozen=True)
class Message:
    message_id: UUID
    sender_id: UUID
    receiver_id: UUID
    msg_body: str
    created_at: datetime
    msg_type: str
    has_read: bool = False
