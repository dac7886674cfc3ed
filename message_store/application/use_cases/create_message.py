from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.domain.entities.message import Message, MsgType


def utc_now_millis() -> datetime:
    """Current UTC time truncated to the millisecond precision of a CQL timestamp."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class CreateMessageUseCase:
    def __init__(self, repository: MessageRepositoryPort) -> None:
        self._repository = repository
        self._logger = logging.getLogger(__name__)

    def execute(self, sender_id: uuid.UUID, receiver_id: uuid.UUID, msg_body: str, msg_type: MsgType) -> Message:
        """Assign a time-based id and creation time, then persist the message unread."""
        message = Message(
            message_id=uuid.uuid1(),
            sender_id=sender_id,
            receiver_id=receiver_id,
            msg_body=msg_body,
            created_at=utc_now_millis(),
            msg_type=MsgType(msg_type).value,
            has_read=False,
        )
        saved = self._repository.save(message)
        self._logger.info(
            "Message stored",
            extra={"message_id": str(saved.message_id), "receiver_id": str(saved.receiver_id)},
        )
        return saved
