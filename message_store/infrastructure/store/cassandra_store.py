from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from cassandra import ConsistencyLevel
from cassandra.query import SimpleStatement

from message_store.application.exceptions import MessageNotFoundError, MessageStoreError
from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.domain.entities.message import Message
from message_store.infrastructure.cassandra.session import DRIVER_ERRORS


INSERT_MESSAGE_CQL = (
    "INSERT INTO messages (message_id, sender_id, receiver_id, msg_body, created_at, msg_type, has_read) "
    "VALUES (%s, %s, %s, %s, %s, %s, %s)"
)

SELECT_MESSAGE_CQL = (
    "SELECT message_id, sender_id, receiver_id, msg_body, created_at, msg_type, has_read "
    "FROM messages WHERE receiver_id = %s AND message_id = %s LIMIT 1"
)


class CassandraMessageRepository(MessageRepositoryPort):
    def __init__(self, session: Any) -> None:
        self._session = session
        self._insert = SimpleStatement(INSERT_MESSAGE_CQL, consistency_level=ConsistencyLevel.ONE)
        self._select = SimpleStatement(SELECT_MESSAGE_CQL, consistency_level=ConsistencyLevel.ONE)
        self._logger = logging.getLogger(__name__)

    def save(self, message: Message) -> Message:
        params = (
            message.message_id,
            message.sender_id,
            message.receiver_id,
            message.msg_body,
            message.created_at,
            message.msg_type,
            message.has_read,
        )
        try:
            self._session.execute(self._insert, params)
        except DRIVER_ERRORS as e:
            self._logger.error(
                "Insert failed",
                extra={"message_id": str(message.message_id), "receiver_id": str(message.receiver_id), "error": str(e)},
            )
            raise MessageStoreError(f"Failed to save message {message.message_id}: {e}") from e
        return message

    def get_by_id(self, message_id: UUID, receiver_id: UUID) -> Message:
        try:
            row = self._session.execute(self._select, (receiver_id, message_id)).one()
        except DRIVER_ERRORS as e:
            self._logger.error(
                "Lookup failed",
                extra={"message_id": str(message_id), "receiver_id": str(receiver_id), "error": str(e)},
            )
            raise MessageStoreError(f"Failed to read message {message_id}: {e}") from e

        if row is None:
            raise MessageNotFoundError(message_id, receiver_id)
        return _row_to_message(row)


def _row_to_message(row: Any) -> Message:
    return Message(
        message_id=row.message_id,
        sender_id=row.sender_id,
        receiver_id=row.receiver_id,
        msg_body=row.msg_body,
        created_at=_as_utc(row.created_at),
        msg_type=row.msg_type,
        has_read=bool(row.has_read),
    )


def _as_utc(value: datetime) -> datetime:
    # The driver hands back naive datetimes that are already UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
