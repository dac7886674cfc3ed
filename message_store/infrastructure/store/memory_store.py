from __future__ import annotations

import threading
from datetime import datetime
from uuid import UUID

from message_store.application.exceptions import MessageNotFoundError
from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.domain.entities.message import Message


class MemoryMessageRepository(MessageRepositoryPort):
    def __init__(self) -> None:
        # receiver_id -> {(message_id, created_at): Message}
        self._partitions: dict[UUID, dict[tuple[UUID, datetime], Message]] = {}
        self._lock = threading.Lock()

    def save(self, message: Message) -> Message:
        with self._lock:
            partition = self._partitions.setdefault(message.receiver_id, {})
            partition[(message.message_id, message.created_at)] = message
        return message

    def get_by_id(self, message_id: UUID, receiver_id: UUID) -> Message:
        with self._lock:
            partition = self._partitions.get(receiver_id, {})
            # First row in clustering order, as LIMIT 1 would return.
            matches = sorted(
                (key for key in partition if key[0] == message_id),
                key=lambda key: key[1],
            )
            if not matches:
                raise MessageNotFoundError(message_id, receiver_id)
            return partition[matches[0]]

    def count(self, receiver_id: UUID) -> int:
        """Rows stored for one receiver. Used by tests to check overwrite semantics."""
        with self._lock:
            return len(self._partitions.get(receiver_id, {}))
