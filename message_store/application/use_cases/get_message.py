from __future__ import annotations

from uuid import UUID

from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.domain.entities.message import Message


class GetMessageUseCase:
    def __init__(self, repository: MessageRepositoryPort) -> None:
        self._repository = repository

    def execute(self, message_id: UUID, receiver_id: UUID) -> Message:
        return self._repository.get_by_id(message_id, receiver_id)
