from abc import ABC, abstractmethod
from uuid import UUID

from message_store.domain.entities.message import Message


class MessageRepositoryPort(ABC):
    @abstractmethod
    def save(self, message: Message) -> Message:
        """
        Persist a fully populated message as a single-row insert.
        Returns the same message; the write is not read back.
        """
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, message_id: UUID, receiver_id: UUID) -> Message:
        """
        Look up one message inside the receiver's partition.
        Raises MessageNotFoundError when no row matches.
        """
        raise NotImplementedError
