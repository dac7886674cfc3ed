from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, Request

from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.application.use_cases.create_message import CreateMessageUseCase
from message_store.application.use_cases.get_message import GetMessageUseCase
from message_store.core.config import Settings
from message_store.infrastructure.cassandra.session import connect_database
from message_store.infrastructure.store.cassandra_store import CassandraMessageRepository
from message_store.infrastructure.store.memory_store import MemoryMessageRepository


logger = logging.getLogger(__name__)


def build_message_repository(settings: Settings) -> tuple[MessageRepositoryPort, Any | None]:
    """
    Build the repository selected by STORE_PROVIDER.
    Returns the repository and the driver session to close on shutdown (None for memory).
    """
    provider = settings.STORE_PROVIDER.lower()
    if provider == "memory":
        logger.info("Using MemoryMessageRepository (STORE_PROVIDER=memory)")
        return MemoryMessageRepository(), None
    if provider != "cassandra":
        raise ValueError(f"Unknown STORE_PROVIDER: {settings.STORE_PROVIDER}")

    session = connect_database(settings)
    logger.info("Using CassandraMessageRepository", extra={"keyspace": settings.DB_KEYSPACE})
    return CassandraMessageRepository(session), session


def get_message_repository(request: Request) -> MessageRepositoryPort:
    return request.app.state.message_repository


def get_create_message_use_case(
    repository: MessageRepositoryPort = Depends(get_message_repository),
) -> CreateMessageUseCase:
    return CreateMessageUseCase(repository=repository)


def get_message_use_case(
    repository: MessageRepositoryPort = Depends(get_message_repository),
) -> GetMessageUseCase:
    return GetMessageUseCase(repository=repository)
