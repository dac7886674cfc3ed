from __future__ import annotations

import logging
import re

from cassandra import ConsistencyLevel, DriverException
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile, NoHostAvailable, Session

from message_store.application.exceptions import DatabaseConnectionError, SchemaBootstrapError
from message_store.core.config import Settings


logger = logging.getLogger(__name__)

# NoHostAvailable does not derive from DriverException.
DRIVER_ERRORS = (DriverException, NoHostAvailable)

_KEYSPACE_NAME = re.compile(r"^[A-Za-z0-9_]{1,48}$")

CREATE_KEYSPACE_CQL = """
CREATE KEYSPACE IF NOT EXISTS {keyspace}
    WITH replication = {{
        'class': 'SimpleStrategy',
        'replication_factor': 1
    }}
"""

CREATE_MESSAGES_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.messages (
    message_id UUID,
    sender_id UUID,
    receiver_id UUID,
    msg_body TEXT,
    created_at TIMESTAMP,
    msg_type TEXT,
    has_read BOOLEAN,
    PRIMARY KEY ((receiver_id), message_id, created_at)
)
"""


def build_cluster(settings: Settings) -> Cluster:
    auth = PlainTextAuthProvider(username=settings.DB_USER, password=settings.DB_PASSWORD)
    profile = ExecutionProfile(consistency_level=ConsistencyLevel.ONE)
    return Cluster(
        contact_points=[settings.DB_HOST],
        port=int(settings.DB_PORT),
        auth_provider=auth,
        execution_profiles={EXEC_PROFILE_DEFAULT: profile},
    )


def connect_database(settings: Settings, cluster: Cluster | None = None) -> Session:
    """
    Open the long-lived session shared by every request.

    With DB_INIT the keyspace and table are provisioned before the session is
    bound to the keyspace; otherwise the session connects straight to it.
    Any failure here must stop the process from serving.
    """
    keyspace = settings.DB_KEYSPACE
    cluster = cluster or build_cluster(settings)

    try:
        session = cluster.connect() if settings.DB_INIT else cluster.connect(keyspace)
    except DRIVER_ERRORS as e:
        logger.error("Failed to connect to the message database", extra={"error": str(e)})
        cluster.shutdown()
        raise DatabaseConnectionError(f"Cannot connect to {settings.DB_HOST}:{settings.DB_PORT}: {e}") from e

    logger.info("Connection to the message database established", extra={"keyspace": keyspace})

    if settings.DB_INIT:
        try:
            bootstrap_schema(session, keyspace)
            session.set_keyspace(keyspace)
        except SchemaBootstrapError:
            cluster.shutdown()
            raise
        except DRIVER_ERRORS as e:
            cluster.shutdown()
            raise SchemaBootstrapError(f"Cannot use keyspace {keyspace}: {e}") from e

    return session


def bootstrap_schema(session: Session, keyspace: str) -> None:
    """Create keyspace and messages table if absent. Safe to run repeatedly."""
    if not _KEYSPACE_NAME.match(keyspace):
        raise SchemaBootstrapError(f"Invalid keyspace name: {keyspace!r}")

    for statement in (CREATE_KEYSPACE_CQL, CREATE_MESSAGES_TABLE_CQL):
        query = statement.format(keyspace=keyspace)
        try:
            session.execute(query)
        except DRIVER_ERRORS as e:
            logger.error("Schema statement failed", extra={"keyspace": keyspace, "error": str(e)})
            raise SchemaBootstrapError(f"Schema bootstrap failed for keyspace {keyspace}: {e}") from e
        logger.debug("Executed schema statement: %s", query.strip().splitlines()[0])

    logger.info("Schema ready", extra={"keyspace": keyspace})


def shutdown_session(session: Session) -> None:
    session.cluster.shutdown()
