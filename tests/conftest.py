"""
Shared fixtures and fakes standing in for the Cassandra driver session.
"""

from __future__ import annotations

import uuid
from collections import namedtuple
from datetime import datetime, timezone

import pytest

from message_store.application.use_cases.create_message import utc_now_millis
from message_store.domain.entities.message import Message, MsgType


Row = namedtuple("Row", "message_id sender_id receiver_id msg_body created_at msg_type has_read")


class FakeResultSet:
    def __init__(self, rows: list) -> None:
        self._rows = rows

    def one(self):
        return self._rows[0] if self._rows else None


class FakeCassandraSession:
    """Records every statement and keeps inserted rows the way the driver would return them."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[object, object]] = []
        self.keyspace: str | None = None
        self._rows: dict[tuple, Row] = {}
        self.cluster: "FakeCluster | None" = None

    def execute(self, statement, params=None):
        self.calls.append((statement, params))
        if self.error is not None:
            raise self.error

        query = getattr(statement, "query_string", statement).strip()
        if query.startswith("INSERT"):
            message_id, sender_id, receiver_id, msg_body, created_at, msg_type, has_read = params
            # The driver returns naive UTC datetimes at millisecond precision.
            naive = created_at.astimezone(timezone.utc).replace(tzinfo=None)
            self._rows[(receiver_id, message_id, naive)] = Row(
                message_id, sender_id, receiver_id, msg_body, naive, msg_type, has_read
            )
            return FakeResultSet([])
        if query.startswith("SELECT"):
            receiver_id, message_id = params
            matches = sorted(
                (key for key in self._rows if key[0] == receiver_id and key[1] == message_id),
                key=lambda key: key[2],
            )
            return FakeResultSet([self._rows[key] for key in matches[:1]])
        return FakeResultSet([])

    def set_keyspace(self, keyspace: str) -> None:
        self.keyspace = keyspace

    @property
    def row_count(self) -> int:
        return len(self._rows)


class FakeCluster:
    def __init__(self, session: FakeCassandraSession | None = None, error: Exception | None = None) -> None:
        self.session = session or FakeCassandraSession()
        self.session.cluster = self
        self.error = error
        self.connected_keyspace: str | None = None
        self.is_shutdown = False

    def connect(self, keyspace: str | None = None) -> FakeCassandraSession:
        self.connected_keyspace = keyspace
        if self.error is not None:
            raise self.error
        return self.session

    def shutdown(self) -> None:
        self.is_shutdown = True


def make_message(**overrides) -> Message:
    fields = {
        "message_id": uuid.uuid1(),
        "sender_id": uuid.uuid4(),
        "receiver_id": uuid.uuid4(),
        "msg_body": "hello",
        "created_at": utc_now_millis(),
        "msg_type": MsgType.text.value,
        "has_read": False,
    }
    fields.update(overrides)
    return Message(**fields)


@pytest.fixture
def message() -> Message:
    return make_message()


@pytest.fixture
def fixed_created_at() -> datetime:
    return datetime(2025, 1, 8, 12, 30, 15, 123000, tzinfo=timezone.utc)
