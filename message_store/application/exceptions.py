class MessagingError(RuntimeError):
    """Base class for errors raised by the message store service."""
    pass


class MessageStoreError(MessagingError):
    """Raised when the database rejects or fails a read or write (network, unavailable replicas, bad values)."""
    pass


class MessageNotFoundError(MessagingError):
    """Raised when no message matches the requested receiver and message ids."""

    def __init__(self, message_id, receiver_id) -> None:
        super().__init__(f"Message {message_id} not found for receiver {receiver_id}")
        self.message_id = message_id
        self.receiver_id = receiver_id


class DatabaseConnectionError(MessagingError):
    """Raised when a session to the database cannot be established at startup."""
    pass


class SchemaBootstrapError(MessagingError):
    """Raised when keyspace or table provisioning fails at startup."""
    pass
