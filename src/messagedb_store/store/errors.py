"""Errors raised by the message store adapter.

Only two failure kinds are recognized by the adapter itself. Every other
backend failure (connectivity, syntax, timeouts, unrelated constraint
violations) is a `psycopg.Error` and is re-raised unchanged.
"""


class MessageStoreError(Exception):
    """Base class for errors defined by the message store adapter."""


class VersionConflict(MessageStoreError):
    """Raised when an append's expected version doesn't match the stream.

    Message DB rejects the write when the stream's last position differs from
    the expected version supplied with the append. Callers recover by re-reading
    the stream, recomputing and appending again.

    Attributes:
        message: The backend's original error message text
        stream_name: Name of the stream where the conflict occurred (if known)
        expected_version: The version that was expected (if known)
        actual_version: The stream's actual version, parsed from the message (if present)
    """

    def __init__(
        self,
        message: str,
        stream_name: str | None = None,
        expected_version: int | None = None,
        actual_version: int | None = None,
    ) -> None:
        self.message = message
        self.stream_name = stream_name
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(message)


class CodecError(MessageStoreError):
    """Raised when a payload can't be encoded to or decoded from storage."""
