"""Expected version handling for optimistic concurrency.

An expected version is one of:
- None: no check, the append always succeeds
- NO_STREAM: the stream must have no messages yet
- a non-negative int: the position of the stream's last message

Example:
    >>> canonize(NO_STREAM)
    -1
    >>> canonize(3)
    3
    >>> canonize(None) is None
    True
"""

from enum import Enum


class _NoStream(Enum):
    NO_STREAM = "no_stream"

    def __repr__(self) -> str:
        return "NO_STREAM"


NO_STREAM = _NoStream.NO_STREAM

# Value Message DB's write_message understands as "stream must be empty"
NO_STREAM_VERSION = -1

ExpectedVersion = int | _NoStream | None


def canonize(expected_version: ExpectedVersion) -> int | None:
    """Convert an expected version into the value sent to Message DB.

    Args:
        expected_version: None, NO_STREAM, -1 or a non-negative position

    Returns:
        None when no check is requested, otherwise an int >= -1

    Raises:
        TypeError: If expected_version is not None, NO_STREAM or an int
        ValueError: If expected_version is an int below -1
    """
    if expected_version is None:
        return None
    if expected_version is NO_STREAM:
        return NO_STREAM_VERSION
    # bool is an int subclass, but True/False as a version is always a mistake
    if isinstance(expected_version, bool) or not isinstance(expected_version, int):
        raise TypeError(
            f"expected_version must be None, NO_STREAM or an int, got {expected_version!r}"
        )
    if expected_version < NO_STREAM_VERSION:
        raise ValueError(f"expected_version must be >= -1, got {expected_version}")
    return expected_version


def parse(value: str) -> int | _NoStream:
    """Parse a textual expected version such as "no_stream" or "4"."""
    if value.strip().lower() == NO_STREAM.value:
        return NO_STREAM
    return int(value)
