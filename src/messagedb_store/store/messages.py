"""Message records written to and read from Message DB."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class WriteMessage:
    """A message to append to a stream.

    Attributes:
        type: Message type/name (e.g., "ItemAdded")
        data: Message payload, stored as jsonb
        metadata: Optional metadata, stored as jsonb
        id: Optional message id; one is generated at append time when None

    Example:
        >>> msg = WriteMessage(type="ItemAdded", data={"qty": 3})
        >>> msg.id is None
        True
    """

    type: str
    data: dict[str, Any] = field(default_factory=dict)
    metadata: dict[str, Any] | None = None
    id: str | None = None


@dataclass(frozen=True)
class ReadMessage:
    """A message read back from a Message DB stream or category.

    Attributes:
        id: Unique identifier of the message (UUID)
        stream_name: Name of the stream containing this message
        type: Message type/name
        position: Position of the message within its stream (0-based)
        global_position: Position across all streams in the store
        data: Message payload (deserialized from JSON)
        metadata: Message metadata (deserialized from JSON, may be None)
        time: Timestamp when the message was recorded
    """

    id: str
    stream_name: str
    type: str
    position: int
    global_position: int
    data: dict[str, Any]
    metadata: dict[str, Any] | None
    time: datetime

    @classmethod
    def build(cls, record: dict[str, Any]) -> "ReadMessage":
        """Build a ReadMessage from a decoded record dictionary.

        Keys not belonging to ReadMessage are ignored, so read transforms may
        leave extra entries in the record.

        Raises:
            KeyError: If a required field is missing from the record
        """
        return cls(
            id=str(record["id"]),
            stream_name=record["stream_name"],
            type=record["type"],
            position=int(record["position"]),
            global_position=int(record["global_position"]),
            data=record["data"],
            metadata=record["metadata"],
            time=record["time"],
        )
