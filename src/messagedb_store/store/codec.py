"""Serialization of message data and metadata.

Payloads are stored in jsonb columns. On write they are serialized to JSON
text and cast to jsonb in SQL. On read, Message DB's functions hand the
columns back as JSON text, which is parsed here.
"""

import json
from typing import Any

from messagedb_store.store.errors import CodecError


def _encode(payload: Any, kind: str) -> str:
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as e:
        raise CodecError(f"Cannot encode message {kind}: {e}") from e


def _decode(wire: Any, kind: str) -> Any:
    # Message DB's read functions return varchar, but a jsonb column read
    # directly comes back already decoded
    if isinstance(wire, dict | list | int | float):
        return wire
    if isinstance(wire, bytes | bytearray | memoryview):
        wire = bytes(wire).decode("utf-8", errors="strict")
    if not isinstance(wire, str):
        raise CodecError(f"Cannot decode message {kind} from {type(wire).__name__}")
    try:
        return json.loads(wire)
    except json.JSONDecodeError as e:
        raise CodecError(f"Malformed message {kind}: {e}") from e


def encode_data(data: Any) -> str:
    """Serialize message data to JSON text. None is stored as JSON null."""
    return _encode(data, "data")


def encode_metadata(metadata: Any) -> str | None:
    """Serialize message metadata to JSON text, or None when there is none."""
    if metadata is None:
        return None
    return _encode(metadata, "metadata")


def decode_data(wire: Any) -> Any:
    """Deserialize message data read from the store.

    Raises:
        CodecError: If the stored value isn't valid JSON
    """
    if wire is None:
        return None
    try:
        return _decode(wire, "data")
    except UnicodeDecodeError as e:
        raise CodecError(f"Malformed message data: {e}") from e


def decode_metadata(wire: Any) -> Any:
    """Deserialize message metadata read from the store.

    Raises:
        CodecError: If the stored value isn't valid JSON
    """
    if wire is None:
        return None
    try:
        return _decode(wire, "metadata")
    except UnicodeDecodeError as e:
        raise CodecError(f"Malformed message metadata: {e}") from e
