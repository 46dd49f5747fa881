"""Conversion of Message DB rows into ReadMessage records."""

from collections.abc import Callable, Iterable, Sequence
from typing import Any, overload

from messagedb_store.store import codec
from messagedb_store.store.messages import ReadMessage

ReadTransform = Callable[[dict[str, Any]], dict[str, Any]]


def identity(record: dict[str, Any]) -> dict[str, Any]:
    """Default read transform: return the record unchanged."""
    return record


@overload
def map_row(row: None, transform: ReadTransform | None = None) -> None: ...


@overload
def map_row(row: Sequence[Any], transform: ReadTransform | None = None) -> ReadMessage: ...


def map_row(
    row: Sequence[Any] | None,
    transform: ReadTransform | None = None,
) -> ReadMessage | None:
    """Convert a raw result row into a ReadMessage.

    The row holds eight fields in order: id, stream_name, type, position,
    global_position, data, metadata, time. Data and metadata are decoded,
    then the record dict is passed through the transform before the
    ReadMessage is built. A None row (no message) maps to None.

    Args:
        row: Result row, or None
        transform: Hook that may normalize or enrich the decoded record

    Returns:
        The ReadMessage, or None if row is None

    Raises:
        CodecError: If data or metadata can't be decoded
        ValueError: If the row doesn't have exactly eight fields
    """
    if row is None:
        return None

    if len(row) != 8:
        raise ValueError(f"Expected a row with 8 fields, got {len(row)}")

    id_, stream_name, type_, position, global_position, data, metadata, time = row

    record: dict[str, Any] = {
        "id": id_,
        "stream_name": stream_name,
        "type": type_,
        "position": position,
        "global_position": global_position,
        "data": codec.decode_data(data),
        "metadata": codec.decode_metadata(metadata),
        "time": time,
    }

    record = (transform or identity)(record)
    return ReadMessage.build(record)


def map_rows(
    rows: Iterable[Sequence[Any]],
    transform: ReadTransform | None = None,
) -> list[ReadMessage]:
    """Map every row, keeping the order the backend returned them in."""
    return [map_row(row, transform) for row in rows]
