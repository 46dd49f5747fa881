"""Message store operations: get, get_last and put.

These functions are stateless. Each call borrows one connection from the
session for a single round trip; all state lives in Message DB.

Example:
    ```python
    from messagedb_store.store import Session, WriteMessage, get, get_last, put

    with Session(config) as session:
        put(session, WriteMessage(type="ItemAdded", data={"qty": 3}), "cart-123")
        put(
            session,
            WriteMessage(type="ItemAdded", data={"qty": 1}),
            "cart-123",
            expected_version=0,
        )

        messages = get(session, "cart-123", position=0, batch_size=100)
        last = get_last(session, "cart-123")
        category_messages = get(session, "cart")
    ```
"""

import dataclasses
import uuid
from collections.abc import Callable, Sequence
from typing import Any

import structlog

from messagedb_store.store import expected_version as ev
from messagedb_store.store import sql
from messagedb_store.store.errors import VersionConflict
from messagedb_store.store.execute import execute
from messagedb_store.store.mapper import ReadTransform, map_row, map_rows
from messagedb_store.store.messages import ReadMessage, WriteMessage
from messagedb_store.store.session import Session

logger = structlog.get_logger(__name__)


class Defaults:
    """Default read options."""

    POSITION = 0
    BATCH_SIZE = 1000


def random_identifier() -> str:
    """Default message id generator: a random UUID4 string."""
    return str(uuid.uuid4())


def convert_position(rows: Sequence[Sequence[Any]] | None) -> int | None:
    """Extract the single integer returned by write_message.

    Returns None when the backend returned no row.
    """
    if not rows:
        return None
    position = rows[0][0]
    if position is None:
        return None
    return int(position)


def get(
    session: Session,
    stream_name: str,
    position: int | None = None,
    batch_size: int | None = None,
    condition: str | None = None,
    transform: ReadTransform | None = None,
) -> list[ReadMessage]:
    """Read a window of messages from a stream or a category.

    When stream_name has no id segment it is read as a category, fanning in
    every stream of the category ordered by global position. Otherwise the
    single stream is read, ordered by position. Messages are returned in the
    order Message DB returned them.

    Args:
        session: Connected session
        stream_name: Stream (e.g., "cart-123") or category (e.g., "cart")
        position: Starting position (global position for categories, default: 0)
        batch_size: Maximum number of messages to return (default: 1000)
        condition: Optional SQL condition applied by Message DB
        transform: Optional hook applied to each decoded record

    Returns:
        List of ReadMessage objects. Empty list if no messages found.

    Raises:
        CodecError: If stored data or metadata is malformed
        psycopg.Error: If the database operation fails
    """
    condition = sql.constrain_condition(condition)
    position = Defaults.POSITION if position is None else position
    batch_size = Defaults.BATCH_SIZE if batch_size is None else batch_size

    log = logger.bind(stream_name=stream_name)
    log.debug("Getting messages")

    statement = sql.build_read(stream_name)
    params = (stream_name, position, batch_size, condition)

    with session.connection() as conn:
        rows = execute(conn, statement, params)

    messages = map_rows(rows, transform)

    log.debug(
        "Finished getting messages",
        count=len(messages),
        position=position,
        batch_size=batch_size,
        condition=condition or "(none)",
    )
    log.info("Get completed")

    return messages


def get_last(
    session: Session,
    stream_name: str,
    transform: ReadTransform | None = None,
) -> ReadMessage | None:
    """Read the most recent message of a stream.

    Args:
        session: Connected session
        stream_name: Stream to read (e.g., "cart-123")
        transform: Optional hook applied to the decoded record

    Returns:
        The last message, or None if the stream is empty

    Raises:
        CodecError: If stored data or metadata is malformed
        psycopg.Error: If the database operation fails
    """
    log = logger.bind(stream_name=stream_name)
    log.debug("Getting last message")

    statement = sql.build_read_last(stream_name)

    with session.connection() as conn:
        rows = execute(conn, statement, (stream_name,))

    last_message = map_row(rows[-1] if rows else None, transform)

    log.debug("Last message", message=last_message)
    log.info("Get last completed", found=last_message is not None)

    return last_message


def put(
    session: Session,
    message: WriteMessage,
    stream_name: str,
    expected_version: ev.ExpectedVersion = None,
    identifier_get: Callable[[], str] | None = None,
) -> int | None:
    """Append a message to a stream.

    Args:
        session: Connected session
        message: Message to append; an id is generated when message.id is None
        stream_name: Stream to append to (e.g., "cart-123")
        expected_version: None for no check, NO_STREAM (or -1) for an empty
            stream, or the position of the stream's last message
        identifier_get: Id generator used when the message has no id
            (default: random UUID4)

    Returns:
        The position write_message reported for the new message, or None if
        the backend returned nothing

    Raises:
        VersionConflict: If the stream is not at the expected version
        CodecError: If data or metadata can't be serialized
        TypeError, ValueError: If expected_version is not a valid version
        psycopg.Error: Any other database failure
    """
    identifier_get = identifier_get or random_identifier
    version = ev.canonize(expected_version)

    log = logger.bind(stream_name=stream_name, expected_version=version)
    log.debug("Putting message")

    if message.id is None:
        message = dataclasses.replace(message, id=identifier_get())

    log.debug("Message data", message=message)

    statement, params = sql.build_append(message, stream_name, version)

    try:
        with session.connection() as conn:
            rows = execute(conn, statement, params)
    except VersionConflict as e:
        e.stream_name = stream_name
        e.expected_version = version
        log.warning(
            "Optimistic concurrency check failed",
            message_id=message.id,
            actual_version=e.actual_version,
        )
        raise

    position = convert_position(rows)

    log.info("Put completed", message_id=message.id, position=position)

    return position
