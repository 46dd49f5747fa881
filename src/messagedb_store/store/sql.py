"""SQL statements for the Message DB server functions.

Read statements take four positional parameters (stream name or category,
position, batch size, condition) and select the eight message columns in a
fixed order: id, stream_name, type, position, global_position, data,
metadata, time.
"""

from typing import Any

from messagedb_store.store import codec
from messagedb_store.store.messages import WriteMessage
from messagedb_store.store.stream_name import is_category

MESSAGE_COLUMNS = "id, stream_name, type, position, global_position, data, metadata, time"

# get_category_messages has correlation and consumer group parameters
# before condition, so condition is bound by name
SQL_GET_CATEGORY = (
    f"SELECT {MESSAGE_COLUMNS} FROM message_store.get_category_messages("
    "%s::varchar, %s::bigint, %s::bigint, condition => %s::varchar)"
)
SQL_GET_STREAM = (
    f"SELECT {MESSAGE_COLUMNS} FROM message_store.get_stream_messages("
    "%s::varchar, %s::bigint, %s::bigint, %s::varchar)"
)
SQL_GET_LAST = (
    f"SELECT {MESSAGE_COLUMNS} FROM message_store.get_last_stream_message(%s::varchar)"
)
SQL_PUT = """
SELECT message_store.write_message(
    %s::varchar,
    %s::varchar,
    %s::varchar,
    %s::jsonb,
    %s::jsonb,
    %s::bigint
)
"""


def constrain_condition(condition: str | None) -> str | None:
    """Wrap a raw SQL condition in parentheses so it composes safely.

    Example:
        >>> constrain_condition("type = 'Added' OR type = 'Removed'")
        "(type = 'Added' OR type = 'Removed')"
    """
    if condition is None:
        return None
    return f"({condition})"


def build_read(stream_name: str) -> str:
    """Return the category read statement for a category stream, else the stream read."""
    if is_category(stream_name):
        return SQL_GET_CATEGORY
    return SQL_GET_STREAM


def build_read_last(stream_name: str) -> str:
    """Return the statement reading the last message of a stream."""
    return SQL_GET_LAST


def build_append(
    message: WriteMessage,
    stream_name: str,
    expected_version: int | None,
) -> tuple[str, tuple[Any, ...]]:
    """Build the write_message statement and its parameters.

    Args:
        message: Message to append; its id must already be resolved
        stream_name: Target stream
        expected_version: Canonical expected version, or None for no check

    Returns:
        The statement and its six positional parameters

    Raises:
        ValueError: If the message has no id
        CodecError: If data or metadata can't be serialized
    """
    if message.id is None:
        raise ValueError("message id must be resolved before building the append")

    params = (
        str(message.id),
        stream_name,
        message.type,
        codec.encode_data(message.data),
        codec.encode_metadata(message.metadata),
        expected_version,
    )
    return SQL_PUT, params
