"""Statement execution and translation of Message DB errors.

This is the only place that looks at the text of a backend error. Message DB
signals an optimistic concurrency violation by raising an exception whose
message starts with "Wrong expected version:", e.g.

    Wrong expected version: 0 (Stream: cart-123, Stream Version: 1)

That error becomes a VersionConflict. Every other error is re-raised as is.
"""

import re
from typing import Any

import psycopg
import structlog
from psycopg.rows import tuple_row

from messagedb_store.store.errors import VersionConflict

logger = structlog.get_logger(__name__)

WRONG_EXPECTED_VERSION = "Wrong expected version:"

_STREAM_VERSION = re.compile(r"Stream Version: (-?\d+)")


def error_message(error: psycopg.Error) -> str:
    """Return the primary message of a backend error."""
    diag = getattr(error, "diag", None)
    primary = diag.message_primary if diag is not None else None
    return primary or str(error)


def parse_stream_version(message: str) -> int | None:
    """Extract the stream's actual version from a wrong expected version message."""
    match = _STREAM_VERSION.search(message)
    if match is None:
        return None
    return int(match.group(1))


def execute(
    conn: psycopg.Connection[Any],
    sql: str,
    params: tuple[Any, ...] | list[Any],
) -> list[tuple[Any, ...]]:
    """Execute a statement and return its rows unchanged.

    Rows are plain tuples regardless of the connection's row factory, so
    callers can rely on the column order of the statement.

    Args:
        conn: An open connection (owned by the caller)
        sql: Statement with positional %s placeholders
        params: Positional parameters

    Returns:
        All rows produced by the statement

    Raises:
        VersionConflict: If Message DB rejected an append because of its expected version
        psycopg.Error: Any other backend failure, unchanged
    """
    try:
        with conn.cursor(row_factory=tuple_row) as cur:
            cur.execute(sql, params)
            if cur.description is None:
                return []
            return cur.fetchall()
    except psycopg.Error as e:
        message = error_message(e)
        if not message.startswith(WRONG_EXPECTED_VERSION):
            raise

        logger.debug("Wrong expected version reported", error_message=message)
        raise VersionConflict(
            message,
            actual_version=parse_stream_version(message),
        ) from e
