"""
Message store adapter for Message DB.

This package provides the session, message records and the three store
operations (get, get_last, put) for reading and writing messages to
Message DB (PostgreSQL-based message store).
"""

from messagedb_store.store.database import Defaults, get, get_last, put
from messagedb_store.store.errors import CodecError, MessageStoreError, VersionConflict
from messagedb_store.store.expected_version import NO_STREAM
from messagedb_store.store.messages import ReadMessage, WriteMessage
from messagedb_store.store.session import Session
from messagedb_store.store.stream_name import (
    get_category,
    get_id,
    is_category,
    stream_name,
)

__all__ = [
    "Session",
    "Defaults",
    "get",
    "get_last",
    "put",
    "ReadMessage",
    "WriteMessage",
    "NO_STREAM",
    "MessageStoreError",
    "VersionConflict",
    "CodecError",
    "is_category",
    "get_category",
    "get_id",
    "stream_name",
]
