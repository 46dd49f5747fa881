"""Pooled Message DB session.

A Session owns the connection pool. The store operations in
messagedb_store.store.database never create or close it; they borrow one
connection per call through Session.connection().
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg
import structlog
from psycopg_pool import ConnectionPool

from messagedb_store.config import MessageDBConfig

logger = structlog.get_logger(__name__)


class Session:
    """Connection handle shared by the message store operations.

    Example:
        ```python
        # Using as context manager
        config = MessageDBConfig(host="localhost", port=5432, database="message_store",
                                 user="message_store", password="secret")
        with Session(config) as session:
            session.health_check()
            messages = get(session, "cart-123")

        # Manual lifecycle management
        session = Session(config)
        session.connect()
        try:
            put(session, WriteMessage(type="ItemAdded", data={"qty": 3}), "cart-123")
        finally:
            session.close()
        ```
    """

    def __init__(self, config: MessageDBConfig) -> None:
        self.config = config
        self._pool: ConnectionPool | None = None
        self._logger = logger.bind(
            db_host=config.host,
            db_port=config.port,
            db_name=config.database,
        )

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    def connect(self) -> None:
        """Create the connection pool.

        Raises:
            psycopg.OperationalError: If connections cannot be established
        """
        if self._pool is not None:
            self._logger.warning("Connection pool already exists, skipping connect")
            return

        self._logger.info(
            "Creating connection pool",
            min_size=self.config.min_size,
            max_size=self.config.max_size,
        )
        self._pool = ConnectionPool(
            conninfo=self.config.to_connection_string(),
            min_size=self.config.min_size,
            max_size=self.config.max_size,
            open=True,
        )
        self._logger.info("Connection pool created successfully")

    def close(self) -> None:
        """Close the connection pool and release all connections."""
        if self._pool is not None:
            self._logger.info("Closing connection pool")
            self._pool.close()
            self._pool = None
            self._logger.info("Connection pool closed")

    @contextmanager
    def connection(self) -> Iterator[psycopg.Connection[Any]]:
        """Borrow a connection from the pool for the duration of the block.

        The transaction is committed when the block exits normally and rolled
        back when it raises; the connection then goes back to the pool.

        Raises:
            RuntimeError: If the pool has not been created
            psycopg_pool.PoolTimeout: If no connection becomes available in time
        """
        if self._pool is None:
            raise RuntimeError(
                "Connection pool not initialized. Call connect() first or use as context manager."
            )
        with self._pool.connection() as conn:
            yield conn

    def health_check(self) -> bool:
        """Check connectivity and that Message DB's write_message function exists.

        Raises:
            RuntimeError: If the pool has not been created
            psycopg.Error: If a query fails
        """
        self._logger.info("Performing health check")

        with self.connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
                result = cur.fetchone()
                if result is None or result[0] != 1:
                    self._logger.error("Health check failed: unexpected result")
                    return False

                cur.execute(
                    """
                    SELECT EXISTS (
                        SELECT 1
                        FROM pg_proc
                        WHERE proname = 'write_message'
                    )
                    """
                )
                result = cur.fetchone()
                if result is None or not result[0]:
                    self._logger.error(
                        "Health check failed: write_message function not found. "
                        "Is Message DB installed?"
                    )
                    return False

        self._logger.info("Health check passed")
        return True

    def __enter__(self) -> "Session":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:  # type: ignore
        self.close()
