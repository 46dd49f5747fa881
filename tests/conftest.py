"""Pytest configuration and fixtures for testing.

This module provides pytest fixtures for:
- Message DB Docker container management (integration tests)
- Database connection configuration
- Fake sessions and connections for unit tests

Integration tests need Docker and run only when MESSAGEDB_INTEGRATION=1.
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from unittest.mock import MagicMock

import psycopg
import pytest

from messagedb_store.config import MessageDBConfig
from messagedb_store.store import Session


@pytest.fixture(scope="session")
def docker_compose_file():
    """Return the path to the docker-compose.yml file."""
    return os.path.join(os.path.dirname(__file__), "..", "docker-compose.yml")


@pytest.fixture(scope="session")
def docker_setup():
    """Override docker setup to not use --build flag."""
    return ["up -d"]


@pytest.fixture(scope="session")
def docker_cleanup():
    """Override docker cleanup to not delete volumes."""
    return ["down"]


@pytest.fixture(scope="session")
def messagedb_service(request):
    """Start Message DB container and wait for it to be ready.

    Skips unless MESSAGEDB_INTEGRATION=1, so docker is never touched by
    the unit test run.
    """
    if os.getenv("MESSAGEDB_INTEGRATION") != "1":
        pytest.skip("MESSAGEDB_INTEGRATION=1 not set")

    docker_services = request.getfixturevalue("docker_services")
    docker_services.wait_until_responsive(
        timeout=30.0, pause=0.5, check=lambda: is_messagedb_responsive()
    )
    return "messagedb"


def is_messagedb_responsive():
    """Check if Message DB is responsive and fully installed."""
    import time

    try:
        conninfo = (
            "host=localhost port=5433 "
            "dbname=message_store user=postgres password=message_store_password"
        )
        with psycopg.connect(conninfo) as conn:
            with conn.cursor() as cur:
                # The database accepts connections before all functions are created
                cur.execute(
                    """
                    SELECT COUNT(*) FROM pg_proc
                    WHERE proname IN (
                        'write_message', 'get_stream_messages',
                        'get_category_messages', 'get_last_stream_message'
                    )
                    AND pronamespace = (
                        SELECT oid FROM pg_namespace WHERE nspname = 'message_store'
                    )
                    """
                )
                result = cur.fetchone()
                count = result[0] if result else 0
                if count >= 4:
                    time.sleep(1)
                    return True
                return False
    except Exception:
        return False


@pytest.fixture
def messagedb_config(messagedb_service):
    """Provide MessageDB configuration for integration tests."""
    return MessageDBConfig(
        host="localhost",
        port=5433,
        database="message_store",
        user="postgres",
        password="message_store_password",
    )


@pytest.fixture
def messagedb_session(messagedb_config):
    """Provide a Session connected to the test database."""
    session = Session(messagedb_config)
    session.connect()
    yield session
    session.close()


class FakeSession:
    """Session double handing out a single mock connection."""

    def __init__(self) -> None:
        self.conn = MagicMock(name="connection")
        self.connections_borrowed = 0

    @contextmanager
    def connection(self) -> Iterator[Any]:
        self.connections_borrowed += 1
        yield self.conn


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


def make_cursor(conn: MagicMock, rows: list[tuple[Any, ...]] | None = None) -> MagicMock:
    """Configure conn.cursor() as a context manager returning a mock cursor."""
    cur = MagicMock(name="cursor")
    cur.fetchall.return_value = rows or []
    conn.cursor.return_value.__enter__.return_value = cur
    conn.cursor.return_value.__exit__.return_value = False
    return cur


@pytest.fixture(name="make_cursor")
def make_cursor_fixture():
    return make_cursor
