"""Shared pytest fixtures for Meshtastic Map API tests."""

import os
import tempfile
from typing import Callable, Generator, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event

from meshtastic_map.api.app import create_app
from meshtastic_map.config import EnvVars
from meshtastic_map.database import engine
from meshtastic_map.database.engine import DatabaseEngine
from meshtastic_map.database.models import Base, Node
from meshtastic_map.protobufs import EnumResolver, load_enum_resolver


@pytest.fixture(scope="function")
def temp_db_path() -> Generator[str, None, None]:
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield os.path.join(tmpdir, "test.db")


@pytest.fixture(autouse=True)
def reset_global_engine():
    """Reset global database engine before and after each test."""
    engine._db_engine = None
    yield
    engine.close_database()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of configuration tests."""
    for name, value in vars(EnvVars).items():
        if not name.startswith("_") and isinstance(value, str):
            monkeypatch.delenv(value, raising=False)


@pytest.fixture(scope="function")
def db_engine(temp_db_path: str) -> DatabaseEngine:
    """Initialize the global database engine on a temporary SQLite file."""
    return engine.init_database(temp_db_path)


@pytest.fixture(scope="function")
def add_rows(db_engine: DatabaseEngine) -> Callable[..., None]:
    """Return a helper that commits model instances to the test database."""

    def _add(*rows: Base) -> None:
        with db_engine.session_scope() as session:
            session.add_all(rows)

    return _add


@pytest.fixture(scope="function")
def executed_statements(db_engine: DatabaseEngine) -> List[str]:
    """Record every SQL statement sent to the test database."""
    statements: List[str] = []

    @event.listens_for(db_engine.engine, "before_cursor_execute")
    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    return statements


@pytest.fixture(scope="session")
def enum_resolver() -> EnumResolver:
    """Load the protobuf enum tables once."""
    return load_enum_resolver()


@pytest.fixture(scope="function")
def client(db_engine: DatabaseEngine, enum_resolver: EnumResolver) -> Generator[TestClient, None, None]:
    """Test client for an app backed by the temporary database."""
    app = create_app(enable_metrics=False, enum_resolver=enum_resolver)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(scope="session")
def make_node() -> Callable[..., Node]:
    """Return a factory for Nodes with the required columns filled in."""

    def _make(node_id: int, **kwargs) -> Node:
        kwargs.setdefault("hardware_model", 0)
        kwargs.setdefault("role", 0)
        kwargs.setdefault("is_licensed", False)
        return Node(node_id=node_id, **kwargs)

    return _make
