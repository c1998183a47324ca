# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.database import create_db_engine, create_session_factory, create_tables
from taskboard.main import create_app

from .helpers import bearer, register


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file per test."""
    return Settings(
        database_url=f"sqlite:///{tmp_path / 'taskboard.db'}",
        secret_key="test-secret",
        access_token_expire_minutes=60,
        cors_origins=["http://testserver"],
        log_level="WARNING",
    )


@pytest.fixture()
def client(settings: Settings):
    # Entering the client runs the lifespan, which creates the tables.
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def session(settings: Settings):
    engine = create_db_engine(settings.database_url)
    create_tables(engine)
    db = create_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def alice_headers(client: TestClient) -> dict:
    return bearer(register(client, name="Alice", email="alice@x.com"))


@pytest.fixture()
def bob_headers(client: TestClient) -> dict:
    return bearer(register(client, name="Bob", email="bob@y.com"))
