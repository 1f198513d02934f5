import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from calculator_api.app.core.config import Settings
from calculator_api.app.main import create_app


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Settings with defaults, independent of the caller's environment."""
    for name in ("DEFAULT_LIST_LIMIT", "MAX_LIST_LIMIT", "COLLECTION_NAME", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    return Settings()


@pytest.fixture
def database():
    """Fresh in-memory MongoDB database."""
    return AsyncMongoMockClient()["calculations_test"]


@pytest.fixture
def collection(database, settings):
    return database[settings.collection_name]


@pytest.fixture
def client(database, settings):
    app = create_app(database=database, settings=settings)
    with TestClient(app) as test_client:
        yield test_client
