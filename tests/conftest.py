"""Shared fixtures: fresh providers, registries and app clients per test."""
import pytest
from fastapi.testclient import TestClient

from refvalidator.config import Settings
from refvalidator.main import create_app
from refvalidator.providers.auth import MockAuthProvider
from refvalidator.providers.database import MockDatabaseProvider
from refvalidator.providers.email import MockEmailProvider
from refvalidator.providers.nlp import MockNLPProvider
from refvalidator.providers.storage import MockStorageProvider
from refvalidator.state import create_registry


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def database():
    return MockDatabaseProvider()


@pytest.fixture
def empty_database():
    return MockDatabaseProvider(seed=False)


@pytest.fixture
def auth():
    return MockAuthProvider()


@pytest.fixture
def email():
    return MockEmailProvider()


@pytest.fixture
def nlp():
    return MockNLPProvider()


@pytest.fixture
def storage():
    return MockStorageProvider()


@pytest.fixture
def registry(settings):
    return create_registry(settings)


@pytest.fixture
def client(settings, registry):
    app = create_app(settings=settings, registry=registry)
    with TestClient(app) as test_client:
        yield test_client
