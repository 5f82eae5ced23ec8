"""
pytest configuration and fixtures.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from coffee_service.config import Settings
from coffee_service.models import Coffee
from coffee_service.server import create_app
from coffee_service.service import CoffeeService
from coffee_service.sqlite_store import SqliteCoffeeStore
from coffee_service.store import CoffeeStore, InMemoryCoffeeStore


@pytest.fixture
def settings() -> Settings:
    """Default test settings (in-memory store)."""
    return Settings(log_level="warning")


@pytest.fixture
def memory_store() -> InMemoryCoffeeStore:
    return InMemoryCoffeeStore()


@pytest.fixture
def sqlite_store(tmp_path) -> Generator[SqliteCoffeeStore, None, None]:
    store = SqliteCoffeeStore(str(tmp_path / "coffee.db"))
    yield store
    store.close()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path) -> Generator[CoffeeStore, None, None]:
    """Every store backend, for contract tests."""
    if request.param == "memory":
        yield InMemoryCoffeeStore()
        return
    backend = SqliteCoffeeStore(str(tmp_path / "coffee.db"))
    yield backend
    backend.close()


@pytest.fixture
def service(memory_store: InMemoryCoffeeStore) -> CoffeeService:
    return CoffeeService(memory_store)


@pytest.fixture
def client(settings: Settings, memory_store: InMemoryCoffeeStore) -> Generator[TestClient, None, None]:
    """Test client over an app backed by `memory_store`."""
    app = create_app(settings, store=memory_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def stored_a_v3(memory_store: InMemoryCoffeeStore) -> Coffee:
    """A stored record {id: 1, name: "A", version: 3}."""
    created = memory_store.insert(Coffee(name="A", version=1))
    created.version = 3
    return memory_store.save(created)
