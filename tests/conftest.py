import pytest
from fastapi.testclient import TestClient

from catalog import api
from catalog.config import settings
from catalog.database import create_tables
from catalog.library import Library
from catalog.store import BookStore


@pytest.fixture
def db_file(tmp_path, request):
    # Unique database file per test
    return str(tmp_path / f"test_{request.node.name}.db")


@pytest.fixture
def store(db_file):
    """An empty, unseeded store."""
    create_tables(db_file)
    return BookStore(db_file)


@pytest.fixture
def lib(store):
    lib = Library(store)
    yield lib
    lib.close()


@pytest.fixture
def client(db_file, monkeypatch):
    """API client over a freshly seeded database."""
    monkeypatch.setattr(settings, "database_file", db_file)
    monkeypatch.setattr(settings, "seed_database", True)
    with TestClient(api.app) as test_client:
        yield test_client
