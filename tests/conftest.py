"""Shared fixtures: the app wired to an in-memory store instead of MongoDB."""

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from films.database.db import ConnectionFactory, DatabaseConfig, get_connection_factory
from films.main import app
from tests.fake_mongo import FakeStore


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def factory(store):
    return ConnectionFactory(DatabaseConfig(url="mongodb://fake-mongo:27017"), client_class=store.client_class)


@pytest.fixture
def client(factory):
    # Not entered as a context manager: startup would wait for a real database
    app.dependency_overrides[get_connection_factory] = lambda: factory
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def seed_film(store):
    """Insert a film directly into the store and return it in wire form."""
    object_id = ObjectId()
    document = {
        "title": "TEST before update Ex Machina",
        "year": 2014,
        "actors": ["Domhnall Gleeson", "Oscar Isaac", "Alicia Vikander"],
    }
    store.documents()[object_id] = {"_id": object_id, **document}
    return {"_id": str(object_id), **document}
