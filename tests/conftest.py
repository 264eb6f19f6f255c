import jwt
import mongomock
import pytest
from fastapi.testclient import TestClient

from socialposts import config
from socialposts.database import get_db
from socialposts.main import app
from socialposts.store.posts import PostStore


def make_token(user_id, **claims):
    payload = {"id": user_id, **claims}
    return jwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def auth_header(user_id, **claims):
    return {"Authorization": f"Bearer {make_token(user_id, **claims)}"}


@pytest.fixture
def db():
    return mongomock.MongoClient()[config.DB_NAME]


@pytest.fixture
def store(db):
    return PostStore(db)


@pytest.fixture
def client(db):
    # Not used as a context manager, so the lifespan never opens a real connection
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
