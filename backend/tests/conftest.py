import os

# Use in-memory sqlite for tests; must be set before carnet is imported
os.environ.setdefault("CARNET_DATABASE_URL", "sqlite://")
os.environ.setdefault("CARNET_AUTH_SECRET_KEY", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from carnet.core.auth import create_access_token  # noqa: E402
from carnet.db import Base, get_db, make_engine  # noqa: E402
from carnet.main import app  # noqa: E402


@pytest.fixture
def session_factory():
    # Fresh database per test
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def alice():
    return auth_headers("user_alice")


@pytest.fixture
def bob():
    return auth_headers("user_bob")
