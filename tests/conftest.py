import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spellquest.db import Base, enable_sqlite_savepoints, get_db
from spellquest.main import app
from spellquest.store import seed_catalog


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    with factory() as db:
        seed_catalog(db)
    return factory


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Create an account and return bearer headers for it."""
    def _signup(email="learner@example.com", password="spelling123", **extra):
        res = client.post("/auth/signup", json={"email": email, "password": password, **extra})
        assert res.status_code == 201, res.text
        token = client.post("/auth/token", data={"username": email, "password": password})
        assert token.status_code == 200, token.text
        return {"Authorization": f"Bearer {token.json()['access_token']}"}

    return _signup


@pytest.fixture
def auth_headers(signup):
    return signup()
