import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from auth import create_token
from database import init_db, make_engine, make_session_factory
from main import create_app
from models.user import User


@pytest.fixture
def engine():
    # One shared in-memory connection per test
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db):
    """Insert a user directly, skipping bcrypt to keep tests fast."""
    def _make(email: str, name: str | None = None, **fields) -> User:
        user = User(email=email, password="not-a-real-hash", name=name, **fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def client(engine):
    with TestClient(create_app(engine=engine)) as c:
        yield c


@pytest.fixture
def auth_headers():
    def _headers(user_id: int) -> dict:
        return {"Authorization": f"Bearer {create_token(user_id)}"}
    return _headers
