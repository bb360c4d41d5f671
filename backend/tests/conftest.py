import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from academia import services
from academia.auth import Authorities
from academia.database import create_db_and_tables, enable_sqlite_foreign_keys, get_session
from academia.main import app


@pytest.fixture(name="session")
def session_fixture():
    """A fresh in-memory SQLite database per test."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    create_db_and_tables(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


@pytest.fixture(name="client")
def client_fixture(session):
    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    """Create a user with the given authorities and return (user, headers)."""
    def _make(login, *authorities):
        authorities = authorities or (Authorities.USER,)
        user = services.AuthService(session).register(login, 'secret', authorities=authorities)
        token = services.AuthService.create_token(user)
        return user, {'Authorization': f'Bearer {token}'}
    return _make


@pytest.fixture
def headers(make_user):
    """Bearer headers of a plain `ROLE_USER` account."""
    _user, h = make_user('usuario')
    return h
