import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import sessionmaker

import app.models  # noqa: F401 (register models with Base.metadata)
from app.core.database import Base, get_db
from app.main import app as fastapi_app
from app.models.user import User
from app.services.auth import create_access_token, hash_password

# In-memory SQLite for tests, no database server needed
TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_db():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    """Provide a test database session."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    """TestClient with overridden DB dependency."""

    def _override_get_db():
        try:
            yield db
        finally:
            pass

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


def _create_user(db, username: str, **overrides) -> User:
    """Insert a user directly into the DB and return it."""
    defaults = {
        "first_name": "Test",
        "last_name": "User",
        "username": username,
        "email": f"{username}@example.com",
        "password_hash": hash_password("strongpassword123"),
    }
    defaults.update(overrides)
    user = User(**defaults)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def _auth_header(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def alice(db) -> User:
    return _create_user(db, "alice")


@pytest.fixture
def bob(db) -> User:
    return _create_user(db, "bob")


@pytest.fixture
def alice_headers(alice) -> dict:
    return _auth_header(alice)


@pytest.fixture
def bob_headers(bob) -> dict:
    return _auth_header(bob)
