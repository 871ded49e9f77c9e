import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from timeclock.database import Base, get_db
from timeclock.main import app
from timeclock.models.user import User
from timeclock.services.auth_service import AuthContext
from timeclock.utils.clock import FixedClock, get_clock

TEST_DB_URL = "sqlite:///./test_timeclock.db"
TEST_PASSWORD = "pass1234"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def clock():
    # 2024-03-01 09:00 (UTC+8)
    fixed = FixedClock(datetime(2024, 3, 1, 9, 0))
    app.dependency_overrides[get_clock] = lambda: fixed
    yield fixed
    app.dependency_overrides.pop(get_clock, None)


@pytest.fixture
def seed_users(db):
    users = {
        "admin": User(username="admin", password=TEST_PASSWORD, name="Admin", role="admin"),
        "alice": User(username="alice", password=TEST_PASSWORD, name="Alice", role="employee"),
        "bob": User(username="bob", password=TEST_PASSWORD, name="Bob", role="employee"),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


def context_for(user: User) -> AuthContext:
    return AuthContext(user_id=user.user_id, role=user.role, username=user.username, token="test-token")


def get_token(client, username: str, password: str = TEST_PASSWORD) -> str:
    resp = client.post("/api/auth/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def auth_headers(client, username: str) -> dict:
    return {"Authorization": f"Bearer {get_token(client, username)}"}
