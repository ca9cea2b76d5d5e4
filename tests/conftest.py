import os
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set testing environment before the app reads its settings
os.environ["TESTING"] = "1"
os.environ["TEST_DATABASE_URL"] = "sqlite:///./test.db"

from app.main import app
from app.core.database import get_db, Base
from app.core.security import get_password_hash, UserRole
from app.models.slot import Slot
from app.models.user import User
from app.services.slot_catalog import seed_slots

# Create test database
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Monday; far enough ahead that it never collides with a real seed run
SEED_DATE = date(2030, 1, 7)

def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture(scope="function")
def test_db():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(test_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def client(test_db):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client

@pytest.fixture
def slots(db_session):
    """Seed the default grid and return it ordered by start time."""
    seed_slots(db_session, start_date=SEED_DATE)
    return db_session.query(Slot).order_by(Slot.start_at).all()

def register_and_login(client, name, email, password="pw123"):
    """Register a patient and return its bearer token."""
    response = client.post(
        "/api/register",
        json={"name": name, "email": email, "password": password}
    )
    assert response.status_code == 201
    login_response = client.post("/api/login", json={"email": email, "password": password})
    assert login_response.status_code == 200
    return login_response.json()["token"]

def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}

@pytest.fixture
def patient_token(client):
    return register_and_login(client, "Alice", "alice@example.com")

@pytest.fixture
def other_patient_token(client):
    return register_and_login(client, "Bob", "bob@example.com")

@pytest.fixture
def admin_token(client, db_session):
    db_session.add(User(
        name="Admin User",
        email="admin@example.com",
        password_hash=get_password_hash("adminpass"),
        role=UserRole.ADMIN,
    ))
    db_session.commit()
    response = client.post(
        "/api/login",
        json={"email": "admin@example.com", "password": "adminpass"}
    )
    assert response.status_code == 200
    return response.json()["token"]
