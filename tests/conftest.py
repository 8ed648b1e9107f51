"""
Shared test fixtures — SQLite test database, test client, admin auth helpers.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set JWT_SECRET before importing app modules
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from expo_estimator.database import Base, get_db
from expo_estimator.main import app
from expo_estimator import models
from expo_estimator.vendor_directory import DEFAULT_VENDORS


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client. Startup hooks don't run, so nothing is seeded."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_vendors(db):
    """The default vendor directory, as the startup hook would seed it."""
    for data in DEFAULT_VENDORS:
        db.add(models.Vendor(**data))
    db.commit()
    return db.query(models.Vendor).order_by(models.Vendor.id).all()


@pytest.fixture
def admin_headers(client):
    """Register a test admin and return auth headers."""
    response = client.post("/api/auth/register", json={
        "email": "admin@easemyexpo.in",
        "password": "strongpassword123",
        "full_name": "Test Admin",
    })
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}
