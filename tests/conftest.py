import os

# Settings are read at import time; give the test run its own values
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from datetime import datetime, timedelta, UTC
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from jose import jwt

from hotel_console.database import get_db
from hotel_console.models.base import Base
from hotel_console.config import settings
# Import all model classes to ensure they're registered with SQLAlchemy
from hotel_console.models.hotel import Hotel
from hotel_console.models.role import Role
from hotel_console.models.user import User
from hotel_console.models.privilege_document import PrivilegeDocument
# Import FastAPI app AFTER model imports
from hotel_console.main import app

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """FastAPI test client with test database"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def create_test_token(operator_id: str = "admin-123", expired: bool = False) -> str:
    """
    Generate valid JWT token for testing.

    Args:
        operator_id: Operator ID to embed in 'sub' claim
        expired: If True, create expired token

    Returns:
        Encoded JWT token
    """
    if expired:
        exp = datetime.now(UTC) - timedelta(minutes=5)
    else:
        exp = datetime.now(UTC) + timedelta(minutes=15)

    payload = {"sub": operator_id, "exp": exp, "iat": datetime.now(UTC)}

    token = jwt.encode(payload, settings.SECRET_KEY, algorithm="HS256")
    return token


@pytest.fixture
def auth_headers():
    """Authorization headers for authenticated requests"""
    return {"Authorization": f"Bearer {create_test_token()}"}


@pytest.fixture
def hotel(db_session):
    """Hotel H1 used by most privilege tests"""
    hotel = Hotel(name="Harbour View", city="Colombo", country="Sri Lanka")
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def other_hotel(db_session):
    hotel = Hotel(name="Hill Lodge")
    db_session.add(hotel)
    db_session.commit()
    db_session.refresh(hotel)
    return hotel


@pytest.fixture
def manager_role(db_session, hotel):
    role = Role(hotel_id=hotel.id, name="Manager")
    db_session.add(role)
    db_session.commit()
    db_session.refresh(role)
    return role


@pytest.fixture
def clerk_role(db_session, hotel):
    role = Role(hotel_id=hotel.id, name="Clerk")
    db_session.add(role)
    db_session.commit()
    db_session.refresh(role)
    return role


@pytest.fixture
def staff_user(db_session, hotel, manager_role, clerk_role):
    """User holding both Manager and Clerk in the hotel"""
    user = User(
        hotel_id=hotel.id,
        first_name="Nimal",
        last_name="Perera",
        email="nimal@harbourview.test",
    )
    user.roles = [manager_role, clerk_role]
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
