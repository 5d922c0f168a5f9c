"""Pytest fixtures and configuration for Volunteer Hub tests."""

import os

# Keep the app's module-level engine in memory and hashing fast.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from volunteerhub.database.database import Base, enable_sqlite_savepoints
from volunteerhub.database.models import Event, UserCredentials, UserProfile
from volunteerhub.models.enums import EventUrgency, UserRole, VolunteerSkill


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.

    Uses an in-memory SQLite database that is created fresh for each test.
    Foreign keys are enabled by the connect listener in the database module.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )
    enable_sqlite_savepoints(engine)

    # Create all tables
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def make_user(db_session: Session):
    """Factory that persists credentials (and optionally a profile)."""

    def _make_user(
        email: str = "volunteer@example.com",
        role: UserRole = UserRole.VOLUNTEER,
        password_hash: str = "not-a-real-hash",
        profile: dict = None,
    ) -> UserCredentials:
        credentials = UserCredentials(email=email, password_hash=password_hash, role=role)
        db_session.add(credentials)
        if profile is not None:
            fields = {
                "first_name": "Vera",
                "last_name": "Volunteer",
                "address_one": "1 Main St",
                "city": "Houston",
                "state": "TX",
                "zip_code": "77001",
            }
            fields.update(profile)
            db_session.add(UserProfile(user_credentials_id=credentials.id, **fields))
        db_session.commit()
        return credentials

    return _make_user


@pytest.fixture
def volunteer(make_user) -> UserCredentials:
    return make_user(
        email="volunteer@example.com",
        profile={"skills": [VolunteerSkill.COOKING], "availability": ["Weekends"]},
    )


@pytest.fixture
def admin(make_user) -> UserCredentials:
    return make_user(email="admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def make_event(db_session: Session):
    """Factory that persists an event; ``days`` offsets the date from now."""

    def _make_event(
        name: str = "Food Drive",
        days: float = 7,
        date_utc: datetime = None,
        urgency: EventUrgency = EventUrgency.MEDIUM,
        required_skills=None,
        location: str = "Community Center",
    ) -> Event:
        event = Event(
            name=name,
            description=f"{name} description",
            location=location,
            date_utc=date_utc or datetime.now(timezone.utc) + timedelta(days=days),
            urgency=urgency,
            required_skills=required_skills or [],
        )
        db_session.add(event)
        db_session.commit()
        return event

    return _make_event


@pytest.fixture
def auth_headers():
    """Build a Bearer header carrying a real JWT for a user."""
    from volunteerhub.auth.jwt import create_access_token

    def _auth_headers(user: UserCredentials) -> dict:
        token = create_access_token(user.id, user.email, user.role.value)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from volunteerhub.api.app import app
    from volunteerhub.database.database import get_db

    # Override the get_db dependency to use our test database session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up dependency overrides
    app.dependency_overrides.clear()
