"""
Integration test fixtures. Overrides get_db for API tests with in-memory DB.
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


@pytest.fixture
def override_get_db():
    """Create in-memory engine and session factory for API tests."""
    from api.config import Base
    import api.models.models  # noqa: F401
    # TestClient runs endpoints on other threads; StaticPool keeps a single in-memory database.
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def _get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def api_client(override_get_db):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    from api.api import app
    from api.config import get_db
    from api.services.progress_service import stats_cache
    stats_cache.clear()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
    stats_cache.clear()


@pytest.fixture
def seeded_course(override_get_db, course_seeder):
    """Six-stage course "budgeting-basics" in the API database."""
    db = next(override_get_db())
    try:
        course = course_seeder(db)
        return {"id": course.id, "slug": course.slug}
    finally:
        db.close()


@pytest.fixture
def auth_cookies(api_client, override_get_db):
    """Register a learner through the API and return the auth cookies."""
    response = api_client.post(
        "/auth/register",
        json={"email": "learner@example.com", "password": "learnpass1", "confirm_password": "learnpass1"},
    )
    assert response.status_code == 200
    return {"access_token": response.cookies["access_token"]}
