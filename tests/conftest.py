"""
Pytest configuration and shared fixtures for the test suite.
Ensures proper Python path and provides common fixtures for unit and integration tests.
"""
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root and src to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
src_path = project_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


def seed_course(db, slug="budgeting-basics", stages=6, quizzes=None, name="Budgeting Basics"):
    """Insert a course with `stages` lessons and `quizzes` quizzes (defaults to one per lesson)."""
    from api.models.models import Course, LearningStage, Quiz
    from learning.samples import PYTHON_VARIABLES_QUESTIONS

    quizzes = stages if quizzes is None else quizzes
    course = Course(id=f"course-{slug}", slug=slug, name=name, stages_count=stages)
    db.add(course)
    for i in range(1, stages + 1):
        db.add(LearningStage(id=f"{slug}-stage-{i}", course_id=course.id, order_index=i, name=f"Lesson {i}"))
    for i in range(1, quizzes + 1):
        db.add(
            Quiz(
                id=f"{slug}-quiz-{i}",
                course_id=course.id,
                order_index=i,
                name=f"Quiz {i}",
                questions=PYTHON_VARIABLES_QUESTIONS,
                passing_score=70,
                time_limit=15,
            )
        )
    db.commit()
    db.refresh(course)
    return course


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """Create an in-memory SQLite engine for tests; one shared connection so every session sees the same data."""
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )


@pytest.fixture
def db_session(in_memory_engine):
    """Create an in-memory database session. Uses api.config.Base for schema."""
    from api.config import Base
    import api.models.models  # noqa: F401
    Base.metadata.create_all(in_memory_engine)
    SessionLocal = sessionmaker(bind=in_memory_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def test_user(db_session):
    from api.models.models import User
    user = User(email="learner@example.com", hashed_password="x", preferences={"name": "Learner"})
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def test_course(db_session):
    """A six-stage course with one quiz per stage."""
    return seed_course(db_session)


@pytest.fixture
def course_seeder():
    """The seed_course helper, for fixtures that own their own session."""
    return seed_course
