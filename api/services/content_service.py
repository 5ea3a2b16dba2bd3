"""
Read access to course content: courses, learning stages and quizzes.

Lookups return ``None`` when nothing matches; callers decide how to report it.
"""

from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session as DBSession

from api.config import settings
from api.models.models import Course, LearningStage, Quiz as QuizRow
from api.utils.common import normalize_slug
from api.utils.logger import configure_logging
from learning.types import Quiz, QuizQuestion

logger = configure_logging()


def _load_question(raw: object, position: int) -> QuizQuestion:
    """Parse one stored question. A malformed entry still counts toward the total and can never be answered correctly."""
    try:
        return QuizQuestion.model_validate(raw)
    except ValidationError as e:
        qid = str(raw.get("id")) if isinstance(raw, dict) and raw.get("id") else f"invalid-{position}"
        logger.warning("malformed quiz question id=%s errors=%s", qid, e.errors())
        return QuizQuestion(id=qid, type="invalid", options=[])


def quiz_from_row(row: QuizRow) -> Quiz:
    questions = row.questions if isinstance(row.questions, list) else []
    return Quiz(
        id=row.id,
        title=row.name,
        description=row.description or f"Quiz for {row.name}",
        questions=[_load_question(q, i) for i, q in enumerate(questions, start=1)],
        time_limit=row.time_limit if row.time_limit is not None else settings.default_time_limit_minutes,
        passing_score=row.passing_score if row.passing_score is not None else settings.default_passing_score,
    )


class ContentService:
    """Course, stage and quiz lookups keyed the way the learner navigates: slug + order index."""

    def __init__(self, db: DBSession):
        self.db = db

    def list_courses(self) -> list[Course]:
        return self.db.query(Course).order_by(Course.name.asc()).all()

    def get_course_by_slug(self, slug: str) -> Optional[Course]:
        return self.db.query(Course).filter(Course.slug == normalize_slug(slug)).first()

    def list_stages(self, course_id: str) -> list[LearningStage]:
        return (
            self.db.query(LearningStage)
            .filter(LearningStage.course_id == course_id)
            .order_by(LearningStage.order_index.asc())
            .all()
        )

    def list_quizzes(self, course_id: str) -> list[QuizRow]:
        return (
            self.db.query(QuizRow)
            .filter(QuizRow.course_id == course_id)
            .order_by(QuizRow.order_index.asc())
            .all()
        )

    def get_stage(self, course_id: str, order_index: int) -> Optional[LearningStage]:
        return (
            self.db.query(LearningStage)
            .filter(LearningStage.course_id == course_id, LearningStage.order_index == order_index)
            .first()
        )

    def get_stage_by_id(self, stage_id: str) -> Optional[LearningStage]:
        return self.db.query(LearningStage).filter(LearningStage.id == stage_id).first()

    def get_quiz_row(self, course_id: str, order_index: int) -> Optional[QuizRow]:
        return (
            self.db.query(QuizRow)
            .filter(QuizRow.course_id == course_id, QuizRow.order_index == order_index)
            .first()
        )

    def get_quiz_row_by_id(self, quiz_id: str) -> Optional[QuizRow]:
        return self.db.query(QuizRow).filter(QuizRow.id == quiz_id).first()

    def get_quiz_by_slug_and_order(self, slug: str, order_index: int) -> Optional[QuizRow]:
        course = self.get_course_by_slug(slug)
        if course is None:
            return None
        return self.get_quiz_row(course.id, order_index)
