"""
Quiz delivery, per-question checking and quiz finish.

Finishing a quiz scores the submitted answers server-side and records the
attempt. The answers themselves are not stored; only the derived score is.
A timer-expiry finish goes through the same path as a manual one.
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from api.models.models import Quiz as QuizRow
from api.schemas.quiz_schemas import (
    CheckAnswerResponse,
    PublicQuestion,
    QuizResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from api.schemas.result_schemas import ErrorKind, ServiceResult
from api.services.content_service import ContentService, quiz_from_row
from api.services.progress_service import ProgressService
from api.utils.common import strip_answer_key
from api.utils.logger import configure_logging
from learning.quiz import grade_quiz, validate_answer

logger = configure_logging()


class QuizService:
    def __init__(self, db: DBSession, progress: Optional[ProgressService] = None):
        self.db = db
        self.content = ContentService(db)
        self.progress = progress or ProgressService(db)

    def _load(self, slug: str, order_index: int) -> ServiceResult:
        try:
            course = self.content.get_course_by_slug(slug)
            if course is None:
                return ServiceResult.fail(ErrorKind.NOT_FOUND, "Course not found")
            row = self.content.get_quiz_row(course.id, order_index)
        except SQLAlchemyError:
            logger.exception("quiz lookup failed slug=%s order_index=%s", slug, order_index)
            self.db.rollback()
            return ServiceResult.fail(ErrorKind.PERSISTENCE, "Failed to fetch quiz")
        if row is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "Quiz not found")
        return ServiceResult.ok(row)

    def get_quiz(self, slug: str, order_index: int) -> ServiceResult:
        loaded = self._load(slug, order_index)
        if not loaded.success:
            return loaded
        row: QuizRow = loaded.data
        quiz = quiz_from_row(row)
        return ServiceResult.ok(
            QuizResponse(
                id=quiz.id,
                course_id=row.course_id,
                order_index=row.order_index,
                title=quiz.title,
                description=quiz.description,
                time_limit=quiz.time_limit,
                passing_score=quiz.passing_score,
                questions=[PublicQuestion(**q) for q in strip_answer_key(row.questions)],
            )
        )

    def check_answer(self, slug: str, order_index: int, question_id: str, answer) -> ServiceResult:
        loaded = self._load(slug, order_index)
        if not loaded.success:
            return loaded
        quiz = quiz_from_row(loaded.data)
        question = next((q for q in quiz.questions if q.id == question_id), None)
        if question is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "Question not found")
        return ServiceResult.ok(CheckAnswerResponse(question_id=question_id, correct=validate_answer(question, answer)))

    def submit_quiz(self, user_id: int, slug: str, order_index: int, body: SubmitQuizRequest) -> ServiceResult:
        loaded = self._load(slug, order_index)
        if not loaded.success:
            return loaded
        quiz = quiz_from_row(loaded.data)
        grade = grade_quiz(quiz, body.answers)
        logger.info(
            "quiz finished user_id=%s quiz_id=%s score=%s passed=%s timed_out=%s",
            user_id, quiz.id, grade.score, grade.passed, body.timed_out,
        )
        saved = self.progress.record_quiz_attempt(user_id, quiz.id, grade.score, body.time_taken)
        if not saved.success:
            return saved
        record = saved.data
        return ServiceResult.ok(
            SubmitQuizResponse(
                quiz_id=quiz.id,
                score=grade.score,
                is_passed=grade.passed,
                passing_score=quiz.passing_score,
                correct_count=grade.correct_count,
                total_questions=grade.total_questions,
                results=grade.results,
                attempts_count=record.attempts_count,
                best_score=record.best_score,
            )
        )
