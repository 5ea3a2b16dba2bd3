"""
Progress persistence and aggregation.

Recording:
- Quiz attempts: one row per (user, quiz). First finish inserts, every later
  finish bumps attempts_count, replaces score and keeps the best score.
- Stage completion: one row per (user, stage), inserted once and never touched.

Both writes rely on the table's unique constraint; a concurrent duplicate
insert is folded into the existing row instead of creating a second one.

Every public method returns a ServiceResult; database errors are logged,
rolled back and reported as ``persistence`` failures.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import case, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from api.config import settings
from api.models.models import (
    Course,
    LearningStage,
    Quiz as QuizRow,
    UserLearningStageProgress,
    UserQuizProgress,
)
from api.schemas.result_schemas import ErrorKind, ServiceResult
from api.schemas.user_progress_schemas import (
    CourseProgressResponse,
    QuizAttemptRecord,
    StageProgressResponse,
    UserStatsResponse,
)
from api.services.content_service import ContentService
from api.utils.cache import ReadThroughCache
from api.utils.common import iso_format
from api.utils.logger import configure_logging, log_request
from learning.progress import (
    CourseProgress,
    StageProgress,
    UserStats,
    aggregate_all_courses,
    aggregate_course_progress,
    compute_user_stats,
    count_by_course,
)

logger = configure_logging()


@dataclass
class UserActivity:
    """A user's own completion rows, the cacheable half of their stats."""
    completed_stage_course_ids: list[str] = field(default_factory=list)
    completed_quiz_course_ids: list[str] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)  # latest score per attempt record


# user_id -> UserActivity
stats_cache = ReadThroughCache(ttl_sec=settings.stats_cache_ttl_seconds)


def stage_progress_response(stage: StageProgress) -> StageProgressResponse:
    return StageProgressResponse(
        order_index=stage.order_index,
        stage_completed=stage.stage_completed,
        quiz_completed=stage.quiz_completed,
        state=stage.state.value,
    )


def course_progress_response(progress: CourseProgress) -> CourseProgressResponse:
    return CourseProgressResponse(
        course_id=progress.course_id,
        progress=progress.progress,
        completed_stages=progress.completed_stages,
        total_stages=progress.total_stages,
        completed_quizzes=progress.completed_quizzes,
        total_quizzes=progress.total_quizzes,
        completed_count=progress.completed_count,
        is_completed=progress.is_completed,
        stages=[stage_progress_response(s) for s in progress.stages],
    )


def attempt_record(row: UserQuizProgress) -> QuizAttemptRecord:
    return QuizAttemptRecord(
        quiz_id=row.quiz_id,
        course_id=row.course_id,
        score=int(row.score),
        best_score=int(row.best_score),
        attempts_count=int(row.attempts_count),
        time_taken=row.time_taken,
        completed_at=iso_format(row.completed_at),
    )


class ProgressService:
    """Attempt recorder and progress aggregator over the progress tables."""

    def __init__(self, db: DBSession, cache: Optional[ReadThroughCache] = None):
        self.db = db
        self.content = ContentService(db)
        self.cache = cache if cache is not None else stats_cache

    def _persistence_failure(self, action: str) -> ServiceResult:
        logger.exception("%s failed", action)
        self.db.rollback()
        return ServiceResult.fail(ErrorKind.PERSISTENCE, f"Failed to {action}")

    # ----- quiz attempts -----

    def _find_attempt(self, user_id: int, quiz_id: str) -> Optional[UserQuizProgress]:
        return (
            self.db.query(UserQuizProgress)
            .filter(UserQuizProgress.user_id == user_id, UserQuizProgress.quiz_id == quiz_id)
            .first()
        )

    def _apply_retake(self, row: UserQuizProgress, score: int, time_taken: Optional[int], now: datetime) -> None:
        # SQL-side expressions so two finishes racing on the same row both count.
        row.score = score
        row.attempts_count = UserQuizProgress.attempts_count + 1
        row.best_score = case(
            (UserQuizProgress.best_score < score, score),
            else_=UserQuizProgress.best_score,
        )
        row.time_taken = time_taken
        row.completed_at = now
        row.updated_at = now

    def record_quiz_attempt(self, user_id: int, quiz_id: str, score: int, time_taken: Optional[int] = None) -> ServiceResult:
        """Persist one finished attempt and return the resulting QuizAttemptRecord."""
        try:
            with log_request(logger, "record_quiz_attempt"):
                quiz = self.content.get_quiz_row_by_id(quiz_id)
                if quiz is None:
                    return ServiceResult.fail(ErrorKind.NOT_FOUND, "Quiz not found")

                now = datetime.utcnow()
                row = self._find_attempt(user_id, quiz_id)
                if row is None:
                    row = UserQuizProgress(
                        id=str(uuid4()),
                        user_id=user_id,
                        quiz_id=quiz.id,
                        course_id=quiz.course_id,
                        score=score,
                        best_score=score,
                        attempts_count=1,
                        time_taken=time_taken,
                        completed_at=now,
                        created_at=now,
                        updated_at=now,
                    )
                    self.db.add(row)
                    try:
                        self.db.commit()
                    except IntegrityError:
                        # Another finish for the same (user, quiz) inserted first.
                        self.db.rollback()
                        logger.warning("concurrent first attempt user_id=%s quiz_id=%s; updating", user_id, quiz_id)
                        row = self._find_attempt(user_id, quiz_id)
                        if row is None:
                            raise
                        self._apply_retake(row, score, time_taken, now)
                        self.db.commit()
                else:
                    self._apply_retake(row, score, time_taken, now)
                    self.db.commit()
                self.db.refresh(row)
                self.cache.invalidate(user_id)
                logger.info(
                    "quiz attempt user_id=%s quiz_id=%s score=%s best=%s attempts=%s",
                    user_id, quiz_id, row.score, row.best_score, row.attempts_count,
                )
                return ServiceResult.ok(attempt_record(row))
        except SQLAlchemyError:
            return self._persistence_failure("save quiz progress")

    def save_quiz_progress(self, user_id: int, slug: str, order_index: int, score: int, time_taken: Optional[int] = None) -> ServiceResult:
        """Same as record_quiz_attempt, addressing the quiz the way the learner does."""
        try:
            course = self.content.get_course_by_slug(slug)
            if course is None:
                return ServiceResult.fail(ErrorKind.NOT_FOUND, "Course not found")
            quiz = self.content.get_quiz_row(course.id, order_index)
            if quiz is None:
                return ServiceResult.fail(ErrorKind.NOT_FOUND, "Quiz not found")
        except SQLAlchemyError:
            return self._persistence_failure("look up quiz")
        return self.record_quiz_attempt(user_id, quiz.id, score, time_taken)

    def get_quiz_attempt(self, user_id: int, quiz_id: str) -> ServiceResult:
        try:
            row = self._find_attempt(user_id, quiz_id)
        except SQLAlchemyError:
            return self._persistence_failure("load quiz progress")
        if row is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "No attempt recorded")
        return ServiceResult.ok(attempt_record(row))

    def get_quiz_attempt_by_slug(self, user_id: int, slug: str, order_index: int) -> ServiceResult:
        try:
            quiz = self.content.get_quiz_by_slug_and_order(slug, order_index)
        except SQLAlchemyError:
            return self._persistence_failure("look up quiz")
        if quiz is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "Quiz not found")
        return self.get_quiz_attempt(user_id, quiz.id)

    # ----- stage completion -----

    def _find_stage_completion(self, user_id: int, stage_id: str) -> Optional[UserLearningStageProgress]:
        return (
            self.db.query(UserLearningStageProgress)
            .filter(
                UserLearningStageProgress.user_id == user_id,
                UserLearningStageProgress.learning_stage_id == stage_id,
            )
            .first()
        )

    def record_stage_completion(self, user_id: int, stage_id: str) -> ServiceResult:
        """Idempotent: completing an already completed stage succeeds and changes nothing."""
        try:
            with log_request(logger, "record_stage_completion"):
                stage = self.content.get_stage_by_id(stage_id)
                if stage is None:
                    return ServiceResult.fail(ErrorKind.NOT_FOUND, "Stage not found")
                existing = self._find_stage_completion(user_id, stage_id)
                if existing is not None:
                    return ServiceResult.ok(
                        {"stage_id": stage_id, "already_completed": True, "completed_at": iso_format(existing.completed_at)}
                    )
                now = datetime.utcnow()
                self.db.add(
                    UserLearningStageProgress(
                        id=str(uuid4()),
                        user_id=user_id,
                        learning_stage_id=stage.id,
                        course_id=stage.course_id,
                        completed_at=now,
                    )
                )
                try:
                    self.db.commit()
                except IntegrityError:
                    self.db.rollback()
                    logger.info("stage already completed concurrently user_id=%s stage_id=%s", user_id, stage_id)
                    return ServiceResult.ok({"stage_id": stage_id, "already_completed": True, "completed_at": None})
                self.cache.invalidate(user_id)
                return ServiceResult.ok({"stage_id": stage_id, "already_completed": False, "completed_at": iso_format(now)})
        except SQLAlchemyError:
            return self._persistence_failure("mark stage as complete")

    def _resolve_stage(self, slug: str, order_index: int) -> ServiceResult:
        course = self.content.get_course_by_slug(slug)
        if course is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "Course not found")
        stage = self.content.get_stage(course.id, order_index)
        if stage is None:
            return ServiceResult.fail(ErrorKind.NOT_FOUND, "Stage not found")
        return ServiceResult.ok(stage)

    def mark_stage_complete(self, user_id: int, slug: str, order_index: int) -> ServiceResult:
        try:
            resolved = self._resolve_stage(slug, order_index)
        except SQLAlchemyError:
            return self._persistence_failure("look up stage")
        if not resolved.success:
            return resolved
        return self.record_stage_completion(user_id, resolved.data.id)

    def check_stage_completion(self, user_id: int, slug: str, order_index: int) -> ServiceResult:
        try:
            resolved = self._resolve_stage(slug, order_index)
            if not resolved.success:
                return resolved
            stage = resolved.data
            done = self._find_stage_completion(user_id, stage.id) is not None
        except SQLAlchemyError:
            return self._persistence_failure("check stage completion")
        return ServiceResult.ok({"stage_id": stage.id, "order_index": stage.order_index, "is_completed": done})

    # ----- aggregation -----

    def _course_progress(self, user_id: int, course_id: str) -> CourseProgress:
        stage_orders = (
            self.db.query(LearningStage.order_index)
            .join(UserLearningStageProgress, UserLearningStageProgress.learning_stage_id == LearningStage.id)
            .filter(UserLearningStageProgress.user_id == user_id, UserLearningStageProgress.course_id == course_id)
            .all()
        )
        quiz_orders = (
            self.db.query(QuizRow.order_index)
            .join(UserQuizProgress, UserQuizProgress.quiz_id == QuizRow.id)
            .filter(UserQuizProgress.user_id == user_id, UserQuizProgress.course_id == course_id)
            .all()
        )
        total_stages = self.db.query(func.count(LearningStage.id)).filter(LearningStage.course_id == course_id).scalar() or 0
        total_quizzes = self.db.query(func.count(QuizRow.id)).filter(QuizRow.course_id == course_id).scalar() or 0

        progress = aggregate_course_progress(
            course_id,
            total_stages=int(total_stages),
            total_quizzes=int(total_quizzes),
            completed_stage_orders=[r[0] for r in stage_orders],
            completed_quiz_orders=[r[0] for r in quiz_orders],
        )
        for s in progress.stages:
            if s.is_anomalous:
                logger.warning(
                    "quiz completed without its lesson user_id=%s course_id=%s order_index=%s",
                    user_id, course_id, s.order_index,
                )
        return progress

    def course_progress_by_id(self, user_id: int, course_id: str) -> ServiceResult:
        try:
            return ServiceResult.ok(self._course_progress(user_id, course_id))
        except SQLAlchemyError:
            return self._persistence_failure("fetch progress data")

    def get_course_progress(self, user_id: int, slug: str) -> ServiceResult:
        """Progress for one course as a CourseProgress (with per-stage breakdown)."""
        try:
            course = self.content.get_course_by_slug(slug)
            if course is None:
                return ServiceResult.fail(ErrorKind.NOT_FOUND, "Course not found")
            return ServiceResult.ok(self._course_progress(user_id, course.id))
        except SQLAlchemyError:
            return self._persistence_failure("fetch progress data")

    def _load_activity(self, user_id: int) -> UserActivity:
        stage_rows = (
            self.db.query(UserLearningStageProgress.course_id)
            .filter(UserLearningStageProgress.user_id == user_id)
            .all()
        )
        quiz_rows = (
            self.db.query(UserQuizProgress.course_id, UserQuizProgress.score)
            .filter(UserQuizProgress.user_id == user_id)
            .all()
        )
        return UserActivity(
            completed_stage_course_ids=[r[0] for r in stage_rows],
            completed_quiz_course_ids=[r[0] for r in quiz_rows],
            scores=[r[1] for r in quiz_rows],
        )

    def _all_courses_progress(self, user_id: int, activity: Optional[UserActivity] = None) -> list[CourseProgress]:
        # Content totals are always read fresh; only the user's own rows may come from the cache.
        if activity is None:
            activity = self._load_activity(user_id)
        course_ids = [r[0] for r in self.db.query(Course.id).order_by(Course.name.asc()).all()]
        counts = count_by_course(
            course_ids,
            stage_course_ids=[r[0] for r in self.db.query(LearningStage.course_id).all()],
            quiz_course_ids=[r[0] for r in self.db.query(QuizRow.course_id).all()],
            completed_stage_course_ids=activity.completed_stage_course_ids,
            completed_quiz_course_ids=activity.completed_quiz_course_ids,
        )
        return aggregate_all_courses(counts)

    def get_all_courses_progress(self, user_id: int) -> ServiceResult:
        """Dashboard progress for every course, list of CourseProgress without stage breakdown."""
        try:
            return ServiceResult.ok(self._all_courses_progress(user_id))
        except SQLAlchemyError:
            return self._persistence_failure("fetch progress data")

    def get_user_stats(self, user_id: int) -> ServiceResult:
        try:
            activity: UserActivity = self.cache.get(user_id, lambda: self._load_activity(user_id))
            stats: UserStats = compute_user_stats(self._all_courses_progress(user_id, activity), activity.scores)
        except SQLAlchemyError:
            return self._persistence_failure("fetch stats data")
        return ServiceResult.ok(UserStatsResponse(**stats.__dict__))
