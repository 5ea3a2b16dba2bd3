"""
Quiz endpoints for one learning stage: fetch, check an answer, finish.

Finishing also pushes the updated course progress to the user's open
progress WebSockets.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.schemas.quiz_schemas import (
    CheckAnswerRequest,
    CheckAnswerResponse,
    QuizResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from api.schemas.user_progress_schemas import QuizAttemptRecord
from api.schemas.user_schemas import CurrentUser
from api.services.progress_service import ProgressService
from api.services.quiz_service import QuizService
from api.routes.progress_routes import push_course_progress
from api.utils.auth import get_current_user
from api.utils.common import unwrap

quiz_routes = APIRouter()


@quiz_routes.get("/courses/{slug}/stages/{order_index}/quiz", response_model=QuizResponse)
async def get_quiz(
    slug: str,
    order_index: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> QuizResponse:
    """Quiz content for the stage, without the answer key."""
    return unwrap(QuizService(db).get_quiz(slug, order_index))


@quiz_routes.post("/courses/{slug}/stages/{order_index}/quiz/check", response_model=CheckAnswerResponse)
async def check_answer(
    slug: str,
    order_index: int,
    body: CheckAnswerRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CheckAnswerResponse:
    """Immediate feedback for a single question. Nothing is stored."""
    return unwrap(QuizService(db).check_answer(slug, order_index, body.question_id, body.answer))


@quiz_routes.post("/courses/{slug}/stages/{order_index}/quiz/submit", response_model=SubmitQuizResponse)
async def submit_quiz(
    slug: str,
    order_index: int,
    body: SubmitQuizRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> SubmitQuizResponse:
    """
    Finish the quiz: score the answers and record the attempt.
    Used both for the "finish" button and for timer expiry (timed_out=true).
    """
    progress = ProgressService(db)
    result: SubmitQuizResponse = unwrap(QuizService(db, progress).submit_quiz(current_user.id, slug, order_index, body))
    await push_course_progress(progress, current_user.id, slug)
    return result


@quiz_routes.get("/courses/{slug}/stages/{order_index}/quiz/attempt", response_model=QuizAttemptRecord)
async def get_quiz_attempt(
    slug: str,
    order_index: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> QuizAttemptRecord:
    """Latest score, best score and attempt count; 404 before the first finish."""
    return unwrap(ProgressService(db).get_quiz_attempt_by_slug(current_user.id, slug, order_index))
