"""
Course catalogue and course page endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.config import get_db
from api.schemas.course_schemas import (
    CourseListResponse,
    CourseResponse,
    CourseStagesResponse,
    LearningStageResponse,
)
from api.schemas.result_schemas import ErrorKind, ServiceResult
from api.schemas.user_schemas import CurrentUser
from api.services.content_service import ContentService
from api.services.progress_service import ProgressService, stage_progress_response
from api.utils.auth import get_current_user
from api.utils.common import ServiceResultError, unwrap
from learning.progress import StageProgress

course_routes = APIRouter()


def _course_response(course, progress) -> CourseResponse:
    return CourseResponse(
        id=course.id,
        slug=course.slug,
        name=course.name,
        description=course.description,
        icon=course.icon,
        color=course.color,
        difficulty=course.difficulty,
        duration=course.duration,
        total_stages=progress.total_stages,
        completed_stages=progress.completed_stages,
        progress=progress.progress,
    )


@course_routes.get("/courses", response_model=CourseListResponse)
async def list_courses(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CourseListResponse:
    """All courses, each with the current user's progress."""
    service = ProgressService(db)
    progress_by_id = {p.course_id: p for p in unwrap(service.get_all_courses_progress(current_user.id))}
    courses = ContentService(db).list_courses()
    return CourseListResponse(
        courses=[_course_response(c, progress_by_id[c.id]) for c in courses if c.id in progress_by_id]
    )


@course_routes.get("/courses/{slug}", response_model=CourseStagesResponse)
async def get_course(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CourseStagesResponse:
    """Course page: ordered stages with their three-state progress."""
    content = ContentService(db)
    course = content.get_course_by_slug(slug)
    if course is None:
        raise ServiceResultError(ServiceResult.fail(ErrorKind.NOT_FOUND, "Course not found"))
    progress = unwrap(ProgressService(db).course_progress_by_id(current_user.id, course.id))
    by_order = {s.order_index: s for s in progress.stages}
    quiz_ids = {q.order_index: q.id for q in content.list_quizzes(course.id)}
    stages = []
    for stage in content.list_stages(course.id):
        # order_index outside 1..total_stages is reported as not started
        stage_progress = by_order.get(stage.order_index) or StageProgress(stage.order_index, False, False)
        stages.append(
            LearningStageResponse(
                id=stage.id,
                order_index=stage.order_index,
                name=stage.name,
                quiz_id=quiz_ids.get(stage.order_index),
                progress=stage_progress_response(stage_progress),
            )
        )
    return CourseStagesResponse(course=_course_response(course, progress), stages=stages)
