"""
Progress endpoints: per-course progress, dashboard, stats, stage completion,
and the progress WebSocket.
"""

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from api.config import get_db
from api.schemas.course_schemas import StageCompletionResponse
from api.schemas.user_progress_schemas import (
    AllCoursesProgressResponse,
    CourseProgressResponse,
    UserStatsResponse,
)
from api.schemas.user_schemas import CurrentUser
from api.services.progress_service import ProgressService, course_progress_response
from api.utils.auth import get_current_user, get_user_from_websocket
from api.utils.common import unwrap
from api.utils.logger import configure_logging
from api.ws.progress_broadcast import broadcast_progress, subscribe_progress, unsubscribe_progress

logger = configure_logging()

progress_routes = APIRouter()


async def push_course_progress(service: ProgressService, user_id: int, slug: str) -> None:
    """Broadcast fresh progress for the course after a write. Failure here never fails the write."""
    result = service.get_course_progress(user_id, slug)
    if not result.success:
        logger.warning("progress push skipped user_id=%s slug=%s error=%s", user_id, slug, result.error)
        return
    payload = course_progress_response(result.data)
    await broadcast_progress(
        user_id,
        {"type": "progress_update", "course_id": payload.course_id, "progress": payload.model_dump()},
    )


@progress_routes.get("/courses/{slug}/progress", response_model=CourseProgressResponse)
async def get_course_progress(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> CourseProgressResponse:
    """Progress percentage, counts and per-stage breakdown for one course."""
    return course_progress_response(unwrap(ProgressService(db).get_course_progress(current_user.id, slug)))


@progress_routes.get("/progress", response_model=AllCoursesProgressResponse)
async def get_all_courses_progress(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AllCoursesProgressResponse:
    """Dashboard: progress for every course (no per-stage breakdown)."""
    courses = unwrap(ProgressService(db).get_all_courses_progress(current_user.id))
    return AllCoursesProgressResponse(courses=[course_progress_response(c) for c in courses])


@progress_routes.get("/user/stats", response_model=UserStatsResponse)
async def get_user_stats(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> UserStatsResponse:
    return unwrap(ProgressService(db).get_user_stats(current_user.id))


@progress_routes.post("/courses/{slug}/stages/{order_index}/complete", response_model=StageCompletionResponse)
async def mark_stage_complete(
    slug: str,
    order_index: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StageCompletionResponse:
    """Mark the lesson as done. Repeating the call is harmless."""
    service = ProgressService(db)
    data = unwrap(service.mark_stage_complete(current_user.id, slug, order_index))
    if not data["already_completed"]:
        await push_course_progress(service, current_user.id, slug)
    return StageCompletionResponse(stage_id=data["stage_id"], order_index=order_index, is_completed=True)


@progress_routes.get("/courses/{slug}/stages/{order_index}/completion", response_model=StageCompletionResponse)
async def check_stage_completion(
    slug: str,
    order_index: int,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> StageCompletionResponse:
    return StageCompletionResponse(**unwrap(ProgressService(db).check_stage_completion(current_user.id, slug, order_index)))


@progress_routes.websocket("/ws/progress")
async def progress_websocket(websocket: WebSocket, db: Session = Depends(get_db)):
    """
    Live progress for the authenticated user. Server sends
    { type: "progress_update", course_id, progress } after each write.
    Auth: cookie access_token or query ?token=.
    """
    user = get_user_from_websocket(websocket, db)
    if user is None:
        await websocket.close(code=1008)
        return
    user_id = int(user.id)
    await websocket.accept()
    subscribe_progress(user_id, websocket)
    try:
        await websocket.send_json({"type": "subscribed", "user_id": user_id})
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        unsubscribe_progress(user_id, websocket)
