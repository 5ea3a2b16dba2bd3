"""
Course and learning stage schemas.
"""

from pydantic import BaseModel
from typing import Optional

from api.schemas.user_progress_schemas import StageProgressResponse


class CourseResponse(BaseModel):
    id: str
    slug: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    difficulty: Optional[str] = None
    duration: Optional[str] = None
    total_stages: int
    completed_stages: int
    progress: int


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]


class LearningStageResponse(BaseModel):
    id: str
    order_index: int
    name: str
    quiz_id: Optional[str] = None
    progress: StageProgressResponse


class CourseStagesResponse(BaseModel):
    course: CourseResponse
    stages: list[LearningStageResponse]


class StageCompletionResponse(BaseModel):
    stage_id: str
    order_index: int
    is_completed: bool
