"""
User learning progress schemas (course page, dashboard, profile stats).
"""

from pydantic import BaseModel
from typing import Optional


class StageProgressResponse(BaseModel):
    order_index: int
    stage_completed: bool
    quiz_completed: bool
    state: str  # not_started | lesson_done | completed


class CourseProgressResponse(BaseModel):
    course_id: str
    progress: int
    completed_stages: int
    total_stages: int
    completed_quizzes: int
    total_quizzes: int
    completed_count: int
    is_completed: bool
    stages: list[StageProgressResponse] = []


class AllCoursesProgressResponse(BaseModel):
    courses: list[CourseProgressResponse]


class UserStatsResponse(BaseModel):
    total_courses: int
    completed_courses: int
    total_stages: int
    completed_stages: int
    total_quizzes: int
    completed_quizzes: int
    average_score: int


class QuizAttemptRecord(BaseModel):
    quiz_id: str
    course_id: str
    score: int
    best_score: int
    attempts_count: int
    time_taken: Optional[int] = None
    completed_at: Optional[str] = None
