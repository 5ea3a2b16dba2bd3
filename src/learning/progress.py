"""
Course and account progress aggregation.

A course is made of stages (lessons) and quizzes, linked one-to-one by
``order_index``. Every completed stage and every completed quiz is worth one
unit; there is no weighting between the two.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from learning.percent import percentage


class StageState(str, Enum):
    NOT_STARTED = "not_started"
    LESSON_DONE = "lesson_done"  # quiz pending
    COMPLETED = "completed"


@dataclass(frozen=True)
class StageProgress:
    order_index: int
    stage_completed: bool
    quiz_completed: bool

    @property
    def state(self) -> StageState:
        # A quiz finished without its lesson is not a valid state; colour it by the lesson.
        if not self.stage_completed:
            return StageState.NOT_STARTED
        if not self.quiz_completed:
            return StageState.LESSON_DONE
        return StageState.COMPLETED

    @property
    def is_anomalous(self) -> bool:
        return self.quiz_completed and not self.stage_completed


@dataclass
class CourseProgress:
    course_id: str
    progress: int
    completed_stages: int
    total_stages: int
    completed_quizzes: int
    total_quizzes: int
    completed_count: int
    stages: list[StageProgress] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.progress >= 100


def _course_progress(
    course_id: str,
    completed_stages: int,
    total_stages: int,
    completed_quizzes: int,
    total_quizzes: int,
    stages: list[StageProgress] | None = None,
) -> CourseProgress:
    return CourseProgress(
        course_id=course_id,
        progress=percentage(completed_stages + completed_quizzes, total_stages + total_quizzes),
        completed_stages=completed_stages,
        total_stages=total_stages,
        completed_quizzes=completed_quizzes,
        total_quizzes=total_quizzes,
        # Fully finished lesson+quiz pairs.
        completed_count=min(completed_stages, completed_quizzes),
        stages=stages or [],
    )


def aggregate_course_progress(
    course_id: str,
    *,
    total_stages: int,
    total_quizzes: int,
    completed_stage_orders: Iterable[int],
    completed_quiz_orders: Iterable[int],
) -> CourseProgress:
    """
    Build progress for one course from the order indices of the user's
    completion records (one entry per record).
    """
    stage_orders = list(completed_stage_orders)
    quiz_orders = list(completed_quiz_orders)
    stage_set = set(stage_orders)
    quiz_set = set(quiz_orders)
    stages = [
        StageProgress(
            order_index=i,
            stage_completed=i in stage_set,
            quiz_completed=i in quiz_set,
        )
        for i in range(1, total_stages + 1)
    ]
    return _course_progress(
        course_id,
        completed_stages=len(stage_orders),
        total_stages=total_stages,
        completed_quizzes=len(quiz_orders),
        total_quizzes=total_quizzes,
        stages=stages,
    )


@dataclass(frozen=True)
class CourseCounts:
    course_id: str
    total_stages: int = 0
    total_quizzes: int = 0
    completed_stages: int = 0
    completed_quizzes: int = 0


def count_by_course(
    course_ids: Iterable[str],
    *,
    stage_course_ids: Iterable[str],
    quiz_course_ids: Iterable[str],
    completed_stage_course_ids: Iterable[str],
    completed_quiz_course_ids: Iterable[str],
) -> list[CourseCounts]:
    """Tally the four per-course counts from flat lists of course ids, one per row."""
    stages = Counter(stage_course_ids)
    quizzes = Counter(quiz_course_ids)
    done_stages = Counter(completed_stage_course_ids)
    done_quizzes = Counter(completed_quiz_course_ids)
    return [
        CourseCounts(
            course_id=cid,
            total_stages=stages[cid],
            total_quizzes=quizzes[cid],
            completed_stages=done_stages[cid],
            completed_quizzes=done_quizzes[cid],
        )
        for cid in course_ids
    ]


def aggregate_all_courses(counts: Iterable[CourseCounts]) -> list[CourseProgress]:
    """Dashboard form: same formula as a single course, no per-stage breakdown."""
    return [
        _course_progress(
            c.course_id,
            completed_stages=c.completed_stages,
            total_stages=c.total_stages,
            completed_quizzes=c.completed_quizzes,
            total_quizzes=c.total_quizzes,
        )
        for c in counts
    ]


@dataclass
class UserStats:
    total_courses: int
    completed_courses: int
    total_stages: int
    completed_stages: int
    total_quizzes: int
    completed_quizzes: int
    average_score: int


def average_score(scores: Iterable[int | float]) -> int:
    values = list(scores)
    if not values:
        return 0
    # Half-up on the mean, same policy as every other displayed percentage.
    mean = sum(values) / len(values)
    return int(mean + 0.5)


def compute_user_stats(courses: list[CourseProgress], scores: Iterable[int | float]) -> UserStats:
    return UserStats(
        total_courses=len(courses),
        completed_courses=sum(1 for c in courses if c.is_completed),
        total_stages=sum(c.total_stages for c in courses),
        completed_stages=sum(c.completed_stages for c in courses),
        total_quizzes=sum(c.total_quizzes for c in courses),
        completed_quizzes=sum(c.completed_quizzes for c in courses),
        average_score=average_score(scores),
    )
