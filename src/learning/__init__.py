"""
Quiz scoring and progress aggregation core.

Pure functions only: nothing here touches the database or the network.
"""

from learning.types import QuestionType, QuizOption, QuizQuestion, Quiz, Answer, Answers
from learning.percent import percentage
from learning.quiz import (
    QuizGrade,
    validate_answer,
    calculate_score,
    is_passed,
    grade_quiz,
    quiz_navigation_progress,
)
from learning.progress import (
    StageState,
    StageProgress,
    CourseProgress,
    CourseCounts,
    UserStats,
    aggregate_course_progress,
    aggregate_all_courses,
    average_score,
    compute_user_stats,
    count_by_course,
)

__all__ = [
    "QuestionType",
    "QuizOption",
    "QuizQuestion",
    "Quiz",
    "Answer",
    "Answers",
    "percentage",
    "QuizGrade",
    "validate_answer",
    "calculate_score",
    "is_passed",
    "grade_quiz",
    "quiz_navigation_progress",
    "StageState",
    "StageProgress",
    "CourseProgress",
    "CourseCounts",
    "UserStats",
    "aggregate_course_progress",
    "aggregate_all_courses",
    "average_score",
    "compute_user_stats",
    "count_by_course",
]
