"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- User, Course, LearningStage, Quiz, UserQuizProgress, UserLearningStageProgress
"""

from api.models.models import (
    User,
    Course,
    LearningStage,
    Quiz,
    UserQuizProgress,
    UserLearningStageProgress,
)

__all__ = [
    "User",
    "Course",
    "LearningStage",
    "Quiz",
    "UserQuizProgress",
    "UserLearningStageProgress",
]
