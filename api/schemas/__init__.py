"""
API schemas package. Import from submodules or from this package.

Example:
    from api.schemas import CourseProgressResponse, ServiceResult
    from api.schemas.quiz_schemas import SubmitQuizRequest
"""

from api.schemas.auth_schemas import (
    AuthTokenPayload,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    RegisterRequest,
    RegisterResponse,
)
from api.schemas.user_schemas import CurrentUser
from api.schemas.result_schemas import ErrorKind, ServiceResult
from api.schemas.course_schemas import (
    CourseResponse,
    CourseListResponse,
    LearningStageResponse,
    CourseStagesResponse,
    StageCompletionResponse,
)
from api.schemas.quiz_schemas import (
    PublicOption,
    PublicQuestion,
    QuizResponse,
    CheckAnswerRequest,
    CheckAnswerResponse,
    SubmitQuizRequest,
    SubmitQuizResponse,
)
from api.schemas.user_progress_schemas import (
    StageProgressResponse,
    CourseProgressResponse,
    AllCoursesProgressResponse,
    UserStatsResponse,
    QuizAttemptRecord,
)

__all__ = [
    # auth
    "AuthTokenPayload",
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "RegisterRequest",
    "RegisterResponse",
    # user
    "CurrentUser",
    # results
    "ErrorKind",
    "ServiceResult",
    # course
    "CourseResponse",
    "CourseListResponse",
    "LearningStageResponse",
    "CourseStagesResponse",
    "StageCompletionResponse",
    # quiz
    "PublicOption",
    "PublicQuestion",
    "QuizResponse",
    "CheckAnswerRequest",
    "CheckAnswerResponse",
    "SubmitQuizRequest",
    "SubmitQuizResponse",
    # user progress
    "StageProgressResponse",
    "CourseProgressResponse",
    "AllCoursesProgressResponse",
    "UserStatsResponse",
    "QuizAttemptRecord",
]
