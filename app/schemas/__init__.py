from app.schemas.category import (
    ExamCategory,
    ExamCategoryListResponse,
)
from app.schemas.exam_result import (
    AnswerDetail,
    ExamResultCreateRequest,
    ExamResultListResponse,
    ExamResultResponse,
    ScoreResult,
)
from app.schemas.exam_session import ExamSessionSnapshot
from app.schemas.question import (
    QuestionCreateRequest,
    QuestionListResponse,
    QuestionResponse,
    QuestionStatsResponse,
    QuestionUpdateRequest,
)
from app.schemas.student import (
    StudentCreateRequest,
    StudentListResponse,
    StudentResponse,
    StudentUpdateRequest,
)
from app.schemas.token import (
    TokenCreateRequest,
    TokenResponse,
    TokenStatsResponse,
    TokenValidateRequest,
    TokenValidationResponse,
)

__all__ = [
    "ExamCategory",
    "ExamCategoryListResponse",
    "AnswerDetail",
    "ScoreResult",
    "ExamResultCreateRequest",
    "ExamResultResponse",
    "ExamResultListResponse",
    "ExamSessionSnapshot",
    "QuestionCreateRequest",
    "QuestionUpdateRequest",
    "QuestionResponse",
    "QuestionListResponse",
    "QuestionStatsResponse",
    "StudentCreateRequest",
    "StudentUpdateRequest",
    "StudentResponse",
    "StudentListResponse",
    "TokenCreateRequest",
    "TokenResponse",
    "TokenValidateRequest",
    "TokenValidationResponse",
    "TokenStatsResponse",
]
