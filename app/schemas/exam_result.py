import math
from datetime import datetime

from pydantic import BaseModel, Field, computed_field, model_validator

from app.core.config import settings
from app.core.enums import Difficulty, ExamType

UNANSWERED = -1


def calculate_percentage(score: int, total_questions: int) -> int:
    """정답률 (반올림, 문제가 없으면 0)"""
    if total_questions <= 0:
        return 0
    return math.floor(100 * score / total_questions + 0.5)


def is_passing(percentage: int) -> bool:
    return percentage >= settings.pass_threshold


class AnswerDetail(BaseModel):
    """문항별 채점 결과"""
    question_id: str
    character: str | None = None
    question: str | None = None
    selected_answer: int = Field(..., ge=UNANSWERED, description="미응답이면 -1")
    correct_answer: int = Field(..., ge=0)
    is_correct: bool

    model_config = {"frozen": True}


class ScoreResult(BaseModel):
    """채점 결과"""
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)
    answers: list[AnswerDetail]

    @computed_field
    @property
    def percentage(self) -> int:
        return calculate_percentage(self.score, self.total_questions)

    @computed_field
    @property
    def passed(self) -> bool:
        return is_passing(self.percentage)


class ExamResultCreateRequest(BaseModel):
    """시험 결과 저장 요청 스키마"""
    student_id: str
    student_name: str
    exam_type: ExamType
    exam_category: str
    difficulty: Difficulty
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)
    time_spent: int = Field(..., ge=0, description="소요 시간 (ms)")
    completed_at: datetime
    answers: list[AnswerDetail]

    @model_validator(mode="after")
    def validate_counts(self):
        if self.score > self.total_questions:
            raise ValueError("score는 total_questions보다 클 수 없습니다")
        if len(self.answers) != self.total_questions:
            raise ValueError("answers 개수가 total_questions와 일치해야 합니다")
        return self


class ExamResultResponse(ExamResultCreateRequest):
    """시험 결과 응답 스키마"""
    id: int

    model_config = {"from_attributes": True}

    @computed_field
    @property
    def percentage(self) -> int:
        return calculate_percentage(self.score, self.total_questions)

    @computed_field
    @property
    def passed(self) -> bool:
        return is_passing(self.percentage)


class ExamResultListResponse(BaseModel):
    """시험 결과 목록 응답 스키마"""
    results: list[ExamResultResponse]
    total: int
