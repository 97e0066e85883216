from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.enums import Difficulty, ExamType


class ExamSessionSnapshot(BaseModel):
    """진행 중인 시험 세션 스냅샷 (저장 시 항상 전체 상태를 보냄)"""
    student_id: str
    exam_type: ExamType
    exam_category: str
    difficulty: Difficulty
    question_ids: list[str] = Field(default_factory=list, description="고정된 출제 순서")
    answers: dict[str, int] = Field(default_factory=dict, description="문제 ID → 선택한 보기 인덱스")
    start_time: datetime
    time_remaining: int = Field(..., ge=0, description="남은 시간 (ms)")
    current_question: int = Field(0, ge=0)
    is_fullscreen: bool = False

    model_config = {"from_attributes": True}

    @field_validator("answers")
    @classmethod
    def validate_answers(cls, v: dict[str, int]) -> dict[str, int]:
        if any(index < 0 for index in v.values()):
            raise ValueError("답안 인덱스는 0 이상이어야 합니다")
        return v
