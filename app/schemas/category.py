from pydantic import BaseModel, Field, computed_field

from app.core.enums import Difficulty, ExamType, get_difficulty_label, get_type_label


class ExamCategory(BaseModel):
    """시험 카테고리 (정적 참조 데이터)"""
    id: str
    name: str
    description: str
    type: ExamType
    difficulty: Difficulty
    chapters: list[str] | None = None
    time_limit: int = Field(..., gt=0, description="제한 시간 (분)")
    question_count: int = Field(..., gt=0, description="목표 문제 수")

    model_config = {"frozen": True}

    @property
    def time_limit_ms(self) -> int:
        return self.time_limit * 60 * 1000

    @computed_field
    @property
    def type_label(self) -> str:
        return get_type_label(self.type)

    @computed_field
    @property
    def difficulty_label(self) -> str:
        return get_difficulty_label(self.difficulty)


class ExamCategoryListResponse(BaseModel):
    """시험 카테고리 목록 응답 스키마"""
    categories: list[ExamCategory]
    total: int
