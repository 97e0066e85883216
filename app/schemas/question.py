from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from app.core.enums import Difficulty, ExamType

OPTION_COUNT = 4


class QuestionBase(BaseModel):
    """문제 공통 필드"""
    type: ExamType
    category: str = Field(..., min_length=1, description="시험 카테고리 ID (예: hiragana-basic)")
    character: str | None = Field(None, description="출제 문자 (가나/한자)")
    question: str | None = Field(None, description="문제 텍스트")
    options: list[str] = Field(..., min_length=OPTION_COUNT, max_length=OPTION_COUNT, description="선택지 4개")
    correct_answer: int = Field(..., ge=0, lt=OPTION_COUNT, description="정답 인덱스 (0-3)")
    chapter: str | None = None
    difficulty: Difficulty

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: list[str]) -> list[str]:
        if any(not option.strip() for option in v):
            raise ValueError("선택지는 비어 있을 수 없습니다")
        return v

    @model_validator(mode="after")
    def validate_prompt(self):
        if not self.character and not self.question:
            raise ValueError("character 또는 question 중 하나는 필수입니다")
        return self


class QuestionCreateRequest(QuestionBase):
    """문제 추가 요청 스키마 (관리자 작성 문제)"""


class QuestionUpdateRequest(QuestionBase):
    """문제 수정 요청 스키마"""


class QuestionResponse(QuestionBase):
    """문제 응답 스키마

    DB 모델에서는 question_id, 내장 데이터/JSON에서는 id를 사용한다.
    """
    id: str = Field(..., validation_alias=AliasChoices("question_id", "id"))
    is_custom: bool = False

    model_config = {"from_attributes": True}


class QuestionListResponse(BaseModel):
    """문제 목록 응답 스키마"""
    questions: list[QuestionResponse]
    total: int


class QuestionStatsResponse(BaseModel):
    """문제 통계 응답 스키마"""
    total: int
    by_type: dict[str, int]
    by_difficulty: dict[str, int]
    custom: int
