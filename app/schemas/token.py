from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.enums import Difficulty, ExamType


def normalize_token(value: str) -> str:
    """토큰 정규화 (공백 제거 + 대문자)"""
    return value.strip().upper()


class TokenCreateRequest(BaseModel):
    """토큰 생성 요청 스키마"""
    exam_type: ExamType
    exam_category: str = Field(..., min_length=1)
    difficulty: Difficulty


class TokenResponse(BaseModel):
    """토큰 응답 스키마"""
    token: str
    exam_type: ExamType
    exam_category: str
    difficulty: Difficulty
    used: bool
    used_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}


class TokenValidateRequest(BaseModel):
    """토큰 검증 요청 스키마"""
    token: str = Field(..., description="학생이 입력한 토큰 (대소문자 무관)")

    @field_validator("token")
    @classmethod
    def normalize(cls, v: str) -> str:
        v = normalize_token(v)
        if not v:
            raise ValueError("토큰을 입력해주세요")
        return v


class TokenValidationResponse(BaseModel):
    """토큰 검증 결과 (유효하지 않으면 valid=False만 채워짐)"""
    valid: bool
    exam_type: ExamType | None = None
    exam_category: str | None = None
    difficulty: Difficulty | None = None


class TokenStatsResponse(BaseModel):
    """토큰 통계 응답 스키마"""
    total: int
    used: int
    available: int
    by_type: dict[str, int]
    by_difficulty: dict[str, int]
