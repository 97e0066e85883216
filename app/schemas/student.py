from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.enums import Difficulty, ExamType, StudentStatus


class StudentCreateRequest(BaseModel):
    """학생 생성 요청 스키마 (토큰 인증 직후)"""
    name: str = Field(..., min_length=1, max_length=100)
    token: str = Field(..., min_length=1)
    exam_type: ExamType
    exam_category: str
    difficulty: Difficulty
    start_time: datetime
    status: StudentStatus = StudentStatus.ACTIVE
    time_remaining: int = Field(..., ge=0, description="남은 시간 (ms)")
    current_question: int = Field(0, ge=0)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("이름을 입력해주세요")
        return v


class StudentUpdateRequest(BaseModel):
    """학생 상태 업데이트 요청 스키마"""
    name: str | None = Field(None, min_length=1, max_length=100)
    status: StudentStatus
    time_remaining: int = Field(..., ge=0)
    current_question: int = Field(..., ge=0)
    end_time: datetime | None = None


class StudentResponse(BaseModel):
    """학생 응답 스키마"""
    id: str
    name: str
    token: str
    exam_type: ExamType
    exam_category: str
    difficulty: Difficulty
    start_time: datetime
    end_time: datetime | None
    status: StudentStatus
    time_remaining: int
    current_question: int

    model_config = {"from_attributes": True}

    def to_update_request(self) -> StudentUpdateRequest:
        return StudentUpdateRequest(
            name=self.name,
            status=self.status,
            time_remaining=self.time_remaining,
            current_question=self.current_question,
            end_time=self.end_time,
        )


class StudentListResponse(BaseModel):
    """학생 목록 응답 스키마"""
    students: list[StudentResponse]
    total: int
