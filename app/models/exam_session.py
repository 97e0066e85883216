from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, JSONType, TimestampMixin


class ExamSession(Base, TimestampMixin):
    __tablename__ = "exam_sessions"

    # 학생당 진행 중인 세션은 최대 1개 (student_id 기준 upsert)
    student_id: Mapped[str] = mapped_column(ForeignKey("students.id"), primary_key=True)
    exam_type: Mapped[str] = mapped_column(String(32), nullable=False)
    exam_category: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False)
    question_ids: Mapped[list[str]] = mapped_column(JSONType, nullable=False, default=list)
    answers: Mapped[dict[str, int]] = mapped_column(JSONType, nullable=False, default=dict)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    time_remaining: Mapped[int] = mapped_column(nullable=False)
    current_question: Mapped[int] = mapped_column(default=0, nullable=False)
    is_fullscreen: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    student: Mapped["Student"] = relationship("Student", back_populates="exam_session")
