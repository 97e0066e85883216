import uuid
from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, TimestampMixin


class Student(Base, TimestampMixin):
    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    token: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    exam_type: Mapped[str] = mapped_column(String(32), nullable=False)
    exam_category: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)  # 'active', 'completed', 'disconnected'
    time_remaining: Mapped[int] = mapped_column(nullable=False)
    current_question: Mapped[int] = mapped_column(default=0, nullable=False)

    exam_session: Mapped["ExamSession"] = relationship("ExamSession", back_populates="student", uselist=False)
    results: Mapped[list["ExamResult"]] = relationship("ExamResult", back_populates="student")
