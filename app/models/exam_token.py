from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, TimestampMixin


class ExamToken(Base, TimestampMixin):
    __tablename__ = "exam_tokens"

    id: Mapped[int] = mapped_column(primary_key=True)
    token: Mapped[str] = mapped_column(String(32), nullable=False, unique=True, index=True)
    exam_type: Mapped[str] = mapped_column(String(32), nullable=False)
    exam_category: Mapped[str] = mapped_column(String(64), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False)
    used: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    used_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)
