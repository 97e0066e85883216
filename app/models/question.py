from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JSONType, TimestampMixin


class Question(Base, TimestampMixin):
    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(primary_key=True)
    question_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    character: Mapped[str | None] = mapped_column(String(32), default=None)
    question: Mapped[str | None] = mapped_column(Text, default=None)
    options: Mapped[list[str]] = mapped_column(JSONType, nullable=False)
    correct_answer: Mapped[int] = mapped_column(nullable=False)
    chapter: Mapped[str | None] = mapped_column(String(16), default=None)
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False)
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
