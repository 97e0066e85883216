from app.models.base import Base, get_db
from app.models.exam_result import ExamResult
from app.models.exam_session import ExamSession
from app.models.exam_token import ExamToken
from app.models.question import Question
from app.models.student import Student

__all__ = ["Base", "ExamToken", "Question", "Student", "ExamSession", "ExamResult", "get_db"]
