from app.crud.exam_result import (
    create_exam_result,
    delete_exam_result,
    get_all_exam_results,
    get_exam_result_by_id,
)
from app.crud.exam_session import (
    delete_exam_session,
    get_exam_session,
    upsert_exam_session,
)
from app.crud.question import (
    create_question,
    delete_question,
    get_question_by_question_id,
    get_questions,
    update_question,
)
from app.crud.student import (
    create_student,
    delete_student,
    get_all_students,
    get_student_by_id,
    update_student,
)
from app.crud.token import (
    consume_token,
    create_token,
    delete_token,
    get_all_tokens,
    get_token,
    mark_token_used,
)

__all__ = [
    "create_token",
    "get_token",
    "get_all_tokens",
    "consume_token",
    "mark_token_used",
    "delete_token",
    "get_question_by_question_id",
    "get_questions",
    "create_question",
    "update_question",
    "delete_question",
    "create_student",
    "get_student_by_id",
    "get_all_students",
    "update_student",
    "delete_student",
    "get_exam_session",
    "upsert_exam_session",
    "delete_exam_session",
    "create_exam_result",
    "get_exam_result_by_id",
    "get_all_exam_results",
    "delete_exam_result",
]
