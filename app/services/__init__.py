from app.services.exam_service import (
    delete_result,
    delete_session,
    get_session,
    list_results,
    save_result,
    save_session,
)
from app.services.export_service import (
    export_detailed_csv,
    export_summary_csv,
)
from app.services.question_service import (
    add_question,
    delete_question,
    get_question_stats,
    get_questions,
    update_question,
)
from app.services.scoring import (
    build_exam_result,
    calculate_time_spent,
    score_exam,
)
from app.services.student_service import (
    create_student,
    delete_student,
    get_student,
    list_students,
    update_student,
)
from app.services.token_service import (
    delete_token,
    disable_token,
    generate_token,
    get_token_stats,
    list_tokens,
    validate_token,
)

__all__ = [
    "generate_token",
    "validate_token",
    "list_tokens",
    "delete_token",
    "disable_token",
    "get_token_stats",
    "get_questions",
    "add_question",
    "update_question",
    "delete_question",
    "get_question_stats",
    "create_student",
    "get_student",
    "list_students",
    "update_student",
    "delete_student",
    "save_session",
    "get_session",
    "delete_session",
    "save_result",
    "list_results",
    "delete_result",
    "export_summary_csv",
    "export_detailed_csv",
    "score_exam",
    "calculate_time_spent",
    "build_exam_result",
]
