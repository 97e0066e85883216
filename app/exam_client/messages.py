"""사용자에게 보여줄 오류 문구

백엔드 원문 오류는 절대 그대로 노출하지 않고 작업 종류별 고정 문구로 바꾼다.
"""
from app.exam_client.errors import ExamClientError, GatewayError

UNKNOWN_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다. 다시 시도해주세요."
CONNECTION_ERROR_MESSAGE = "서버 연결에 문제가 있습니다. 인터넷 연결을 확인해주세요."

_OPERATION_MESSAGES: dict[str, str] = {
    "validate_token": "토큰 확인 중 문제가 발생했습니다. 다시 시도해주세요.",
    "load_questions": "문제를 불러오지 못했습니다. 다시 시도해주세요.",
    "create_student": "학생 등록에 실패했습니다. 다시 시도해주세요.",
    "get_student": "학생 정보를 찾을 수 없습니다.",
    "update_student": "학생 정보 갱신에 실패했습니다. 다시 시도해주세요.",
    "save_session": "연결에 문제가 있습니다. 답안이 저장되지 않았을 수 있습니다.",
    "load_session": "시험 세션을 불러오지 못했습니다. 페이지를 새로고침해주세요.",
    "delete_session": "시험 세션 정리에 실패했습니다.",
    "save_result": "시험 결과 저장에 실패했습니다. 다시 제출해주세요.",
}


def get_error_message(error: BaseException) -> str:
    """예외 → 사용자 문구"""
    if isinstance(error, GatewayError):
        if error.status_code is None:
            return CONNECTION_ERROR_MESSAGE
        return _OPERATION_MESSAGES.get(error.operation, UNKNOWN_ERROR_MESSAGE)
    if isinstance(error, ExamClientError):
        return error.message
    return UNKNOWN_ERROR_MESSAGE

