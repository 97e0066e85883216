"""시험 클라이언트 예외"""


class ExamClientError(Exception):
    """시험 클라이언트 기본 예외 (message는 사용자에게 그대로 보여줄 수 있는 문구)"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ExamValidationError(ExamClientError):
    """입력 검증 오류 (게이트웨이 호출 전 로컬에서 거부)"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class InvalidTokenError(ExamValidationError):
    """존재하지 않거나 이미 사용된 토큰"""

    def __init__(self):
        super().__init__("토큰이 유효하지 않거나 이미 사용되었습니다.", field="token")


class InvalidStateError(ExamClientError):
    """현재 상태에서 허용되지 않는 조작"""


class GatewayError(ExamClientError):
    """영속성 게이트웨이 호출 실패

    operation은 실패한 작업 이름 (예: save_session), status_code는 HTTP 응답 코드 (전송 오류면 None).
    """

    def __init__(self, operation: str, status_code: int | None = None, detail: str | None = None):
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"{operation} 실패 (status={status_code})")


class SubmissionError(ExamClientError):
    """제출 경로(결과 저장/학생 갱신) 실패, 재시도 가능"""
