"""커스텀 예외 클래스 정의"""


class BaseAppError(Exception):
    """애플리케이션 기본 예외 클래스"""

    def __init__(self, message: str, status_code: int = 500):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class TokenNotFoundError(BaseAppError):
    """토큰을 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, token: str):
        super().__init__(f"토큰을 찾을 수 없습니다: {token}", status_code=404)


class QuestionNotFoundError(BaseAppError):
    """문제를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, question_id: str):
        super().__init__(f"문제를 찾을 수 없습니다: {question_id}", status_code=404)


class BuiltInQuestionError(BaseAppError):
    """기본 제공 문제를 삭제하려 할 때 발생하는 예외 (400)"""

    def __init__(self, question_id: str):
        super().__init__(f"기본 제공 문제는 삭제할 수 없습니다: {question_id}", status_code=400)


class StudentNotFoundError(BaseAppError):
    """학생을 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, student_id: str):
        super().__init__(f"학생을 찾을 수 없습니다: {student_id}", status_code=404)


class ExamSessionNotFoundError(BaseAppError):
    """시험 세션을 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, student_id: str):
        super().__init__(f"시험 세션을 찾을 수 없습니다: {student_id}", status_code=404)


class ExamResultNotFoundError(BaseAppError):
    """시험 결과를 찾을 수 없을 때 발생하는 예외 (404)"""

    def __init__(self, result_id: int):
        super().__init__(f"시험 결과를 찾을 수 없습니다: {result_id}", status_code=404)


class InvalidExamRequestError(BaseAppError):
    """잘못된 시험 요청일 때 발생하는 예외 (400)"""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)
