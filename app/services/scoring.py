"""채점 및 결과 조립

score_exam은 순수 함수다. 같은 입력이면 항상 같은 결과를 돌려주므로
제출 가드(종료 상태에서 submit 무시)와 함께 중복 채점 문제가 생기지 않는다.
"""
from collections.abc import Mapping, Sequence
from datetime import datetime

from app.schemas.exam_result import UNANSWERED, AnswerDetail, ExamResultCreateRequest, ScoreResult
from app.schemas.question import QuestionResponse
from app.schemas.student import StudentResponse


def score_exam(
    questions: Sequence[QuestionResponse],
    answers: Mapping[str, int],
) -> ScoreResult:
    """출제 순서대로 채점 (미응답은 -1, 오답 처리)"""
    details = []
    for question in questions:
        selected = answers.get(question.id, UNANSWERED)
        details.append(
            AnswerDetail(
                question_id=question.id,
                character=question.character,
                question=question.question,
                selected_answer=selected,
                correct_answer=question.correct_answer,
                is_correct=selected == question.correct_answer,
            )
        )

    score = sum(1 for detail in details if detail.is_correct)
    return ScoreResult(score=score, total_questions=len(details), answers=details)


def calculate_time_spent(time_limit_ms: int, time_remaining_ms: int) -> int:
    """소요 시간 = 제한 시간 - 제출 시점 남은 시간 (ms)"""
    return time_limit_ms - max(0, min(time_remaining_ms, time_limit_ms))


def build_exam_result(
    student: StudentResponse,
    score: ScoreResult,
    time_spent: int,
    completed_at: datetime,
) -> ExamResultCreateRequest:
    """채점 결과 + 학생 정보로 결과 저장 요청 생성"""
    return ExamResultCreateRequest(
        student_id=student.id,
        student_name=student.name,
        exam_type=student.exam_type,
        exam_category=student.exam_category,
        difficulty=student.difficulty,
        score=score.score,
        total_questions=score.total_questions,
        time_spent=time_spent,
        completed_at=completed_at,
        answers=score.answers,
    )
