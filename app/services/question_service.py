import logging
import secrets
import string
import time
from collections import Counter

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ExamType
from app.crud import question as question_crud
from app.data.questions import (
    CUSTOM_QUESTION_PREFIX,
    get_all_builtin_questions,
    get_builtin_questions,
    is_custom_question,
)
from app.exceptions import BuiltInQuestionError, QuestionNotFoundError
from app.schemas import question as question_schema

logger = logging.getLogger(__name__)


def generate_custom_question_id() -> str:
    """관리자 작성 문제 ID (custom_<epoch ms>_<랜덤 9자>)"""
    suffix = "".join(secrets.choice(string.ascii_lowercase + string.digits) for _ in range(9))
    return f"{CUSTOM_QUESTION_PREFIX}{int(time.time() * 1000)}_{suffix}"


async def get_questions(
    session: AsyncSession,
    category: str | None = None,
    exam_type: ExamType | None = None,
) -> question_schema.QuestionListResponse:
    """문제 목록 조회

    DB에 해당 조건의 문제가 하나도 없으면 기본 제공 문제를 반환한다.
    """
    records = await question_crud.get_questions(
        session,
        category=category,
        exam_type=exam_type.value if exam_type else None,
    )
    questions = [question_schema.QuestionResponse.model_validate(r) for r in records]

    if not questions:
        if category is not None:
            questions = get_builtin_questions(category)
            if exam_type is not None:
                questions = [q for q in questions if q.type == exam_type]
        else:
            questions = get_all_builtin_questions(exam_type)
        logger.debug(f"기본 제공 문제 사용: category={category}, type={exam_type}, count={len(questions)}")

    return question_schema.QuestionListResponse(questions=questions, total=len(questions))


async def add_question(
    session: AsyncSession,
    request: question_schema.QuestionCreateRequest,
) -> question_schema.QuestionResponse:
    """관리자 문제 추가"""
    question_id = generate_custom_question_id()
    record = await question_crud.create_question(session, question_id, request, is_custom=True)
    logger.info(f"문제 추가: question_id={question_id}, category={record.category}")
    return question_schema.QuestionResponse.model_validate(record)


async def update_question(
    session: AsyncSession,
    question_id: str,
    request: question_schema.QuestionUpdateRequest,
) -> question_schema.QuestionResponse:
    """문제 수정"""
    record = await question_crud.get_question_by_question_id(session, question_id)
    if not record:
        raise QuestionNotFoundError(question_id)

    record = await question_crud.update_question(session, record, request)
    logger.info(f"문제 수정: question_id={question_id}")
    return question_schema.QuestionResponse.model_validate(record)


async def delete_question(session: AsyncSession, question_id: str) -> None:
    """문제 삭제 (기본 제공 문제는 삭제 불가)"""
    if not is_custom_question(question_id):
        raise BuiltInQuestionError(question_id)

    record = await question_crud.get_question_by_question_id(session, question_id)
    if not record:
        raise QuestionNotFoundError(question_id)

    await question_crud.delete_question(session, record)
    logger.info(f"문제 삭제: question_id={question_id}")


async def get_question_stats(session: AsyncSession) -> question_schema.QuestionStatsResponse:
    """문제 통계 (DB 기준)"""
    records = await question_crud.get_questions(session)
    return question_schema.QuestionStatsResponse(
        total=len(records),
        by_type=dict(Counter(r.type for r in records)),
        by_difficulty=dict(Counter(r.difficulty for r in records)),
        custom=sum(1 for r in records if r.is_custom),
    )
