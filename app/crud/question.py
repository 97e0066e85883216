from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.question import Question
from app.schemas.question import QuestionCreateRequest, QuestionUpdateRequest


async def get_question_by_question_id(session: AsyncSession, question_id: str) -> Question | None:
    """문제 ID(question_id)로 조회"""
    result = await session.execute(select(Question).where(Question.question_id == question_id))
    return result.scalar_one_or_none()


async def get_questions(
    session: AsyncSession,
    category: str | None = None,
    exam_type: str | None = None,
) -> Sequence[Question]:
    """문제 목록 조회 (등록순)

    Args:
        session: 데이터베이스 세션
        category: 카테고리 필터 (선택)
        exam_type: 시험 유형 필터 (선택)
    """
    stmt = select(Question)
    if category is not None:
        stmt = stmt.where(Question.category == category)
    if exam_type is not None:
        stmt = stmt.where(Question.type == exam_type)
    stmt = stmt.order_by(Question.created_at, Question.id)
    result = await session.execute(stmt)
    return result.scalars().all()


async def create_question(
    session: AsyncSession,
    question_id: str,
    request: QuestionCreateRequest,
    is_custom: bool = True,
) -> Question:
    """문제 생성"""
    question = Question(
        question_id=question_id,
        type=request.type.value,
        category=request.category,
        character=request.character,
        question=request.question,
        options=list(request.options),
        correct_answer=request.correct_answer,
        chapter=request.chapter,
        difficulty=request.difficulty.value,
        is_custom=is_custom,
    )
    session.add(question)
    await session.commit()
    await session.refresh(question)
    return question


async def update_question(
    session: AsyncSession,
    question: Question,
    request: QuestionUpdateRequest,
) -> Question:
    """문제 수정"""
    question.type = request.type.value
    question.category = request.category
    question.character = request.character
    question.question = request.question
    question.options = list(request.options)
    question.correct_answer = request.correct_answer
    question.chapter = request.chapter
    question.difficulty = request.difficulty.value
    await session.commit()
    await session.refresh(question)
    return question


async def delete_question(session: AsyncSession, question: Question) -> None:
    """문제 삭제"""
    await session.execute(delete(Question).where(Question.id == question.id))
    await session.commit()
