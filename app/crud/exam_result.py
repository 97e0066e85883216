from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exam_result import ExamResult
from app.schemas.exam_result import ExamResultCreateRequest


async def create_exam_result(session: AsyncSession, request: ExamResultCreateRequest) -> ExamResult:
    """시험 결과 생성"""
    result = ExamResult(
        student_id=request.student_id,
        student_name=request.student_name,
        exam_type=request.exam_type.value,
        exam_category=request.exam_category,
        difficulty=request.difficulty.value,
        score=request.score,
        total_questions=request.total_questions,
        time_spent=request.time_spent,
        completed_at=request.completed_at,
        answers=[answer.model_dump() for answer in request.answers],
    )
    session.add(result)
    await session.commit()
    await session.refresh(result)
    return result


async def get_exam_result_by_id(session: AsyncSession, result_id: int) -> ExamResult | None:
    """ID로 시험 결과 조회"""
    result = await session.execute(select(ExamResult).where(ExamResult.id == result_id))
    return result.scalar_one_or_none()


async def get_all_exam_results(session: AsyncSession) -> Sequence[ExamResult]:
    """모든 시험 결과 조회 (완료 시각 최신순)"""
    stmt = select(ExamResult).order_by(ExamResult.completed_at.desc(), ExamResult.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def delete_exam_result(session: AsyncSession, record: ExamResult) -> None:
    """시험 결과 삭제"""
    await session.execute(delete(ExamResult).where(ExamResult.id == record.id))
    await session.commit()
