from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exam_session import ExamSession
from app.schemas.exam_session import ExamSessionSnapshot


async def get_exam_session(session: AsyncSession, student_id: str) -> ExamSession | None:
    """학생 ID로 진행 중 세션 조회"""
    result = await session.execute(select(ExamSession).where(ExamSession.student_id == student_id))
    return result.scalar_one_or_none()


async def upsert_exam_session(session: AsyncSession, snapshot: ExamSessionSnapshot) -> ExamSession:
    """세션 저장 (student_id 기준 upsert, 항상 전체 스냅샷으로 덮어씀)"""
    record = await get_exam_session(session, snapshot.student_id)
    if record is None:
        record = ExamSession(student_id=snapshot.student_id)
        session.add(record)

    record.exam_type = snapshot.exam_type.value
    record.exam_category = snapshot.exam_category
    record.difficulty = snapshot.difficulty.value
    record.question_ids = list(snapshot.question_ids)
    record.answers = dict(snapshot.answers)
    record.start_time = snapshot.start_time
    record.time_remaining = snapshot.time_remaining
    record.current_question = snapshot.current_question
    record.is_fullscreen = snapshot.is_fullscreen

    await session.commit()
    await session.refresh(record)
    return record


async def delete_exam_session(session: AsyncSession, student_id: str) -> int:
    """세션 삭제, 삭제된 행 수 반환"""
    result = await session.execute(delete(ExamSession).where(ExamSession.student_id == student_id))
    await session.commit()
    return result.rowcount
