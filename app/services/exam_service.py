import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import exam_result as result_crud, exam_session as session_crud, student as student_crud
from app.exceptions import (
    ExamResultNotFoundError,
    ExamSessionNotFoundError,
    InvalidExamRequestError,
    StudentNotFoundError,
)
from app.schemas import exam_result as result_schema, exam_session as session_schema

logger = logging.getLogger(__name__)


async def save_session(
    session: AsyncSession,
    student_id: str,
    snapshot: session_schema.ExamSessionSnapshot,
) -> session_schema.ExamSessionSnapshot:
    """진행 중 세션 저장 (student_id 기준 upsert, 마지막 쓰기 우선)"""
    if snapshot.student_id != student_id:
        raise InvalidExamRequestError(
            f"경로의 student_id와 세션의 student_id가 다릅니다: {student_id} != {snapshot.student_id}"
        )

    student = await student_crud.get_student_by_id(session, student_id)
    if not student:
        raise StudentNotFoundError(student_id)

    record = await session_crud.upsert_exam_session(session, snapshot)
    logger.debug(
        f"세션 저장: student_id={student_id}, time_remaining={record.time_remaining}, "
        f"answered={len(record.answers)}"
    )
    return session_schema.ExamSessionSnapshot.model_validate(record)


async def get_session(session: AsyncSession, student_id: str) -> session_schema.ExamSessionSnapshot:
    """진행 중 세션 조회"""
    record = await session_crud.get_exam_session(session, student_id)
    if not record:
        raise ExamSessionNotFoundError(student_id)
    return session_schema.ExamSessionSnapshot.model_validate(record)


async def delete_session(session: AsyncSession, student_id: str) -> None:
    """세션 삭제 (없으면 아무 것도 하지 않음)"""
    deleted = await session_crud.delete_exam_session(session, student_id)
    logger.info(f"세션 삭제: student_id={student_id}, deleted={deleted}")


async def save_result(
    session: AsyncSession,
    request: result_schema.ExamResultCreateRequest,
) -> result_schema.ExamResultResponse:
    """시험 결과 저장"""
    student = await student_crud.get_student_by_id(session, request.student_id)
    if not student:
        raise StudentNotFoundError(request.student_id)

    try:
        record = await result_crud.create_exam_result(session, request)
    except Exception as e:
        logger.error(f"시험 결과 저장 실패: {e}, student_id={request.student_id}", exc_info=True)
        await session.rollback()
        raise

    logger.info(
        f"시험 결과 저장: result_id={record.id}, student_id={record.student_id}, "
        f"score={record.score}/{record.total_questions}"
    )
    return result_schema.ExamResultResponse.model_validate(record)


async def list_results(session: AsyncSession) -> result_schema.ExamResultListResponse:
    """시험 결과 목록 (완료 시각 최신순)"""
    records = await result_crud.get_all_exam_results(session)
    results = [result_schema.ExamResultResponse.model_validate(r) for r in records]
    return result_schema.ExamResultListResponse(results=results, total=len(results))


async def delete_result(session: AsyncSession, result_id: int) -> None:
    """시험 결과 삭제 (관리자 전용)"""
    record = await result_crud.get_exam_result_by_id(session, result_id)
    if not record:
        raise ExamResultNotFoundError(result_id)

    await result_crud.delete_exam_result(session, record)
    logger.info(f"시험 결과 삭제: result_id={result_id}")
