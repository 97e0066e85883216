import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import student as student_crud
from app.exceptions import StudentNotFoundError
from app.schemas import student as student_schema

logger = logging.getLogger(__name__)


async def create_student(
    session: AsyncSession,
    request: student_schema.StudentCreateRequest,
) -> student_schema.StudentResponse:
    """학생 생성 (토큰 인증 직후)"""
    student = await student_crud.create_student(session, request)
    logger.info(f"학생 생성: student_id={student.id}, category={student.exam_category}")
    return student_schema.StudentResponse.model_validate(student)


async def get_student(session: AsyncSession, student_id: str) -> student_schema.StudentResponse:
    student = await student_crud.get_student_by_id(session, student_id)
    if not student:
        raise StudentNotFoundError(student_id)
    return student_schema.StudentResponse.model_validate(student)


async def list_students(session: AsyncSession) -> student_schema.StudentListResponse:
    students = await student_crud.get_all_students(session)
    responses = [student_schema.StudentResponse.model_validate(s) for s in students]
    return student_schema.StudentListResponse(students=responses, total=len(responses))


async def update_student(
    session: AsyncSession,
    student_id: str,
    request: student_schema.StudentUpdateRequest,
) -> student_schema.StudentResponse:
    """학생 상태 업데이트 (진행 상황 스냅샷 / 완료 처리)"""
    student = await student_crud.get_student_by_id(session, student_id)
    if not student:
        raise StudentNotFoundError(student_id)

    student = await student_crud.update_student(session, student, request)
    logger.info(f"학생 업데이트: student_id={student_id}, status={student.status}")
    return student_schema.StudentResponse.model_validate(student)


async def delete_student(session: AsyncSession, student_id: str) -> None:
    """학생 삭제 (진행 중 세션과 결과도 함께 삭제)"""
    student = await student_crud.get_student_by_id(session, student_id)
    if not student:
        raise StudentNotFoundError(student_id)

    try:
        await student_crud.delete_student(session, student)
    except Exception as e:
        logger.error(f"학생 삭제 실패: {e}, student_id={student_id}", exc_info=True)
        await session.rollback()
        raise

    logger.info(f"학생 삭제: student_id={student_id}")
