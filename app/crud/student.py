from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.exam_result import ExamResult
from app.models.exam_session import ExamSession
from app.models.student import Student
from app.schemas.student import StudentCreateRequest, StudentUpdateRequest


async def create_student(session: AsyncSession, request: StudentCreateRequest) -> Student:
    """학생 생성 (ID는 DB 레벨에서 uuid 부여)"""
    student = Student(
        name=request.name,
        token=request.token,
        exam_type=request.exam_type.value,
        exam_category=request.exam_category,
        difficulty=request.difficulty.value,
        start_time=request.start_time,
        status=request.status.value,
        time_remaining=request.time_remaining,
        current_question=request.current_question,
    )
    session.add(student)
    await session.commit()
    await session.refresh(student)
    return student


async def get_student_by_id(session: AsyncSession, student_id: str) -> Student | None:
    """ID로 학생 조회"""
    result = await session.execute(select(Student).where(Student.id == student_id))
    return result.scalar_one_or_none()


async def get_all_students(session: AsyncSession) -> Sequence[Student]:
    """모든 학생 조회 (최신순)"""
    result = await session.execute(select(Student).order_by(Student.created_at.desc(), Student.start_time.desc()))
    return result.scalars().all()


async def update_student(
    session: AsyncSession,
    student: Student,
    request: StudentUpdateRequest,
) -> Student:
    """학생 상태 업데이트"""
    if request.name is not None:
        student.name = request.name
    student.status = request.status.value
    student.time_remaining = request.time_remaining
    student.current_question = request.current_question
    student.end_time = request.end_time
    await session.commit()
    await session.refresh(student)
    return student


async def delete_student(session: AsyncSession, student: Student) -> None:
    """학생 삭제 (세션, 결과 포함, 단일 트랜잭션)"""
    await session.execute(delete(ExamSession).where(ExamSession.student_id == student.id))
    await session.execute(delete(ExamResult).where(ExamResult.student_id == student.id))
    await session.execute(delete(Student).where(Student.id == student.id))
    await session.commit()
