from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import student as student_schema
from app.services import student_service

router = APIRouter(prefix="/students", tags=["students"])


@router.post("", response_model=student_schema.StudentResponse, status_code=status.HTTP_201_CREATED)
async def create_student(
    request: student_schema.StudentCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """학생 생성 API"""
    return await student_service.create_student(db, request)


@router.get("", response_model=student_schema.StudentListResponse)
async def get_students(
    db: AsyncSession = Depends(get_db),
):
    """학생 목록 조회 API"""
    return await student_service.list_students(db)


@router.get("/{student_id}", response_model=student_schema.StudentResponse)
async def get_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    """학생 조회 API"""
    return await student_service.get_student(db, student_id)


@router.put("/{student_id}", response_model=student_schema.StudentResponse)
async def update_student(
    student_id: str,
    request: student_schema.StudentUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """학생 상태 업데이트 API"""
    return await student_service.update_student(db, student_id, request)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    """학생 삭제 API (세션/결과 포함)"""
    await student_service.delete_student(db, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
