from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import exam_session as session_schema
from app.services import exam_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.put("/{student_id}", response_model=session_schema.ExamSessionSnapshot)
async def save_session(
    student_id: str,
    snapshot: session_schema.ExamSessionSnapshot,
    db: AsyncSession = Depends(get_db),
):
    """시험 세션 저장 API (upsert)"""
    return await exam_service.save_session(db, student_id, snapshot)


@router.get("/{student_id}", response_model=session_schema.ExamSessionSnapshot)
async def get_session(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    """시험 세션 조회 API (재개용)"""
    return await exam_service.get_session(db, student_id)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    student_id: str,
    db: AsyncSession = Depends(get_db),
):
    """시험 세션 삭제 API"""
    await exam_service.delete_session(db, student_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
