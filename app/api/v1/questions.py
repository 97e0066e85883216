from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ExamType
from app.models.base import get_db
from app.schemas import question as question_schema
from app.services import question_service

router = APIRouter(prefix="/questions", tags=["questions"])


@router.get("", response_model=question_schema.QuestionListResponse)
async def get_questions(
    category: str | None = Query(None, description="시험 카테고리 ID"),
    type: ExamType | None = Query(None, description="시험 유형"),
    db: AsyncSession = Depends(get_db),
):
    """문제 목록 조회 API (DB에 없으면 기본 제공 문제)"""
    return await question_service.get_questions(db, category=category, exam_type=type)


@router.get("/stats", response_model=question_schema.QuestionStatsResponse)
async def get_question_stats(
    db: AsyncSession = Depends(get_db),
):
    """문제 통계 API"""
    return await question_service.get_question_stats(db)


@router.post("", response_model=question_schema.QuestionResponse, status_code=status.HTTP_201_CREATED)
async def add_question(
    request: question_schema.QuestionCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 추가 API (관리자용)"""
    return await question_service.add_question(db, request)


@router.put("/{question_id}", response_model=question_schema.QuestionResponse)
async def update_question(
    question_id: str,
    request: question_schema.QuestionUpdateRequest,
    db: AsyncSession = Depends(get_db),
):
    """문제 수정 API (관리자용)"""
    return await question_service.update_question(db, question_id, request)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question(
    question_id: str,
    db: AsyncSession = Depends(get_db),
):
    """문제 삭제 API (관리자 작성 문제만)"""
    await question_service.delete_question(db, question_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
