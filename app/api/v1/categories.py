from fastapi import APIRouter, HTTPException, status

from app.data.exam_categories import EXAM_CATEGORIES, get_exam_category
from app.schemas import category as category_schema

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=category_schema.ExamCategoryListResponse)
async def get_categories():
    """시험 카테고리 목록 조회 API"""
    return category_schema.ExamCategoryListResponse(
        categories=EXAM_CATEGORIES,
        total=len(EXAM_CATEGORIES),
    )


@router.get("/{category_id}", response_model=category_schema.ExamCategory)
async def get_category(category_id: str):
    """시험 카테고리 상세 조회 API"""
    category = get_exam_category(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"시험 카테고리를 찾을 수 없습니다: {category_id}",
        )
    return category
