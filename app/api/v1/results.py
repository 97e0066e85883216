from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import get_db
from app.schemas import exam_result as result_schema
from app.services import exam_service, export_service

router = APIRouter(prefix="/results", tags=["results"])

CSV_MEDIA_TYPE = "text/csv; charset=utf-8"


@router.post("", response_model=result_schema.ExamResultResponse, status_code=status.HTTP_201_CREATED)
async def save_result(
    request: result_schema.ExamResultCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    """시험 결과 저장 API"""
    return await exam_service.save_result(db, request)


@router.get("", response_model=result_schema.ExamResultListResponse)
async def get_results(
    db: AsyncSession = Depends(get_db),
):
    """시험 결과 목록 조회 API"""
    return await exam_service.list_results(db)


@router.get("/export/summary.csv")
async def export_summary(
    db: AsyncSession = Depends(get_db),
):
    """시험 결과 요약 CSV 다운로드 API"""
    results = await exam_service.list_results(db)
    return Response(
        content=export_service.export_summary_csv(results.results),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_service.summary_filename()}"'},
    )


@router.get("/export/detail.csv")
async def export_detail(
    db: AsyncSession = Depends(get_db),
):
    """문항별 상세 CSV 다운로드 API"""
    results = await exam_service.list_results(db)
    return Response(
        content=export_service.export_detailed_csv(results.results),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{export_service.detailed_filename()}"'},
    )


@router.delete("/{result_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_result(
    result_id: int,
    db: AsyncSession = Depends(get_db),
):
    """시험 결과 삭제 API (관리자용)"""
    await exam_service.delete_result(db, result_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
